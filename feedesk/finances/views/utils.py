"""
finances/views/utils.py
────────────────────────
Shared helpers used by every finances view module.
Nothing here imports from other view modules (no circular imports).
"""

import json
from functools import wraps

from django.http import HttpResponseNotAllowed, JsonResponse
from django.shortcuts import redirect


# ── Access control ────────────────────────────────────────────────────────────

def admin_required(view_fn):
    """
    Decorator: requests without a valid dashboard session go to the login
    page.  SessionClaimsMiddleware already guards /dashboard/; this keeps the
    view safe wherever it is routed.
    """
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if not getattr(req, 'session_claims', None):
            return redirect('login')
        return view_fn(req, *args, **kwargs)
    return wrapper


def require_POST_or_405(view_fn):
    """Decorator: return 405 for any non-POST request."""
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if req.method != 'POST':
            return HttpResponseNotAllowed(['POST'])
        return view_fn(req, *args, **kwargs)
    return wrapper


def current_user_id(req):
    claims = getattr(req, 'session_claims', None) or {}
    return claims.get('user', {}).get('id')


# ── Request / response plumbing ───────────────────────────────────────────────

def request_data(req):
    """
    The submitted fields: the decoded JSON object for JSON requests,
    otherwise req.POST.  Returns None for a body that is not a JSON object.
    """
    if req.content_type == 'application/json':
        try:
            data = json.loads(req.body or b'{}')
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
    return req.POST


def result_response(result):
    """Render a finances.results.Result as the {success, data|error} envelope."""
    return JsonResponse(result.to_envelope(), status=result.http_status)


def error_response(message, status=400, details=None):
    body = {'success': False, 'error': message}
    if details:
        body['details'] = details
    return JsonResponse(body, status=status)


def invalid_form_response(form):
    """400 carrying the first form error as the message and the rest as details."""
    errors = form.errors.get_json_data()
    first = next(iter(errors.values()), [{'message': 'Invalid input'}])[0]['message']
    return error_response(first, details=errors)


def bad_body_response():
    return error_response('Request body must be a JSON object')
