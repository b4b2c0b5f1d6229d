"""
accounts/middleware.py
──────────────────────
Decodes the dashboard `session` cookie once per request.

request.session_claims is the decoded claim dict or None.  Every path under
/dashboard/ requires valid claims (otherwise → login page), and a signed-in
admin hitting the login page is sent straight to the dashboard.
"""

from django.conf import settings
from django.shortcuts import redirect
from django.urls import reverse

from .session import decode_session_token

PROTECTED_PREFIX = '/dashboard/'


class SessionClaimsMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        token = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME)
        request.session_claims = decode_session_token(token)

        if request.session_claims is None and (
            request.path == PROTECTED_PREFIX.rstrip('/') or request.path.startswith(PROTECTED_PREFIX)
        ):
            return redirect('login')
        if request.session_claims is not None and request.path == reverse('login'):
            return redirect('dashboard')

        return self.get_response(request)
