"""
core/views.py
─────────────
Site root and the JSON error handlers (registered in feedesk/urls.py).
"""

from django.http import JsonResponse
from django.shortcuts import redirect


def home_view(req):
    """Signed-in administrators go to the dashboard, everyone else to login."""
    if getattr(req, 'session_claims', None):
        return redirect('dashboard')
    return redirect('login')


# ── Custom error responses ────────────────────────────────────────────────────

def handler404(req, exception):
    return JsonResponse({'success': False, 'error': 'Not found'}, status=404)


def handler500(req):
    return JsonResponse({'success': False, 'error': 'Internal server error'}, status=500)
