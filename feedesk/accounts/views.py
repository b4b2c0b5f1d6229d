"""
accounts/views.py
─────────────────
Authentication views: login, logout.

Signing in issues the dashboard `session` cookie (see accounts/session.py);
signing out deletes it.  All templates are resolved from
accounts/templates/accounts/.
"""

import logging

from django.contrib import messages
from django.contrib.auth import authenticate, get_user_model
from django.http import HttpResponseNotAllowed
from django.shortcuts import redirect, render

from .session import clear_session_cookie, issue_session_cookie

logger = logging.getLogger(__name__)


def _bootstrap_first_admin(email, password):
    """
    On an empty install the first successful-looking login creates the
    administrator account with the submitted credentials.
    """
    User = get_user_model()
    if User.objects.exists():
        return None
    user = User.objects.create_superuser(
        username=email,
        email=email,
        password=password,
        name='Admin',
        role=User.Role.ADMIN,
    )
    logger.info('Created first administrator account %s', email)
    return user


# ── Login / Logout ────────────────────────────────────────────────────────────

def login_view(req):
    """Show the login form (GET) or authenticate and redirect (POST)."""
    if req.method == 'POST':
        email    = req.POST.get('email', '').strip()
        password = req.POST.get('password', '')

        if not email or not password:
            messages.error(req, 'Please provide both email and password')
            return render(req, 'accounts/login.html', {'email': email}, status=400)

        user = authenticate(req, username=email, password=password)
        if user is None:
            user = _bootstrap_first_admin(email, password)

        if user is not None:
            logger.info('User %s signed in', user.email)
            return issue_session_cookie(redirect('dashboard'), user)

        logger.warning('Failed login attempt for %s', email)
        messages.error(req, 'Invalid credentials')
        return render(req, 'accounts/login.html', {'email': email}, status=400)

    return render(req, 'accounts/login.html')


def logout_view(req):
    """Log the current user out (POST only for CSRF safety)."""
    if req.method != 'POST':
        return HttpResponseNotAllowed(['POST'])
    return clear_session_cookie(redirect('login'))
