"""
accounts/session.py
───────────────────
Codec for the dashboard `session` cookie.

The cookie carries a signed claim set

    {"user": {"id": ..., "email": ..., "name": ...}, "expires": "<ISO-8601>"}

produced with django.core.signing (keyed by SECRET_KEY).  Decoding never
raises: a missing, tampered or expired token simply means "no session".

Functions
─────────
create_session_token(user, now=None)
    Build the signed token for *user*, expiring SESSION_TOKEN_MAX_AGE later.

decode_session_token(token, now=None)
    Return the claim dict, or None when the token is not usable.

issue_session_cookie(response, user) / clear_session_cookie(response)
    Set or delete the HTTP-only cookie on a response.
"""

import logging
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

from django.conf import settings
from django.core import signing
from django.utils import timezone

logger = logging.getLogger(__name__)

SALT = 'accounts.session'


def _max_age():
    return settings.SESSION_TOKEN_MAX_AGE


def build_claims(user, now=None):
    now = now or timezone.now()
    return {
        'user': {
            'id':    str(user.pk),
            'email': user.email,
            'name':  user.name,
        },
        'expires': (now + timedelta(seconds=_max_age())).isoformat(),
    }


def create_session_token(user, now=None):
    return signing.dumps(build_claims(user, now), salt=SALT, compress=True)


def decode_session_token(token, now=None):
    if not token:
        return None
    try:
        claims = signing.loads(token, salt=SALT, max_age=_max_age())
    except signing.BadSignature:
        # SignatureExpired is a BadSignature subclass.
        return None

    try:
        expires = datetime.fromisoformat(claims['expires'])
        if not claims['user']['id']:
            raise ValueError('empty user id')
    except (KeyError, TypeError, ValueError):
        logger.warning('Session token with malformed claims rejected')
        return None

    if timezone.is_naive(expires):
        expires = timezone.make_aware(expires, dt_timezone.utc)
    if expires <= (now or timezone.now()):
        return None
    return claims


def issue_session_cookie(response, user):
    """Attach a fresh `session` cookie for *user* to *response*."""
    response.set_cookie(
        settings.SESSION_TOKEN_COOKIE_NAME,
        create_session_token(user),
        max_age=_max_age(),
        httponly=True,
        secure=not settings.DEBUG,
        samesite='Lax',
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(settings.SESSION_TOKEN_COOKIE_NAME, samesite='Lax')
    return response
