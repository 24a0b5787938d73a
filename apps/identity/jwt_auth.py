"""
JWT session utilities for Sativar.

A single signed token carries the user identity and lives in an
httpOnly `session` cookie.
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from django.conf import settings


JWT_ALGORITHM = 'HS256'


def _secret() -> str:
    return settings.SESSION_SECRET


def create_session_token(user) -> str:
    """
    Create a session token for the given user.

    Payload: {user: {id, name, email}, exp, iat}
    """
    now = datetime.now(timezone.utc)
    payload = {
        'user': {
            'id': str(user.id),
            'name': user.name,
            'email': user.email,
        },
        'exp': now + timedelta(hours=settings.SESSION_TOKEN_LIFETIME_HOURS),
        'iat': now,
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a session token.

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    payload = decode_token(token)
    if not payload:
        return None
    try:
        return UUID(payload['user']['id'])
    except (KeyError, TypeError, ValueError):
        return None


def get_session_cookie_settings(is_production: bool = False) -> dict:
    """
    Cookie settings for the session token.

    Production: Secure, SameSite=Lax
    Development: Not secure (localhost), SameSite=Lax
    """
    return {
        'httponly': True,
        'secure': is_production,
        'samesite': 'Lax',
        'path': '/',
        'max_age': settings.SESSION_TOKEN_LIFETIME_HOURS * 60 * 60,
    }
