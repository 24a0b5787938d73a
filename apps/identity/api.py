"""
Identity API endpoints with JWT session cookie.

Provides login, logout, current user and first-run administrator setup.
"""
from typing import Optional
from ninja import Router, Schema
from django.conf import settings
from django.http import HttpRequest, HttpResponse
from ninja.errors import HttpError
from django.contrib.auth import authenticate

from .models import User
from .dtos import UserDTO, AdminCreate, AdminUpdate
from .services import get_user_dto, get_user_by_email, admin_exists, create_admin, update_admin
from .jwt_auth import create_session_token, get_user_id_from_token, get_session_cookie_settings

router = Router(tags=["Identity"])


# =============================================================================
# Schemas
# =============================================================================

class LoginSchema(Schema):
    email: str
    password: str


class SessionResponse(Schema):
    success: bool
    user: Optional[UserDTO] = None
    message: Optional[str] = None


class SetupStatus(Schema):
    admin_exists: bool


# =============================================================================
# Helper Functions
# =============================================================================

def get_current_user(request: HttpRequest) -> Optional[User]:
    """
    Extract and validate user from the session cookie.

    Falls back to a Django session login (admin site, test client).
    Returns User object if valid token, None otherwise.
    """
    token = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE)
    if not token:
        session_user = getattr(request, 'user', None)
        if session_user is not None and session_user.is_authenticated and session_user.is_active:
            return session_user
        return None

    user_id = get_user_id_from_token(token)
    if not user_id:
        return None

    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        return None


def require_auth(request: HttpRequest) -> User:
    """
    Require authentication. Raises 401 if not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HttpError(401, "Authentication required")
    return user


def _session_response(user: User, message: Optional[str] = None) -> HttpResponse:
    response = HttpResponse(
        SessionResponse(success=True, user=get_user_dto(user.id), message=message).model_dump_json(),
        content_type='application/json'
    )
    response.set_cookie(
        settings.SESSION_TOKEN_COOKIE,
        create_session_token(user),
        **get_session_cookie_settings(not settings.DEBUG)
    )
    return response


# =============================================================================
# Auth Endpoints
# =============================================================================

@router.post("/login", response=SessionResponse, auth=None)
def login_user(request: HttpRequest, payload: LoginSchema):
    """
    Authenticate with email and password and set the session cookie.
    """
    candidate = get_user_by_email(payload.email)
    user = None
    if candidate is not None:
        user = authenticate(request, username=candidate.username, password=payload.password)

    if user is None:
        raise HttpError(401, "Invalid email or password")

    if not user.is_active:
        raise HttpError(401, "Account is disabled")

    return _session_response(user)


@router.post("/logout", response=SessionResponse, auth=None)
def logout_user(request: HttpRequest):
    """
    Clear the session cookie.
    """
    response = HttpResponse(
        SessionResponse(success=True, message="Logged out").model_dump_json(),
        content_type='application/json'
    )
    response.delete_cookie(settings.SESSION_TOKEN_COOKIE, path='/')
    return response


@router.get("/me", response=UserDTO, auth=None)
def get_me(request: HttpRequest):
    """
    Get current authenticated user's profile.
    """
    user = require_auth(request)
    user_dto = get_user_dto(user.id)
    if not user_dto:
        raise HttpError(404, "User not found")
    return user_dto


# =============================================================================
# Administrator Setup
# =============================================================================

@router.get("/setup", response=SetupStatus, auth=None)
def get_setup_status(request: HttpRequest):
    """Whether the first administrator has been created."""
    return {"admin_exists": admin_exists()}


@router.post("/setup", response=SessionResponse, auth=None)
def setup_admin(request: HttpRequest, payload: AdminCreate):
    """
    Create the first administrator and log them in.
    Rejected once any user exists.
    """
    try:
        dto = create_admin(payload)
    except ValueError as e:
        raise HttpError(400, str(e))

    return _session_response(User.objects.get(id=dto.id), message="Administrator created")


@router.put("/admin", response=SessionResponse, auth=None)
def update_current_admin(request: HttpRequest, payload: AdminUpdate):
    """
    Update the logged-in administrator's name, email or password.
    The session cookie is re-issued with the new identity.
    """
    user = require_auth(request)
    try:
        updated = update_admin(user.id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not updated:
        raise HttpError(404, "User not found")

    return _session_response(User.objects.get(id=user.id), message="Profile updated")
