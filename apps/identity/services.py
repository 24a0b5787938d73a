"""Services for Identity app."""
import logging

from django.db import transaction

from .models import User
from .dtos import UserDTO, AdminCreate, AdminUpdate

logger = logging.getLogger(__name__)


def _to_dto(user: User) -> UserDTO:
    return UserDTO(id=user.id, name=user.name, email=user.email)


def get_user_dto(user_id) -> UserDTO | None:
    try:
        return _to_dto(User.objects.get(id=user_id))
    except User.DoesNotExist:
        return None


def get_user_by_email(email: str) -> User | None:
    return User.objects.filter(email__iexact=email.strip()).first()


def admin_exists() -> bool:
    return User.objects.exists()


@transaction.atomic
def create_admin(payload: AdminCreate) -> UserDTO:
    """
    Create the first user. Only allowed while no user exists.

    Raises:
        ValueError: if a user already exists or the payload is incomplete
    """
    if User.objects.select_for_update().exists():
        raise ValueError("An administrator already exists")

    email = payload.email.strip().lower()
    if not email or not payload.password:
        raise ValueError("Email and password are required")

    user = User.objects.create_user(
        username=email,
        email=email,
        password=payload.password,
        name=payload.name.strip(),
        is_staff=True,
        is_superuser=True,
    )
    logger.info("Created administrator %s", user.id)
    return _to_dto(user)


def update_admin(user_id, payload: AdminUpdate) -> UserDTO | None:
    """
    Update name, email and/or password of a user.

    Raises:
        ValueError: if the new email belongs to another user
    """
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        return None

    if payload.name is not None:
        user.name = payload.name.strip()
    if payload.email:
        email = payload.email.strip().lower()
        if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
            raise ValueError("Email already in use")
        user.email = email
        user.username = email
    if payload.password:
        user.set_password(payload.password)

    user.save()
    logger.info("Updated administrator %s", user.id)
    return _to_dto(user)
