import logging
import uuid

from django.contrib.auth import get_user_model


ROLE_USER = "user"
ROLE_ADMIN = "admin"

logger = logging.getLogger(__name__)


def is_admin(user) -> bool:
    """Admin check shared by permissions and services, verified against the database."""
    if not getattr(user, "is_authenticated", False):
        return False
    User = get_user_model()
    db_user = User.objects.only("id", "role", "is_superuser", "is_staff").filter(pk=user.pk).first()
    if db_user is None:
        return False
    return bool(db_user.is_superuser or db_user.is_staff or db_user.role == ROLE_ADMIN)


def is_same_user(user, user_id) -> bool:
    """True when ``user_id`` (UUID or string) identifies the authenticated ``user``."""
    if not getattr(user, "is_authenticated", False):
        return False
    is_same = str(user.pk) == str(user_id)
    if not is_same:
        logger.warning(f"Access denied: user {user.pk} requested resources of user {user_id}")
    return is_same


def is_user_id(value) -> bool:
    """True when ``value`` is shaped like a user primary key (a UUID)."""
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True
