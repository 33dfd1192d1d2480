from authentication.domain.models.profile import Profile
from authentication.domain.models.user import CustomUser


__all__ = [
    "CustomUser",
    "Profile",
]
