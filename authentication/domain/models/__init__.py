from .profile import Profile
from .user import CustomUser

__all__ = [
    "CustomUser",
    "Profile",
]
