from .auth_serializers import (
    ChangePasswordSerializer,
    LoginRequestSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from .profile_serializers import (
    ProfileDetailSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    PublicUserSerializer,
    SellerInfoSerializer,
)


__all__ = [
    "UserSerializer",
    "UserRegistrationSerializer",
    "LoginRequestSerializer",
    "ChangePasswordSerializer",
    "ProfileSerializer",
    "ProfileDetailSerializer",
    "ProfileUpdateSerializer",
    "PublicUserSerializer",
    "SellerInfoSerializer",
]
