from .auth_views import ChangePasswordAPIView, LoginAPIView, MeAPIView, RegisterAPIView
from .profile_views import ProfileViewSet


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
    "MeAPIView",
    "ChangePasswordAPIView",
    "ProfileViewSet",
]
