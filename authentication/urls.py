from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.views import ChangePasswordAPIView, LoginAPIView, MeAPIView, ProfileViewSet, RegisterAPIView


router = DefaultRouter()
router.register(r"profiles", ProfileViewSet, basename="profile")

app_name = "authentication"

urlpatterns = [
    path("auth/register/", RegisterAPIView.as_view(), name="register"),
    path("auth/login/", LoginAPIView.as_view(), name="login"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("auth/me/", MeAPIView.as_view(), name="me"),
    path(
        "auth/users/<str:user_id>/change-password/",
        ChangePasswordAPIView.as_view(),
        name="change_password",
    ),
    path("", include(router.urls)),
]
