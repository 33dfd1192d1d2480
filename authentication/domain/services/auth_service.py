"""
AuthService - account registration, credential login and password changes.

Issues simplejwt token pairs; every account gets a Profile through the
``post_save`` receiver on CustomUser.
"""

import logging

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import RefreshToken

from utils.logging_utils import mask_value

from .results import LoginResult, RegisterResult, Result


User = get_user_model()
logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("phone_number", "instagram_handle", "academic_level", "bio")


class CampusRefreshToken(RefreshToken):
    """Refresh token carrying the claims clients show before fetching the profile."""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token["email"] = user.email
        token["role"] = user.role
        token["first_name"] = user.first_name
        token["last_name"] = user.last_name
        return token


class AuthService:
    """Authentication business logic shared by the REST views."""

    def issue_tokens(self, user):
        refresh = CampusRefreshToken.for_user(user)
        return str(refresh.access_token), str(refresh)

    @transaction.atomic
    def register(
        self,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        **profile_data,
    ) -> RegisterResult:
        """
        Create a user and its profile, then log the user in.

        Args:
            email: Login email, unique across accounts
            password: Raw password (already validated by the serializer)
            first_name: Optional first name
            last_name: Optional last name
            **profile_data: Optional profile fields (phone_number, instagram_handle, ...)

        Returns:
            RegisterResult with the user and a fresh token pair
        """
        email = (email or "").strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            logger.info(f"Registration rejected, email already exists: {mask_value(email)}")
            return RegisterResult(success=False, conflict=True, error="Email already exists")

        try:
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
        except IntegrityError:
            return RegisterResult(success=False, conflict=True, error="Email already exists")

        profile = user.profile
        updates = [field for field in PROFILE_FIELDS if profile_data.get(field)]
        for field in updates:
            setattr(profile, field, profile_data[field])
        if updates:
            profile.save(update_fields=updates + ["updated_at"])

        access, refresh = self.issue_tokens(user)
        logger.info(f"Registered user {user.id} ({mask_value(email)})")
        return RegisterResult(
            success=True,
            user=user,
            access_token=access,
            refresh_token=refresh,
            message="Registration successful",
        )

    def login(self, email: str, password: str, request=None) -> LoginResult:
        """Authenticate with email/password and return a token pair."""
        if not email or not password:
            return LoginResult(success=False, error="Email and password are required.")

        user = authenticate(request, username=email.strip().lower(), password=password)
        if user is None:
            logger.info(f"Failed login for {mask_value(email)}")
            return LoginResult(success=False, error="Invalid email or password")

        access, refresh = self.issue_tokens(user)
        logger.info(f"User {user.id} logged in")
        return LoginResult(
            success=True,
            user=user,
            access_token=access,
            refresh_token=refresh,
            message="Login successful",
        )

    def change_password(self, user, user_id, current_password: str, new_password: str) -> Result:
        """
        Change the caller's own password.

        The current password must match and the new one must pass the
        configured ``AUTH_PASSWORD_VALIDATORS``. Issued tokens stay valid.
        """
        if str(user.id) != str(user_id):
            return Result(
                success=False,
                message="You can only change your own password.",
                error="forbidden",
                status="forbidden",
            )

        if not current_password or not user.check_password(current_password):
            logger.info(f"Password change for user {user.id} rejected: wrong current password")
            return Result(
                success=False,
                message="Current password is incorrect",
                error="incorrect_password",
                status="unauthorized",
            )

        try:
            validate_password(new_password, user=user)
        except ValidationError as e:
            return Result(success=False, message=" ".join(e.messages), error="invalid_password", status="invalid")

        user.set_password(new_password)
        user.save(update_fields=["password"])
        logger.info(f"Password changed for user {user.id}")
        return Result(success=True, message="Password changed successfully")
