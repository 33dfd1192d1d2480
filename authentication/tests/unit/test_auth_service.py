from unittest.mock import MagicMock, patch

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from authentication.domain.services.auth_service import AuthService
from authentication.domain.services.profile_service import ProfileService
from authentication.tests.factories import UserFactory


@pytest.fixture
def auth_service():
    return AuthService()


@pytest.mark.unit
@pytest.mark.django_db
class TestAuthService:
    def test_register_normalizes_email_and_sets_profile(self, auth_service):
        result = auth_service.register(
            email="  Mixed.Case@Campus.EDU ",
            password="s3cure-pass-42",
            first_name="Ana",
            last_name="Reyes",
            phone_number="555-0100",
        )

        assert result.success is True
        assert result.user.email == "mixed.case@campus.edu"
        assert result.user.profile.phone_number == "555-0100"

    def test_register_conflict(self, auth_service):
        UserFactory(email="taken@campus.edu")

        result = auth_service.register(email="Taken@campus.edu", password="s3cure-pass-42")

        assert result.success is False
        assert result.conflict is True
        assert result.error == "Email already exists"

    def test_issued_access_token_carries_profile_claims(self, auth_service):
        user = UserFactory(first_name="Ana", last_name="Reyes")

        access, refresh = auth_service.issue_tokens(user)
        token = AccessToken(access)

        assert token["user_id"] == str(user.id)
        assert token["email"] == user.email
        assert token["role"] == "user"
        assert refresh

    def test_login_requires_both_fields(self, auth_service):
        result = auth_service.login("", "")
        assert result.success is False

    def test_login_success(self, auth_service):
        user = UserFactory(email="ok@campus.edu")

        result = auth_service.login("OK@campus.edu", "campus-pass-123")

        assert result.success is True
        assert result.user == user
        assert result.access_token

    def test_change_password_replaces_hash(self, auth_service):
        user = UserFactory()

        result = auth_service.change_password(user, str(user.id), "campus-pass-123", "fresh-pass-456")

        user.refresh_from_db()
        assert result.success is True
        assert result.message == "Password changed successfully"
        assert user.check_password("fresh-pass-456")

    def test_change_password_wrong_current_password(self, auth_service):
        user = UserFactory()

        result = auth_service.change_password(user, str(user.id), "not-it", "fresh-pass-456")

        user.refresh_from_db()
        assert result.status == "unauthorized"
        assert user.check_password("campus-pass-123")

    def test_change_password_runs_password_validators(self, auth_service):
        user = UserFactory()

        result = auth_service.change_password(user, str(user.id), "campus-pass-123", "abc")

        assert result.success is False
        assert result.status == "invalid"
        assert "too short" in result.message

    def test_change_password_for_another_user_is_forbidden(self, auth_service):
        user = UserFactory()
        other = UserFactory()

        result = auth_service.change_password(user, str(other.id), "campus-pass-123", "fresh-pass-456")

        assert result.status == "forbidden"


@pytest.mark.unit
class TestProfileServiceGuards:
    def test_update_other_profile_is_forbidden(self):
        service = ProfileService(storage=MagicMock())
        user = MagicMock(id="a")

        result = service.update_profile(user, "b", {"bio": "x"})

        assert result.success is False
        assert result.status == "forbidden"

    @patch("authentication.domain.services.profile_service.settings")
    def test_upload_rejects_extension_before_storage(self, mock_settings):
        mock_settings.PROFILE_PICTURE_MAX_BYTES = 1024
        storage = MagicMock()
        service = ProfileService(storage=storage)
        user = MagicMock(id="a")
        upload = MagicMock(size=10)
        upload.name = "script.exe"

        result = service.upload_profile_picture(user, "a", upload)

        assert result.status == "invalid"
        storage.upload.assert_not_called()
