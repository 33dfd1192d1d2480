import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from infrastructure.container import container


class ProfileViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(first_name="Ana", last_name="Reyes")
        self.other = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_retrieve_profile(self):
        response = self.client.get(reverse("authentication:profile-detail", args=[self.other.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(self.other.id))
        self.assertEqual(response.data["seller_rating"], "0.00")

    def test_retrieve_unknown_profile(self):
        response = self.client.get(
            reverse("authentication:profile-detail", args=["00000000-0000-0000-0000-000000000000"])
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_malformed_profile_id_returns_404(self):
        profile = self.client.get(reverse("authentication:profile-detail", args=["not-a-uuid"]))
        seller_info = self.client.get(reverse("authentication:profile-seller-info", args=["not-a-uuid"]))

        self.assertEqual(profile.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(seller_info.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_own_profile(self):
        response = self.client.patch(
            reverse("authentication:profile-detail", args=[self.user.id]),
            {"firstName": "Anita", "bio": "Selling my textbooks", "instagramHandle": "@anita"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Anita")
        self.assertEqual(self.user.profile.bio, "Selling my textbooks")
        self.assertEqual(self.user.profile.instagram_handle, "anita")

    def test_update_other_profile_forbidden(self):
        response = self.client.patch(
            reverse("authentication:profile-detail", args=[self.other.id]), {"bio": "hacked"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_seller_info(self):
        response = self.client.get(reverse("authentication:profile-seller-info", args=[self.user.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["display_name"], "Ana Reyes")
        self.assertEqual(response.data["active_listings"], 0)
        self.assertEqual(response.data["total_reviews"], 0)


class ProfilePictureUploadTest(TestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.settings_override = override_settings(MEDIA_ROOT=self.media_root)
        self.settings_override.enable()
        container.reset()

        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)
        self.url = reverse("authentication:profile-upload-picture", args=[self.user.id])

    def tearDown(self):
        self.settings_override.disable()
        container.reset()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_upload_picture(self):
        image = SimpleUploadedFile("me.png", b"\x89PNG\r\n\x1a\n" + b"0" * 64, content_type="image/png")

        response = self.client.post(self.url, {"file": image}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.profile.refresh_from_db()
        self.assertTrue(self.user.profile.profile_picture.endswith(f"profile_pictures/{self.user.id}.png"))

    def test_upload_rejects_wrong_type(self):
        document = SimpleUploadedFile("notes.pdf", b"%PDF-1.4", content_type="application/pdf")

        response = self.client.post(self.url, {"file": document}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_upload_without_file(self):
        response = self.client.post(self.url, {}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(PROFILE_PICTURE_MAX_BYTES=10)
    def test_upload_too_large(self):
        image = SimpleUploadedFile("big.jpg", b"x" * 100, content_type="image/jpeg")

        response = self.client.post(self.url, {"file": image}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("too large", response.data["error"])
