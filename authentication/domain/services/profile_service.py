"""
ProfileService - profile management and public seller information.
"""

import logging
import os
from typing import Any, Dict

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import UploadedFile

from authentication.domain.models import Profile
from infrastructure.storage import StorageException, StorageInterface
from utils.rbac import is_user_id

from .results import Result


User = get_user_model()
logger = logging.getLogger(__name__)

EDITABLE_USER_FIELDS = ("first_name", "last_name")
EDITABLE_PROFILE_FIELDS = ("phone_number", "instagram_handle", "academic_level", "bio")
PICTURE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp")


class ProfileService:
    """
    Profile management service.

    Only the owner may edit a profile or its picture; seller information is public.
    """

    def __init__(self, storage: StorageInterface):
        self.storage = storage

    def _find_profile(self, user_id):
        if not is_user_id(user_id):
            return None
        return Profile.objects.select_related("user").filter(user_id=user_id).first()

    def get_profile(self, user_id) -> Result:
        profile = self._find_profile(user_id)
        if profile is None:
            return Result(success=False, message="Profile not found", error="not_found", status="not_found")
        return Result(success=True, message="ok", data={"profile": profile})

    def update_profile(self, user, user_id, profile_data: Dict[str, Any]) -> Result:
        """
        Update the user's name and profile fields.

        Unknown keys are ignored; email and rating fields are never writable here.
        """
        if str(user.id) != str(user_id):
            logger.warning(f"User {user.id} attempted to edit profile of {user_id}")
            return Result(
                success=False,
                message="You can only edit your own profile.",
                error="forbidden",
                status="forbidden",
            )

        profile = user.profile

        user_updates = [field for field in EDITABLE_USER_FIELDS if field in profile_data]
        for field in user_updates:
            setattr(user, field, profile_data[field])
        if user_updates:
            user.save(update_fields=user_updates)

        profile_updates = [field for field in EDITABLE_PROFILE_FIELDS if field in profile_data]
        for field in profile_updates:
            setattr(profile, field, profile_data[field])
        if profile_updates:
            profile.save(update_fields=profile_updates + ["updated_at"])

        updated_fields = user_updates + profile_updates

        logger.info(f"Profile updated for user {user.id}. Updated fields: {updated_fields}")
        return Result(
            success=True,
            message="Profile updated successfully.",
            data={"profile": profile, "updated_fields": updated_fields},
        )

    def get_seller_info(self, user_id) -> Result:
        """Public seller card: name, picture, rating and listing count."""
        profile = self._find_profile(user_id)
        if profile is None:
            return Result(success=False, message="Seller not found", error="not_found", status="not_found")

        seller = profile.user
        info = {
            "id": str(seller.id),
            "first_name": seller.first_name,
            "last_name": seller.last_name,
            "display_name": seller.display_name,
            "profile_picture": profile.profile_picture,
            "academic_level": profile.academic_level,
            "instagram_handle": profile.instagram_handle,
            "seller_rating": profile.seller_rating,
            "total_reviews": profile.total_reviews,
            "active_listings": seller.products.filter(is_available=True).count(),
            "member_since": seller.date_joined,
        }
        return Result(success=True, message="ok", data=info)

    def upload_profile_picture(self, user, user_id, image_file: UploadedFile) -> Result:
        """
        Store a new profile picture and point the profile at it.
        """
        if str(user.id) != str(user_id):
            return Result(
                success=False,
                message="You can only change your own picture.",
                error="forbidden",
                status="forbidden",
            )

        max_size = settings.PROFILE_PICTURE_MAX_BYTES
        if image_file.size > max_size:
            return Result(
                success=False,
                message=f"Image file too large. Maximum size is {max_size // (1024 * 1024)}MB",
                error="invalid",
                status="invalid",
            )

        extension = os.path.splitext(image_file.name)[1].lstrip(".").lower()
        if extension not in PICTURE_EXTENSIONS:
            return Result(
                success=False,
                message=f"Invalid file type. Allowed types: {', '.join(PICTURE_EXTENSIONS)}",
                error="invalid",
                status="invalid",
            )

        try:
            stored = self.storage.upload(
                image_file,
                f"profile_pictures/{user.id}.{extension}",
                getattr(image_file, "content_type", "") or f"image/{extension}",
            )
        except StorageException as e:
            logger.error(f"Profile picture upload failed for user {user.id}: {e}")
            return Result(success=False, message="Failed to upload profile picture.", error=str(e), status="error")

        profile = user.profile
        profile.profile_picture = stored.url
        profile.save(update_fields=["profile_picture", "updated_at"])

        logger.info(f"Profile picture uploaded for user {user.id}: {stored.key}")
        return Result(
            success=True,
            message="Profile picture uploaded successfully.",
            data={"profile_picture": stored.url, "size": stored.size},
        )
