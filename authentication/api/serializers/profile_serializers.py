from rest_framework import serializers

from authentication.domain.models import CustomUser, Profile


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = (
            "phone_number",
            "instagram_handle",
            "academic_level",
            "bio",
            "profile_picture",
            "seller_rating",
            "total_reviews",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("profile_picture", "seller_rating", "total_reviews", "created_at", "updated_at")

    def validate_instagram_handle(self, value):
        """Store handles without the leading @."""
        return value.strip().lstrip("@") if value else value


class PublicUserSerializer(serializers.ModelSerializer):
    """Identity shown on listings, messages and reviews."""

    display_name = serializers.ReadOnlyField()
    profile_picture = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = ("id", "first_name", "last_name", "display_name", "profile_picture")

    def get_profile_picture(self, obj):
        profile = getattr(obj, "profile", None)
        return profile.profile_picture if profile else ""


class ProfileDetailSerializer(serializers.ModelSerializer):
    """Profile page: user identity merged with the profile fields."""

    id = serializers.UUIDField(source="user.id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    first_name = serializers.CharField(source="user.first_name", required=False, allow_blank=True, max_length=50)
    last_name = serializers.CharField(source="user.last_name", required=False, allow_blank=True, max_length=50)

    class Meta:
        model = Profile
        fields = ("id", "email", "first_name", "last_name") + ProfileSerializer.Meta.fields
        read_only_fields = ProfileSerializer.Meta.read_only_fields


class ProfileUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=50)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=50)
    phone_number = serializers.CharField(required=False, allow_blank=True, max_length=20)
    instagram_handle = serializers.CharField(required=False, allow_blank=True, max_length=50)
    academic_level = serializers.ChoiceField(
        choices=Profile.ACADEMIC_LEVEL_CHOICES + [("", "Unspecified")], required=False
    )
    bio = serializers.CharField(required=False, allow_blank=True, max_length=500)

    def validate_instagram_handle(self, value):
        return value.strip().lstrip("@") if value else value


class SellerInfoSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    display_name = serializers.CharField()
    profile_picture = serializers.CharField(allow_blank=True)
    academic_level = serializers.CharField(allow_blank=True)
    instagram_handle = serializers.CharField(allow_blank=True)
    seller_rating = serializers.DecimalField(max_digits=3, decimal_places=2)
    total_reviews = serializers.IntegerField()
    active_listings = serializers.IntegerField()
    member_since = serializers.DateTimeField()
