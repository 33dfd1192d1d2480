from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from authentication.domain.models import CustomUser, Profile

from .profile_serializers import ProfileSerializer


class UserSerializer(serializers.ModelSerializer):
    profile = ProfileSerializer(read_only=True)
    display_name = serializers.ReadOnlyField()

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "display_name",
            "role",
            "date_joined",
            "profile",
        )
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, validators=[validate_password])
    first_name = serializers.CharField(max_length=50)
    last_name = serializers.CharField(max_length=50)
    phone_number = serializers.CharField(required=False, allow_blank=True, max_length=20)
    instagram_handle = serializers.CharField(required=False, allow_blank=True, max_length=50)
    academic_level = serializers.ChoiceField(choices=Profile.ACADEMIC_LEVEL_CHOICES, required=False)

    def validate_email(self, value):
        return value.strip().lower()

    def validate_instagram_handle(self, value):
        return value.strip().lstrip("@") if value else value


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)
