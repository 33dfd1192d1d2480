"""
Response serializers used only for the OpenAPI schema of the auth endpoints.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer


class TokenPairResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserSerializer()


class ProfilePictureUploadResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    profile_picture = serializers.CharField()
    size = serializers.IntegerField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField(required=False)
    detail = serializers.CharField(required=False)
