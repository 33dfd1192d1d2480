"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of shared API responses for OpenAPI
schema generation. They are not used for validation.
"""

from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")


class SuccessResponseSerializer(serializers.Serializer):
    """Generic success response"""

    message = serializers.CharField(help_text="Success message")
