# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import ErrorResponseSerializer, SuccessResponseSerializer


__all__ = [
    "ErrorResponseSerializer",
    "SuccessResponseSerializer",
]
