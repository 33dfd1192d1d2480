"""
Translation of domain exceptions raised by raise-style services into DRF responses.
"""

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.response import Response


DOMAIN_EXCEPTIONS = (ObjectDoesNotExist, PermissionDenied, ValidationError)


def domain_error_response(exc) -> Response:
    if isinstance(exc, ObjectDoesNotExist):
        return Response({"detail": str(exc) or "Not found"}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, PermissionDenied):
        return Response({"detail": str(exc) or "Permission denied"}, status=status.HTTP_403_FORBIDDEN)
    if isinstance(exc, ValidationError):
        return Response({"detail": " ".join(exc.messages)}, status=status.HTTP_400_BAD_REQUEST)
    raise exc
