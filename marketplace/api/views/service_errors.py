"""
Mapping of marketplace service error codes onto HTTP responses.
"""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services import ErrorCodes, ServiceResult


ERROR_STATUS = {
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.TRADE_OFFER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.REVIEW_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCodes.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCodes.REVIEW_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCodes.PRODUCT_UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(result: ServiceResult) -> Response:
    """``{"detail": ...}`` with the status matching ``result.error``; unknown codes are 500."""
    http_status = ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"detail": result.error_detail}, status=http_status)
