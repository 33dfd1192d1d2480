"""
Shared pieces of the marketplace service layer.

Services return a ``ServiceResult`` for expected failures (not found,
permission, invalid state) instead of raising, and views translate the
error code into an HTTP status.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    ``value`` is set when ``ok``; otherwise ``error`` holds an ``ErrorCodes``
    constant and ``error_detail`` the message shown to the client.
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T = None) -> ServiceResult[T]:
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """Gives every service a class-named ``self.logger`` and the ``log_performance`` decorator."""

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """Log how long a service call took and whether it came back as an error result."""

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            started = time.monotonic()
            name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                elapsed_ms = (time.monotonic() - started) * 1000
                self.logger.error(f"{name} raised after {elapsed_ms:.2f}ms: {e}", exc_info=True)
                raise

            elapsed_ms = (time.monotonic() - started) * 1000
            if isinstance(result, ServiceResult) and not result.ok:
                self.logger.warning(f"{name} returned '{result.error}' in {elapsed_ms:.2f}ms")
            else:
                self.logger.debug(f"{name} completed in {elapsed_ms:.2f}ms")
            return result

        return wrapper


class ErrorCodes:
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_UNAVAILABLE = "product_unavailable"
    ORDER_NOT_FOUND = "order_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    TRADE_OFFER_NOT_FOUND = "trade_offer_not_found"
    REVIEW_NOT_FOUND = "review_not_found"
    REVIEW_EXISTS = "review_exists"

    # Lifecycle
    INVALID_TRANSITION = "invalid_transition"
    INVALID_STATE = "invalid_state"

    PERMISSION_DENIED = "permission_denied"
    VALIDATION_ERROR = "validation_error"
    INTERNAL_ERROR = "internal_error"
