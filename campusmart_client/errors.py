"""
Client-side errors and the user-facing message for a failed request.
"""

from typing import Any, Optional


NETWORK_ERROR_MESSAGE = "Network error: Unable to connect to server. Please check your connection."

STATUS_MESSAGES = {
    400: "Invalid request. Please check your input.",
    401: "Session expired. Please log in again.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    409: "This item already exists.",
    500: "Server error. Please try again later.",
}


def error_message(status: Optional[int], payload: Any = None) -> str:
    """
    Message to show for a failed request.

    The server's own ``message``, ``error`` or ``detail`` wins, then the values
    of a field-error mapping under ``errors``, then a fixed text per status.
    """
    if status is None:
        return NETWORK_ERROR_MESSAGE

    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            if payload.get(key):
                return str(payload[key])
        errors = payload.get("errors")
        if isinstance(errors, dict) and errors:
            return ", ".join(_flatten(value) for value in errors.values())

    return STATUS_MESSAGES.get(status, f"Server error: {status}")


def _flatten(value) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


class ApiError(Exception):
    def __init__(self, status: Optional[int], payload: Any = None, message: Optional[str] = None):
        self.status = status
        self.payload = payload
        self.message = message or error_message(status, payload)
        super().__init__(self.message)

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401


class NetworkError(ApiError):
    """The server could not be reached; there is no status or payload."""

    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(None, None, NETWORK_ERROR_MESSAGE)
        self.cause = cause
