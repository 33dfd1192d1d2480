"""Request middleware for the Campus Mart API."""

from __future__ import annotations

from typing import Callable


class JWTCSRFBypassMiddleware:
    """Exempt bearer-token requests from CSRF enforcement.

    Clients of the API authenticate with ``Authorization: Bearer <jwt>`` and
    never rely on cookies, so ``CsrfViewMiddleware`` must not reject their
    mutating requests. Session-authenticated requests (the admin site) keep
    full CSRF protection.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        authorization = request.META.get("HTTP_AUTHORIZATION", "")
        if authorization.lower().startswith("bearer "):
            request._dont_enforce_csrf_checks = True  # type: ignore[attr-defined]
            request.META.setdefault("CSRF_SKIP_REASON", "jwt-bearer")
        return self.get_response(request)
