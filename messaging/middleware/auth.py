import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from django.contrib.auth.models import AnonymousUser
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError


logger = logging.getLogger(__name__)


def handshake_token(scope):
    """Access token from ``?token=`` or, failing that, an ``Authorization: Bearer`` header."""
    params = parse_qs(scope.get("query_string", b"").decode())
    if params.get("token"):
        return params["token"][0]

    for name, value in scope.get("headers", []):
        if name == b"authorization":
            scheme, _, token = value.decode().partition(" ")
            if scheme.lower() == "bearer" and token:
                return token.strip()
    return None


class HandshakeAuthMiddleware:
    """
    Authenticates inbox and notification sockets with the same JWT the REST API uses.

    Sits inside AuthMiddlewareStack; a session user already on the scope wins.
    """

    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        if "user" in scope and not isinstance(scope["user"], AnonymousUser):
            return await self.inner(scope, receive, send)

        token = handshake_token(scope)
        if token:
            user = await self.get_user_from_token(token)
            if user is not None:
                scope["user"] = user
                logger.debug(f"Authenticated user {user.id} via WebSocket JWT")
            else:
                logger.debug("Invalid JWT token provided in WebSocket handshake")

        return await self.inner(scope, receive, send)

    @database_sync_to_async
    def get_user_from_token(self, token):
        jwt_auth = JWTAuthentication()
        try:
            validated_token = jwt_auth.get_validated_token(token)
            return jwt_auth.get_user(validated_token)
        except (InvalidToken, TokenError, AuthenticationFailed):
            return None
