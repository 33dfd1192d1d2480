"""
Python client for the Campus Mart REST API.
"""

from .actions import order_actions, trade_offer_actions
from .client import CampusMartClient
from .config import ClientConfig
from .errors import ApiError, NetworkError, error_message
from .http import ApiClient
from .images import select_display_image
from .normalize import normalize_record
from .polling import ConversationPoller, Poller, UnreadCountPoller
from .products import LikeGuard, build_product_payload
from .session import FileSessionStore, MemorySessionStore, SessionContext


__all__ = [
    "ApiClient",
    "ApiError",
    "CampusMartClient",
    "ClientConfig",
    "ConversationPoller",
    "FileSessionStore",
    "LikeGuard",
    "MemorySessionStore",
    "NetworkError",
    "Poller",
    "SessionContext",
    "UnreadCountPoller",
    "build_product_payload",
    "error_message",
    "normalize_record",
    "order_actions",
    "select_display_image",
    "trade_offer_actions",
]
