from typing import Optional

from .config import ClientConfig
from .http import ApiClient
from .polling import ConversationPoller, UnreadCountPoller
from .resources import (
    AuthClient,
    MessageClient,
    NotificationClient,
    OrderClient,
    ProductClient,
    ProfileClient,
    ReviewClient,
    SellerClient,
    TradeOfferClient,
)
from .session import FileSessionStore, MemorySessionStore, SessionContext


class CampusMartClient:
    """
    Entry point bundling the session, the transport and every resource client.

    Usage:
        client = CampusMartClient(ClientConfig.from_env())
        client.auth.login("student@campus.edu", "secret")
        client.products.list()
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[SessionContext] = None):
        self.config = config or ClientConfig()
        if session is None:
            store = FileSessionStore(self.config.session_path) if self.config.session_path else MemorySessionStore()
            session = SessionContext(store)
            session.load()
        self.session = session
        self.api = ApiClient(self.config, self.session)

        self.auth = AuthClient(self.api)
        self.products = ProductClient(self.api)
        self.orders = OrderClient(self.api)
        self.trade_offers = TradeOfferClient(self.api)
        self.messages = MessageClient(self.api)
        self.reviews = ReviewClient(self.api)
        self.notifications = NotificationClient(self.api)
        self.profiles = ProfileClient(self.api)
        self.sellers = SellerClient(self.api)

    def conversation_poller(self, other_user_id, on_messages, product_id=None) -> ConversationPoller:
        return ConversationPoller(
            self.messages,
            self.session.user_id,
            other_user_id,
            on_messages,
            product_id=product_id,
            interval=self.config.conversation_poll_seconds,
        )

    def unread_count_poller(self, on_counts) -> UnreadCountPoller:
        return UnreadCountPoller(
            self.messages,
            self.notifications,
            self.session.user_id,
            on_counts,
            interval=self.config.unread_poll_seconds,
        )
