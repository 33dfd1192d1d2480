"""
Repeating timers for screens that refresh from the API.

The ``ws/messages/`` and ``ws/notifications/`` sockets push the same data, so
polling is the fallback when a socket is unavailable.
"""

import logging
import threading
from typing import Callable, Optional

from .errors import ApiError


logger = logging.getLogger(__name__)


class Poller:
    """
    Calls ``callback`` every ``interval`` seconds until stopped.

    A failed tick is logged and the next tick still runs.
    Usable as a context manager; leaving the block stops the timer.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "poller"):
        self.interval = interval
        self.callback = callback
        self.name = name
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self):
        with self._lock:
            if self._running:
                return self
            self._running = True
            self._schedule()
        return self

    def stop(self):
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def tick(self):
        try:
            self.callback()
        except ApiError as e:
            logger.warning(f"{self.name} tick failed: {e.message}")
        except Exception as e:
            logger.error(f"{self.name} tick raised: {e}", exc_info=True)

    def _schedule(self):
        self._timer = threading.Timer(self.interval, self._run)
        self._timer.daemon = True
        self._timer.start()

    def _run(self):
        if not self._running:
            return
        self.tick()
        with self._lock:
            if self._running:
                self._schedule()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()


class ConversationPoller(Poller):
    """
    Refreshes an open conversation every 5 seconds by default.

    Without ``product_id`` the general conversation (messages tied to no
    product) is fetched, not the whole history between the two users.
    """

    def __init__(self, messages, user1_id, user2_id, on_messages, product_id=None, interval: float = 5.0):
        self.messages = messages
        self.user1_id = user1_id
        self.user2_id = user2_id
        self.product_id = product_id
        self.on_messages = on_messages
        super().__init__(interval, self.refresh, name="conversation-poller")

    def refresh(self):
        messages = self.messages.conversation(
            self.user1_id, self.user2_id, product_id=self.product_id, general=self.product_id is None
        )
        self.on_messages(messages)


class UnreadCountPoller(Poller):
    """Refreshes the unread message and notification badges every 30 seconds by default."""

    def __init__(self, messages, notifications, user_id, on_counts, interval: float = 30.0):
        self.messages = messages
        self.notifications = notifications
        self.user_id = user_id
        self.on_counts = on_counts
        super().__init__(interval, self.refresh, name="unread-count-poller")

    def refresh(self):
        self.on_counts(
            {
                "messages": self.messages.unread_count(self.user_id),
                "notifications": self.notifications.unread_count(self.user_id),
            }
        )
