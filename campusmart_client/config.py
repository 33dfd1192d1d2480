import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_BASE_URL = "http://localhost:8000/api"


@dataclass
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    # JSON file for the persisted session; None keeps it in memory only
    session_path: Optional[str] = None
    conversation_poll_seconds: float = 5.0
    unread_poll_seconds: float = 30.0

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            base_url=os.environ.get("CAMPUSMART_API_URL", DEFAULT_BASE_URL),
            timeout=float(os.environ.get("CAMPUSMART_TIMEOUT", 10)),
            session_path=os.environ.get("CAMPUSMART_SESSION_PATH") or None,
            conversation_poll_seconds=float(os.environ.get("CAMPUSMART_CONVERSATION_POLL", 5)),
            unread_poll_seconds=float(os.environ.get("CAMPUSMART_UNREAD_POLL", 30)),
        )
