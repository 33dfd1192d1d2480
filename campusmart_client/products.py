import logging
import threading
from typing import Any, Callable, Dict, Optional, Set


logger = logging.getLogger(__name__)

LISTING_TYPES = ("for_sale", "sale", "trade_only", "trade_ok")

PRODUCT_FIELDS = ("name", "description", "category", "brand_type", "condition", "contact_info", "stock")


def build_product_payload(form: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shape a product form into the create/update request body.

    A trade-only listing never carries a price, whatever was typed. The first
    image URL becomes the primary image.
    """
    listing_type = form.get("listing_type") or "for_sale"
    if listing_type not in LISTING_TYPES:
        raise ValueError(f"Unknown listing type '{listing_type}'")

    trade_only = listing_type == "trade_only"
    raw_price = form.get("price")
    if trade_only or raw_price in (None, ""):
        price = None
    else:
        price = float(raw_price)

    payload = {field: form[field] for field in PRODUCT_FIELDS if form.get(field) not in (None, "")}
    payload["price"] = price
    payload["trade_only"] = trade_only
    urls = [url for url in (form.get("image_urls") or []) if url]
    payload["images"] = [{"image_url": url, "is_primary": index == 0} for index, url in enumerate(urls)]
    return payload


class LikeGuard:
    """
    Drops a like request while an earlier one for the same product is still in flight.

    Safe to share between threads, such as the UI thread and a poller.
    """

    def __init__(self, send: Callable[[Any], Any]):
        self._send = send
        self._pending: Set[Any] = set()
        self._lock = threading.Lock()

    def is_pending(self, product_id) -> bool:
        return product_id in self._pending

    def like(self, product_id) -> Optional[Any]:
        with self._lock:
            if product_id in self._pending:
                logger.debug(f"Like for product {product_id} already in flight")
                return None
            self._pending.add(product_id)
        try:
            return self._send(product_id)
        finally:
            with self._lock:
                self._pending.discard(product_id)
