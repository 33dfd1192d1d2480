"""
Action buttons a viewer may press on an order or trade offer.

These tables mirror the server's transition rules; the server stays the
authority and rejects anything else.
"""

from typing import List, Optional, Tuple


Action = Tuple[str, Optional[str]]

ORDER_SELLER_ACTIONS = {
    "pending": (("Confirm", "confirmed"), ("Cancel", "cancelled")),
    "confirmed": (("Mark Ready", "ready_for_pickup"), ("Cancel", "cancelled")),
    "ready_for_pickup": (("Mark Completed", "completed"), ("Cancel", "cancelled")),
}
ORDER_BUYER_ACTIONS = {
    "pending": (("Cancel", "cancelled"),),
}

TRADE_OFFER_SELLER_ACTIONS = {
    "PENDING": (("Accept", "ACCEPTED"), ("Reject", "REJECTED")),
}
TRADE_OFFER_OFFERER_ACTIONS = {
    "PENDING": (("Withdraw", "WITHDRAWN"),),
}
TRADE_OFFER_FINAL_ACTIONS = (("Delete", None),)


def order_actions(status: str, viewer_role: str) -> List[Action]:
    """``viewer_role`` is ``"seller"`` or ``"buyer"``; completed and cancelled orders offer nothing."""
    status = (status or "").strip().lower()
    table = ORDER_SELLER_ACTIONS if viewer_role == "seller" else ORDER_BUYER_ACTIONS
    return list(table.get(status, ()))


def trade_offer_actions(status: str, viewer_is_seller: bool) -> List[Action]:
    status = (status or "").strip().upper()
    if status != "PENDING":
        return list(TRADE_OFFER_FINAL_ACTIONS)
    table = TRADE_OFFER_SELLER_ACTIONS if viewer_is_seller else TRADE_OFFER_OFFERER_ACTIONS
    return list(table[status])
