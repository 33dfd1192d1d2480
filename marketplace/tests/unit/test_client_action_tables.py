import pytest

from campusmart_client import actions
from marketplace.models import Order, TradeOffer


@pytest.mark.unit
class TestClientActionTables:
    """The SDK's button tables must offer exactly what the server accepts."""

    def test_order_tables_match(self):
        assert actions.ORDER_SELLER_ACTIONS == Order.SELLER_ACTIONS
        assert actions.ORDER_BUYER_ACTIONS == Order.BUYER_ACTIONS

    def test_order_targets_are_valid_transitions(self):
        for table in (actions.ORDER_SELLER_ACTIONS, actions.ORDER_BUYER_ACTIONS):
            for status, buttons in table.items():
                assert {target for _, target in buttons} <= set(Order.TRANSITIONS[status])

    def test_trade_offer_tables_match_transition_roles(self):
        pending = TradeOffer.TRANSITIONS[TradeOffer.PENDING]
        seller_targets = {target for _, target in actions.TRADE_OFFER_SELLER_ACTIONS[TradeOffer.PENDING]}
        offerer_targets = {target for _, target in actions.TRADE_OFFER_OFFERER_ACTIONS[TradeOffer.PENDING]}

        assert seller_targets == {target for target, role in pending.items() if role == "seller"}
        assert offerer_targets == {target for target, role in pending.items() if role == "offerer"}
