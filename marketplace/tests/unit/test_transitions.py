import uuid
from types import SimpleNamespace

import pytest

from marketplace.models import Order, Product, TradeOffer


def make_user():
    return SimpleNamespace(id=uuid.uuid4())


@pytest.fixture
def parties():
    return make_user(), make_user()


def make_order(buyer, seller, status):
    return Order(buyer_id=buyer.id, seller_id=seller.id, status=status)


@pytest.mark.unit
class TestOrderTransitions:
    @pytest.mark.parametrize(
        "current, allowed",
        [
            (Order.PENDING, {Order.CONFIRMED, Order.CANCELLED}),
            (Order.CONFIRMED, {Order.READY_FOR_PICKUP, Order.CANCELLED}),
            (Order.READY_FOR_PICKUP, {Order.COMPLETED, Order.CANCELLED}),
            (Order.COMPLETED, set()),
            (Order.CANCELLED, set()),
        ],
    )
    def test_table(self, parties, current, allowed):
        order = make_order(*parties, current)
        statuses = {choice for choice, _ in Order.STATUS_CHOICES}

        assert {target for target in statuses if order.can_transition(target)} == allowed
        assert order.is_terminal == (not allowed)

    def test_same_status_never_allowed(self, parties):
        for status, _ in Order.STATUS_CHOICES:
            assert not make_order(*parties, status).can_transition(status)

    def test_seller_actions(self, parties):
        buyer, seller = parties
        labels = {
            status: [action["label"] for action in make_order(buyer, seller, status).available_actions(seller)]
            for status, _ in Order.STATUS_CHOICES
        }

        assert labels == {
            Order.PENDING: ["Confirm", "Cancel"],
            Order.CONFIRMED: ["Mark Ready", "Cancel"],
            Order.READY_FOR_PICKUP: ["Mark Completed", "Cancel"],
            Order.COMPLETED: [],
            Order.CANCELLED: [],
        }

    def test_buyer_may_only_cancel_pending(self, parties):
        buyer, seller = parties

        assert make_order(buyer, seller, Order.PENDING).available_actions(buyer) == [
            {"label": "Cancel", "status": Order.CANCELLED}
        ]
        assert make_order(buyer, seller, Order.CONFIRMED).available_actions(buyer) == []
        assert not make_order(buyer, seller, Order.PENDING).can_actor_transition(buyer, Order.CONFIRMED)

    def test_every_action_is_a_legal_transition(self, parties):
        buyer, seller = parties
        for status, _ in Order.STATUS_CHOICES:
            order = make_order(buyer, seller, status)
            for viewer in (buyer, seller):
                for action in order.available_actions(viewer):
                    assert order.can_transition(action["status"])

    def test_outsider_has_no_actions(self, parties):
        order = make_order(*parties, Order.PENDING)
        assert order.available_actions(make_user()) == []


@pytest.mark.unit
class TestTradeOfferTransitions:
    def make_offer(self, offerer, seller, status):
        return TradeOffer(product=Product(seller_id=seller.id), offerer_id=offerer.id, status=status)

    @pytest.mark.parametrize("raw", [" accepted ", "Accepted", "ACCEPTED"])
    def test_normalize_status(self, raw):
        assert TradeOffer.normalize_status(raw) == TradeOffer.ACCEPTED

    def test_pending_actions_per_role(self, parties):
        offerer, seller = parties
        offer = self.make_offer(offerer, seller, TradeOffer.PENDING)

        assert [a["label"] for a in offer.available_actions(seller)] == ["Accept", "Reject"]
        assert [a["label"] for a in offer.available_actions(offerer)] == ["Withdraw"]

    @pytest.mark.parametrize("status", [TradeOffer.ACCEPTED, TradeOffer.REJECTED, TradeOffer.WITHDRAWN])
    def test_final_offers_only_offer_delete(self, parties, status):
        offerer, seller = parties
        offer = self.make_offer(offerer, seller, status)

        assert offer.is_final
        assert offer.available_actions(seller) == [{"label": "Delete", "status": None}]
        assert offer.available_actions(offerer) == [{"label": "Delete", "status": None}]
        assert not any(offer.can_transition(target) for target, _ in TradeOffer.STATUS_CHOICES)

    def test_roles_guard_moves(self, parties):
        offerer, seller = parties
        offer = self.make_offer(offerer, seller, TradeOffer.PENDING)

        assert offer.can_actor_transition(seller, TradeOffer.ACCEPTED)
        assert offer.can_actor_transition(seller, TradeOffer.REJECTED)
        assert not offer.can_actor_transition(seller, TradeOffer.WITHDRAWN)
        assert offer.can_actor_transition(offerer, TradeOffer.WITHDRAWN)
        assert not offer.can_actor_transition(offerer, TradeOffer.ACCEPTED)
        assert not offer.can_actor_transition(make_user(), TradeOffer.ACCEPTED)
