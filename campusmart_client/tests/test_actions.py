import pytest

from campusmart_client import order_actions, trade_offer_actions


def labels(actions):
    return {label for label, _ in actions}


@pytest.mark.unit
class TestOrderActions:
    @pytest.mark.parametrize(
        "status, expected",
        [
            ("pending", {"Confirm", "Cancel"}),
            ("confirmed", {"Mark Ready", "Cancel"}),
            ("ready_for_pickup", {"Mark Completed", "Cancel"}),
            ("completed", set()),
            ("cancelled", set()),
        ],
    )
    def test_seller(self, status, expected):
        assert labels(order_actions(status, "seller")) == expected

    def test_buyer_only_cancels_pending(self):
        assert order_actions("pending", "buyer") == [("Cancel", "cancelled")]
        assert order_actions("confirmed", "buyer") == []

    def test_status_case_is_ignored(self):
        assert labels(order_actions("PENDING", "seller")) == {"Confirm", "Cancel"}


@pytest.mark.unit
class TestTradeOfferActions:
    def test_pending(self):
        assert trade_offer_actions("PENDING", viewer_is_seller=True) == [("Accept", "ACCEPTED"), ("Reject", "REJECTED")]
        assert trade_offer_actions("pending", viewer_is_seller=False) == [("Withdraw", "WITHDRAWN")]

    @pytest.mark.parametrize("status", ["ACCEPTED", "REJECTED", "WITHDRAWN"])
    @pytest.mark.parametrize("viewer_is_seller", [True, False])
    def test_final_states_only_delete(self, status, viewer_is_seller):
        assert trade_offer_actions(status, viewer_is_seller) == [("Delete", None)]
