import threading
import time
from unittest.mock import MagicMock

import pytest

from campusmart_client import LikeGuard, build_product_payload, select_display_image
from campusmart_client.images import PLACEHOLDER_IMAGE_URL


@pytest.mark.unit
class TestBuildProductPayload:
    def test_sale_listing(self):
        payload = build_product_payload(
            {
                "name": "Desk lamp",
                "description": "Warm light",
                "price": "12.50",
                "listing_type": "for_sale",
                "condition": "good",
                "stock": 2,
                "image_urls": ["https://cdn.test/a.png", "https://cdn.test/b.png"],
            }
        )

        assert payload["price"] == 12.5
        assert payload["trade_only"] is False
        assert payload["stock"] == 2
        assert payload["images"] == [
            {"image_url": "https://cdn.test/a.png", "is_primary": True},
            {"image_url": "https://cdn.test/b.png", "is_primary": False},
        ]

    def test_trade_only_drops_typed_price(self):
        payload = build_product_payload({"name": "Board game", "price": "30", "listing_type": "trade_only"})

        assert payload["price"] is None
        assert payload["trade_only"] is True

    def test_empty_price_is_none(self):
        assert build_product_payload({"name": "Mug", "price": "", "listing_type": "trade_ok"})["price"] is None

    def test_blank_image_urls_are_skipped(self):
        payload = build_product_payload({"name": "Mug", "image_urls": ["", "https://cdn.test/m.png"]})
        assert payload["images"] == [{"image_url": "https://cdn.test/m.png", "is_primary": True}]

    def test_unknown_listing_type(self):
        with pytest.raises(ValueError):
            build_product_payload({"name": "Mug", "listing_type": "auction"})


@pytest.mark.unit
class TestLikeGuard:
    def test_second_like_while_in_flight_is_dropped(self):
        results = []
        guard = None

        def send(product_id):
            results.append(guard.like(product_id))
            return {"liked": True, "like_count": 1}

        guard = LikeGuard(send)

        assert guard.like(7) == {"liked": True, "like_count": 1}
        assert results == [None]
        assert not guard.is_pending(7)

    def test_pending_flag_cleared_after_failure(self):
        send = MagicMock(side_effect=RuntimeError("boom"))
        guard = LikeGuard(send)

        with pytest.raises(RuntimeError):
            guard.like(3)

        assert not guard.is_pending(3)
        send.side_effect = None
        send.return_value = {"liked": False}
        assert guard.like(3) == {"liked": False}


@pytest.mark.unit
class TestSelectDisplayImage:
    def test_primary_wins(self):
        images = [{"image_url": "a.png", "is_primary": False}, {"image_url": "b.png", "is_primary": True}]
        assert select_display_image(images) == "b.png"

    def test_first_without_primary(self):
        assert select_display_image([{"image_url": "a.png"}, {"image_url": "b.png"}]) == "a.png"

    def test_placeholder(self):
        assert select_display_image([]) == PLACEHOLDER_IMAGE_URL
        assert select_display_image(None) == PLACEHOLDER_IMAGE_URL

    def test_concurrent_likes_from_two_threads_send_once(self):
        class SlowAddSet(set):
            def add(self, item):
                time.sleep(0.05)
                super().add(item)

        sends = []
        release = threading.Event()

        def send(product_id):
            sends.append(product_id)
            release.wait(2)
            return {"liked": True, "like_count": 1}

        guard = LikeGuard(send)
        guard._pending = SlowAddSet()
        start = threading.Barrier(2)
        results = []

        def like():
            start.wait()
            results.append(guard.like(7))

        threads = [threading.Thread(target=like) for _ in range(2)]
        for thread in threads:
            thread.start()
        time.sleep(0.2)
        release.set()
        for thread in threads:
            thread.join(2)

        assert sends == [7]
        assert results.count(None) == 1
        assert {"liked": True, "like_count": 1} in results
