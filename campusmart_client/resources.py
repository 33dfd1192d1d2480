"""
One client per REST resource.

Each method maps to a single endpoint and returns the normalized JSON body.
"""

import logging
import os
from typing import Any, Dict, Optional

from .http import ApiClient
from .products import LikeGuard, build_product_payload


logger = logging.getLogger(__name__)


class ResourceClient:
    def __init__(self, api: ApiClient):
        self.api = api


class AuthClient(ResourceClient):
    def register(self, email, password, first_name, last_name, **profile) -> Dict:
        body = self.api.post(
            "auth/register/",
            json={"email": email, "password": password, "first_name": first_name, "last_name": last_name, **profile},
        )
        self._begin(body)
        return body

    def login(self, email, password) -> Dict:
        body = self.api.post("auth/login/", json={"email": email, "password": password})
        self._begin(body)
        return body

    def me(self) -> Dict:
        user = self.api.get("auth/me/")
        self.api.session.update_user(user)
        return user

    def change_password(self, current_password, new_password, user_id=None) -> Dict:
        """Change the signed-in user's password; defaults to the session's user."""
        user_id = user_id or self.api.session.user_id
        return self.api.put(
            f"auth/users/{user_id}/change-password/",
            json={"current_password": current_password, "new_password": new_password},
        )

    def logout(self):
        self.api.session.clear()

    def _begin(self, body):
        self.api.session.begin(body["access"], body.get("user"), refresh_token=body.get("refresh"))
        logger.info(f"Signed in as {self.api.session.user_id}")


class ProductClient(ResourceClient):
    def __init__(self, api: ApiClient):
        super().__init__(api)
        self.likes = LikeGuard(lambda product_id: self.api.post(f"products/{product_id}/like/"))

    def list(self, category=None):
        return self.api.get("products/", params={"category": category} if category else None)

    def get(self, product_id):
        return self.api.get(f"products/{product_id}/")

    def search(self, term):
        return self.api.get("products/search/", params={"q": term})

    def by_seller(self, seller_id):
        return self.api.get(f"products/seller/{seller_id}/")

    def categories(self):
        return self.api.get("categories/")

    def create(self, form: Dict[str, Any]):
        return self.api.post("products/", json=build_product_payload(form))

    def update(self, product_id, form: Dict[str, Any]):
        return self.api.put(f"products/{product_id}/", json=build_product_payload(form))

    def delete(self, product_id):
        return self.api.delete(f"products/{product_id}/")

    def like(self, product_id):
        """Toggle the like; returns None while a toggle for the same product is in flight."""
        return self.likes.like(product_id)

    def is_liked(self, product_id) -> bool:
        return bool(self.api.get(f"products/{product_id}/liked/")["liked"])


class OrderClient(ResourceClient):
    def list(self, status=None):
        return self.api.get("orders/", params={"status": status} if status else None)

    def get(self, order_id):
        return self.api.get(f"orders/{order_id}/")

    def for_buyer(self, buyer_id):
        return self.api.get(f"orders/buyer/{buyer_id}/")

    def for_seller(self, seller_id):
        return self.api.get(f"orders/seller/{seller_id}/")

    def for_product(self, product_id):
        return self.api.get(f"orders/product/{product_id}/")

    def place(self, product_id, quantity=1, pickup_location="", payment_method="", delivery_notes=""):
        return self.api.post(
            "orders/",
            json={
                "product": product_id,
                "quantity": quantity,
                "pickup_location": pickup_location,
                "payment_method": payment_method,
                "delivery_notes": delivery_notes,
            },
        )

    def update_status(self, order_id, status, reason=None):
        body = {"status": status}
        if reason:
            body["reason"] = reason
        return self.api.patch(f"orders/{order_id}/status/", json=body)

    def delete(self, order_id):
        return self.api.delete(f"orders/{order_id}/")


class TradeOfferClient(ResourceClient):
    def list(self):
        return self.api.get("tradeoffers/")

    def get(self, offer_id):
        return self.api.get(f"tradeoffers/{offer_id}/")

    def received(self, seller_id):
        return self.api.get(f"tradeoffers/seller/{seller_id}/")

    def made(self, offerer_id):
        return self.api.get(f"tradeoffers/offerer/{offerer_id}/")

    def for_product(self, product_id):
        return self.api.get(f"tradeoffers/product/{product_id}/")

    def create(self, product_id, **offer):
        return self.api.post("tradeoffers/", json={"product": product_id, **offer})

    def update_status(self, offer_id, status):
        return self.api.patch(f"tradeoffers/{offer_id}/status/", json={"status": status})

    def delete(self, offer_id):
        return self.api.delete(f"tradeoffers/{offer_id}/")


class MessageClient(ResourceClient):
    def conversations(self, user_id):
        return self.api.get(f"messages/conversations/{user_id}/")

    def unread_count(self, user_id) -> int:
        return self.api.get(f"messages/unread-count/{user_id}/")["unread_count"]

    def user_messages(self, user_id):
        return self.api.get(f"messages/user/{user_id}/")

    def conversation(self, user1_id, user2_id, product_id=None, general=False):
        """Whole history by default; narrowed to one product, or to messages with no product."""
        path = f"messages/conversation/{user1_id}/{user2_id}/"
        if product_id is not None:
            path += f"product/{product_id}/"
        elif general:
            path += "general/"
        return self.api.get(path)

    def send(self, receiver_id, content="", product_id=None, image_url=""):
        body = {"receiver": str(receiver_id), "content": content, "image_url": image_url}
        if product_id is not None:
            body["product"] = product_id
        return self.api.post("messages/", json=body)

    def mark_read(self, message_id):
        return self.api.patch(f"messages/{message_id}/read/")

    def mark_conversation_read(self, other_user_id, product_id=None):
        return self.api.patch("messages/conversation/read/", json=self._target(other_user_id, product_id))

    def delete(self, message_id):
        return self.api.delete(f"messages/{message_id}/")

    def delete_conversation(self, other_user_id, product_id=None):
        return self.api.delete("messages/conversation/", json=self._target(other_user_id, product_id))

    def archive(self, other_user_id, product_id=None, value=True):
        body = {**self._target(other_user_id, product_id), "value": value}
        return self.api.patch("messages/conversation/archive/", json=body)

    def mute(self, other_user_id, product_id=None, value=True):
        body = {**self._target(other_user_id, product_id), "value": value}
        return self.api.patch("messages/conversation/mute/", json=body)

    def upload_image(self, path: str) -> str:
        with open(path, "rb") as fh:
            body = self.api.post("messages/upload-image/", files={"file": (os.path.basename(path), fh)})
        return body["image_url"]

    def report(self, reported_user_id, reason, product_id=None):
        body = {"reported_user": str(reported_user_id), "reason": reason}
        if product_id is not None:
            body["product"] = product_id
        return self.api.post("reports/", json=body)

    @staticmethod
    def _target(other_user_id, product_id) -> Dict:
        body = {"other_user": str(other_user_id)}
        if product_id is not None:
            body["product"] = product_id
        return body


class ReviewClient(ResourceClient):
    def get(self, review_id):
        return self.api.get(f"reviews/{review_id}/")

    def for_seller(self, seller_id):
        return self.api.get(f"reviews/user/{seller_id}/")

    def seller_detailed(self, seller_id, page=0, size=10, sort="recent"):
        return self.api.get(f"reviews/seller/{seller_id}/detailed/", params={"page": page, "size": size, "sort": sort})

    def written(self, reviewer_id):
        return self.api.get(f"reviews/written/{reviewer_id}/")

    def for_product(self, product_id):
        return self.api.get(f"reviews/product/{product_id}/")

    def create(self, rating, comment="", seller_id=None, order_id=None, product_id=None):
        body = {"rating": rating, "comment": comment}
        if seller_id is not None:
            body["seller"] = str(seller_id)
        if order_id is not None:
            body["order"] = order_id
        if product_id is not None:
            body["product"] = product_id
        return self.api.post("reviews/", json=body)

    def update(self, review_id, rating=None, comment=None):
        body = {key: value for key, value in (("rating", rating), ("comment", comment)) if value is not None}
        return self.api.patch(f"reviews/{review_id}/", json=body)

    def delete(self, review_id):
        return self.api.delete(f"reviews/{review_id}/")


class NotificationClient(ResourceClient):
    def list(self, user_id, type: Optional[str] = None):
        return self.api.get(f"notifications/profile/{user_id}/", params={"type": type} if type else None)

    def unread(self, user_id):
        return self.api.get(f"notifications/profile/{user_id}/unread/")

    def unread_count(self, user_id) -> int:
        return self.api.get(f"notifications/profile/{user_id}/unread/count/")["unread_count"]

    def mark_read(self, notification_id):
        return self.api.patch(f"notifications/{notification_id}/read/")

    def mark_all_read(self, user_id):
        return self.api.patch(f"notifications/profile/{user_id}/read-all/")

    def delete(self, notification_id):
        return self.api.delete(f"notifications/{notification_id}/")

    def delete_all(self, user_id):
        return self.api.delete(f"notifications/profile/{user_id}/")


class ProfileClient(ResourceClient):
    def get(self, user_id):
        return self.api.get(f"profiles/{user_id}/")

    def update(self, user_id, **fields):
        return self.api.patch(f"profiles/{user_id}/", json=fields)

    def upload_picture(self, user_id, path: str):
        with open(path, "rb") as fh:
            return self.api.post(f"profiles/{user_id}/upload-picture/", files={"file": (os.path.basename(path), fh)})


class SellerClient(ResourceClient):
    def info(self, seller_id):
        return self.api.get(f"profiles/{seller_id}/seller-info/")

    def products(self, seller_id):
        return self.api.get(f"products/seller/{seller_id}/")

    def reviews(self, seller_id, page=0, size=10):
        return self.api.get(f"reviews/seller/{seller_id}/detailed/", params={"page": page, "size": size})
