"""
NotificationService - persistence, queries and real-time fan-out of user notifications.

Every notification is stored first and then pushed to the recipient's
``notifications_user_{id}`` channel group. A failed push is logged and never
undoes the stored notification.
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.exceptions import ObjectDoesNotExist, PermissionDenied

from notifications.domain.models import Notification
from utils.rbac import is_same_user


logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 50
PREVIEW_CUT = 47
DEFAULT_PICKUP_LOCATION = "the designated location"
DEFAULT_CANCEL_REASON = "Order cancelled"


def notification_group_name(user_id) -> str:
    return f"notifications_user_{user_id}"


def message_preview(content: str) -> str:
    """Notification text for a chat message; image-only messages have no content."""
    if not content:
        return "Sent an image"
    if len(content) > PREVIEW_LIMIT:
        return content[:PREVIEW_CUT] + "..."
    return content


def serialize_notification(notification: Notification) -> dict:
    return {
        "id": notification.id,
        "recipient": str(notification.recipient_id),
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "related_id": notification.related_id,
        "related_type": notification.related_type,
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat() if notification.created_at else None,
    }


class NotificationService:
    def __init__(self):
        self.channel_layer = get_channel_layer()

    # Creation and push

    def create_notification(self, recipient, type, title, message, related_id=None, related_type=""):
        notification = Notification.objects.create(
            recipient=recipient,
            type=type,
            title=title,
            message=message,
            related_id=related_id,
            related_type=related_type,
        )
        logger.info(f"Created {type} notification {notification.id} for user {recipient.id}")
        self.push(notification)
        return notification

    def push(self, notification: Notification):
        """Send a stored notification to the recipient's open sockets."""
        if self.channel_layer is None:
            return
        try:
            async_to_sync(self.channel_layer.group_send)(
                notification_group_name(notification.recipient_id),
                {"type": "notification_new", "notification": serialize_notification(notification)},
            )
        except Exception as e:
            logger.error(f"Failed to push notification {notification.id}: {e}")

    # Queries (owner only)

    def _check_owner(self, user, owner_id):
        if not is_same_user(user, owner_id):
            raise PermissionDenied("You can only access your own notifications")

    def _get_owned(self, user, notification_id) -> Notification:
        try:
            notification = Notification.objects.get(id=notification_id)
        except (Notification.DoesNotExist, ValueError):
            raise ObjectDoesNotExist("Notification not found")
        if notification.recipient_id != user.id:
            raise PermissionDenied("You can only access your own notifications")
        return notification

    def list_notifications(self, user, owner_id, type=None):
        self._check_owner(user, owner_id)
        queryset = Notification.objects.filter(recipient_id=user.id)
        if type:
            queryset = queryset.filter(type=type.strip().upper())
        return queryset

    def list_unread(self, user, owner_id):
        self._check_owner(user, owner_id)
        return Notification.objects.filter(recipient_id=user.id, is_read=False)

    def unread_count(self, user, owner_id=None) -> int:
        if owner_id is not None:
            self._check_owner(user, owner_id)
        return Notification.objects.filter(recipient_id=user.id, is_read=False).count()

    def mark_as_read(self, user, notification_id) -> Notification:
        notification = self._get_owned(user, notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return notification

    def mark_all_as_read(self, user, owner_id) -> int:
        self._check_owner(user, owner_id)
        updated = Notification.objects.filter(recipient_id=user.id, is_read=False).update(is_read=True)
        logger.info(f"Marked {updated} notifications read for user {user.id}")
        return updated

    def delete_notification(self, user, notification_id):
        notification = self._get_owned(user, notification_id)
        notification.delete()

    def delete_all(self, user, owner_id) -> int:
        self._check_owner(user, owner_id)
        deleted, _ = Notification.objects.filter(recipient_id=user.id).delete()
        logger.info(f"Deleted {deleted} notifications for user {user.id}")
        return deleted

    # Notifiers with fixed copy

    def notify_order_placed(self, order):
        return self.create_notification(
            order.seller,
            Notification.ORDER_PLACED,
            "New Order Received!",
            f"{order.buyer.display_name} placed an order for your product '{order.product.name}'",
            related_id=order.id,
            related_type="ORDER",
        )

    def notify_order_confirmed(self, order):
        return self.create_notification(
            order.buyer,
            Notification.ORDER_CONFIRMED,
            "Order Confirmed!",
            f"Your order for '{order.product.name}' has been confirmed by the seller. "
            "Awaiting pickup preparation.",
            related_id=order.id,
            related_type="ORDER",
        )

    def notify_order_ready(self, order):
        location = order.pickup_location or DEFAULT_PICKUP_LOCATION
        return self.create_notification(
            order.buyer,
            Notification.ORDER_READY,
            "Order Ready for Pickup!",
            f"Your order for '{order.product.name}' is ready for pickup at {location}",
            related_id=order.id,
            related_type="ORDER",
        )

    def notify_order_completed(self, order):
        return self.create_notification(
            order.buyer,
            Notification.ORDER_COMPLETED,
            "Order Completed!",
            f"Your order for '{order.product.name}' has been completed. Thank you for your purchase!",
            related_id=order.id,
            related_type="ORDER",
        )

    def notify_order_cancelled(self, order, reason=None):
        """Both parties are told about a cancellation."""
        text = f"Order for '{order.product.name}' has been cancelled. Reason: {reason or DEFAULT_CANCEL_REASON}"
        return [
            self.create_notification(
                party, Notification.ORDER_CANCELLED, "Order Cancelled", text, related_id=order.id, related_type="ORDER"
            )
            for party in (order.buyer, order.seller)
        ]

    def notify_trade_offer_received(self, offer):
        return self.create_notification(
            offer.product.seller,
            Notification.TRADE_OFFER,
            "New Trade Offer!",
            f"{offer.offerer.display_name} made a trade offer on your product '{offer.product.name}'",
            related_id=offer.id,
            related_type="TRADE_OFFER",
        )

    def notify_trade_offer_status(self, offer):
        """Tell the counterpart of whoever moved the offer out of PENDING."""
        product_name = offer.product.name
        if offer.status == "WITHDRAWN":
            recipient = offer.product.seller
            title = "Trade Offer Withdrawn"
            text = f"{offer.offerer.display_name} withdrew their trade offer on '{product_name}'"
        else:
            recipient = offer.offerer
            verb = offer.status.lower()
            title = f"Trade Offer {offer.status.capitalize()}"
            text = f"Your trade offer for '{product_name}' has been {verb} by the seller."
        return self.create_notification(
            recipient, Notification.TRADE_OFFER, title, text, related_id=offer.id, related_type="TRADE_OFFER"
        )

    def notify_review(self, review):
        text = f"{review.reviewer.display_name} left you a {review.rating}-star review"
        if review.product_id:
            text += f" for '{review.product.name}'"
        return self.create_notification(
            review.seller, Notification.REVIEW, "New Review!", text, related_id=review.id, related_type="REVIEW"
        )

    def notify_new_message(self, message):
        return self.create_notification(
            message.receiver,
            Notification.MESSAGE,
            f"New message from {message.sender.display_name}",
            message_preview(message.content),
            related_id=message.id,
            related_type="MESSAGE",
        )
