"""
MessageService - direct messages between users, grouped into conversations.

A conversation is the set of messages exchanged by two users about one product,
or about nothing in particular (``product`` is null, the "general" conversation).
New messages and read receipts are pushed to both participants'
``inbox_user_{id}`` channel groups.
"""

import logging
import os
import uuid

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist, PermissionDenied, ValidationError
from django.db.models import Q
from django.utils import timezone

from infrastructure.storage import StorageException, StorageInterface
from marketplace.models import Product
from messaging.domain.models import ConversationReport, Message
from messaging.infra.observability.metrics import conversation_reports_total, messages_sent_total
from utils.rbac import is_same_user


User = get_user_model()
logger = logging.getLogger(__name__)

# Product filter meaning "every message between the two users"
ANY_PRODUCT = object()


def inbox_group_name(user_id) -> str:
    return f"inbox_user_{user_id}"


def conversation_filter(user_a_id, user_b_id, product_id=ANY_PRODUCT) -> Q:
    pair = Q(sender_id=user_a_id, receiver_id=user_b_id) | Q(sender_id=user_b_id, receiver_id=user_a_id)
    if product_id is ANY_PRODUCT:
        return pair
    if product_id is None:
        return pair & Q(product__isnull=True)
    return pair & Q(product_id=product_id)


def serialize_message(message: Message) -> dict:
    return {
        "id": message.id,
        "sender": str(message.sender_id),
        "receiver": str(message.receiver_id),
        "product": message.product_id,
        "content": message.content,
        "image_url": message.image_url,
        "is_read": message.is_read,
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }


class MessageService:
    def __init__(self, storage: StorageInterface, notifications=None):
        self.storage = storage
        self.notifications = notifications
        self.channel_layer = get_channel_layer()

    def _check_owner(self, user, owner_id):
        if not is_same_user(user, owner_id):
            raise PermissionDenied("You can only access your own messages")

    def _get_user(self, user_id, label="User"):
        try:
            return User.objects.get(id=user_id)
        except (User.DoesNotExist, ValueError, ValidationError):
            raise ObjectDoesNotExist(f"{label} not found")

    def _get_product(self, product_id):
        try:
            return Product.objects.get(id=product_id)
        except (Product.DoesNotExist, ValueError):
            raise ObjectDoesNotExist("Product not found")

    def _visible(self):
        return Message.objects.filter(is_deleted=False).select_related(
            "sender__profile", "receiver__profile", "product"
        )

    # Inbox

    def list_conversations(self, user, owner_id):
        """
        One entry per (other user, product) pair, most recent conversation first.

        ``is_archived`` and ``is_muted`` reflect the conversation's latest message.
        """
        self._check_owner(user, owner_id)
        messages = (
            self._visible()
            .filter(Q(sender_id=user.id) | Q(receiver_id=user.id))
            .prefetch_related("product__images")
            .order_by("-created_at", "-id")
        )

        conversations = {}
        for message in messages:
            other = message.receiver if message.sender_id == user.id else message.sender
            key = (other.id, message.product_id)
            conversation = conversations.get(key)
            if conversation is None:
                conversation = conversations[key] = {
                    "other_user": other,
                    "product": message.product,
                    "last_message": message.content,
                    "last_message_image": message.image_url,
                    "last_message_time": message.created_at,
                    "last_message_sender": message.sender_id,
                    "unread_count": 0,
                    "is_archived": message.is_archived,
                    "is_muted": message.is_muted,
                }
            if message.receiver_id == user.id and not message.is_read:
                conversation["unread_count"] += 1

        return list(conversations.values())

    def unread_count(self, user, owner_id) -> int:
        self._check_owner(user, owner_id)
        return Message.objects.filter(receiver_id=user.id, is_read=False, is_deleted=False).count()

    def list_user_messages(self, user, owner_id):
        """Every visible message the user sent or received, newest first."""
        self._check_owner(user, owner_id)
        return (
            self._visible()
            .filter(Q(sender_id=user.id) | Q(receiver_id=user.id))
            .order_by("-created_at", "-id")
        )

    def get_conversation(self, user, user1_id, user2_id, product_id=ANY_PRODUCT):
        """Messages between two users in chronological order; the caller must be one of them."""
        if not (is_same_user(user, user1_id) or is_same_user(user, user2_id)):
            raise PermissionDenied("You are not a participant in this conversation")
        try:
            return self._visible().filter(conversation_filter(user1_id, user2_id, product_id)).order_by(
                "created_at", "id"
            )
        except ValidationError:
            raise ObjectDoesNotExist("User not found")

    # Sending

    def send_message(self, sender, receiver_id, content="", product_id=None, image_url=""):
        content = (content or "").strip()
        image_url = (image_url or "").strip()
        if not content and not image_url:
            raise ValidationError("Message must have content or an image")
        if str(sender.id) == str(receiver_id):
            raise ValidationError("You cannot send a message to yourself")

        receiver = self._get_user(receiver_id, label="Receiver")
        product = self._get_product(product_id) if product_id is not None else None

        latest = (
            Message.objects.filter(conversation_filter(sender.id, receiver.id, product_id))
            .order_by("-created_at", "-id")
            .only("is_muted")
            .first()
        )
        is_muted = bool(latest and latest.is_muted)

        message = Message.objects.create(
            sender=sender,
            receiver=receiver,
            product=product,
            content=content,
            image_url=image_url,
            is_muted=is_muted,
        )
        messages_sent_total.labels(kind=message.kind).inc()
        logger.info(f"Message {message.id} sent from {sender.id} to {receiver.id} (product={product_id})")

        if is_muted:
            logger.debug(f"Conversation muted, skipping notification for message {message.id}")
        else:
            self._notify(message)

        payload = serialize_message(message)
        for user_id in (sender.id, receiver.id):
            self._push(user_id, {"type": "message_new", "message": payload})
        return message

    def _notify(self, message):
        if self.notifications is None:
            return
        try:
            self.notifications.notify_new_message(message)
        except Exception as e:
            logger.error(f"Failed to notify about message {message.id}: {e}", exc_info=True)

    def _push(self, user_id, event):
        if self.channel_layer is None:
            return
        try:
            async_to_sync(self.channel_layer.group_send)(inbox_group_name(user_id), event)
        except Exception as e:
            logger.error(f"Failed to push {event['type']} to user {user_id}: {e}")

    # Read state

    def mark_as_read(self, user, message_id) -> Message:
        try:
            message = Message.objects.get(id=message_id, is_deleted=False)
        except (Message.DoesNotExist, ValueError):
            raise ObjectDoesNotExist("Message not found")
        if message.receiver_id != user.id:
            raise PermissionDenied("Only the receiver can mark a message as read")
        if not message.is_read:
            message.is_read = True
            message.save(update_fields=["is_read"])
        return message

    def mark_conversation_read(self, user, other_user_id, product_id=None) -> int:
        """
        Mark everything ``other_user`` sent to ``user`` in one conversation as read.

        Without a product only the general conversation is affected.
        """
        other = self._get_user(other_user_id)
        queryset = Message.objects.filter(sender_id=other.id, receiver_id=user.id, is_read=False)
        if product_id is None:
            queryset = queryset.filter(product__isnull=True)
        else:
            queryset = queryset.filter(product_id=product_id)
        updated = queryset.update(is_read=True)

        if updated:
            logger.info(f"User {user.id} read {updated} messages from {other.id}")
            self._push(
                other.id,
                {
                    "type": "message_read",
                    "receipt": {
                        "reader": str(user.id),
                        "product": product_id,
                        "count": updated,
                        "read_at": timezone.now().isoformat(),
                    },
                },
            )
        return updated

    # Removal and conversation flags

    def delete_message(self, user, message_id):
        try:
            message = Message.objects.get(id=message_id, is_deleted=False)
        except (Message.DoesNotExist, ValueError):
            raise ObjectDoesNotExist("Message not found")
        if message.sender_id != user.id:
            raise PermissionDenied("You can only delete your own messages")
        message.is_deleted = True
        message.save(update_fields=["is_deleted"])
        logger.info(f"Message {message.id} deleted by {user.id}")

    def _update_conversation(self, user, other_user_id, product_id, **fields) -> int:
        other = self._get_user(other_user_id)
        if product_id is None:
            product_id = ANY_PRODUCT
        updated = Message.objects.filter(conversation_filter(user.id, other.id, product_id)).update(**fields)
        logger.info(f"User {user.id} set {fields} on {updated} messages with {other.id}")
        return updated

    def delete_conversation(self, user, other_user_id, product_id=None) -> int:
        """Soft-delete a conversation for both sides; without a product every conversation with the user goes."""
        return self._update_conversation(user, other_user_id, product_id, is_deleted=True)

    def set_archived(self, user, other_user_id, archived=True, product_id=None) -> int:
        return self._update_conversation(user, other_user_id, product_id, is_archived=archived)

    def set_muted(self, user, other_user_id, muted=True, product_id=None) -> int:
        return self._update_conversation(user, other_user_id, product_id, is_muted=muted)

    # Attachments and moderation

    def upload_image(self, user, image_file) -> str:
        max_size = settings.MESSAGE_IMAGE_MAX_BYTES
        if image_file.size > max_size:
            raise ValidationError(f"Image file too large. Maximum size is {max_size // (1024 * 1024)}MB")

        extension = os.path.splitext(image_file.name)[1].lstrip(".").lower()
        allowed = settings.MESSAGE_IMAGE_EXTENSIONS
        if extension not in allowed:
            raise ValidationError(f"Invalid file type. Allowed types: {', '.join(allowed)}")

        try:
            stored = self.storage.upload(
                image_file,
                f"message_images/{user.id}/{uuid.uuid4().hex}.{extension}",
                getattr(image_file, "content_type", "") or f"image/{extension}",
            )
        except StorageException as e:
            logger.error(f"Message image upload failed for user {user.id}: {e}")
            raise

        logger.info(f"Message image uploaded by {user.id}: {stored.key}")
        return stored.url

    def report_conversation(self, reporter, reported_user_id, reason, product_id=None) -> ConversationReport:
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required")
        if str(reporter.id) == str(reported_user_id):
            raise ValidationError("You cannot report yourself")

        reported = self._get_user(reported_user_id)
        product = self._get_product(product_id) if product_id is not None else None

        report = ConversationReport.objects.create(
            reporter=reporter, reported_user=reported, product=product, reason=reason
        )
        conversation_reports_total.inc()
        logger.warning(f"Conversation reported: {reporter.id} -> {reported.id} (report {report.id})")
        return report
