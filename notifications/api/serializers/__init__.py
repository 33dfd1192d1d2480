from .notification_serializers import BulkResultSerializer, NotificationSerializer, UnreadCountSerializer


__all__ = ["NotificationSerializer", "UnreadCountSerializer", "BulkResultSerializer"]
