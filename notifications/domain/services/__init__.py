from .notification_service import NotificationService, message_preview, notification_group_name


__all__ = ["NotificationService", "message_preview", "notification_group_name"]
