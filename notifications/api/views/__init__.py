from .notification_views import NotificationViewSet


__all__ = ["NotificationViewSet"]
