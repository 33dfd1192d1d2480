from .message_views import MessageViewSet
from .report_views import ReportViewSet


__all__ = ["MessageViewSet", "ReportViewSet"]
