from .message_serializers import (
    ConversationFlagSerializer,
    ConversationSerializer,
    ConversationTargetSerializer,
    ConversationUpdateResultSerializer,
    ImageUploadSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    MessageUnreadCountSerializer,
)
from .report_serializers import ConversationReportSerializer


__all__ = [
    "ConversationFlagSerializer",
    "ConversationReportSerializer",
    "ConversationSerializer",
    "ConversationTargetSerializer",
    "ConversationUpdateResultSerializer",
    "ImageUploadSerializer",
    "MessageCreateSerializer",
    "MessageSerializer",
    "MessageUnreadCountSerializer",
]
