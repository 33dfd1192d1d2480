from messaging.domain.models import ConversationReport, Message


__all__ = ["ConversationReport", "Message"]
