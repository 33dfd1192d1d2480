from django.contrib import admin

from .models import ConversationReport, Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "sender", "receiver", "product", "is_read", "is_deleted", "created_at")
    list_filter = ("is_read", "is_deleted", "is_archived", "is_muted")
    search_fields = ("sender__email", "receiver__email", "content")
    raw_id_fields = ("sender", "receiver", "product")


@admin.register(ConversationReport)
class ConversationReportAdmin(admin.ModelAdmin):
    list_display = ("id", "reporter", "reported_user", "product", "created_at")
    search_fields = ("reporter__email", "reported_user__email", "reason")
    readonly_fields = ("created_at",)
