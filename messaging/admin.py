from django.contrib import admin
from django.utils.html import format_html
from .models import Conversation, ConversationParticipant, Message


class ConversationParticipantInline(admin.TabularInline):
    model = ConversationParticipant
    extra = 0
    fields = ('user', 'joined_at', 'left_at', 'last_read_at', 'is_active')
    readonly_fields = ('joined_at',)


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = (
        'conversation_display', 'conversation_type', 'participant_count',
        'message_count', 'last_message_at', 'is_active', 'created_at'
    )
    list_filter = ('conversation_type', 'is_active', 'created_at', 'last_message_at')
    search_fields = ('participants__email', 'participants__name')
    readonly_fields = ('id', 'created_at', 'updated_at', 'last_message_at')
    date_hierarchy = 'created_at'

    inlines = [ConversationParticipantInline]

    def conversation_display(self, obj):
        return str(obj)
    conversation_display.short_description = 'Conversation'

    def participant_count(self, obj):
        return obj.participants.count()
    participant_count.short_description = 'Participants'

    def message_count(self, obj):
        return obj.messages.count()
    message_count.short_description = 'Messages'

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related('participants')


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('sender_name', 'conversation', 'message_type', 'content_preview', 'created_at')
    list_filter = ('message_type', 'is_deleted', 'created_at')
    search_fields = ('content', 'sender__email', 'sender_name')
    readonly_fields = ('id', 'created_at', 'deleted_at')
    date_hierarchy = 'created_at'
    actions = ['soft_delete_messages']

    def content_preview(self, obj):
        if obj.is_deleted:
            return format_html('<em class="text-muted">Deleted message</em>')
        return obj.content[:50] + '...' if len(obj.content) > 50 else obj.content
    content_preview.short_description = 'Content'

    def soft_delete_messages(self, request, queryset):
        for message in queryset.filter(is_deleted=False):
            message.soft_delete()
    soft_delete_messages.short_description = 'Soft delete selected messages'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('sender', 'conversation')
