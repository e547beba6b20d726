from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('user', 'notification_type', 'title', 'read', 'created_at')
    list_filter = ('notification_type', 'read', 'created_at')
    search_fields = ('user__email', 'title', 'body')
    readonly_fields = ('created_at',)
    actions = ['mark_read']

    def mark_read(self, request, queryset):
        updated = queryset.update(read=True)
        self.message_user(request, f"{updated} notifications marked as read.")
    mark_read.short_description = 'Mark selected notifications as read'
