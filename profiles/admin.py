from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = (
        'user', 'gender', 'university', 'location', 'budget_display',
        'mood_display', 'created_at'
    )
    list_filter = ('gender', 'mood_name')
    search_fields = ('user__email', 'user__name', 'university', 'location', 'bio')
    readonly_fields = ('created_at', 'updated_at', 'mood_updated_at')

    fieldsets = (
        ('User', {
            'fields': ('user',)
        }),
        ('Personal Information', {
            'fields': ('gender', 'university', 'bio')
        }),
        ('Housing Search', {
            'fields': ('location', 'max_budget', 'move_in_date', 'preferences')
        }),
        ('Mood', {
            'fields': ('mood_name', 'mood_emoji', 'mood_color', 'mood_status', 'mood_updated_at')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def budget_display(self, obj):
        if obj.max_budget:
            return f"Up to ${obj.max_budget}"
        return "Not specified"
    budget_display.short_description = "Budget"

    def mood_display(self, obj):
        return f"{obj.mood_emoji} {obj.mood_name}"
    mood_display.short_description = "Mood"
