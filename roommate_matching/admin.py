from django.contrib import admin
from .models import QuizResponse


@admin.register(QuizResponse)
class QuizResponseAdmin(admin.ModelAdmin):
    list_display = ('user', 'answer_count', 'times_taken', 'completed_at', 'updated_at')
    list_filter = ('completed_at',)
    search_fields = ('user__email', 'user__name')
    readonly_fields = ('completed_at', 'updated_at', 'times_taken')
    raw_id_fields = ('user',)

    fieldsets = (
        ('User', {
            'fields': ('user',)
        }),
        ('Answers', {
            'fields': ('answers',)
        }),
        ('Metadata', {
            'fields': ('times_taken', 'completed_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user')
