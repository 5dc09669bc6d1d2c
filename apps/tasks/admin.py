from django.contrib import admin
from .models import Task, UserTask


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'package', 'reward_amount', 'order', 'is_active']
    list_filter = ['is_active', 'package']
    search_fields = ['title', 'description']
    list_editable = ['order', 'is_active']
    ordering = ['package__price', 'order']


@admin.register(UserTask)
class UserTaskAdmin(admin.ModelAdmin):
    """Completed tasks with their screenshots, for spot checks."""

    list_display = ['task', 'user', 'user_package', 'reward_earned', 'completed_at']
    list_filter = ['completed_on', 'task__package']
    search_fields = ['user__phone', 'user__full_name', 'task__title']
    raw_id_fields = ['user', 'user_package']
    readonly_fields = [
        'user',
        'task',
        'user_package',
        'reward_earned',
        'completed_at',
        'completed_on',
        'idempotency_key',
    ]
    date_hierarchy = 'completed_at'

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'task', 'user_package__package')
