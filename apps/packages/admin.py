from django.contrib import admin
from .models import Package, UserPackage
from apps.tasks.models import Task


class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ['order', 'title', 'link', 'reward_amount', 'is_active']


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):
    """Packages and their tasks are managed here."""

    list_display = [
        'name',
        'price',
        'daily_return',
        'daily_tasks',
        'duration_days',
        'get_total_return',
        'is_active',
    ]
    list_filter = ['is_active']
    search_fields = ['name']
    list_editable = ['is_active']
    inlines = [TaskInline]

    def get_total_return(self, obj):
        return obj.total_return
    get_total_return.short_description = 'Total return'


@admin.register(UserPackage)
class UserPackageAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'package',
        'price_paid',
        'purchased_at',
        'expiry_date',
        'is_active',
        'tasks_completed_today',
        'last_task_date',
        'total_earned',
    ]
    list_filter = ['is_active', 'package', 'purchased_at']
    search_fields = ['user__phone', 'user__full_name', 'package__name']
    raw_id_fields = ['user']
    readonly_fields = [
        'price_paid',
        'purchased_at',
        'tasks_completed_today',
        'last_task_date',
        'total_earned',
    ]
    date_hierarchy = 'purchased_at'

    def has_add_permission(self, request):
        """Packages are bought through the purchase service, which debits the wallet."""
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'package')
