from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserCreationForm
from django.utils.html import format_html
from .models import User, CustomerBankAccount


BADGE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


class UserAddForm(UserCreationForm):
    class Meta:
        model = User
        fields = ('phone', 'full_name')


class CustomerBankAccountInline(admin.StackedInline):
    model = CustomerBankAccount
    extra = 0
    can_delete = False
    readonly_fields = ['created_at', 'updated_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for platform users.

    Balances are read-only here: money only moves through deposits,
    withdrawals and the ledger services.
    """

    add_form = UserAddForm

    list_display = [
        'phone',
        'full_name',
        'wallet_balance',
        'referral_code',
        'referred_by',
        'is_active_badge',
        'is_staff_badge',
        'created_at',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'phone',
        'full_name',
        'referral_code',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'
    inlines = [CustomerBankAccountInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('phone', 'full_name', 'password')
        }),
        ('Wallet & Referrals', {
            'fields': ('wallet_balance', 'referral_code', 'referred_by'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('phone', 'full_name', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'wallet_balance',
        'referral_code',
        'created_at',
        'last_login',
    ]
    raw_id_fields = ['referred_by']
    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(BADGE, '#6B8E5E', 'white', 'Active')
        return format_html(BADGE, '#B85C5C', 'white', 'Inactive')
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def is_staff_badge(self, obj):
        """Display staff status as colored badge."""
        if obj.is_staff:
            return format_html(BADGE, '#A47449', 'white', 'Staff')
        return format_html(BADGE, '#ccc', '#666', 'User')
    is_staff_badge.short_description = 'Role'
    is_staff_badge.admin_order_field = 'is_staff'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('referred_by')


@admin.register(CustomerBankAccount)
class CustomerBankAccountAdmin(admin.ModelAdmin):
    list_display = ['user', 'bank_name', 'account_number', 'account_holder', 'updated_at']
    search_fields = ['user__phone', 'user__full_name', 'account_number', 'account_holder']
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at']
