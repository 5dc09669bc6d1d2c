from django.contrib import admin, messages
from django.utils.html import format_html
from .models import Transaction, Deposit, Withdrawal, AdminBankAccount, RequestStatus
from .services import (
    approve_deposit,
    reject_deposit,
    approve_withdrawal,
    mark_withdrawal_paid,
    reject_withdrawal,
    WalletServiceError,
)


STATUS_COLORS = {
    RequestStatus.PENDING: ('#E5C49A', '#2C1810'),
    RequestStatus.APPROVED: ('#A47449', 'white'),
    RequestStatus.PAID: ('#6B8E5E', 'white'),
    RequestStatus.REJECTED: ('#B85C5C', 'white'),
}


def status_badge(obj):
    """Display request status as colored badge."""
    bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, obj.get_status_display()
    )
status_badge.short_description = 'Status'


def run_review(modeladmin, request, queryset, service, id_argument, verb):
    """Apply a review service to each selected request and report the outcome."""
    done = 0
    for obj in queryset:
        try:
            service(**{id_argument: obj.pk}, reviewer=request.user)
        except WalletServiceError as e:
            modeladmin.message_user(request, f'{obj}: {e}', level=messages.WARNING)
            continue
        done += 1
    modeladmin.message_user(request, f'{verb} {done} request(s).')


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Read-only ledger."""

    list_display = ['user', 'type', 'direction', 'amount', 'balance_after', 'description', 'created_at']
    list_filter = ['type', 'direction', 'created_at']
    search_fields = ['user__phone', 'user__full_name', 'description']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Deposit)
class DepositAdmin(admin.ModelAdmin):
    list_display = ['user', 'amount', status_badge, 'screenshot', 'reviewed_by', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['user__phone', 'user__full_name']
    readonly_fields = ['user', 'amount', 'screenshot', 'status', 'reviewed_by', 'reviewed_at', 'created_at']
    date_hierarchy = 'created_at'
    actions = ['approve_selected', 'reject_selected']

    def has_add_permission(self, request):
        return False

    @admin.action(description='Approve selected deposits (credits wallets)')
    def approve_selected(self, request, queryset):
        run_review(self, request, queryset, approve_deposit, 'deposit_id', 'Approved')

    @admin.action(description='Reject selected deposits')
    def reject_selected(self, request, queryset):
        run_review(self, request, queryset, reject_deposit, 'deposit_id', 'Rejected')


@admin.register(Withdrawal)
class WithdrawalAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'amount',
        'fee',
        'net_amount',
        status_badge,
        'bank_name',
        'account_number',
        'created_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['user__phone', 'user__full_name', 'account_number']
    readonly_fields = [
        'user',
        'amount',
        'fee',
        'net_amount',
        'status',
        'bank_name',
        'account_number',
        'account_holder',
        'reviewed_by',
        'reviewed_at',
        'paid_at',
        'created_at',
    ]
    date_hierarchy = 'created_at'
    actions = ['approve_selected', 'mark_paid_selected', 'reject_selected']

    def has_add_permission(self, request):
        return False

    @admin.action(description='Approve selected withdrawals')
    def approve_selected(self, request, queryset):
        run_review(self, request, queryset, approve_withdrawal, 'withdrawal_id', 'Approved')

    @admin.action(description='Mark selected withdrawals as paid')
    def mark_paid_selected(self, request, queryset):
        run_review(self, request, queryset, mark_withdrawal_paid, 'withdrawal_id', 'Paid')

    @admin.action(description='Reject selected withdrawals (refunds wallets)')
    def reject_selected(self, request, queryset):
        run_review(self, request, queryset, reject_withdrawal, 'withdrawal_id', 'Rejected')


@admin.register(AdminBankAccount)
class AdminBankAccountAdmin(admin.ModelAdmin):
    list_display = ['bank_name', 'account_number', 'account_holder', 'branch_name', 'is_active']
    list_filter = ['is_active']
    list_editable = ['is_active']
