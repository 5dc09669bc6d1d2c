from django.contrib import admin
from .models import Referral, ReferralEarning


class ReferralEarningInline(admin.TabularInline):
    model = ReferralEarning
    extra = 0
    fields = ['amount', 'package_price', 'user_package', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Earnings are created by the purchase flow."""
        return False


@admin.register(Referral)
class ReferralAdmin(admin.ModelAdmin):
    list_display = ['referrer', 'referred', 'bonus_amount', 'created_at']
    search_fields = [
        'referrer__phone',
        'referrer__full_name',
        'referred__phone',
        'referred__full_name',
    ]
    raw_id_fields = ['referrer', 'referred']
    readonly_fields = ['bonus_amount', 'created_at']
    inlines = [ReferralEarningInline]


@admin.register(ReferralEarning)
class ReferralEarningAdmin(admin.ModelAdmin):
    list_display = ['referrer', 'referred', 'amount', 'package_price', 'created_at']
    search_fields = ['referrer__phone', 'referred__phone']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
