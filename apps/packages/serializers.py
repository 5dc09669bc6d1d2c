from rest_framework import serializers
from .models import Package, UserPackage


class PackageSerializer(serializers.ModelSerializer):
    """Package as shown in the catalog."""

    total_return = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Package
        fields = [
            'id',
            'name',
            'price',
            'daily_return',
            'daily_tasks',
            'duration_days',
            'total_return',
            'net_profit',
            'background_image',
        ]
        read_only_fields = fields


class UserPackageSerializer(serializers.ModelSerializer):
    """Owned package with today's task progress."""

    package = PackageSerializer(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    tasks_completed_today = serializers.SerializerMethodField()
    tasks_remaining_today = serializers.SerializerMethodField()

    class Meta:
        model = UserPackage
        fields = [
            'id',
            'package',
            'price_paid',
            'purchased_at',
            'expiry_date',
            'is_active',
            'is_expired',
            'tasks_completed_today',
            'tasks_remaining_today',
            'last_task_date',
            'total_earned',
        ]
        read_only_fields = fields

    def _today(self):
        return self.context.get('today')

    def get_tasks_completed_today(self, obj):
        today = self._today()
        if today is None:
            return obj.tasks_completed_today
        return obj.tasks_completed_on(today)

    def get_tasks_remaining_today(self, obj):
        today = self._today()
        if today is None:
            return max(0, obj.package.daily_tasks - obj.tasks_completed_today)
        return obj.tasks_remaining_on(today)
