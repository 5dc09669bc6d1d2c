from rest_framework import serializers

from apps.packages.serializers import UserPackageSerializer
from apps.wallet.serializers import TransactionSerializer


class DashboardSerializer(serializers.Serializer):
    wallet_balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    active_packages_count = serializers.IntegerField()
    active_packages = UserPackageSerializer(many=True)
    total_earned = serializers.DecimalField(max_digits=14, decimal_places=2)
    referrals = serializers.IntegerField()
    tasks_completed = serializers.IntegerField()
    recent_transactions = TransactionSerializer(many=True)
