from rest_framework import serializers
from .models import Referral, ReferralEarning


class ReferralSerializer(serializers.ModelSerializer):
    """A user invited by the caller."""

    referred_name = serializers.CharField(source='referred.get_display_name', read_only=True)
    joined_at = serializers.DateTimeField(source='referred.created_at', read_only=True)

    class Meta:
        model = Referral
        fields = ['id', 'referred_name', 'joined_at', 'bonus_amount', 'created_at']
        read_only_fields = fields


class ReferralOverviewSerializer(serializers.Serializer):
    referral_code = serializers.CharField()
    referral_link = serializers.URLField()
    total_referrals = serializers.IntegerField()
    total_bonus = serializers.DecimalField(max_digits=12, decimal_places=2)
    referrals = ReferralSerializer(many=True)


class ReferralEarningSerializer(serializers.ModelSerializer):

    referred_name = serializers.CharField(source='referred.get_display_name', read_only=True)

    class Meta:
        model = ReferralEarning
        fields = ['id', 'referred_name', 'amount', 'package_price', 'created_at']
        read_only_fields = fields
