from rest_framework import serializers
from .models import User, CustomerBankAccount


class UserSerializer(serializers.ModelSerializer):
    """Profile of the signed-in user."""

    class Meta:
        model = User
        fields = [
            'id',
            'phone',
            'full_name',
            'referral_code',
            'wallet_balance',
            'is_staff',
            'created_at',
            'last_login',
        ]
        read_only_fields = [
            'id', 'phone', 'referral_code', 'wallet_balance',
            'is_staff', 'created_at', 'last_login',
        ]


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'phone', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class UserRegistrationSerializer(serializers.Serializer):
    """
    Validate sign-up input.

    Business rules (duplicate phone, referral code lookup) are checked by
    the registration service.
    """

    phone = serializers.CharField(max_length=20)
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'}
    )
    full_name = serializers.CharField(max_length=150)
    referral_code = serializers.CharField(
        max_length=16,
        required=False,
        allow_blank=True
    )


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    phone = serializers.CharField(max_length=20)
    password = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )


class UserUpdateSerializer(serializers.ModelSerializer):
    """Only the name can be changed after sign-up."""

    class Meta:
        model = User
        fields = ['full_name']


class BankAccountSerializer(serializers.ModelSerializer):
    """Customer payout account."""

    class Meta:
        model = CustomerBankAccount
        fields = [
            'id',
            'bank_name',
            'account_number',
            'account_holder',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
