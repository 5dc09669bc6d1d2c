from rest_framework import serializers
from .models import Transaction, Deposit, Withdrawal, AdminBankAccount


# =============================================================================
# Input Serializers
# =============================================================================

class DepositInputSerializer(serializers.Serializer):
    """
    Validate a deposit submission.

    The screenshot is optional here so the service can report the
    missing-proof error in its own words.
    """

    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    screenshot = serializers.FileField(required=False, allow_null=True)


class WithdrawalInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class WithdrawalQuoteInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=0
    )


class ReviewInputSerializer(serializers.Serializer):
    """Optional note left by the reviewer."""

    note = serializers.CharField(max_length=500, required=False, allow_blank=True)


# =============================================================================
# Output Serializers
# =============================================================================

class TransactionSerializer(serializers.ModelSerializer):
    """Ledger entry."""

    signed_amount = serializers.DecimalField(max_digits=13, decimal_places=2, read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'type',
            'direction',
            'amount',
            'signed_amount',
            'balance_after',
            'currency',
            'description',
            'reference_id',
            'created_at',
        ]
        read_only_fields = fields


class DepositSerializer(serializers.ModelSerializer):

    class Meta:
        model = Deposit
        fields = [
            'id',
            'amount',
            'screenshot',
            'status',
            'admin_note',
            'reviewed_at',
            'created_at',
        ]
        read_only_fields = fields


class WithdrawalSerializer(serializers.ModelSerializer):

    class Meta:
        model = Withdrawal
        fields = [
            'id',
            'amount',
            'fee',
            'net_amount',
            'status',
            'bank_name',
            'account_number',
            'account_holder',
            'admin_note',
            'reviewed_at',
            'paid_at',
            'created_at',
        ]
        read_only_fields = fields


class AdminBankAccountSerializer(serializers.ModelSerializer):

    class Meta:
        model = AdminBankAccount
        fields = ['id', 'bank_name', 'account_number', 'account_holder', 'branch_name']
        read_only_fields = fields


class WalletSummarySerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    has_pending_withdrawal = serializers.BooleanField()
    deposits = DepositSerializer(many=True)
    withdrawals = WithdrawalSerializer(many=True)
    transactions = TransactionSerializer(many=True)


class DepositInstructionsSerializer(serializers.Serializer):
    bank_accounts = AdminBankAccountSerializer(many=True)
    preset_amounts = serializers.ListField(child=serializers.IntegerField())
    currency = serializers.CharField()


class WithdrawalQuoteSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    fee = serializers.DecimalField(max_digits=12, decimal_places=2)
    net_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    fee_rate = serializers.DecimalField(max_digits=5, decimal_places=4)
    minimum = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
