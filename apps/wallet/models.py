from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class TransactionType(models.TextChoices):
    DEPOSIT = 'deposit', 'Deposit'
    WITHDRAWAL = 'withdrawal', 'Withdrawal'
    WITHDRAWAL_REFUND = 'withdrawal_refund', 'Withdrawal refund'
    PACKAGE_PURCHASE = 'package_purchase', 'Package purchase'
    TASK_REWARD = 'task_reward', 'Task reward'
    REFERRAL_BONUS = 'referral_bonus', 'Referral bonus'


class TransactionDirection(models.TextChoices):
    CREDIT = 'credit', 'Credit'
    DEBIT = 'debit', 'Debit'


# Ledger entry types that count as earnings on the dashboard
EARNING_TYPES = (TransactionType.TASK_REWARD, TransactionType.REFERRAL_BONUS)


class Transaction(models.Model):
    """Immutable wallet ledger entry. One row per balance change."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='transactions'
    )
    type = models.CharField(max_length=20, choices=TransactionType.choices)
    direction = models.CharField(max_length=6, choices=TransactionDirection.choices)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    balance_after = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='ETB')
    description = models.CharField(max_length=255, blank=True)

    # Id of the package, task, deposit or withdrawal this entry belongs to
    reference_id = models.UUIDField(null=True, blank=True, db_index=True)

    # Position in the user's ledger, assigned under the user row lock
    sequence = models.PositiveIntegerField(default=0, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='txn_user_created_idx'),
            models.Index(fields=['user', 'type'], name='txn_user_type_idx'),
        ]
        constraints = [
            models.UniqueConstraint(fields=['user', 'sequence'], name='unique_txn_user_sequence'),
        ]
        ordering = ['-created_at', '-sequence']

    def __str__(self):
        sign = '+' if self.direction == TransactionDirection.CREDIT else '-'
        return f"{self.get_type_display()} {sign}{self.amount} {self.currency}"

    @property
    def signed_amount(self):
        if self.direction == TransactionDirection.DEBIT:
            return -self.amount
        return self.amount


class RequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    PAID = 'paid', 'Paid'
    REJECTED = 'rejected', 'Rejected'


class Deposit(models.Model):
    """Deposit request backed by a payment screenshot, reviewed by staff."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='deposits'
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    screenshot = models.FileField(upload_to='deposit_screenshots/%Y/%m/')
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING
    )

    # Review
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_deposits'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    admin_note = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'deposits'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='deposit_user_created_idx'),
            models.Index(fields=['status', 'created_at'], name='deposit_status_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Deposit {self.amount} by {self.user_id} ({self.status})"


class Withdrawal(models.Model):
    """Withdrawal request. The amount is held from the wallet on request."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='withdrawals'
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    fee = models.DecimalField(max_digits=12, decimal_places=2)
    net_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING
    )

    # Payout destination at the time of the request
    bank_name = models.CharField(max_length=100, blank=True)
    account_number = models.CharField(max_length=50, blank=True)
    account_holder = models.CharField(max_length=150, blank=True)

    # Review
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_withdrawals'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    admin_note = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'withdrawals'
        indexes = [
            models.Index(fields=['user', 'status'], name='withdrawal_user_status_idx'),
            models.Index(fields=['status', 'created_at'], name='withdrawal_status_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Withdrawal {self.amount} by {self.user_id} ({self.status})"


class AdminBankAccount(models.Model):
    """Company bank account users send deposits to."""

    bank_name = models.CharField(max_length=100)
    account_number = models.CharField(max_length=50)
    account_holder = models.CharField(max_length=150)
    branch_name = models.CharField(max_length=100, blank=True, null=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'admin_bank_accounts'
        ordering = ['bank_name']

    def __str__(self):
        return f"{self.bank_name} - {self.account_number}"
