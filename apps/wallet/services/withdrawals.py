"""
Withdrawal management service.

The requested amount leaves the wallet as soon as the request is made so
it cannot be spent twice while staff review it. Rejection refunds it.
"""

import logging
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, CustomerBankAccount
from apps.wallet.models import Withdrawal, RequestStatus, TransactionType

from . import ledger
from .exceptions import (
    InvalidAmountError,
    InsufficientBalanceError,
    PendingWithdrawalExistsError,
    WithdrawalNotFoundError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
)
from .fees import calculate_withdrawal_fee
from .money import to_money

logger = logging.getLogger(__name__)


@transaction.atomic
def request_withdrawal(*, user: User, amount) -> Withdrawal:
    """
    Request a withdrawal and hold the amount from the wallet.

    Locks the user row first, so two concurrent requests cannot both pass
    the pending-request and balance checks.

    Args:
        user: Withdrawing user
        amount: Gross amount; the fee is deducted from it

    Returns:
        Created Withdrawal (status=pending) with fee and net_amount set

    Raises:
        InvalidAmountError: If amount is below MIN_WITHDRAWAL_AMOUNT
        InsufficientBalanceError: If amount exceeds the wallet balance
        PendingWithdrawalExistsError: If another request is still pending
    """
    try:
        amount = to_money(amount)
    except ValueError as e:
        raise InvalidAmountError(str(e))

    minimum = settings.MIN_WITHDRAWAL_AMOUNT
    if amount < minimum:
        raise InvalidAmountError(f"Minimum withdrawal amount is {minimum} {settings.CURRENCY}")

    locked = ledger.lock_user(user.pk)

    if Withdrawal.objects.filter(user=locked, status=RequestStatus.PENDING).exists():
        logger.warning("User %s already has a pending withdrawal", locked.pk)
        raise PendingWithdrawalExistsError(
            "You already have a pending withdrawal request. "
            "Please wait until it is processed."
        )

    if amount > locked.wallet_balance:
        raise InsufficientBalanceError("Insufficient balance")

    fee, net_amount = calculate_withdrawal_fee(amount)
    bank = CustomerBankAccount.objects.filter(user=locked).first()

    withdrawal = Withdrawal.objects.create(
        user=locked,
        amount=amount,
        fee=fee,
        net_amount=net_amount,
        bank_name=bank.bank_name if bank else '',
        account_number=bank.account_number if bank else '',
        account_holder=bank.account_holder if bank else '',
    )

    ledger.debit(
        user=user,
        amount=amount,
        type=TransactionType.WITHDRAWAL,
        description=f"Withdrawal request (fee {fee}, net {net_amount})",
        reference_id=withdrawal.id,
    )

    logger.info(
        "Withdrawal %s of %s requested by user %s (fee %s)",
        withdrawal.id, amount, user.pk, fee
    )
    return withdrawal


def _get_withdrawal_for_review(withdrawal_id: UUID, reviewer: User, allowed) -> Withdrawal:
    if not reviewer.is_staff:
        raise InsufficientPermissionsError("Only staff can review withdrawals")

    try:
        withdrawal = Withdrawal.objects.select_for_update().get(id=withdrawal_id)
    except Withdrawal.DoesNotExist:
        raise WithdrawalNotFoundError(f"Withdrawal {withdrawal_id} not found")

    if withdrawal.status not in allowed:
        raise InvalidStateTransitionError(
            f"Cannot change withdrawal in {withdrawal.status} state"
        )
    return withdrawal


@transaction.atomic
def approve_withdrawal(*, withdrawal_id: UUID, reviewer: User, note: str = '') -> Withdrawal:
    """Approve a pending withdrawal for payout."""
    withdrawal = _get_withdrawal_for_review(
        withdrawal_id, reviewer, allowed=(RequestStatus.PENDING,)
    )

    withdrawal.status = RequestStatus.APPROVED
    withdrawal.reviewed_by = reviewer
    withdrawal.reviewed_at = timezone.now()
    withdrawal.admin_note = note
    withdrawal.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'admin_note', 'updated_at'])

    logger.info("Withdrawal %s approved by %s", withdrawal.id, reviewer.id)
    return withdrawal


@transaction.atomic
def mark_withdrawal_paid(*, withdrawal_id: UUID, reviewer: User, note: str = '') -> Withdrawal:
    """Record that the net amount was sent to the user."""
    withdrawal = _get_withdrawal_for_review(
        withdrawal_id, reviewer, allowed=(RequestStatus.PENDING, RequestStatus.APPROVED)
    )

    now = timezone.now()
    withdrawal.status = RequestStatus.PAID
    withdrawal.reviewed_by = reviewer
    withdrawal.reviewed_at = withdrawal.reviewed_at or now
    withdrawal.paid_at = now
    if note:
        withdrawal.admin_note = note
    withdrawal.save(update_fields=[
        'status', 'reviewed_by', 'reviewed_at', 'paid_at', 'admin_note', 'updated_at'
    ])

    logger.info("Withdrawal %s paid out by %s", withdrawal.id, reviewer.id)
    return withdrawal


@transaction.atomic
def reject_withdrawal(*, withdrawal_id: UUID, reviewer: User, note: str = '') -> Withdrawal:
    """Reject a withdrawal and return the held amount to the wallet."""
    withdrawal = _get_withdrawal_for_review(
        withdrawal_id, reviewer, allowed=(RequestStatus.PENDING, RequestStatus.APPROVED)
    )

    ledger.credit(
        user=withdrawal.user,
        amount=withdrawal.amount,
        type=TransactionType.WITHDRAWAL_REFUND,
        description='Withdrawal rejected, amount returned',
        reference_id=withdrawal.id,
    )

    withdrawal.status = RequestStatus.REJECTED
    withdrawal.reviewed_by = reviewer
    withdrawal.reviewed_at = timezone.now()
    withdrawal.admin_note = note
    withdrawal.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'admin_note', 'updated_at'])

    logger.info("Withdrawal %s rejected by %s", withdrawal.id, reviewer.id)
    return withdrawal
