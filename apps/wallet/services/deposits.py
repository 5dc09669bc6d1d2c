"""
Deposit management service.

Users submit a deposit with a payment screenshot; staff approve or reject
it. Only approval moves money.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.wallet.models import Deposit, RequestStatus, TransactionType

from . import ledger
from .exceptions import (
    InvalidAmountError,
    ScreenshotRequiredError,
    DepositNotFoundError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
)
from .money import to_money

logger = logging.getLogger(__name__)


def submit_deposit(*, user: User, amount, screenshot) -> Deposit:
    """
    Create a pending deposit request.

    Args:
        user: Depositing user
        amount: Amount transferred to the company account
        screenshot: Uploaded proof of payment

    Returns:
        Created Deposit (status=pending)

    Raises:
        InvalidAmountError: If amount is not positive
        ScreenshotRequiredError: If no screenshot was uploaded
    """
    try:
        amount = to_money(amount)
    except ValueError as e:
        raise InvalidAmountError(str(e))
    if amount <= 0:
        raise InvalidAmountError("Deposit amount must be greater than zero")

    if not screenshot:
        raise ScreenshotRequiredError("Please fill in all fields and upload a screenshot.")

    deposit = Deposit.objects.create(
        user=user,
        amount=amount,
        screenshot=screenshot,
    )
    logger.info("Deposit %s of %s submitted by user %s", deposit.id, amount, user.id)
    return deposit


def _get_pending_deposit_for_review(deposit_id: UUID, reviewer: User) -> Deposit:
    if not reviewer.is_staff:
        raise InsufficientPermissionsError("Only staff can review deposits")

    try:
        deposit = Deposit.objects.select_for_update().get(id=deposit_id)
    except Deposit.DoesNotExist:
        raise DepositNotFoundError(f"Deposit {deposit_id} not found")

    if deposit.status != RequestStatus.PENDING:
        raise InvalidStateTransitionError(
            f"Cannot review deposit in {deposit.status} state"
        )
    return deposit


@transaction.atomic
def approve_deposit(*, deposit_id: UUID, reviewer: User, note: str = '') -> Deposit:
    """
    Approve a pending deposit and credit the user's wallet.

    Raises:
        InsufficientPermissionsError: If reviewer is not staff
        DepositNotFoundError: If deposit doesn't exist
        InvalidStateTransitionError: If deposit is not pending
    """
    deposit = _get_pending_deposit_for_review(deposit_id, reviewer)

    ledger.credit(
        user=deposit.user,
        amount=deposit.amount,
        type=TransactionType.DEPOSIT,
        description='Deposit approved',
        reference_id=deposit.id,
    )

    deposit.status = RequestStatus.APPROVED
    deposit.reviewed_by = reviewer
    deposit.reviewed_at = timezone.now()
    deposit.admin_note = note
    deposit.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'admin_note', 'updated_at'])

    logger.info("Deposit %s approved by %s", deposit.id, reviewer.id)
    return deposit


@transaction.atomic
def reject_deposit(*, deposit_id: UUID, reviewer: User, note: str = '') -> Deposit:
    """
    Reject a pending deposit. No money moves.

    Raises:
        InsufficientPermissionsError: If reviewer is not staff
        DepositNotFoundError: If deposit doesn't exist
        InvalidStateTransitionError: If deposit is not pending
    """
    deposit = _get_pending_deposit_for_review(deposit_id, reviewer)

    deposit.status = RequestStatus.REJECTED
    deposit.reviewed_by = reviewer
    deposit.reviewed_at = timezone.now()
    deposit.admin_note = note
    deposit.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'admin_note', 'updated_at'])

    logger.info("Deposit %s rejected by %s", deposit.id, reviewer.id)
    return deposit
