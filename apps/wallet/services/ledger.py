"""
Wallet ledger.

The only code allowed to change ``User.wallet_balance``. Every change
locks the user row, updates the balance and appends a ``Transaction``
with the resulting balance, all inside one atomic block. Callers that
run several ledger operations (purchase + referral bonus) wrap them in
their own ``transaction.atomic`` so the whole workflow commits or rolls
back together.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Max

from apps.wallet.models import Transaction, TransactionType, TransactionDirection

from .exceptions import InvalidAmountError, InsufficientBalanceError
from .money import to_money

User = get_user_model()

logger = logging.getLogger(__name__)


def lock_user(user_id) -> User:
    """Return the user row locked for update. Must run inside a transaction."""
    return User.objects.select_for_update().get(pk=user_id)


def _validated_amount(amount) -> Decimal:
    try:
        amount = to_money(amount)
    except ValueError as e:
        raise InvalidAmountError(str(e))
    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


def _record(
    user,
    *,
    amount: Decimal,
    type: str,
    direction: str,
    description: str,
    reference_id: Optional[UUID],
) -> Transaction:
    locked = lock_user(user.pk)

    if direction == TransactionDirection.DEBIT:
        if locked.wallet_balance < amount:
            logger.warning(
                "Rejected %s debit of %s for user %s (balance %s)",
                type, amount, locked.pk, locked.wallet_balance
            )
            raise InsufficientBalanceError("Insufficient balance")
        locked.wallet_balance -= amount
    else:
        locked.wallet_balance += amount

    locked.save(update_fields=['wallet_balance'])

    last_sequence = (
        Transaction.objects.filter(user=locked).aggregate(last=Max('sequence'))['last']
    )

    entry = Transaction.objects.create(
        user=locked,
        sequence=(last_sequence or 0) + 1,
        type=type,
        direction=direction,
        amount=amount,
        balance_after=locked.wallet_balance,
        currency=settings.CURRENCY,
        description=description,
        reference_id=reference_id,
    )

    # Keep the caller's instance in sync with the stored balance
    user.wallet_balance = locked.wallet_balance

    logger.info(
        "Ledger %s %s %s for user %s, balance now %s",
        direction, type, amount, locked.pk, locked.wallet_balance
    )
    return entry


@transaction.atomic
def credit(
    *,
    user,
    amount,
    type: TransactionType,
    description: str = '',
    reference_id: Optional[UUID] = None,
) -> Transaction:
    """
    Add ``amount`` to the user's wallet and record a credit entry.

    Raises:
        InvalidAmountError: If amount is not positive
    """
    return _record(
        user,
        amount=_validated_amount(amount),
        type=type,
        direction=TransactionDirection.CREDIT,
        description=description,
        reference_id=reference_id,
    )


@transaction.atomic
def debit(
    *,
    user,
    amount,
    type: TransactionType,
    description: str = '',
    reference_id: Optional[UUID] = None,
) -> Transaction:
    """
    Remove ``amount`` from the user's wallet and record a debit entry.

    Raises:
        InvalidAmountError: If amount is not positive
        InsufficientBalanceError: If the balance is lower than amount
    """
    return _record(
        user,
        amount=_validated_amount(amount),
        type=type,
        direction=TransactionDirection.DEBIT,
        description=description,
        reference_id=reference_id,
    )
