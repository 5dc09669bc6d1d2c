"""Withdrawal fee calculation."""

from decimal import Decimal
from typing import Optional, Tuple

from django.conf import settings

from .money import to_money, percentage_of


def calculate_withdrawal_fee(amount, rate: Optional[Decimal] = None) -> Tuple[Decimal, Decimal]:
    """
    Split a withdrawal amount into fee and net payout.

    The fee is ``amount * WITHDRAWAL_FEE_RATE`` rounded half-up to cents and
    the net amount is whatever remains, so ``fee + net == amount`` always.

    >>> calculate_withdrawal_fee(Decimal('100.00'), Decimal('0.13'))
    (Decimal('13.00'), Decimal('87.00'))
    """
    if rate is None:
        rate = settings.WITHDRAWAL_FEE_RATE
    amount = to_money(amount)
    fee = percentage_of(amount, rate)
    return fee, amount - fee
