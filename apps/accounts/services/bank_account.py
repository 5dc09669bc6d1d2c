"""Customer bank account service."""

import logging
from typing import Optional, Tuple

from django.db import transaction

from apps.accounts.models import User, CustomerBankAccount

logger = logging.getLogger(__name__)


def get_bank_account(*, user: User) -> Optional[CustomerBankAccount]:
    """Return the user's saved bank account, or None."""
    return CustomerBankAccount.objects.filter(user=user).first()


@transaction.atomic
def save_bank_account(
    *,
    user: User,
    bank_name: str,
    account_number: str,
    account_holder: str
) -> Tuple[CustomerBankAccount, bool]:
    """
    Create or update the user's payout bank account.

    Returns:
        (account, created) tuple
    """
    account, created = CustomerBankAccount.objects.select_for_update().update_or_create(
        user=user,
        defaults={
            'bank_name': bank_name.strip(),
            'account_number': account_number.strip(),
            'account_holder': account_holder.strip(),
        }
    )

    logger.info(
        "%s bank account for user %s",
        'Created' if created else 'Updated', user.id
    )
    return account, created
