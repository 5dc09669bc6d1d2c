"""
Package purchase service.

Debit, ownership record, ledger entry and referral bonus are one atomic
unit: if any step fails nothing is written.
"""

import logging
from datetime import timedelta
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.packages.models import Package, UserPackage
from apps.referrals.services import credit_referral_bonus
from apps.wallet.models import TransactionType
from apps.wallet.services import ledger, InsufficientBalanceError

from .exceptions import PackageNotFoundError, PackageAlreadyOwnedError

logger = logging.getLogger(__name__)


@transaction.atomic
def purchase_package(*, user: User, package_id: UUID) -> UserPackage:
    """
    Buy a package with the wallet balance.

    Steps (single transaction, user row locked throughout):
        1. Validate the package is for sale
        2. Reject if the user already holds an active copy
        3. Debit the price from the wallet (``package_purchase`` entry)
        4. Create the UserPackage expiring after ``duration_days``
        5. Credit the referrer's bonus, if the user was referred

    Args:
        user: Buying user
        package_id: UUID of the package

    Returns:
        Created UserPackage

    Raises:
        PackageNotFoundError: If package doesn't exist or is inactive
        PackageAlreadyOwnedError: If user holds an active copy
        InsufficientBalanceError: If wallet balance < package price
    """
    locked_user = ledger.lock_user(user.pk)

    try:
        package = Package.objects.get(id=package_id, is_active=True)
    except (Package.DoesNotExist, ValidationError):
        raise PackageNotFoundError(f"Package with ID {package_id} not found")

    now = timezone.now()
    already_owned = UserPackage.objects.filter(
        user=locked_user,
        package=package,
        is_active=True,
        expiry_date__gt=now,
    ).exists()
    if already_owned:
        raise PackageAlreadyOwnedError(f"You already own the {package.name} package")

    if locked_user.wallet_balance < package.price:
        logger.warning(
            "User %s cannot afford package %s (%s < %s)",
            locked_user.pk, package.id, locked_user.wallet_balance, package.price
        )
        raise InsufficientBalanceError(
            "Insufficient balance. Please deposit funds first."
        )

    ledger.debit(
        user=user,
        amount=package.price,
        type=TransactionType.PACKAGE_PURCHASE,
        description=f"Purchased {package.name}",
        reference_id=package.id,
    )

    user_package = UserPackage.objects.create(
        user=locked_user,
        package=package,
        price_paid=package.price,
        purchased_at=now,
        expiry_date=now + timedelta(days=package.duration_days),
    )

    credit_referral_bonus(
        purchaser=locked_user,
        package_price=package.price,
        user_package=user_package,
    )

    logger.info(
        "User %s purchased package %s for %s", locked_user.pk, package.id, package.price
    )
    return user_package
