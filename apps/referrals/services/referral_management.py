"""
Referral management service.

Creates referral links at sign-up and credits the referrer's bonus when
the referred user buys a package.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.referrals.models import Referral, ReferralEarning
from apps.wallet.models import TransactionType
from apps.wallet.services import ledger, percentage_of

from .exceptions import SelfReferralError, AlreadyReferredError

logger = logging.getLogger(__name__)


@transaction.atomic
def create_referral(*, referrer: User, referred: User) -> Referral:
    """
    Record that ``referred`` signed up with ``referrer``'s code.

    Raises:
        SelfReferralError: If both users are the same
        AlreadyReferredError: If referred user already has a referrer
    """
    if referrer.pk == referred.pk:
        raise SelfReferralError("You cannot refer yourself")

    try:
        with transaction.atomic():
            referral = Referral.objects.create(referrer=referrer, referred=referred)
    except IntegrityError:
        raise AlreadyReferredError("User already has a referrer")

    logger.info("Referral created: %s referred %s", referrer.pk, referred.pk)
    return referral


@transaction.atomic
def credit_referral_bonus(
    *,
    purchaser: User,
    package_price: Decimal,
    user_package=None,
    rate: Optional[Decimal] = None
) -> Optional[ReferralEarning]:
    """
    Credit the purchaser's referrer with a share of the package price.

    Runs inside the purchase transaction so the bonus and the purchase
    commit together.

    Args:
        purchaser: User who bought the package
        package_price: Price paid
        user_package: The UserPackage created by the purchase
        rate: Bonus rate, defaults to REFERRAL_BONUS_RATE

    Returns:
        The ReferralEarning, or None if the purchaser was not referred
    """
    try:
        referral = (
            Referral.objects
            .select_for_update()
            .select_related('referrer')
            .get(referred=purchaser)
        )
    except Referral.DoesNotExist:
        logger.debug("No referrer for user %s, skipping referral bonus", purchaser.pk)
        return None

    if rate is None:
        rate = settings.REFERRAL_BONUS_RATE
    bonus = percentage_of(package_price, rate)
    if bonus <= 0:
        return None

    referrer = referral.referrer
    ledger.credit(
        user=referrer,
        amount=bonus,
        type=TransactionType.REFERRAL_BONUS,
        description=f"Referral bonus from {purchaser.get_display_name()}",
        reference_id=user_package.id if user_package else None,
    )

    referral.bonus_amount += bonus
    referral.save(update_fields=['bonus_amount'])

    earning = ReferralEarning.objects.create(
        referral=referral,
        referrer=referrer,
        referred=purchaser,
        user_package=user_package,
        amount=bonus,
        package_price=package_price,
    )

    logger.info(
        "Referral bonus of %s %s credited to %s for purchase by %s",
        bonus, settings.CURRENCY, referrer.pk, purchaser.pk
    )
    return earning
