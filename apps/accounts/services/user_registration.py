"""User registration service."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.referrals.services import create_referral

from .exceptions import UserRegistrationError, InvalidReferralCodeError

User = get_user_model()

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@transaction.atomic
def register_user(
    *,
    phone: str,
    password: str,
    full_name: str,
    referral_code: Optional[str] = None
) -> User:
    """
    Register a new user, linking them to a referrer when a code is given.

    The user row and the referral row are written in the same transaction,
    so a bad referral code never leaves a half-registered account behind.

    Args:
        phone: User's phone number (login identifier)
        password: User's password (will be hashed)
        full_name: User's full name
        referral_code: Optional referral code of the inviting user

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If a required field is missing, the password
            is too short or the phone number is taken
        InvalidReferralCodeError: If the referral code matches no user
    """
    phone = User.objects.normalize_phone(phone or '')
    full_name = (full_name or '').strip()

    if not phone or not password or not full_name:
        raise UserRegistrationError("Please fill in all required fields")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise UserRegistrationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    referrer = None
    referral_code = (referral_code or '').strip().upper()
    if referral_code:
        try:
            referrer = User.objects.get(referral_code=referral_code, is_active=True)
        except User.DoesNotExist:
            logger.warning("Registration with unknown referral code %s", referral_code)
            raise InvalidReferralCodeError("Invalid referral code")

    if User.objects.filter(phone=phone).exists():
        raise UserRegistrationError(
            "Registration failed. Phone number may already be in use."
        )

    try:
        user = User.objects.create_user(
            phone=phone,
            password=password,
            full_name=full_name,
            referred_by=referrer,
        )
    except IntegrityError:
        raise UserRegistrationError(
            "Registration failed. Phone number may already be in use."
        )

    if referrer:
        create_referral(referrer=referrer, referred=user)

    logger.info(
        "Registered user %s (referred by %s)",
        user.id, referrer.id if referrer else None
    )
    return user
