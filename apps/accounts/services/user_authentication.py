"""Phone and password login."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, phone: str, password: str) -> User:
    """
    Resolve a login attempt to a user.

    The phone is normalised the same way registration stores it, so
    "0911 000 001" and "0911-000-001" reach the same account. Unknown
    phones and wrong passwords produce the same error.

    Raises:
        InvalidCredentialsError: If no account matches the phone and password
        InactiveAccountError: If the account exists but was deactivated
    """
    normalized = User.objects.normalize_phone(phone or '')
    user = User.objects.select_for_update().filter(phone=normalized).first()

    if user is None or not user.check_password(password):
        logger.info("Failed login for phone %s", normalized)
        raise InvalidCredentialsError("Invalid phone number or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, user)
    return user
