from decimal import Decimal

import pytest

from apps.accounts.models import User
from apps.referrals.models import Referral


@pytest.fixture
def invited_user(user):
    """User who signed up with ``user``'s code and has money to spend."""
    invited = User.objects.create_user(
        phone='0955000001',
        password='secret123',
        full_name='Meron Alemu',
        referred_by=user,
        wallet_balance=Decimal('5000.00'),
    )
    Referral.objects.create(referrer=user, referred=invited)
    return invited
