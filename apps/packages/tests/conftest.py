from decimal import Decimal

import pytest

from apps.accounts.models import User
from apps.referrals.models import Referral


@pytest.fixture
def referred_buyer(user):
    """User invited by ``user`` with 2000.00 to spend."""
    buyer = User.objects.create_user(
        phone='0944000001',
        password='secret123',
        full_name='Invited Buyer',
        referred_by=user,
        wallet_balance=Decimal('2000.00'),
    )
    Referral.objects.create(referrer=user, referred=buyer)
    return buyer
