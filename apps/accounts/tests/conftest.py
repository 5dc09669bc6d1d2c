import pytest
from apps.accounts.models import User, CustomerBankAccount


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        phone='0911000003',
        password='secret789',
        full_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def bank_account(user):
    """Saved payout account for ``user``."""
    return CustomerBankAccount.objects.create(
        user=user,
        bank_name='Commercial Bank of Ethiopia',
        account_number='1000123456789',
        account_holder='Abebe Kebede',
    )
