from decimal import Decimal

import pytest

from apps.wallet.models import AdminBankAccount, Deposit


@pytest.fixture
def company_account(db):
    return AdminBankAccount.objects.create(
        bank_name='Commercial Bank of Ethiopia',
        account_number='1000999888777',
        account_holder='InvestPro PLC',
        branch_name='Bole',
    )


@pytest.fixture
def retired_company_account(db):
    return AdminBankAccount.objects.create(
        bank_name='Old Bank',
        account_number='1',
        account_holder='InvestPro PLC',
        is_active=False,
    )


@pytest.fixture
def pending_deposit(user, screenshot):
    return Deposit.objects.create(
        user=user,
        amount=Decimal('1500.00'),
        screenshot=screenshot,
    )
