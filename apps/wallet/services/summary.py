"""Read-side wallet queries."""

from django.conf import settings

from apps.accounts.models import User
from apps.wallet.models import Deposit, Withdrawal, Transaction, AdminBankAccount, RequestStatus


def get_wallet_summary(*, user: User, limit: int = None) -> dict:
    """
    Balance plus the most recent deposits, withdrawals and ledger entries.

    Returns:
        dict with keys: balance, currency, has_pending_withdrawal,
        deposits, withdrawals, transactions
    """
    limit = limit or settings.RECENT_ITEMS_LIMIT
    user.refresh_from_db(fields=['wallet_balance'])

    return {
        'balance': user.wallet_balance,
        'currency': settings.CURRENCY,
        'has_pending_withdrawal': Withdrawal.objects.filter(
            user=user, status=RequestStatus.PENDING
        ).exists(),
        'deposits': list(Deposit.objects.filter(user=user)[:limit]),
        'withdrawals': list(Withdrawal.objects.filter(user=user)[:limit]),
        'transactions': list(Transaction.objects.filter(user=user)[:limit]),
    }


def get_deposit_instructions() -> dict:
    """Active company bank accounts and the preset deposit amounts."""
    return {
        'bank_accounts': list(AdminBankAccount.objects.filter(is_active=True)),
        'preset_amounts': list(settings.DEPOSIT_PRESET_AMOUNTS),
        'currency': settings.CURRENCY,
    }
