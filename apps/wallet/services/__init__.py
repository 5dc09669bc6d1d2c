"""
Wallet app services layer.

All balance changes go through ``ledger.credit`` / ``ledger.debit``.
State-changing operations use transactions and row locks.
"""

from .exceptions import (
    WalletServiceError,
    InvalidAmountError,
    InsufficientBalanceError,
    ScreenshotRequiredError,
    DepositNotFoundError,
    WithdrawalNotFoundError,
    PendingWithdrawalExistsError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
)
from .money import to_money, percentage_of
from .ledger import credit, debit, lock_user
from .fees import calculate_withdrawal_fee
from .deposits import submit_deposit, approve_deposit, reject_deposit
from .withdrawals import (
    request_withdrawal,
    approve_withdrawal,
    mark_withdrawal_paid,
    reject_withdrawal,
)
from .summary import get_wallet_summary, get_deposit_instructions

__all__ = [
    # Exceptions
    'WalletServiceError',
    'InvalidAmountError',
    'InsufficientBalanceError',
    'ScreenshotRequiredError',
    'DepositNotFoundError',
    'WithdrawalNotFoundError',
    'PendingWithdrawalExistsError',
    'InvalidStateTransitionError',
    'InsufficientPermissionsError',

    # Money helpers
    'to_money',
    'percentage_of',

    # Ledger
    'credit',
    'debit',
    'lock_user',

    # Fees
    'calculate_withdrawal_fee',

    # Deposits
    'submit_deposit',
    'approve_deposit',
    'reject_deposit',

    # Withdrawals
    'request_withdrawal',
    'approve_withdrawal',
    'mark_withdrawal_paid',
    'reject_withdrawal',

    # Queries
    'get_wallet_summary',
    'get_deposit_instructions',
]
