"""
Domain-specific exceptions for wallet services.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class WalletServiceError(Exception):
    """Base exception for all wallet service errors."""
    pass


class InvalidAmountError(WalletServiceError):
    """Raised when an amount is zero, negative or below a minimum."""
    pass


class InsufficientBalanceError(WalletServiceError):
    """Raised when a debit would take the wallet below zero."""
    pass


class ScreenshotRequiredError(WalletServiceError):
    """Raised when a deposit is submitted without proof of payment."""
    pass


class DepositNotFoundError(WalletServiceError):
    """Raised when a deposit does not exist."""
    pass


class WithdrawalNotFoundError(WalletServiceError):
    """Raised when a withdrawal does not exist."""
    pass


class PendingWithdrawalExistsError(WalletServiceError):
    """Raised when a user already has a withdrawal awaiting review."""
    pass


class InvalidStateTransitionError(WalletServiceError):
    """Raised when a deposit or withdrawal cannot move to the requested status."""
    pass


class InsufficientPermissionsError(WalletServiceError):
    """Raised when a non-staff user attempts a review action."""
    pass
