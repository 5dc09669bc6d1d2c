"""Domain-specific exceptions for referrals services."""


class ReferralsServiceError(Exception):
    """Base exception for referrals services."""
    pass


class SelfReferralError(ReferralsServiceError):
    """Raised when a user would refer themselves."""
    pass


class AlreadyReferredError(ReferralsServiceError):
    """Raised when a user already has a referrer."""
    pass
