"""Services for referral program business logic."""

from .exceptions import (
    ReferralsServiceError,
    SelfReferralError,
    AlreadyReferredError,
)
from .referral_management import create_referral, credit_referral_bonus
from .overview import (
    build_referral_link,
    get_referral_overview,
    list_referral_earnings,
    total_referral_earnings,
    generate_referral_qr,
)

__all__ = [
    # Exceptions
    'ReferralsServiceError',
    'SelfReferralError',
    'AlreadyReferredError',
    # Services
    'create_referral',
    'credit_referral_bonus',
    'build_referral_link',
    'get_referral_overview',
    'list_referral_earnings',
    'total_referral_earnings',
    'generate_referral_qr',
]
