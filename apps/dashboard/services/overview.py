"""Home screen aggregate for a signed-in user."""

from django.conf import settings
from django.db.models import Sum

from apps.accounts.models import User
from apps.packages.services import get_user_packages
from apps.referrals.models import Referral
from apps.tasks.models import UserTask
from apps.wallet.models import Transaction, EARNING_TYPES
from apps.wallet.services import to_money


def get_dashboard(*, user: User, limit: int = None) -> dict:
    """
    Balance, active packages, lifetime earnings and recent activity.

    ``total_earned`` counts task rewards and referral bonuses from the
    ledger; deposits and refunds are not earnings.

    Returns:
        dict with keys: wallet_balance, currency, active_packages,
        active_packages_count, total_earned, referrals, tasks_completed,
        recent_transactions
    """
    limit = limit or settings.RECENT_ITEMS_LIMIT
    user.refresh_from_db(fields=['wallet_balance'])

    active_packages = list(get_user_packages(user=user))

    earned = (
        Transaction.objects
        .filter(user=user, type__in=EARNING_TYPES)
        .aggregate(total=Sum('amount'))['total']
    )

    return {
        'wallet_balance': user.wallet_balance,
        'currency': settings.CURRENCY,
        'active_packages': active_packages,
        'active_packages_count': len(active_packages),
        'total_earned': to_money(earned or 0),
        'referrals': Referral.objects.filter(referrer=user).count(),
        'tasks_completed': UserTask.objects.filter(user=user).count(),
        'recent_transactions': list(Transaction.objects.filter(user=user)[:limit]),
    }
