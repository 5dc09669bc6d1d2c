from decimal import Decimal

import pytest

from apps.dashboard.services import get_dashboard
from apps.packages.services import purchase_package
from apps.referrals.models import Referral
from apps.tasks.services import complete_task
from apps.wallet.models import TransactionType
from apps.wallet.services import credit


@pytest.mark.django_db
class TestGetDashboard:

    def test_new_user(self, user):
        dashboard = get_dashboard(user=user)

        assert dashboard['wallet_balance'] == Decimal('0.00')
        assert dashboard['active_packages'] == []
        assert dashboard['total_earned'] == Decimal('0.00')
        assert dashboard['referrals'] == 0
        assert dashboard['tasks_completed'] == 0
        assert dashboard['recent_transactions'] == []

    def test_earnings_exclude_deposits(self, user, other_user, package, tasks, screenshot):
        credit(user=user, amount=2000, type=TransactionType.DEPOSIT)
        user_package = purchase_package(user=user, package_id=package.id)
        complete_task(
            user=user,
            task_id=tasks[0].id,
            user_package_id=user_package.id,
            screenshot=screenshot,
        )
        Referral.objects.create(referrer=user, referred=other_user)
        credit(user=user, amount=100, type=TransactionType.REFERRAL_BONUS)

        dashboard = get_dashboard(user=user)

        assert dashboard['wallet_balance'] == Decimal('1115.00')
        assert dashboard['total_earned'] == Decimal('115.00')
        assert dashboard['active_packages_count'] == 1
        assert dashboard['referrals'] == 1
        assert dashboard['tasks_completed'] == 1

    def test_recent_transactions_limited(self, user, settings):
        settings.RECENT_ITEMS_LIMIT = 5
        for _ in range(7):
            credit(user=user, amount=10, type=TransactionType.TASK_REWARD)

        dashboard = get_dashboard(user=user)

        assert len(dashboard['recent_transactions']) == 5
        assert dashboard['total_earned'] == Decimal('70.00')
