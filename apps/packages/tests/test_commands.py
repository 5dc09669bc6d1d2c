from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from apps.accounts.models import User
from apps.packages.models import Package
from apps.referrals.models import Referral
from apps.wallet.models import AdminBankAccount


@pytest.mark.django_db
class TestRunDailyMaintenance:

    def _stale(self, user_package):
        user_package.tasks_completed_today = 3
        user_package.last_task_date = timezone.localdate() - timedelta(days=1)
        user_package.save()

    def test_resets_and_expires(self, user_package, expired_user_package):
        self._stale(user_package)
        out = StringIO()

        call_command('run_daily_maintenance', stdout=out)

        user_package.refresh_from_db()
        expired_user_package.refresh_from_db()
        assert user_package.tasks_completed_today == 0
        assert expired_user_package.is_active is False
        assert 'Packages expired: 1' in out.getvalue()
        assert 'Daily maintenance complete.' in out.getvalue()

    def test_dry_run_changes_nothing(self, user_package, expired_user_package):
        self._stale(user_package)
        out = StringIO()

        call_command('run_daily_maintenance', '--dry-run', stdout=out)

        user_package.refresh_from_db()
        expired_user_package.refresh_from_db()
        assert user_package.tasks_completed_today == 3
        assert expired_user_package.is_active is True
        assert 'No changes made' in out.getvalue()


@pytest.mark.django_db
class TestCreateSampleData:

    def test_creates_catalog(self):
        call_command('create_sample_data', stdout=StringIO())

        assert Package.objects.count() == 5
        silver = Package.objects.get(name='Silver')
        assert silver.tasks.count() == 4
        assert AdminBankAccount.objects.filter(is_active=True).count() == 2
        alice = User.objects.get(phone='0911111111')
        assert alice.wallet_balance == 5000
        assert Referral.objects.filter(referrer=alice).count() == 1

    def test_is_repeatable(self):
        call_command('create_sample_data', stdout=StringIO())
        call_command('create_sample_data', stdout=StringIO())

        assert Package.objects.count() == 5
