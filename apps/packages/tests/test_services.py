import datetime
from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.packages.models import Package, UserPackage
from apps.packages.services import (
    list_active_packages,
    get_package,
    get_user_packages,
    purchase_package,
    refresh_daily_counter,
    reset_daily_task_counters,
    expire_user_packages,
    PackageNotFoundError,
    PackageAlreadyOwnedError,
)
from apps.referrals.models import Referral, ReferralEarning
from apps.wallet.models import Transaction, TransactionType, TransactionDirection
from apps.wallet.services import InsufficientBalanceError


@pytest.mark.django_db
class TestCatalog:

    def test_lists_active_packages_by_price(self, package, premium_package, inactive_package):
        packages = list(list_active_packages())

        assert packages == [package, premium_package]

    def test_get_inactive_package(self, inactive_package):
        with pytest.raises(PackageNotFoundError):
            get_package(package_id=inactive_package.id)

    def test_derived_returns(self, package):
        assert package.total_return == Decimal('1500.00')
        assert package.net_profit == Decimal('500.00')

    def test_free_package_rejected_by_database(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            Package.objects.create(
                name='Free',
                price=Decimal('0.00'),
                daily_return=Decimal('10.00'),
                daily_tasks=1,
                duration_days=10,
            )


@pytest.mark.django_db
class TestPurchasePackage:

    def test_purchase_debits_wallet(self, funded_user, package):
        user_package = purchase_package(user=funded_user, package_id=package.id)

        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('4000.00')
        assert user_package.price_paid == Decimal('1000.00')
        assert user_package.is_active
        assert user_package.tasks_completed_today == 0
        assert user_package.expiry_date - user_package.purchased_at == timedelta(days=30)

    def test_purchase_records_ledger_entry(self, funded_user, package):
        purchase_package(user=funded_user, package_id=package.id)

        entry = Transaction.objects.get(user=funded_user)
        assert entry.type == TransactionType.PACKAGE_PURCHASE
        assert entry.direction == TransactionDirection.DEBIT
        assert entry.amount == Decimal('1000.00')
        assert entry.balance_after == Decimal('4000.00')
        assert entry.description == 'Purchased Starter'
        assert entry.reference_id == package.id

    def test_insufficient_balance(self, user, package):
        with pytest.raises(InsufficientBalanceError, match='Please deposit funds first'):
            purchase_package(user=user, package_id=package.id)

        assert not UserPackage.objects.filter(user=user).exists()
        assert not Transaction.objects.filter(user=user).exists()

    def test_exact_balance_is_enough(self, user, package):
        user.wallet_balance = Decimal('1000.00')
        user.save()

        purchase_package(user=user, package_id=package.id)

        user.refresh_from_db()
        assert user.wallet_balance == Decimal('0.00')

    def test_inactive_package(self, funded_user, inactive_package):
        with pytest.raises(PackageNotFoundError):
            purchase_package(user=funded_user, package_id=inactive_package.id)

    def test_already_owned(self, funded_user, package):
        purchase_package(user=funded_user, package_id=package.id)

        with pytest.raises(PackageAlreadyOwnedError):
            purchase_package(user=funded_user, package_id=package.id)

        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('4000.00')

    def test_can_rebuy_after_expiry(self, funded_user, package, expired_user_package):
        purchase_package(user=funded_user, package_id=package.id)

        assert UserPackage.objects.filter(user=funded_user).count() == 2

    def test_referrer_receives_bonus(self, user, referred_buyer, package):
        user_package = purchase_package(user=referred_buyer, package_id=package.id)

        user.refresh_from_db()
        assert user.wallet_balance == Decimal('100.00')

        bonus = Transaction.objects.get(user=user)
        assert bonus.type == TransactionType.REFERRAL_BONUS
        assert bonus.description == 'Referral bonus from Invited Buyer'

        referral = Referral.objects.get(referred=referred_buyer)
        assert referral.bonus_amount == Decimal('100.00')

        earning = ReferralEarning.objects.get(referrer=user)
        assert earning.user_package == user_package
        assert earning.package_price == Decimal('1000.00')

    def test_no_bonus_without_referrer(self, funded_user, package):
        purchase_package(user=funded_user, package_id=package.id)

        assert not Transaction.objects.filter(type=TransactionType.REFERRAL_BONUS).exists()

    def test_failed_purchase_pays_no_bonus(self, user, referred_buyer, premium_package):
        with pytest.raises(InsufficientBalanceError):
            purchase_package(user=referred_buyer, package_id=premium_package.id)

        user.refresh_from_db()
        assert user.wallet_balance == 0
        assert not ReferralEarning.objects.exists()

    def test_bonus_failure_rolls_back_purchase(self, monkeypatch, user, referred_buyer, package):
        def failing_bonus(**kwargs):
            raise RuntimeError("referral ledger unavailable")

        monkeypatch.setattr(
            'apps.packages.services.purchase.credit_referral_bonus', failing_bonus
        )

        with pytest.raises(RuntimeError):
            purchase_package(user=referred_buyer, package_id=package.id)

        referred_buyer.refresh_from_db()
        user.refresh_from_db()
        assert referred_buyer.wallet_balance == Decimal('2000.00')
        assert user.wallet_balance == 0
        assert not UserPackage.objects.filter(user=referred_buyer).exists()
        assert not Transaction.objects.exists()
        assert not ReferralEarning.objects.exists()


@pytest.mark.django_db
class TestUserPackages:

    def test_excludes_expired(self, user, user_package, expired_user_package):
        assert list(get_user_packages(user=user)) == [user_package]

    def test_excludes_other_users(self, other_user, user_package):
        assert list(get_user_packages(user=other_user)) == []


@pytest.mark.django_db
class TestDailyCounters:

    def test_refresh_resets_stale_counter(self, user_package):
        user_package.tasks_completed_today = 3
        user_package.last_task_date = datetime.date(2024, 1, 1)
        user_package.save()

        assert refresh_daily_counter(user_package, datetime.date(2024, 1, 2)) is True

        user_package.refresh_from_db()
        assert user_package.tasks_completed_today == 0
        assert user_package.last_task_date == datetime.date(2024, 1, 2)

    def test_refresh_keeps_todays_counter(self, user_package):
        today = timezone.localdate()
        user_package.tasks_completed_today = 2
        user_package.last_task_date = today
        user_package.save()

        assert refresh_daily_counter(user_package, today) is False
        assert user_package.tasks_completed_today == 2

    def test_refresh_with_outdated_instance(self, user_package):
        today = timezone.localdate()
        outdated = UserPackage.objects.get(pk=user_package.pk)
        UserPackage.objects.filter(pk=user_package.pk).update(
            tasks_completed_today=1, last_task_date=today
        )

        assert refresh_daily_counter(outdated, today) is False

        assert outdated.tasks_completed_today == 1
        user_package.refresh_from_db()
        assert user_package.tasks_completed_today == 1
        assert user_package.last_task_date == today

    def test_bulk_reset(self, user_package, other_user, package):
        today = timezone.localdate()
        user_package.tasks_completed_today = 3
        user_package.last_task_date = today - timedelta(days=1)
        user_package.save()
        fresh = UserPackage.objects.create(
            user=other_user,
            package=package,
            price_paid=package.price,
            expiry_date=timezone.now() + timedelta(days=5),
            tasks_completed_today=1,
            last_task_date=today,
        )

        assert reset_daily_task_counters(today=today) == 1

        user_package.refresh_from_db()
        fresh.refresh_from_db()
        assert user_package.tasks_completed_today == 0
        assert fresh.tasks_completed_today == 1

    def test_bulk_reset_dry_run(self, user_package):
        user_package.tasks_completed_today = 3
        user_package.last_task_date = timezone.localdate() - timedelta(days=1)
        user_package.save()

        assert reset_daily_task_counters(dry_run=True) == 1

        user_package.refresh_from_db()
        assert user_package.tasks_completed_today == 3

    def test_expire_packages(self, user_package, expired_user_package):
        assert expire_user_packages() == 1

        expired_user_package.refresh_from_db()
        user_package.refresh_from_db()
        assert expired_user_package.is_active is False
        assert user_package.is_active is True
