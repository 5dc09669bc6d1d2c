from decimal import Decimal

import pytest
from django.utils import timezone

from apps.accounts.models import CustomerBankAccount
from apps.wallet.models import (
    Transaction,
    TransactionType,
    TransactionDirection,
    RequestStatus,
)
from apps.wallet.services import (
    credit,
    debit,
    to_money,
    calculate_withdrawal_fee,
    submit_deposit,
    approve_deposit,
    reject_deposit,
    request_withdrawal,
    approve_withdrawal,
    mark_withdrawal_paid,
    reject_withdrawal,
    get_wallet_summary,
    get_deposit_instructions,
    InvalidAmountError,
    InsufficientBalanceError,
    ScreenshotRequiredError,
    PendingWithdrawalExistsError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
)


class TestMoney:

    def test_rounds_half_up(self):
        assert to_money('10.005') == Decimal('10.01')
        assert to_money(0.1) == Decimal('0.10')

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_money('ten')


class TestWithdrawalFee:

    def test_thirteen_percent(self):
        assert calculate_withdrawal_fee(Decimal('100')) == (Decimal('13.00'), Decimal('87.00'))

    def test_fee_and_net_add_up(self):
        fee, net = calculate_withdrawal_fee(Decimal('123.45'))

        assert fee == Decimal('16.05')
        assert fee + net == Decimal('123.45')


@pytest.mark.django_db
class TestLedger:

    def test_credit(self, user):
        entry = credit(user=user, amount='250.50', type=TransactionType.DEPOSIT)

        user.refresh_from_db()
        assert user.wallet_balance == Decimal('250.50')
        assert entry.direction == TransactionDirection.CREDIT
        assert entry.balance_after == Decimal('250.50')
        assert entry.currency == 'ETB'

    def test_debit(self, funded_user):
        entry = debit(user=funded_user, amount=Decimal('1000'), type=TransactionType.WITHDRAWAL)

        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('4000.00')
        assert entry.signed_amount == Decimal('-1000.00')

    def test_debit_never_goes_negative(self, user):
        with pytest.raises(InsufficientBalanceError):
            debit(user=user, amount=Decimal('0.01'), type=TransactionType.WITHDRAWAL)

        user.refresh_from_db()
        assert user.wallet_balance == 0
        assert not Transaction.objects.exists()

    @pytest.mark.parametrize('amount', [0, -5, 'abc'])
    def test_invalid_amounts(self, user, amount):
        with pytest.raises(InvalidAmountError):
            credit(user=user, amount=amount, type=TransactionType.DEPOSIT)

    def test_balance_after_tracks_sequence(self, user):
        credit(user=user, amount=100, type=TransactionType.DEPOSIT)
        credit(user=user, amount=50, type=TransactionType.TASK_REWARD)
        debit(user=user, amount=30, type=TransactionType.WITHDRAWAL)

        entries = list(
            Transaction.objects.filter(user=user)
            .order_by('sequence')
            .values_list('sequence', 'balance_after')
        )
        assert entries == [
            (1, Decimal('100.00')),
            (2, Decimal('150.00')),
            (3, Decimal('120.00')),
        ]

    def test_same_timestamp_lists_newest_first(self, user):
        credit(user=user, amount=100, type=TransactionType.DEPOSIT)
        debit(user=user, amount=40, type=TransactionType.PACKAGE_PURCHASE)
        credit(user=user, amount=15, type=TransactionType.TASK_REWARD)
        Transaction.objects.filter(user=user).update(created_at=timezone.now())

        types = list(Transaction.objects.filter(user=user).values_list('type', flat=True))

        assert types == [
            TransactionType.TASK_REWARD,
            TransactionType.PACKAGE_PURCHASE,
            TransactionType.DEPOSIT,
        ]

    def test_sequence_is_per_user(self, user, other_user):
        credit(user=user, amount=100, type=TransactionType.DEPOSIT)
        credit(user=other_user, amount=100, type=TransactionType.DEPOSIT)

        assert Transaction.objects.get(user=other_user).sequence == 1


@pytest.mark.django_db
class TestDeposits:

    def test_submit_creates_pending(self, user, screenshot):
        deposit = submit_deposit(user=user, amount='700', screenshot=screenshot)

        assert deposit.status == RequestStatus.PENDING
        user.refresh_from_db()
        assert user.wallet_balance == 0

    def test_submit_requires_screenshot(self, user):
        with pytest.raises(ScreenshotRequiredError):
            submit_deposit(user=user, amount='700', screenshot=None)

    def test_submit_requires_positive_amount(self, user, screenshot):
        with pytest.raises(InvalidAmountError):
            submit_deposit(user=user, amount='0', screenshot=screenshot)

    def test_approve_credits_wallet(self, user, staff_user, pending_deposit):
        deposit = approve_deposit(deposit_id=pending_deposit.id, reviewer=staff_user, note='ok')

        assert deposit.status == RequestStatus.APPROVED
        assert deposit.reviewed_by == staff_user
        user.refresh_from_db()
        assert user.wallet_balance == Decimal('1500.00')
        assert Transaction.objects.get(user=user).type == TransactionType.DEPOSIT

    def test_approve_twice(self, staff_user, pending_deposit):
        approve_deposit(deposit_id=pending_deposit.id, reviewer=staff_user)

        with pytest.raises(InvalidStateTransitionError):
            approve_deposit(deposit_id=pending_deposit.id, reviewer=staff_user)

    def test_reject_moves_no_money(self, user, staff_user, pending_deposit):
        deposit = reject_deposit(deposit_id=pending_deposit.id, reviewer=staff_user)

        assert deposit.status == RequestStatus.REJECTED
        user.refresh_from_db()
        assert user.wallet_balance == 0

    def test_non_staff_cannot_review(self, other_user, pending_deposit):
        with pytest.raises(InsufficientPermissionsError):
            approve_deposit(deposit_id=pending_deposit.id, reviewer=other_user)


@pytest.mark.django_db
class TestWithdrawals:

    def test_request_holds_amount(self, funded_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('1000'))

        assert withdrawal.status == RequestStatus.PENDING
        assert withdrawal.fee == Decimal('130.00')
        assert withdrawal.net_amount == Decimal('870.00')
        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('4000.00')
        entry = Transaction.objects.get(user=funded_user)
        assert entry.type == TransactionType.WITHDRAWAL
        assert entry.reference_id == withdrawal.id

    def test_snapshots_bank_account(self, funded_user):
        CustomerBankAccount.objects.create(
            user=funded_user,
            bank_name='Awash Bank',
            account_number='0132',
            account_holder='Abebe Kebede',
        )

        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('200'))

        assert withdrawal.bank_name == 'Awash Bank'
        assert withdrawal.account_number == '0132'

    def test_below_minimum(self, funded_user):
        with pytest.raises(InvalidAmountError, match='Minimum withdrawal amount is 100'):
            request_withdrawal(user=funded_user, amount=Decimal('99.99'))

    def test_more_than_balance(self, user):
        user.wallet_balance = Decimal('150.00')
        user.save()

        with pytest.raises(InsufficientBalanceError):
            request_withdrawal(user=user, amount=Decimal('151'))

    def test_one_pending_at_a_time(self, funded_user):
        request_withdrawal(user=funded_user, amount=Decimal('100'))

        with pytest.raises(PendingWithdrawalExistsError):
            request_withdrawal(user=funded_user, amount=Decimal('100'))

    def test_approve_then_pay(self, funded_user, staff_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('500'))

        approve_withdrawal(withdrawal_id=withdrawal.id, reviewer=staff_user)
        paid = mark_withdrawal_paid(withdrawal_id=withdrawal.id, reviewer=staff_user)

        assert paid.status == RequestStatus.PAID
        assert paid.paid_at is not None
        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('4500.00')

    def test_reject_refunds(self, funded_user, staff_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('500'))

        rejected = reject_withdrawal(withdrawal_id=withdrawal.id, reviewer=staff_user, note='bad account')

        assert rejected.status == RequestStatus.REJECTED
        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('5000.00')
        assert Transaction.objects.filter(
            user=funded_user, type=TransactionType.WITHDRAWAL_REFUND
        ).count() == 1

    def test_paid_cannot_be_rejected(self, funded_user, staff_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('500'))
        mark_withdrawal_paid(withdrawal_id=withdrawal.id, reviewer=staff_user)

        with pytest.raises(InvalidStateTransitionError):
            reject_withdrawal(withdrawal_id=withdrawal.id, reviewer=staff_user)

    def test_new_request_after_review(self, funded_user, staff_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('100'))
        reject_withdrawal(withdrawal_id=withdrawal.id, reviewer=staff_user)

        assert request_withdrawal(user=funded_user, amount=Decimal('100'))


@pytest.mark.django_db
class TestSummaries:

    def test_wallet_summary(self, funded_user, settings):
        settings.RECENT_ITEMS_LIMIT = 2
        for _ in range(3):
            credit(user=funded_user, amount=10, type=TransactionType.TASK_REWARD)
        request_withdrawal(user=funded_user, amount=Decimal('100'))

        summary = get_wallet_summary(user=funded_user)

        assert summary['balance'] == Decimal('4930.00')
        assert summary['has_pending_withdrawal'] is True
        assert len(summary['transactions']) == 2
        assert summary['transactions'][0].type == TransactionType.WITHDRAWAL

    def test_deposit_instructions(self, company_account, retired_company_account):
        instructions = get_deposit_instructions()

        assert instructions['bank_accounts'] == [company_account]
        assert 700 in instructions['preset_amounts']
        assert instructions['currency'] == 'ETB'
