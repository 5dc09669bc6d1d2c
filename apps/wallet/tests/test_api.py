import uuid
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.wallet.models import Withdrawal, RequestStatus
from apps.wallet.services import request_withdrawal


@pytest.mark.django_db
class TestWalletSummaryEndpoint:
    """Tests for GET /api/wallet/"""

    def test_summary(self, make_client, funded_user):
        response = make_client(funded_user).get(reverse('wallet:summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == '5000.00'
        assert response.data['currency'] == 'ETB'
        assert response.data['has_pending_withdrawal'] is False

    def test_requires_auth(self, api_client):
        assert api_client.get(reverse('wallet:summary')).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestBankAccountsEndpoint:

    def test_lists_active_accounts(self, authenticated_client, company_account, retired_company_account):
        response = authenticated_client.get(reverse('wallet:bank-accounts'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['bank_accounts']) == 1
        assert response.data['bank_accounts'][0]['branch_name'] == 'Bole'
        assert response.data['preset_amounts'][0] == 700


@pytest.mark.django_db
class TestDepositEndpoints:
    """Tests for /api/wallet/deposits/"""

    def test_submit(self, authenticated_client, screenshot):
        response = authenticated_client.post(
            reverse('wallet:deposit-list'),
            {'amount': '1500', 'screenshot': screenshot},
            format='multipart',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'pending'
        assert response.data['amount'] == '1500.00'

    def test_submit_without_screenshot(self, authenticated_client):
        response = authenticated_client.post(
            reverse('wallet:deposit-list'), {'amount': '1500'}, format='multipart'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Please fill in all fields and upload a screenshot.'

    def test_list_only_own(self, authenticated_client, other_client, pending_deposit):
        own = authenticated_client.get(reverse('wallet:deposit-list'))
        other = other_client.get(reverse('wallet:deposit-list'))

        assert own.data['count'] == 1
        assert other.data['count'] == 0

    def test_staff_approves(self, staff_client, user, pending_deposit):
        response = staff_client.post(
            reverse('wallet:deposit-approve', args=[pending_deposit.id]),
            {'note': 'Verified'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'approved'
        user.refresh_from_db()
        assert user.wallet_balance == Decimal('1500.00')

    def test_staff_rejects(self, staff_client, user, pending_deposit):
        response = staff_client.post(reverse('wallet:deposit-reject', args=[pending_deposit.id]))

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.wallet_balance == 0

    def test_user_cannot_approve(self, authenticated_client, pending_deposit):
        response = authenticated_client.post(
            reverse('wallet:deposit-approve', args=[pending_deposit.id])
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_approve_twice_conflicts(self, staff_client, pending_deposit):
        url = reverse('wallet:deposit-approve', args=[pending_deposit.id])
        staff_client.post(url)

        assert staff_client.post(url).status_code == status.HTTP_409_CONFLICT

    def test_approve_unknown(self, staff_client):
        response = staff_client.post(reverse('wallet:deposit-approve', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestWithdrawalEndpoints:
    """Tests for /api/wallet/withdrawals/"""

    def test_request(self, make_client, funded_user):
        response = make_client(funded_user).post(
            reverse('wallet:withdrawal-list'), {'amount': '1000'}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['fee'] == '130.00'
        assert response.data['net_amount'] == '870.00'

    def test_below_minimum(self, make_client, funded_user):
        response = make_client(funded_user).post(
            reverse('wallet:withdrawal-list'), {'amount': '50'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Minimum withdrawal amount is 100 ETB'

    def test_insufficient_balance(self, authenticated_client):
        response = authenticated_client.post(
            reverse('wallet:withdrawal-list'), {'amount': '100'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Insufficient balance'

    def test_pending_conflict(self, make_client, funded_user):
        request_withdrawal(user=funded_user, amount=Decimal('100'))

        response = make_client(funded_user).post(
            reverse('wallet:withdrawal-list'), {'amount': '100'}, format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_quote(self, authenticated_client):
        response = authenticated_client.get(
            reverse('wallet:withdrawal-quote'), {'amount': '250'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fee'] == '32.50'
        assert response.data['net_amount'] == '217.50'
        assert response.data['minimum'] == '100.00'

    def test_quote_requires_amount(self, authenticated_client):
        response = authenticated_client.get(reverse('wallet:withdrawal-quote'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_staff_review_flow(self, staff_client, funded_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('300'))

        approve = staff_client.post(reverse('wallet:withdrawal-approve', args=[withdrawal.id]))
        paid = staff_client.post(reverse('wallet:withdrawal-mark-paid', args=[withdrawal.id]))

        assert approve.status_code == status.HTTP_200_OK
        assert paid.status_code == status.HTTP_200_OK
        assert Withdrawal.objects.get(id=withdrawal.id).status == RequestStatus.PAID

    def test_staff_reject_refunds(self, staff_client, funded_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('300'))

        response = staff_client.post(reverse('wallet:withdrawal-reject', args=[withdrawal.id]))

        assert response.status_code == status.HTTP_200_OK
        funded_user.refresh_from_db()
        assert funded_user.wallet_balance == Decimal('5000.00')

    def test_user_cannot_mark_paid(self, make_client, funded_user):
        withdrawal = request_withdrawal(user=funded_user, amount=Decimal('300'))

        response = make_client(funded_user).post(
            reverse('wallet:withdrawal-mark-paid', args=[withdrawal.id])
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestTransactionsEndpoint:

    def test_paginated_ledger(self, make_client, funded_user):
        request_withdrawal(user=funded_user, amount=Decimal('100'))

        response = make_client(funded_user).get(reverse('wallet:transactions'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['type'] == 'withdrawal'
        assert response.data['results'][0]['signed_amount'] == '-100.00'
