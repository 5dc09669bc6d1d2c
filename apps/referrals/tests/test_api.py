from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.referrals.services import credit_referral_bonus


@pytest.mark.django_db
class TestReferralOverviewEndpoint:
    """Tests for GET /api/referrals/"""

    def test_overview(self, authenticated_client, user, invited_user):
        credit_referral_bonus(purchaser=invited_user, package_price=Decimal('3000'))

        response = authenticated_client.get(reverse('referrals:overview'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['referral_code'] == user.referral_code
        assert response.data['referral_link'].endswith(f'/register?ref={user.referral_code}')
        assert response.data['total_referrals'] == 1
        assert response.data['total_bonus'] == '300.00'
        assert response.data['referrals'][0]['referred_name'] == 'Meron Alemu'

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('referrals:overview'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestReferralEarningsEndpoint:

    def test_earnings(self, authenticated_client, invited_user):
        credit_referral_bonus(purchaser=invited_user, package_price=Decimal('1000'))

        response = authenticated_client.get(reverse('referrals:earnings'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['amount'] == '100.00'

    def test_other_users_see_nothing(self, other_client, invited_user):
        credit_referral_bonus(purchaser=invited_user, package_price=Decimal('1000'))

        response = other_client.get(reverse('referrals:earnings'))

        assert response.data['count'] == 0


@pytest.mark.django_db
class TestReferralQrEndpoint:

    def test_png(self, authenticated_client):
        response = authenticated_client.get(reverse('referrals:qr-code'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'image/png'
        assert response.content.startswith(b'\x89PNG')
