import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestDashboardEndpoint:
    """Tests for GET /api/dashboard/"""

    def test_dashboard(self, authenticated_client, user_package):
        response = authenticated_client.get(reverse('dashboard:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['wallet_balance'] == '0.00'
        assert response.data['active_packages_count'] == 1
        package = response.data['active_packages'][0]
        assert package['package']['name'] == 'Starter'
        assert package['tasks_completed_today'] == 0
        assert package['package']['daily_tasks'] == 3

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('dashboard:dashboard'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
