"""Fixtures shared by every app's test suite."""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.packages.models import Package, UserPackage
from apps.tasks.models import Task


def client_for(user):
    """Return an API client authenticated as ``user`` using JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user with an empty wallet."""
    return User.objects.create_user(
        phone='0911000001',
        password='secret123',
        full_name='Abebe Kebede',
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        phone='0911000002',
        password='secret456',
        full_name='Sara Tesfaye',
    )


@pytest.fixture
def staff_user(db):
    """Create and return a staff reviewer."""
    return User.objects.create_user(
        phone='0911000099',
        password='staffpass',
        full_name='Staff Reviewer',
        is_staff=True,
    )


@pytest.fixture
def funded_user(user):
    """Test user holding 5000.00 in the wallet."""
    user.wallet_balance = Decimal('5000.00')
    user.save(update_fields=['wallet_balance'])
    return user


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as ``user``."""
    return client_for(user)


@pytest.fixture
def other_client(other_user):
    return client_for(other_user)


@pytest.fixture
def staff_client(staff_user):
    """Return an API client authenticated as a staff member."""
    return client_for(staff_user)


@pytest.fixture
def package(db):
    """Starter package: 1000 for 30 days, 3 tasks a day."""
    return Package.objects.create(
        name='Starter',
        price=Decimal('1000.00'),
        daily_return=Decimal('50.00'),
        daily_tasks=3,
        duration_days=30,
    )


@pytest.fixture
def premium_package(db):
    return Package.objects.create(
        name='Premium',
        price=Decimal('3000.00'),
        daily_return=Decimal('180.00'),
        daily_tasks=5,
        duration_days=60,
    )


@pytest.fixture
def inactive_package(db):
    return Package.objects.create(
        name='Retired',
        price=Decimal('500.00'),
        daily_return=Decimal('20.00'),
        daily_tasks=1,
        duration_days=10,
        is_active=False,
    )


@pytest.fixture
def user_package(user, package):
    """Active package owned by ``user``, bought directly (no ledger entry)."""
    now = timezone.now()
    return UserPackage.objects.create(
        user=user,
        package=package,
        price_paid=package.price,
        purchased_at=now,
        expiry_date=now + timedelta(days=package.duration_days),
    )


@pytest.fixture
def expired_user_package(user, package):
    purchased = timezone.now() - timedelta(days=package.duration_days + 1)
    return UserPackage.objects.create(
        user=user,
        package=package,
        price_paid=package.price,
        purchased_at=purchased,
        expiry_date=purchased + timedelta(days=package.duration_days),
    )


@pytest.fixture
def tasks(package):
    """Four active tasks for the starter package (one more than the daily limit)."""
    return [
        Task.objects.create(
            package=package,
            title=f'Watch video {i}',
            link=f'https://example.com/video/{i}',
            reward_amount=Decimal('15.00'),
            order=i,
        )
        for i in range(1, 5)
    ]


@pytest.fixture
def task(tasks):
    return tasks[0]


@pytest.fixture
def screenshot():
    """A small uploaded image."""
    return SimpleUploadedFile(
        'proof.png',
        b'\x89PNG\r\n\x1a\n' + b'\x00' * 64,
        content_type='image/png',
    )


@pytest.fixture
def make_screenshot():
    """Factory for fresh uploaded files (an upload can only be read once)."""
    def _make(name='proof.png'):
        return SimpleUploadedFile(
            name,
            b'\x89PNG\r\n\x1a\n' + b'\x00' * 64,
            content_type='image/png',
        )
    return _make


@pytest.fixture
def make_client():
    """Factory returning a JWT-authenticated client for any user."""
    return client_for
