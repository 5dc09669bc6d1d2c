"""Package catalog queries."""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from apps.packages.models import Package

from .exceptions import PackageNotFoundError


def list_active_packages() -> QuerySet:
    """Packages currently for sale, cheapest first."""
    return Package.objects.filter(is_active=True).order_by('price', 'name')


def get_package(*, package_id: UUID) -> Package:
    """
    Get an active package by ID.

    Raises:
        PackageNotFoundError: If package doesn't exist or is inactive
    """
    try:
        return Package.objects.get(id=package_id, is_active=True)
    except (Package.DoesNotExist, ValidationError):
        raise PackageNotFoundError(f"Package with ID {package_id} not found")
