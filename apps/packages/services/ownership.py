"""Owned packages and their daily task counters."""

import datetime
import logging
from typing import Optional

from django.db.models import QuerySet, Q
from django.utils import timezone

from apps.accounts.models import User
from apps.packages.models import UserPackage

logger = logging.getLogger(__name__)


def get_user_packages(*, user: User) -> QuerySet:
    """The user's active, unexpired packages with their package loaded."""
    return (
        UserPackage.objects
        .filter(user=user, is_active=True, expiry_date__gt=timezone.now())
        .select_related('package')
        .order_by('-purchased_at')
    )


def refresh_daily_counter(
    user_package: UserPackage,
    today: Optional[datetime.date] = None
) -> bool:
    """
    Start a new task day for the package if the last task was on an earlier day.

    The reset is a conditional UPDATE, so an instance read before a task
    was completed today cannot zero the committed counter. When another
    request already started the day, the instance is reloaded instead.

    Returns:
        True if the counter was reset
    """
    today = today or timezone.localdate()
    if user_package.last_task_date == today:
        return False

    updated = (
        UserPackage.objects
        .filter(pk=user_package.pk)
        .exclude(last_task_date=today)
        .update(tasks_completed_today=0, last_task_date=today)
    )
    if updated:
        user_package.tasks_completed_today = 0
        user_package.last_task_date = today
    else:
        user_package.refresh_from_db(fields=['tasks_completed_today', 'last_task_date'])
    return bool(updated)


def reset_daily_task_counters(today: Optional[datetime.date] = None, dry_run: bool = False) -> int:
    """
    Reset the counter of every active package whose last task day is over.

    Returns:
        Number of packages reset (or that would be reset with dry_run)
    """
    today = today or timezone.localdate()
    stale = UserPackage.objects.filter(is_active=True).filter(
        Q(last_task_date__lt=today) | Q(last_task_date__isnull=True)
    )

    if dry_run:
        return stale.count()

    count = stale.update(tasks_completed_today=0, last_task_date=today)
    logger.info("Reset daily task counters on %d packages for %s", count, today)
    return count


def expire_user_packages(now: Optional[datetime.datetime] = None, dry_run: bool = False) -> int:
    """
    Deactivate packages whose expiry date has passed.

    Returns:
        Number of packages deactivated (or that would be with dry_run)
    """
    now = now or timezone.now()
    expired = UserPackage.objects.filter(is_active=True, expiry_date__lte=now)

    if dry_run:
        return expired.count()

    count = expired.update(is_active=False)
    logger.info("Expired %d user packages", count)
    return count
