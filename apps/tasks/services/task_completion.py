"""
Task completion service.

Recording the completion, crediting the reward and bumping the package's
daily counter happen in one transaction with the package row locked, so
two simultaneous submissions cannot both slip under the daily limit.
"""

import datetime
import logging
from typing import Optional, Tuple
from uuid import UUID

from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.packages.models import UserPackage
from apps.packages.services import refresh_daily_counter
from apps.tasks.models import Task, UserTask
from apps.wallet.models import TransactionType
from apps.wallet.services import ledger

from .exceptions import (
    TaskNotFoundError,
    UserPackageNotFoundError,
    PackageExpiredError,
    ScreenshotRequiredError,
    DailyLimitReachedError,
    TaskAlreadyCompletedError,
)

logger = logging.getLogger(__name__)


def _find_by_idempotency_key(user: User, idempotency_key: Optional[str]) -> Optional[UserTask]:
    if not idempotency_key:
        return None
    return UserTask.objects.filter(user=user, idempotency_key=idempotency_key).first()


@transaction.atomic
def complete_task(
    *,
    user: User,
    task_id: UUID,
    user_package_id: UUID,
    screenshot,
    idempotency_key: Optional[str] = None,
    today: Optional[datetime.date] = None
) -> Tuple[UserTask, bool]:
    """
    Submit a task with its screenshot and credit the reward.

    Args:
        user: Submitting user
        task_id: UUID of the task
        user_package_id: UUID of the owned package the task counts against
        screenshot: Uploaded proof of completion
        idempotency_key: Optional client key; a repeated key returns the
            original completion without crediting again
        today: Task day, defaults to the local date

    Returns:
        (user_task, created) tuple

    Raises:
        UserPackageNotFoundError: If the user doesn't own the package
        PackageExpiredError: If the package is inactive or expired
        TaskNotFoundError: If the task isn't an active task of the package
        ScreenshotRequiredError: If no screenshot was uploaded
        DailyLimitReachedError: If today's quota is used up
        TaskAlreadyCompletedError: If the task was already done today
    """
    today = today or timezone.localdate()

    existing = _find_by_idempotency_key(user, idempotency_key)
    if existing:
        logger.info("Replayed task submission %s for user %s", idempotency_key, user.pk)
        return existing, False

    try:
        user_package = (
            UserPackage.objects
            .select_for_update()
            .select_related('package')
            .get(id=user_package_id, user=user)
        )
    except UserPackage.DoesNotExist:
        raise UserPackageNotFoundError(f"Package {user_package_id} not found")

    # A concurrent request with the same key may have committed while we waited
    existing = _find_by_idempotency_key(user, idempotency_key)
    if existing:
        return existing, False

    if not user_package.is_usable:
        raise PackageExpiredError("This package has expired")

    try:
        task = Task.objects.get(
            id=task_id,
            package_id=user_package.package_id,
            is_active=True,
        )
    except Task.DoesNotExist:
        raise TaskNotFoundError(f"Task {task_id} not found for this package")

    if not screenshot:
        raise ScreenshotRequiredError("Please upload a screenshot first!")

    refresh_daily_counter(user_package, today)

    if user_package.tasks_completed_today >= user_package.package.daily_tasks:
        logger.warning(
            "User %s hit the daily task limit on package %s", user.pk, user_package.pk
        )
        raise DailyLimitReachedError("Daily task limit reached for this package")

    if UserTask.objects.filter(user_package=user_package, task=task, completed_on=today).exists():
        raise TaskAlreadyCompletedError("Task already completed today")

    try:
        with transaction.atomic():
            user_task = UserTask.objects.create(
                user=user,
                task=task,
                user_package=user_package,
                reward_earned=task.reward_amount,
                screenshot=screenshot,
                completed_on=today,
                idempotency_key=idempotency_key or None,
            )
    except IntegrityError:
        raise TaskAlreadyCompletedError("Task already completed today")

    ledger.credit(
        user=user,
        amount=task.reward_amount,
        type=TransactionType.TASK_REWARD,
        description=f"Task reward: {task.title}",
        reference_id=task.id,
    )

    user_package.tasks_completed_today += 1
    user_package.last_task_date = today
    user_package.total_earned += task.reward_amount
    user_package.save(update_fields=['tasks_completed_today', 'last_task_date', 'total_earned'])

    logger.info(
        "User %s completed task %s on package %s (+%s)",
        user.pk, task.id, user_package.pk, task.reward_amount
    )
    return user_task, True
