"""Daily task board for a user's packages."""

import datetime
from typing import List, Optional

from django.utils import timezone

from apps.accounts.models import User
from apps.packages.services import get_user_packages, refresh_daily_counter
from apps.tasks.models import Task, UserTask


def get_task_board(*, user: User, today: Optional[datetime.date] = None) -> List[dict]:
    """
    Tasks available today, grouped by owned package.

    Opening the board starts a new task day for any package whose counter
    is from an earlier day.

    Returns:
        One dict per active package with keys: user_package, tasks,
        completed_task_ids, done_today, daily_tasks, can_complete
    """
    today = today or timezone.localdate()
    board = []

    for user_package in get_user_packages(user=user):
        refresh_daily_counter(user_package, today)

        tasks = list(
            Task.objects.filter(package_id=user_package.package_id, is_active=True)
        )
        completed_task_ids = set(
            UserTask.objects.filter(
                user_package=user_package,
                completed_on=today,
            ).values_list('task_id', flat=True)
        )

        done_today = user_package.tasks_completed_today
        daily_tasks = user_package.package.daily_tasks

        board.append({
            'user_package': user_package,
            'tasks': tasks,
            'completed_task_ids': completed_task_ids,
            'done_today': done_today,
            'daily_tasks': daily_tasks,
            'can_complete': done_today < daily_tasks,
        })

    return board


def list_completed_tasks(*, user: User):
    """The user's completed tasks, newest first."""
    return (
        UserTask.objects
        .filter(user=user)
        .select_related('task', 'user_package__package')
        .order_by('-completed_at')
    )
