"""
Tasks app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    TasksServiceError,
    TaskNotFoundError,
    UserPackageNotFoundError,
    PackageExpiredError,
    ScreenshotRequiredError,
    DailyLimitReachedError,
    TaskAlreadyCompletedError,
)

from .task_board import (
    get_task_board,
    list_completed_tasks,
)

from .task_completion import (
    complete_task,
)


__all__ = [
    # Exceptions
    'TasksServiceError',
    'TaskNotFoundError',
    'UserPackageNotFoundError',
    'PackageExpiredError',
    'ScreenshotRequiredError',
    'DailyLimitReachedError',
    'TaskAlreadyCompletedError',

    # Board
    'get_task_board',
    'list_completed_tasks',

    # Completion
    'complete_task',
]
