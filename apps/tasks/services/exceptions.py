"""
Domain-specific exceptions for tasks app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class TasksServiceError(Exception):
    """Base exception for all tasks service errors."""
    pass


class TaskNotFoundError(TasksServiceError):
    """Raised when a task does not exist or is not part of the package."""
    pass


class UserPackageNotFoundError(TasksServiceError):
    """Raised when the user does not own the given package."""
    pass


class PackageExpiredError(TasksServiceError):
    """Raised when the owned package is inactive or past its expiry date."""
    pass


class ScreenshotRequiredError(TasksServiceError):
    """Raised when a task is submitted without a screenshot."""
    pass


class DailyLimitReachedError(TasksServiceError):
    """Raised when the package's daily task quota is used up."""
    pass


class TaskAlreadyCompletedError(TasksServiceError):
    """Raised when the task was already completed today on this package."""
    pass
