"""
Packages app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    PackagesServiceError,
    PackageNotFoundError,
    PackageAlreadyOwnedError,
)

from .catalog import (
    list_active_packages,
    get_package,
)

from .purchase import (
    purchase_package,
)

from .ownership import (
    get_user_packages,
    refresh_daily_counter,
    reset_daily_task_counters,
    expire_user_packages,
)


__all__ = [
    # Exceptions
    'PackagesServiceError',
    'PackageNotFoundError',
    'PackageAlreadyOwnedError',

    # Catalog
    'list_active_packages',
    'get_package',

    # Purchase
    'purchase_package',

    # Ownership & daily counters
    'get_user_packages',
    'refresh_daily_counter',
    'reset_daily_task_counters',
    'expire_user_packages',
]
