"""Services for the dashboard overview."""

from .overview import get_dashboard


__all__ = [
    'get_dashboard',
]
