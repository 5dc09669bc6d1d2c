import pytest
from django.utils import timezone


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def complete_url():
    """Build the completion URL for a task."""
    from django.urls import reverse

    def _url(task):
        return reverse('tasks:complete', args=[task.id])
    return _url
