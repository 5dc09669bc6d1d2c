from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class Task(models.Model):
    """Micro-task available to owners of a package."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    package = models.ForeignKey(
        'packages.Package',
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    link = models.URLField(max_length=500, blank=True)
    reward_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    is_active = models.BooleanField(default=True)
    order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        indexes = [
            models.Index(fields=['package', 'is_active'], name='task_package_active_idx'),
        ]
        ordering = ['order', 'created_at']

    def __str__(self):
        return f"{self.title} ({self.reward_amount})"


class UserTask(models.Model):
    """A task completed by a user on one of their packages."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='user_tasks'
    )
    task = models.ForeignKey(
        Task,
        on_delete=models.PROTECT,
        related_name='completions'
    )
    user_package = models.ForeignKey(
        'packages.UserPackage',
        on_delete=models.CASCADE,
        related_name='user_tasks'
    )

    reward_earned = models.DecimalField(max_digits=12, decimal_places=2)
    screenshot = models.FileField(upload_to='task_screenshots/%Y/%m/')

    completed_at = models.DateTimeField(default=timezone.now)
    completed_on = models.DateField()

    # Client-supplied key that makes a retried submission a no-op
    idempotency_key = models.CharField(max_length=64, null=True, blank=True)

    class Meta:
        db_table = 'user_tasks'
        constraints = [
            models.UniqueConstraint(
                fields=['user_package', 'task', 'completed_on'],
                name='unique_task_per_package_per_day',
            ),
            models.UniqueConstraint(
                fields=['user', 'idempotency_key'],
                name='unique_task_submission_key',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'completed_at'], name='usertask_user_completed_idx'),
            models.Index(fields=['user_package', 'completed_on'], name='usertask_pkg_day_idx'),
        ]
        ordering = ['-completed_at']

    def __str__(self):
        return f"{self.task.title} by {self.user_id} on {self.completed_on}"
