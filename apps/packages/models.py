from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class Package(models.Model):
    """Investment package tier users buy to unlock daily tasks."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    daily_return = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    daily_tasks = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    duration_days = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    background_image = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'packages'
        indexes = [
            models.Index(fields=['is_active', 'price'], name='package_active_price_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name='package_price_positive',
            ),
        ]
        ordering = ['price']

    def __str__(self):
        return f"{self.name} ({self.price})"

    @property
    def total_return(self):
        """Everything the package pays out over its lifetime."""
        return self.daily_return * self.duration_days

    @property
    def net_profit(self):
        return self.total_return - self.price


class UserPackage(models.Model):
    """A package owned by a user, with its per-day task counter."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='user_packages'
    )
    package = models.ForeignKey(
        Package,
        on_delete=models.PROTECT,
        related_name='user_packages'
    )

    price_paid = models.DecimalField(max_digits=12, decimal_places=2)
    purchased_at = models.DateTimeField(default=timezone.now)
    expiry_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    # Daily task tracking
    tasks_completed_today = models.PositiveIntegerField(default=0)
    last_task_date = models.DateField(null=True, blank=True)
    total_earned = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    class Meta:
        db_table = 'user_packages'
        indexes = [
            models.Index(fields=['user', 'is_active'], name='userpkg_user_active_idx'),
            models.Index(fields=['is_active', 'expiry_date'], name='userpkg_active_expiry_idx'),
            models.Index(fields=['is_active', 'last_task_date'], name='userpkg_active_lasttask_idx'),
        ]
        ordering = ['-purchased_at']

    def __str__(self):
        return f"{self.package.name} owned by {self.user_id}"

    @property
    def is_expired(self):
        return self.expiry_date <= timezone.now()

    @property
    def is_usable(self):
        return self.is_active and not self.is_expired

    def tasks_completed_on(self, day):
        """Counter value as seen on ``day`` (a stale counter reads as zero)."""
        if self.last_task_date != day:
            return 0
        return self.tasks_completed_today

    def tasks_remaining_on(self, day):
        return max(0, self.package.daily_tasks - self.tasks_completed_on(day))
