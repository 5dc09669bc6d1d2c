from django.conf import settings
from django.db import models
from decimal import Decimal
import uuid


class Referral(models.Model):
    """Link between an inviting user and the user who signed up with their code."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    referrer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='referrals_made'
    )
    referred = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='referral'
    )

    # Running total of bonuses earned from this referred user
    bonus_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'referrals'
        indexes = [
            models.Index(fields=['referrer', 'created_at'], name='referral_referrer_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.referrer_id} -> {self.referred_id}"


class ReferralEarning(models.Model):
    """One bonus credited to a referrer for one package purchase."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    referral = models.ForeignKey(
        Referral,
        on_delete=models.CASCADE,
        related_name='earnings'
    )
    referrer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='referral_earnings'
    )
    referred = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='generated_referral_earnings'
    )
    user_package = models.OneToOneField(
        'packages.UserPackage',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='referral_earning'
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    package_price = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'referral_earnings'
        indexes = [
            models.Index(fields=['referrer', 'created_at'], name='refearning_referrer_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.amount} to {self.referrer_id} from {self.referred_id}"
