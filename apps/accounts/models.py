from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import secrets
import string
import uuid


REFERRAL_CODE_LENGTH = 8
REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_referral_code():
    """Return a random upper-case alphanumeric referral code."""
    return ''.join(
        secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(REFERRAL_CODE_LENGTH)
    )


class UserManager(BaseUserManager):
    """Custom user manager for phone-based authentication."""

    use_in_migrations = True

    def create_user(self, phone, password=None, **extra_fields):
        if not phone:
            raise ValueError('Phone number is required')

        phone = self.normalize_phone(phone)
        user = self.model(phone=phone, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, phone, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(phone, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone):
        """Strip whitespace and separators users tend to type."""
        return ''.join(c for c in str(phone) if c.isdigit() or c == '+')


class User(AbstractBaseUser, PermissionsMixin):
    """Platform user identified by phone number."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone = models.CharField(unique=True, max_length=20, db_index=True)
    full_name = models.CharField(max_length=150)

    # Referral program
    referral_code = models.CharField(
        max_length=16,
        unique=True,
        db_index=True,
        editable=False
    )
    referred_by = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='referred_users'
    )

    # Wallet (mutated only through apps.wallet.services.ledger)
    wallet_balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'phone'
    REQUIRED_FIELDS = ['full_name']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['phone'], name='users_phone_idx'),
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(wallet_balance__gte=0),
                name='user_wallet_balance_non_negative',
            ),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.phone})"

    def save(self, *args, **kwargs):
        """Assign a unique referral code on first save."""
        if not self.referral_code:
            self.referral_code = self._generate_unique_referral_code()
        super().save(*args, **kwargs)

    @classmethod
    def _generate_unique_referral_code(cls, max_attempts=10):
        for _ in range(max_attempts):
            code = generate_referral_code()
            if not cls.objects.filter(referral_code=code).exists():
                return code
        raise RuntimeError("Failed to generate unique referral code")

    def get_display_name(self):
        """Return full name or phone number."""
        return self.full_name or self.phone


class CustomerBankAccount(models.Model):
    """Where a user's withdrawals are paid out to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='bank_account'
    )
    bank_name = models.CharField(max_length=100)
    account_number = models.CharField(max_length=50)
    account_holder = models.CharField(max_length=150)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customer_bank_accounts'

    def __str__(self):
        return f"{self.bank_name} {self.account_number} ({self.account_holder})"
