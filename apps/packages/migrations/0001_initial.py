# Generated manually for the packages app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Package',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('daily_return', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('daily_tasks', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('duration_days', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('background_image', models.URLField(blank=True, max_length=500)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'packages',
                'ordering': ['price'],
                'indexes': [
                    models.Index(fields=['is_active', 'price'], name='package_active_price_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UserPackage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('price_paid', models.DecimalField(decimal_places=2, max_digits=12)),
                ('purchased_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('expiry_date', models.DateTimeField()),
                ('is_active', models.BooleanField(default=True)),
                ('tasks_completed_today', models.PositiveIntegerField(default=0)),
                ('last_task_date', models.DateField(blank=True, null=True)),
                ('total_earned', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('package', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='user_packages', to='packages.package')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='user_packages', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_packages',
                'ordering': ['-purchased_at'],
                'indexes': [
                    models.Index(fields=['user', 'is_active'], name='userpkg_user_active_idx'),
                    models.Index(fields=['is_active', 'expiry_date'], name='userpkg_active_expiry_idx'),
                    models.Index(fields=['is_active', 'last_task_date'], name='userpkg_active_lasttask_idx'),
                ],
            },
        ),
    ]
