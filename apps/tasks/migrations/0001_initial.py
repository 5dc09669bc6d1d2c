# Generated manually for the tasks app

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
        ('packages', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('link', models.URLField(blank=True, max_length=500)),
                ('reward_amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('is_active', models.BooleanField(default=True)),
                ('order', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('package', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to='packages.package')),
            ],
            options={
                'db_table': 'tasks',
                'ordering': ['order', 'created_at'],
                'indexes': [
                    models.Index(fields=['package', 'is_active'], name='task_package_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UserTask',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('reward_earned', models.DecimalField(decimal_places=2, max_digits=12)),
                ('screenshot', models.FileField(upload_to='task_screenshots/%Y/%m/')),
                ('completed_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('completed_on', models.DateField()),
                ('idempotency_key', models.CharField(blank=True, max_length=64, null=True)),
                ('task', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='completions', to='tasks.task')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='user_tasks', to=settings.AUTH_USER_MODEL)),
                ('user_package', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='user_tasks', to='packages.userpackage')),
            ],
            options={
                'db_table': 'user_tasks',
                'ordering': ['-completed_at'],
                'indexes': [
                    models.Index(fields=['user', 'completed_at'], name='usertask_user_completed_idx'),
                    models.Index(fields=['user_package', 'completed_on'], name='usertask_pkg_day_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('user_package', 'task', 'completed_on'), name='unique_task_per_package_per_day'),
                    models.UniqueConstraint(fields=('user', 'idempotency_key'), name='unique_task_submission_key'),
                ],
            },
        ),
    ]
