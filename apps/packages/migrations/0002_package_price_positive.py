# Generated manually to forbid free packages at the database level
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('packages', '0001_initial'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='package',
            constraint=models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name='package_price_positive',
            ),
        ),
    ]
