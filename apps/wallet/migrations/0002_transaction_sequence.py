# Generated manually to give ledger entries a stable per-user order
from django.db import migrations, models


def number_existing_entries(apps, schema_editor):
    """Number each user's existing ledger entries oldest first."""
    Transaction = apps.get_model('wallet', 'Transaction')

    user_ids = Transaction.objects.values_list('user_id', flat=True).distinct()
    for user_id in user_ids:
        entries = Transaction.objects.filter(user_id=user_id).order_by('created_at', 'id')
        for number, entry in enumerate(entries, start=1):
            entry.sequence = number
            entry.save(update_fields=['sequence'])


class Migration(migrations.Migration):

    dependencies = [
        ('wallet', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='transaction',
            name='sequence',
            field=models.PositiveIntegerField(default=0, editable=False),
        ),
        migrations.RunPython(number_existing_entries, migrations.RunPython.noop),
        migrations.AddConstraint(
            model_name='transaction',
            constraint=models.UniqueConstraint(
                fields=('user', 'sequence'), name='unique_txn_user_sequence'
            ),
        ),
        migrations.AlterModelOptions(
            name='transaction',
            options={'ordering': ['-created_at', '-sequence']},
        ),
    ]
