"""
Management command for the daily package maintenance run.

Resets per-package task counters for the new day and deactivates packages
whose duration has ended. Meant to run from cron shortly after midnight
(local TIME_ZONE); task endpoints also reset counters lazily, so a missed
run only delays the bookkeeping.

Usage:
    python manage.py run_daily_maintenance
    python manage.py run_daily_maintenance --dry-run
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.packages.services import reset_daily_task_counters, expire_user_packages


class Command(BaseCommand):
    help = 'Reset daily task counters and expire finished packages'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        today = timezone.localdate()

        expired = expire_user_packages(dry_run=dry_run)
        reset = reset_daily_task_counters(today=today, dry_run=dry_run)

        self.stdout.write(f'Packages expired: {expired}')
        self.stdout.write(f'Task counters reset for {today}: {reset}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('--dry-run mode: No changes made.')
            )
            return

        self.stdout.write(self.style.SUCCESS('Daily maintenance complete.'))
