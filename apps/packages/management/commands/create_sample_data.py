"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear

This creates:
- 3 users (admin, alice, bob invited by alice)
- 5 packages with tasks
- 2 company bank accounts for deposits
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.packages.models import Package, UserPackage
from apps.referrals.models import Referral, ReferralEarning
from apps.tasks.models import Task, UserTask
from apps.wallet.models import AdminBankAccount, Transaction, TransactionType, Deposit, Withdrawal
from apps.wallet.services import ledger


PACKAGES = [
    # name, price, daily_return, daily_tasks, duration_days
    ('Bronze', '700', '35', 2, 30),
    ('Silver', '1500', '80', 3, 30),
    ('Gold', '3000', '170', 4, 45),
    ('Platinum', '5000', '300', 5, 60),
    ('Diamond', '10000', '650', 6, 90),
]

TASK_TEMPLATES = [
    ('Watch the promo video', 'https://www.youtube.com/'),
    ('Like our page', 'https://www.facebook.com/'),
    ('Follow the channel', 'https://t.me/'),
    ('Rate the app', 'https://play.google.com/'),
    ('Share the daily post', 'https://www.tiktok.com/'),
    ('Read the weekly update', 'https://example.com/news'),
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        self.create_users()
        self.create_packages()
        self.create_bank_accounts()

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  0900000000 / admin123 (superuser)')
        self.stdout.write('  0911111111 / password123 (alice, 5000 ETB)')
        self.stdout.write('  0922222222 / password123 (bob, invited by alice)')

    def clear_data(self):
        """Clear all data from the database."""
        UserTask.objects.all().delete()
        ReferralEarning.objects.all().delete()
        Referral.objects.all().delete()
        UserPackage.objects.all().delete()
        Task.objects.all().delete()
        Package.objects.all().delete()
        Transaction.objects.all().delete()
        Deposit.objects.all().delete()
        Withdrawal.objects.all().delete()
        AdminBankAccount.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def create_users(self):
        if not User.objects.filter(phone='0900000000').exists():
            User.objects.create_superuser(
                phone='0900000000',
                password='admin123',
                full_name='Admin',
            )
            self.stdout.write('  Created admin')

        alice, created = User.objects.get_or_create(
            phone='0911111111',
            defaults={'full_name': 'Alice Bekele'},
        )
        if created:
            alice.set_password('password123')
            alice.save()
            ledger.credit(
                user=alice,
                amount=Decimal('5000'),
                type=TransactionType.DEPOSIT,
                description='Sample deposit',
            )
            self.stdout.write(f'  Created alice (referral code {alice.referral_code})')

        bob, created = User.objects.get_or_create(
            phone='0922222222',
            defaults={'full_name': 'Bob Haile', 'referred_by': alice},
        )
        if created:
            bob.set_password('password123')
            bob.save()
            Referral.objects.create(referrer=alice, referred=bob)
            self.stdout.write('  Created bob')

    def create_packages(self):
        for name, price, daily_return, daily_tasks, duration_days in PACKAGES:
            package, created = Package.objects.get_or_create(
                name=name,
                defaults={
                    'price': Decimal(price),
                    'daily_return': Decimal(daily_return),
                    'daily_tasks': daily_tasks,
                    'duration_days': duration_days,
                },
            )
            if not created:
                continue

            # Rewards add up to the daily return when every daily task is done
            reward = (package.daily_return / daily_tasks).quantize(Decimal('0.01'))
            templates = TASK_TEMPLATES[:daily_tasks + 1]
            for order, (title, link) in enumerate(templates, start=1):
                Task.objects.create(
                    package=package,
                    title=title,
                    link=link,
                    reward_amount=reward,
                    order=order,
                )
            self.stdout.write(f'  Created package {name} with {len(templates)} tasks')

    def create_bank_accounts(self):
        accounts = [
            ('Commercial Bank of Ethiopia', '1000123456789', 'InvestPro PLC', 'Bole'),
            ('Telebirr', '0911000000', 'InvestPro PLC', None),
        ]
        for bank_name, account_number, holder, branch in accounts:
            AdminBankAccount.objects.get_or_create(
                bank_name=bank_name,
                account_number=account_number,
                defaults={'account_holder': holder, 'branch_name': branch},
            )
