from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from apps.clients.models import Client, ClientPlan, ClientStatus
from apps.plans.models import Plan, PlanType, RecurrencePeriod
from apps.invoices.models import Invoice, InvoiceStatus, PaymentMethod
from apps.expenses.models import Expense, ExpenseCategory, ExpenseStatus
from apps.tasks.models import Task, TaskStatus
from apps.knowledge_base.models import Article

User = get_user_model()


class Command(BaseCommand):
    help = 'Seeds the database with sample data for testing.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing data before seeding',
        )
        parser.add_argument(
            '--users',
            action='store_true',
            help='Seed the administrator only',
        )
        parser.add_argument(
            '--catalog',
            action='store_true',
            help='Seed plans and clients only',
        )
        parser.add_argument(
            '--finance',
            action='store_true',
            help='Seed invoices and expenses only',
        )
        parser.add_argument(
            '--workspace',
            action='store_true',
            help='Seed tasks and knowledge base articles only',
        )

    def handle(self, *args, **options):
        seed_all = not any([
            options['users'], options['catalog'], options['finance'], options['workspace']
        ])

        if options['clean']:
            self.stdout.write(self.style.WARNING('Cleaning database...'))
            self._clean_database()
            self.stdout.write(self.style.SUCCESS('Database cleaned.'))

        if seed_all or options['users']:
            self._seed_users()

        if seed_all or options['catalog']:
            self._seed_catalog()

        if seed_all or options['finance']:
            self._seed_finance()

        if seed_all or options['workspace']:
            self._seed_workspace()

        self.stdout.write(self.style.SUCCESS('Seeding completed successfully.'))

    def _clean_database(self):
        Invoice.objects.all().delete()
        Client.objects.all().delete()
        Plan.objects.all().delete()
        Expense.objects.all().delete()
        ExpenseCategory.objects.all().delete()
        Task.objects.all().delete()
        Article.objects.all().delete()

    def _seed_users(self):
        self.stdout.write('Seeding Users...')
        if not User.objects.exists():
            User.objects.create_superuser(
                username="admin@example.com",
                email="admin@example.com",
                password="password123",
                name="Admin",
            )
            self.stdout.write(' - Created admin@example.com (password123)')
        else:
            self.stdout.write(' - Users already exist, skipping')

    def _seed_catalog(self):
        self.stdout.write('Seeding Plans & Clients...')
        monthly, _ = Plan.objects.get_or_create(
            name="Website maintenance",
            defaults={
                'price': Decimal('350.00'),
                'plan_type': PlanType.RECURRING,
                'recurrence_value': 1,
                'recurrence_period': RecurrencePeriod.MONTHS,
            }
        )
        yearly, _ = Plan.objects.get_or_create(
            name="Domain & hosting",
            defaults={
                'price': Decimal('600.00'),
                'plan_type': PlanType.RECURRING,
                'recurrence_value': 1,
                'recurrence_period': RecurrencePeriod.YEARS,
            }
        )
        Plan.objects.get_or_create(
            name="Store setup",
            defaults={'price': Decimal('1500.00'), 'plan_type': PlanType.ONE_TIME}
        )

        now = timezone.now()
        samples = [
            ("Padaria Pão Quente", ClientStatus.ACTIVE, [(monthly, 40), (yearly, 300)]),
            ("Oficina do Zé", ClientStatus.ACTIVE, [(monthly, 3)]),
            ("Studio Bella", ClientStatus.INACTIVE, [(monthly, 200)]),
        ]
        for name, status, subs in samples:
            client, created = Client.objects.get_or_create(name=name, defaults={'status': status})
            if not created:
                continue
            for position, (plan, days_ago) in enumerate(subs):
                ClientPlan.objects.create(
                    client=client,
                    plan_id=plan.id,
                    activation_date=now - timedelta(days=days_ago),
                    position=position,
                )
            self.stdout.write(f' - Created client {name}')

    def _seed_finance(self):
        self.stdout.write('Seeding Invoices & Expenses...')
        now = timezone.now()

        for client in Client.objects.filter(status=ClientStatus.ACTIVE):
            for sub in client.plans.all():
                plan = Plan.objects.filter(id=sub.plan_id).first()
                if plan is None or Invoice.objects.filter(client_id=client.id, plan_id=plan.id).exists():
                    continue
                if sub.activation_date > now - timedelta(days=30):
                    continue
                Invoice.objects.create(
                    client_id=client.id,
                    plan_id=plan.id,
                    client_name=client.name,
                    plan_name=plan.name,
                    amount=plan.price,
                    issue_date=now - timedelta(days=33),
                    due_date=now - timedelta(days=27),
                    status=InvoiceStatus.PAID,
                    payment_date=now - timedelta(days=28),
                    payment_method=PaymentMethod.PIX,
                )
                self.stdout.write(f' - Invoice for {client.name} / {plan.name}')

        category, _ = ExpenseCategory.objects.get_or_create(name="Infrastructure")
        Expense.objects.get_or_create(
            description="Cloud server",
            defaults={
                'amount': Decimal('120.00'),
                'due_date': (now + timedelta(days=4)).date(),
                'status': ExpenseStatus.PENDING,
                'category': category,
            }
        )

    def _seed_workspace(self):
        self.stdout.write('Seeding Tasks & Articles...')
        now = timezone.now()
        parent, created = Task.objects.get_or_create(
            title="Renew SSL certificates",
            defaults={'due_date': now + timedelta(days=2), 'status': TaskStatus.IN_PROGRESS}
        )
        if created:
            Task.objects.create(title="Check expiry dates", due_date=now, parent=parent)
            Task.objects.create(title="Install new certificates", due_date=now + timedelta(days=1), parent=parent)

        Article.objects.get_or_create(
            title="Onboarding a new client",
            defaults={
                'category': "Processes",
                'icon': "book",
                'content': {"type": "doc", "content": []},
                'metadata': [{"key": "owner", "value": "ops"}],
            }
        )
