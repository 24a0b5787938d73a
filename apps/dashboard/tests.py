"""
Tests for dashboard analytics.
"""
from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4
from django.test import TestCase, Client as HttpClient
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.clients.models import Client, ClientStatus
from apps.expenses.models import Expense, ExpenseStatus
from apps.invoices.models import Invoice, InvoiceStatus
from apps.dashboard import analytics_service
from apps.dashboard.analytics_service import percent_change

User = get_user_model()

TODAY = date(2024, 6, 15)


def local(year, month, day, hour=12):
    return timezone.make_aware(datetime(year, month, day, hour))


def make_invoice(due, status=InvoiceStatus.PENDING, amount='100.00', paid_on=None):
    return Invoice.objects.create(
        client_id=uuid4(), plan_id=uuid4(),
        client_name="Acme", plan_name="Monthly",
        amount=Decimal(amount),
        issue_date=due, due_date=due,
        status=status, payment_date=paid_on,
    )


class PercentChangeTest(TestCase):
    def test_no_previous_value(self):
        self.assertEqual(percent_change(Decimal('50'), Decimal('0')), Decimal('100'))
        self.assertEqual(percent_change(Decimal('0'), Decimal('0')), Decimal('0'))

    def test_relative_change(self):
        self.assertEqual(percent_change(Decimal('150'), Decimal('100')), Decimal('50.0'))
        self.assertEqual(percent_change(Decimal('75'), Decimal('100')), Decimal('-25.0'))


class MonthSummaryTest(TestCase):
    def setUp(self):
        make_invoice(local(2024, 6, 5), InvoiceStatus.PAID, '300.00', paid_on=local(2024, 6, 6))
        make_invoice(local(2024, 5, 5), InvoiceStatus.PAID, '200.00', paid_on=local(2024, 5, 6))
        make_invoice(local(2024, 6, 20), InvoiceStatus.PENDING, '999.00')

        Expense.objects.create(description="Rent", amount=Decimal('120.00'),
                               due_date=date(2024, 6, 1), status=ExpenseStatus.PAID)
        Expense.objects.create(description="Power", amount=Decimal('80.00'),
                               due_date=date(2024, 6, 2), status=ExpenseStatus.PENDING)

        Client.objects.create(name="Active")
        old = Client.objects.create(name="Old", status=ClientStatus.INACTIVE)
        Client.objects.filter(id=old.id).update(created_at=local(2023, 1, 1))
        Client.objects.exclude(id=old.id).update(created_at=local(2024, 6, 3))

    def test_summary(self):
        summary = analytics_service.get_month_summary(today=TODAY)
        self.assertEqual(summary.revenue, Decimal('300.00'))
        self.assertEqual(summary.revenue_change, Decimal('50.0'))
        self.assertEqual(summary.expenses, Decimal('120.00'))
        self.assertEqual(summary.expense_change, Decimal('100'))
        self.assertEqual(summary.profit, Decimal('180.00'))
        self.assertEqual(summary.active_clients, 1)
        self.assertEqual(summary.new_clients, 1)


class MonthlyTrendTest(TestCase):
    def test_six_months_oldest_first_with_gaps(self):
        make_invoice(local(2024, 2, 5), InvoiceStatus.PAID, '100.00', paid_on=local(2024, 2, 10))
        make_invoice(local(2024, 6, 5), InvoiceStatus.PAID, '250.00', paid_on=local(2024, 6, 10))
        make_invoice(local(2023, 12, 5), InvoiceStatus.PAID, '500.00', paid_on=local(2023, 12, 10))
        Expense.objects.create(description="Rent", amount=Decimal('40.00'),
                               due_date=date(2024, 4, 1), status=ExpenseStatus.PAID)

        trends = analytics_service.get_monthly_trends(6, today=TODAY)

        self.assertEqual([(t.year, t.month) for t in trends],
                         [(2024, 1), (2024, 2), (2024, 3), (2024, 4), (2024, 5), (2024, 6)])
        self.assertEqual(trends[1].revenue, Decimal('100.00'))
        self.assertEqual(trends[3].expenses, Decimal('40.00'))
        self.assertEqual(trends[5].revenue, Decimal('250.00'))
        self.assertEqual(trends[0].revenue, Decimal('0.00'))

    def test_trend_wraps_year(self):
        trends = analytics_service.get_monthly_trends(3, today=date(2024, 1, 20))
        self.assertEqual([(t.year, t.month) for t in trends], [(2023, 11), (2023, 12), (2024, 1)])


class ImportantNoticesTest(TestCase):
    def test_labels_window_and_order(self):
        make_invoice(local(2024, 6, 18))
        make_invoice(local(2024, 6, 15))
        make_invoice(local(2024, 6, 12), InvoiceStatus.OVERDUE)
        make_invoice(local(2024, 6, 25))
        make_invoice(local(2024, 6, 10), InvoiceStatus.PAID, paid_on=local(2024, 6, 10))

        notices = analytics_service.get_important_notices(today=TODAY)

        self.assertEqual([n.label for n in notices],
                         ["Overdue 3 day(s)", "Due today", "Due in 3 day(s)"])
        self.assertTrue(notices[0].overdue)
        self.assertFalse(notices[1].overdue)

    def test_last_day_of_window_included(self):
        make_invoice(local(2024, 6, 20, hour=23))
        notices = analytics_service.get_important_notices(today=TODAY)
        self.assertEqual(len(notices), 1)
        self.assertEqual(notices[0].days, 5)


class DashboardAPITest(TestCase):
    def setUp(self):
        self.client = HttpClient()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/dashboard/summary').status_code, 401)

    def test_endpoints(self):
        self.client.force_login(self.user)
        self.assertEqual(self.client.get('/api/dashboard/summary').status_code, 200)
        trends = self.client.get('/api/dashboard/trends')
        self.assertEqual(len(trends.json()), 6)
        self.assertEqual(self.client.get('/api/dashboard/notices').json(), [])

    def test_trends_rejects_bad_range(self):
        self.client.force_login(self.user)
        self.assertEqual(self.client.get('/api/dashboard/trends?months=0').status_code, 400)
