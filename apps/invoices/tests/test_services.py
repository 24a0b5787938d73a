"""
Unit tests for invoice services.
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from uuid import uuid4
from django.test import TestCase
from django.utils import timezone

from apps.clients.models import Client
from apps.plans.models import Plan, RecurrencePeriod
from apps.invoices.models import Invoice, InvoiceStatus, PaymentMethod
from apps.invoices.schemas import InvoiceIn, InvoiceUpdate, PaymentIn
from apps.invoices import services


class InvoiceServiceTest(TestCase):
    def setUp(self):
        self.client_obj = Client.objects.create(name="Acme")
        self.plan = Plan.objects.create(
            name="Monthly", price=Decimal('120.00'),
            recurrence_value=1, recurrence_period=RecurrencePeriod.MONTHS,
        )
        self.due = datetime(2024, 6, 10, 12, tzinfo=dt_timezone.utc)

    def _payload(self, **overrides):
        data = {'client_id': self.client_obj.id, 'plan_id': self.plan.id, 'due_date': self.due}
        data.update(overrides)
        return InvoiceIn(**data)

    def test_create_fills_names_and_amount(self):
        invoice = services.create_invoice(self._payload())
        self.assertEqual(invoice.client_name, "Acme")
        self.assertEqual(invoice.plan_name, "Monthly")
        self.assertEqual(invoice.amount, Decimal('120.00'))
        self.assertEqual(invoice.status, InvoiceStatus.PENDING)

    def test_create_unknown_client_raises(self):
        with self.assertRaises(ValueError):
            services.create_invoice(self._payload(client_id=uuid4()))

    def test_bulk_create_is_all_or_nothing(self):
        with self.assertRaises(ValueError):
            services.create_invoices([self._payload(), self._payload(plan_id=uuid4())])
        self.assertEqual(Invoice.objects.count(), 0)

        created = services.create_invoices([self._payload(), self._payload(amount=Decimal('10'))])
        self.assertEqual(len(created), 2)
        self.assertEqual(Invoice.objects.count(), 2)

    def test_register_payment(self):
        invoice = services.create_invoice(self._payload())
        paid = services.register_payment(invoice.id, PaymentIn(payment_method=PaymentMethod.PIX, payment_notes="ok"))
        self.assertEqual(paid.status, InvoiceStatus.PAID)
        self.assertEqual(paid.payment_method, PaymentMethod.PIX)
        self.assertIsNotNone(paid.payment_date)

    def test_register_payment_rejects_unknown_method(self):
        invoice = services.create_invoice(self._payload())
        with self.assertRaises(ValueError):
            services.register_payment(invoice.id, PaymentIn(payment_method="CASH"))

    def test_register_payment_missing_invoice(self):
        self.assertIsNone(services.register_payment(uuid4(), PaymentIn(payment_method=PaymentMethod.PIX)))

    def test_refresh_overdue_only_touches_pending_past_due(self):
        now = timezone.now()
        past = services.create_invoice(self._payload(due_date=now - timedelta(days=1)))
        future = services.create_invoice(self._payload(due_date=now + timedelta(days=1)))
        paid = services.create_invoice(self._payload(due_date=now - timedelta(days=3), status=InvoiceStatus.PAID))

        self.assertEqual(services.refresh_overdue_invoices(now), 1)
        past.refresh_from_db()
        future.refresh_from_db()
        paid.refresh_from_db()
        self.assertEqual(past.status, InvoiceStatus.OVERDUE)
        self.assertEqual(future.status, InvoiceStatus.PENDING)
        self.assertEqual(paid.status, InvoiceStatus.PAID)

    def test_update_and_delete_many(self):
        a = services.create_invoice(self._payload())
        b = services.create_invoice(self._payload())
        updated = services.update_invoice(a.id, InvoiceUpdate(amount=Decimal('99.00')))
        self.assertEqual(updated.amount, Decimal('99.00'))

        self.assertEqual(services.delete_invoices([a.id, b.id, uuid4()]), 2)
        self.assertFalse(services.delete_invoice(a.id))
