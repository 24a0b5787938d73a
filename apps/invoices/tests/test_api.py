"""
Integration tests for invoice API endpoints.
"""
import json
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch, MagicMock
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.clients.models import Client as Customer
from apps.company.models import CompanySettings
from apps.plans.models import Plan, PlanType
from apps.invoices.models import Invoice

User = get_user_model()


class InvoiceAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')
        self.customer = Customer.objects.create(name="Acme")
        self.plan = Plan.objects.create(name="Setup", price=Decimal('300.00'), plan_type=PlanType.ONE_TIME)
        self.invoice = Invoice.objects.create(
            client_id=self.customer.id, plan_id=self.plan.id,
            client_name="Acme", plan_name="Setup", amount=Decimal('300.00'),
            issue_date=datetime(2024, 5, 1, tzinfo=dt_timezone.utc),
            due_date=datetime(2024, 5, 10, tzinfo=dt_timezone.utc),
        )

    def test_list_requires_auth(self):
        self.assertEqual(self.client.get('/api/invoices').status_code, 401)

    def test_list_filters_by_status(self):
        self.client.force_login(self.user)
        self.assertEqual(len(self.client.get('/api/invoices?status=PENDING').json()), 1)
        self.assertEqual(len(self.client.get('/api/invoices?status=PAID').json()), 0)

    def test_bulk_create(self):
        self.client.force_login(self.user)
        item = {'client_id': str(self.customer.id), 'plan_id': str(self.plan.id),
                'due_date': '2024-07-01T12:00:00Z'}
        response = self.client.post(
            '/api/invoices/bulk',
            data=json.dumps({'invoices': [item, item]}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 2)
        self.assertEqual(response.json()[0]['amount'], '300.00')

    def test_register_payment(self):
        self.client.force_login(self.user)
        response = self.client.post(
            f'/api/invoices/{self.invoice.id}/payment',
            data=json.dumps({'payment_method': 'CREDIT_CARD'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'PAID')

    def test_bulk_delete(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/invoices/bulk-delete',
            data=json.dumps({'invoice_ids': [str(self.invoice.id)]}),
            content_type='application/json',
        )
        self.assertEqual(response.json(), {'deleted': 1})

    @patch('apps.invoices.report_service._get_weasyprint')
    def test_pdf_download_includes_company_header(self, mock_weasy):
        CompanySettings.objects.create(name="Sativar Ltda", cnpj="12.345.678/0001-90")
        html_cls = MagicMock()
        html_cls.return_value.write_pdf.side_effect = lambda target: target.write(b'%PDF-1.7 fake')
        mock_weasy.return_value = html_cls

        self.client.force_login(self.user)
        response = self.client.get(f'/api/invoices/{self.invoice.id}/pdf')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(response.content.startswith(b'%PDF'))
        rendered = html_cls.call_args.kwargs['string']
        self.assertIn("Sativar Ltda", rendered)
        self.assertIn("12.345.678/0001-90", rendered)
        self.assertIn("Acme", rendered)
