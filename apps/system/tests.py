"""
Tests for the database status check and the local-storage import.
"""
import base64
import json
import shutil
import tempfile
from datetime import date
from decimal import Decimal
from io import StringIO
from pathlib import Path
from unittest.mock import patch, MagicMock
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.test import TestCase, Client as HttpClient, override_settings
from django.contrib.auth import get_user_model

from apps.clients.models import Client, ClientStatus
from apps.company.models import CompanySettings
from apps.core.legacy import to_uuid
from apps.expenses.models import Expense, ExpenseCategory, ExpenseStatus
from apps.invoices.models import Invoice, InvoiceStatus, PaymentMethod
from apps.plans.models import Plan, PlanType, RecurrencePeriod
from apps.system import services

User = get_user_model()

PLAN_ID = "5b0d8c1e-2f51-4c3a-9a53-7f0f6b0e1a11"
CLIENT_ID = "9a1e7c02-4d7b-4b8e-8f1d-0a3c5e6f7b22"

PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode()


def sample_export():
    return {
        "sativar-plans": json.dumps([
            {"id": PLAN_ID, "name": "Mensal", "description": "Suporte", "price": 150,
             "type": "recurring", "recurrenceValue": 1, "recurrencePeriod": "meses"},
            {"id": "setup-1", "name": "Setup", "description": "", "price": 500, "type": "one-time"},
        ]),
        "sativar-clients": json.dumps([
            {"id": CLIENT_ID, "name": "Padaria Sol", "taxId": "123", "contactName": "Ana",
             "email": "ana@sol.com", "phone": "", "whatsapp": "", "notes": "", "status": "Ativo",
             "createdAt": {"__type": "Date", "value": "2024-01-10T12:00:00.000Z"},
             "plans": [
                 {"planId": PLAN_ID, "planActivationDate": {"__type": "Date", "value": "2024-01-15T12:00:00.000Z"}},
                 {"planId": "missing-plan", "planActivationDate": {"__type": "Date", "value": "2024-01-15T12:00:00.000Z"}},
             ]},
        ]),
        "sativar-invoices": json.dumps([
            {"id": "inv-1", "clientId": CLIENT_ID, "clientName": "Padaria Sol", "planId": PLAN_ID,
             "planName": "Mensal", "amount": 150, "status": "Paga",
             "issueDate": {"__type": "Date", "value": "2024-02-01T12:00:00.000Z"},
             "dueDate": {"__type": "Date", "value": "2024-02-15T12:00:00.000Z"},
             "paymentDate": {"__type": "Date", "value": "2024-02-14T12:00:00.000Z"},
             "paymentMethod": "Pix", "paymentNotes": "ok"},
        ]),
        "sativar-expense-categories": json.dumps([{"id": "cat-1", "name": "Aluguel"}]),
        "sativar-expenses": json.dumps([
            {"id": "exp-1", "description": "Sala", "category": "Aluguel", "amount": 800,
             "status": "Paga", "dueDate": {"__type": "Date", "value": "2024-02-05T12:00:00.000Z"}},
            {"id": "exp-2", "description": "Luz", "category": "Energia", "amount": 120.5,
             "status": "Pendente", "dueDate": {"__type": "Date", "value": "2024-02-10T12:00:00.000Z"}},
        ]),
        "sativar-companySettings": json.dumps({
            "id": "single-settings", "name": "Sativar", "address": "Rua A", "phone": "",
            "email": "contato@sativar.com", "website": "", "cpf": "", "cnpj": "00.000.000/0001-00",
            "logoDataUrl": PNG_DATA_URL,
        }),
    }


class MediaRootMixin:
    def setUp(self):
        super().setUp()
        self.media_root = tempfile.mkdtemp()
        self.media_override = override_settings(MEDIA_ROOT=self.media_root)
        self.media_override.enable()

    def tearDown(self):
        self.media_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)
        super().tearDown()


class DatabaseStatusTest(TestCase):
    def test_connected(self):
        status = services.get_db_status()
        self.assertTrue(status.success)

    def test_failure_is_reported(self):
        broken = MagicMock()
        broken.ensure_connection.side_effect = DatabaseError("server gone")
        with patch('apps.system.services.connection', broken):
            status = services.get_db_status()
        self.assertFalse(status.success)
        self.assertIn("server gone", status.message)


class MigrateDataTest(MediaRootMixin, TestCase):
    def test_imports_every_collection(self):
        result = services.migrate_data(sample_export())

        self.assertEqual((result.plans, result.clients, result.invoices, result.expenses),
                         (2, 1, 1, 2))
        self.assertTrue(result.settings)

        plan = Plan.objects.get(id=PLAN_ID)
        self.assertEqual(plan.recurrence_period, RecurrencePeriod.MONTHS)
        setup = Plan.objects.get(id=to_uuid("setup-1"))
        self.assertEqual(setup.plan_type, PlanType.ONE_TIME)
        self.assertIsNone(setup.recurrence_value)

        client = Client.objects.get(id=CLIENT_ID)
        self.assertEqual(client.status, ClientStatus.ACTIVE)
        self.assertEqual(client.created_at.year, 2024)
        self.assertEqual(client.plans.count(), 1)

        invoice = Invoice.objects.get(id=to_uuid("inv-1"))
        self.assertEqual(invoice.status, InvoiceStatus.PAID)
        self.assertEqual(invoice.payment_method, PaymentMethod.PIX)
        self.assertEqual(invoice.amount, Decimal('150.00'))

        rent = Expense.objects.get(id=to_uuid("exp-1"))
        self.assertEqual(rent.category.name, "Aluguel")
        self.assertEqual(rent.status, ExpenseStatus.PAID)
        self.assertEqual(rent.due_date, date(2024, 2, 5))
        self.assertTrue(ExpenseCategory.objects.filter(name="Energia").exists())

        company = CompanySettings.objects.get()
        self.assertEqual(company.cnpj, "00.000.000/0001-00")
        self.assertTrue(company.logo.name.endswith('.png'))

    def test_import_is_idempotent(self):
        services.migrate_data(sample_export())
        services.migrate_data(sample_export())
        self.assertEqual(Plan.objects.count(), 2)
        self.assertEqual(Invoice.objects.count(), 1)
        self.assertEqual(Expense.objects.count(), 2)
        self.assertEqual(ExpenseCategory.objects.count(), 2)
        self.assertEqual(Client.objects.get(id=CLIENT_ID).plans.count(), 1)

    def test_bad_record_rolls_back_everything(self):
        export = sample_export()
        export["sativar-invoices"] = json.dumps([{"id": "bad", "clientId": CLIENT_ID, "planId": PLAN_ID,
                                                  "amount": 1, "status": "Paga", "dueDate": "soon"}])
        with self.assertRaises(ValueError):
            services.migrate_data(export)
        self.assertFalse(Plan.objects.exists())
        self.assertFalse(Client.objects.exists())


class DataUrlTest(TestCase):
    def test_decodes_base64(self):
        logo = services.decode_data_url(PNG_DATA_URL)
        self.assertEqual(logo.name, "logo.png")
        self.assertTrue(logo.read().startswith(b"\x89PNG"))

    def test_rejects_other_values(self):
        self.assertIsNone(services.decode_data_url(""))
        self.assertIsNone(services.decode_data_url("https://example.com/logo.png"))
        self.assertIsNone(services.decode_data_url("data:image/png;base64,@@@"))


class ImportCommandTest(MediaRootMixin, TestCase):
    def test_imports_file(self):
        path = Path(self.media_root) / 'export.json'
        path.write_text(json.dumps(sample_export()), encoding='utf-8')
        out = StringIO()
        call_command('import_local_data', str(path), stdout=out)
        self.assertIn("Imported 1 clients", out.getvalue())
        self.assertEqual(Plan.objects.count(), 2)

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command('import_local_data', '/nonexistent/export.json', stdout=StringIO())


class SystemAPITest(MediaRootMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.client = HttpClient()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/system/db-status').status_code, 401)

    def test_db_status(self):
        self.client.force_login(self.user)
        self.assertTrue(self.client.get('/api/system/db-status').json()['success'])

    def test_migrate(self):
        self.client.force_login(self.user)
        response = self.client.post('/api/system/migrate', data=json.dumps(sample_export()),
                                    content_type='application/json')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['invoices'], 1)

    def test_migrate_rejects_malformed(self):
        self.client.force_login(self.user)
        response = self.client.post('/api/system/migrate', data=json.dumps({"clients": [{"name": "no id"}]}),
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)


@override_settings(TASK_BACKEND='local')
class TaskTriggerAPITest(TestCase):
    def setUp(self):
        self.client = HttpClient()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')
        self.client.force_login(self.user)

    def test_refresh_overdue_runs_locally(self):
        with patch('apps.invoices.services.refresh_overdue_invoices', return_value=3) as refresh:
            response = self.client.post('/api/system/tasks/refresh-overdue')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['task_id'])
        refresh.assert_called_once_with()

    def test_check_renewals(self):
        response = self.client.post('/api/system/tasks/check-renewals')
        self.assertEqual(response.status_code, 200)
