"""
Tests for the renewal check service and notification endpoints.
"""
import json
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from django.test import TestCase, Client, override_settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.clients.models import Client as Customer, ClientPlan
from apps.core.data_provider import DataProvider
from apps.core.providers.json_provider import JsonFileDataProvider
from apps.invoices.models import Invoice
from apps.plans.models import Plan, RecurrencePeriod
from apps.tasks.models import Task, TaskStatus
from apps.notifications.services import get_plan_renewal_alerts
from apps.notifications.tasks import check_plan_renewals

User = get_user_model()


class BrokenProvider(DataProvider):
    def list_clients(self):
        raise ConnectionError("database unreachable")

    def list_plans(self):
        return []

    def list_invoices(self):
        return []


class RenewalServiceTest(TestCase):
    def setUp(self):
        self.now = timezone.make_aware(datetime(2024, 6, 1))
        self.plan = Plan.objects.create(name="P1", recurrence_value=30, recurrence_period=RecurrencePeriod.DAYS)
        self.customer = Customer.objects.create(name="C1")
        ClientPlan.objects.create(
            client=self.customer, plan_id=self.plan.id,
            activation_date=timezone.make_aware(datetime(2024, 1, 1)),
        )
        Invoice.objects.create(
            client_id=self.customer.id, plan_id=self.plan.id,
            issue_date=timezone.make_aware(datetime(2024, 4, 25)),
            due_date=timezone.make_aware(datetime(2024, 5, 3)),
        )

    def test_database_provider(self):
        result = get_plan_renewal_alerts(now=self.now, lookahead_days=5)
        self.assertTrue(result.ok)
        self.assertEqual(len(result.alerts), 1)
        self.assertEqual(result.alerts[0].client_id, self.customer.id)
        self.assertEqual(result.alerts[0].next_due_date, timezone.make_aware(datetime(2024, 6, 2)))

    @override_settings(RENEWAL_LOOKAHEAD_DAYS=1)
    def test_lookahead_from_settings(self):
        self.assertEqual(get_plan_renewal_alerts(now=self.now).alerts, [])

    def test_failure_is_reported_not_raised(self):
        with self.assertLogs('apps.notifications.services', level='ERROR'):
            result = get_plan_renewal_alerts(provider=BrokenProvider(), now=self.now)
        self.assertFalse(result.ok)
        self.assertEqual(result.alerts, [])
        self.assertIn("database unreachable", result.error)

    def test_missing_json_file_is_reported(self):
        provider = JsonFileDataProvider(Path(tempfile.gettempdir()) / "does-not-exist-sativar.json")
        with self.assertLogs('apps.notifications.services', level='ERROR'):
            result = get_plan_renewal_alerts(provider=provider, now=self.now)
        self.assertFalse(result.ok)

    @override_settings(RENEWAL_ALERT_PAST_ACTIVATIONS=False)
    def test_past_activation_gate(self):
        other = Customer.objects.create(name="Never invoiced")
        ClientPlan.objects.create(
            client=other, plan_id=self.plan.id,
            activation_date=timezone.make_aware(datetime(2023, 1, 1)),
        )
        result = get_plan_renewal_alerts(now=self.now, lookahead_days=5)
        self.assertEqual([a.client_name for a in result.alerts], ["C1"])

    def test_celery_task_reports_count(self):
        # No `now` override here: the single history invoice is long past, so nothing is due
        self.assertEqual(check_plan_renewals(), {"ok": True, "alerts": 0})


class JsonProviderRenewalTest(TestCase):
    def test_reads_local_storage_export(self):
        client_id = "2b1d3c4e-0000-4000-8000-000000000001"
        plan_id = "2b1d3c4e-0000-4000-8000-000000000002"
        export = {
            "sativar-clients": json.dumps([{
                "id": client_id, "name": "Loja", "status": "Ativo",
                "plans": [{"planId": plan_id,
                           "planActivationDate": {"__type": "Date", "value": "2024-01-01T03:00:00.000Z"}}],
            }]),
            "sativar-plans": [{"id": plan_id, "name": "Mensal", "type": "recurring",
                               "recurrenceValue": 30, "recurrencePeriod": "dias", "price": 99.9}],
            "sativar-invoices": [{"id": "inv-1", "clientId": client_id, "planId": plan_id,
                                  "clientName": "Loja", "amount": 99.9, "status": "Paga",
                                  "issueDate": {"__type": "Date", "value": "2024-04-28T03:00:00.000Z"},
                                  "dueDate": {"__type": "Date", "value": "2024-05-03T03:00:00.000Z"}}],
        }
        with tempfile.NamedTemporaryFile('w', suffix='.json', delete=False) as fh:
            json.dump(export, fh)
        self.addCleanup(Path(fh.name).unlink)

        result = get_plan_renewal_alerts(
            provider=JsonFileDataProvider(fh.name),
            now=datetime.fromisoformat("2024-06-01T03:00:00+00:00"),
            lookahead_days=5,
        )
        self.assertTrue(result.ok)
        self.assertEqual(len(result.alerts), 1)
        self.assertEqual(result.alerts[0].plan_name, "Mensal")
        self.assertEqual(str(result.alerts[0].client_id), client_id)


    def test_invoice_without_due_date_in_export(self):
        good_id = "2b1d3c4e-0000-4000-8000-000000000011"
        bad_id = "2b1d3c4e-0000-4000-8000-000000000012"
        plan_id = "2b1d3c4e-0000-4000-8000-000000000013"
        activation = {"__type": "Date", "value": "2024-06-02T12:00:00.000Z"}
        export = {
            "sativar-clients": [
                {"id": good_id, "name": "Good", "status": "Ativo",
                 "plans": [{"planId": plan_id, "planActivationDate": activation}]},
                {"id": bad_id, "name": "Bad", "status": "Ativo",
                 "plans": [{"planId": plan_id, "planActivationDate": activation}]},
            ],
            "sativar-plans": [{"id": plan_id, "name": "Mensal", "type": "recurring",
                               "recurrenceValue": 30, "recurrencePeriod": "dias", "price": 10}],
            "sativar-invoices": [{"id": "inv-x", "clientId": bad_id, "planId": plan_id}],
        }
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as fh:
            json.dump(export, fh)
        self.addCleanup(Path(fh.name).unlink)

        result = get_plan_renewal_alerts(
            provider=JsonFileDataProvider(fh.name),
            now=datetime.fromisoformat("2024-06-01T03:00:00+00:00"),
            lookahead_days=5,
        )
        self.assertTrue(result.ok)
        self.assertEqual([a.client_name for a in result.alerts], ["Good"])

class NotificationAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/notifications/renewals').status_code, 401)
        self.assertEqual(self.client.get('/api/notifications/tasks').status_code, 401)

    def test_renewals_shape(self):
        self.client.force_login(self.user)
        plan = Plan.objects.create(name="P", recurrence_value=1, recurrence_period=RecurrencePeriod.MONTHS)
        customer = Customer.objects.create(name="New")
        ClientPlan.objects.create(client=customer, plan_id=plan.id,
                                  activation_date=timezone.now() + timedelta(days=2))

        data = self.client.get('/api/notifications/renewals').json()
        self.assertTrue(data['ok'])
        self.assertIsNone(data['error'])
        self.assertEqual(data['alerts'][0]['client_name'], "New")

    def test_task_notifications(self):
        self.client.force_login(self.user)
        Task.objects.create(title="Late", due_date=timezone.now() - timedelta(days=1))
        Task.objects.create(title="Done", due_date=timezone.now() - timedelta(days=1), status=TaskStatus.DONE)

        data = self.client.get('/api/notifications/tasks').json()
        self.assertEqual([t['title'] for t in data], ["Late"])
