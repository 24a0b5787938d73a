"""
Tests for the task service facade and provider selection.
"""
from datetime import timedelta
from uuid import uuid4
from unittest.mock import patch, MagicMock
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.core.task_service import TaskService, _get_backend
from apps.core.backends.local_backend import LocalTaskBackend, TASK_HANDLERS
from apps.core.backends.celery_backend import CeleryTaskBackend
from apps.core.data_provider import get_data_provider
from apps.core.providers.database_provider import DatabaseDataProvider
from apps.core.providers.json_provider import JsonFileDataProvider
from apps.invoices.models import Invoice, InvoiceStatus


class BackendSelectionTest(TestCase):
    @override_settings(TASK_BACKEND='local')
    def test_local(self):
        self.assertIsInstance(_get_backend(), LocalTaskBackend)

    @override_settings(TASK_BACKEND='celery')
    def test_celery(self):
        self.assertIsInstance(_get_backend(), CeleryTaskBackend)

    @override_settings(TASK_BACKEND='lambda')
    def test_unknown(self):
        with self.assertRaises(ValueError):
            _get_backend()


@override_settings(TASK_BACKEND='local')
class LocalBackendTest(TestCase):
    def test_handlers_registered(self):
        self.assertIn('check_plan_renewals', TASK_HANDLERS)
        self.assertIn('refresh_overdue_invoices', TASK_HANDLERS)

    def test_refresh_overdue_runs_synchronously(self):
        invoice = Invoice.objects.create(
            client_id=uuid4(), plan_id=uuid4(),
            issue_date=timezone.now() - timedelta(days=10),
            due_date=timezone.now() - timedelta(days=1),
        )
        task_id = TaskService.refresh_overdue_invoices()
        self.assertTrue(task_id)
        invoice.refresh_from_db()
        self.assertEqual(invoice.status, InvoiceStatus.OVERDUE)

    def test_check_plan_renewals_runs(self):
        self.assertTrue(TaskService.check_plan_renewals())

    def test_unknown_task_raises(self):
        with self.assertRaises(ValueError):
            TaskService.run("unknown")

    def test_handler_failure_propagates(self):
        with patch.dict(TASK_HANDLERS, {'check_plan_renewals': MagicMock(side_effect=RuntimeError("boom"))}):
            with self.assertRaises(RuntimeError):
                TaskService.check_plan_renewals()


@override_settings(TASK_BACKEND='celery')
class CeleryBackendTest(TestCase):
    @patch('apps.core.backends.celery_backend.current_app')
    def test_sends_by_task_name(self, app):
        task_id = TaskService.check_plan_renewals()
        args, kwargs = app.send_task.call_args
        self.assertEqual(args[0], 'apps.notifications.tasks.check_plan_renewals')
        self.assertEqual(kwargs['task_id'], task_id)
        self.assertNotIn('countdown', kwargs)

    @patch('apps.core.backends.celery_backend.current_app')
    def test_countdown(self, app):
        CeleryTaskBackend().dispatch('refresh_overdue_invoices', {}, countdown=30)
        self.assertEqual(app.send_task.call_args.kwargs['countdown'], 30)

    def test_unmapped_task(self):
        with self.assertRaises(ValueError):
            CeleryTaskBackend().dispatch('unknown', {})


class DataProviderSelectionTest(TestCase):
    @override_settings(DATA_PROVIDER='database')
    def test_database(self):
        self.assertIsInstance(get_data_provider(), DatabaseDataProvider)

    @override_settings(DATA_PROVIDER='json', DATA_FILE_PATH='/tmp/export.json')
    def test_json(self):
        provider = get_data_provider()
        self.assertIsInstance(provider, JsonFileDataProvider)
        self.assertEqual(str(provider.path), '/tmp/export.json')

    @override_settings(DATA_PROVIDER='firebase')
    def test_unknown(self):
        with self.assertRaises(ValueError):
            get_data_provider()
