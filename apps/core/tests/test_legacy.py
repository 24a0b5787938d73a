"""
Tests for decoding the browser local-storage export.
"""
import json
import uuid
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from django.test import SimpleTestCase

from apps.core import legacy


class ReviveTest(SimpleTestCase):
    def test_date_marker(self):
        value = legacy.revive({"__type": "Date", "value": "2024-06-02T03:00:00.000Z"})
        self.assertEqual(value, datetime(2024, 6, 2, 3, tzinfo=dt_timezone.utc))

    def test_timestamp_forms(self):
        expected = datetime(2024, 1, 1, tzinfo=dt_timezone.utc)
        seconds = int(expected.timestamp())
        self.assertEqual(legacy.revive({"seconds": seconds, "nanoseconds": 0}), expected)
        self.assertEqual(
            legacy.revive({"__type": "Timestamp", "value": {"seconds": seconds, "nanoseconds": 0}}),
            expected,
        )

    def test_nested(self):
        data = legacy.revive([{"plans": [{"planActivationDate": {"__type": "Date", "value": "2024-01-01"}}]}])
        self.assertIsInstance(data[0]["plans"][0]["planActivationDate"], datetime)


class ValueDecodingTest(SimpleTestCase):
    def test_naive_strings_become_aware(self):
        self.assertIsNotNone(legacy.to_datetime("2024-06-01").tzinfo)
        self.assertIsNotNone(legacy.to_datetime("2024-06-01T10:00:00").tzinfo)
        self.assertIsNone(legacy.to_datetime(None))

    def test_bad_date_raises(self):
        with self.assertRaises(ValueError):
            legacy.to_datetime("not a date")

    def test_non_uuid_ids_are_stable(self):
        self.assertEqual(legacy.to_uuid("1717000000000"), legacy.to_uuid("1717000000000"))
        real = uuid.uuid4()
        self.assertEqual(legacy.to_uuid(str(real)), real)

    def test_choice_mapping(self):
        self.assertEqual(legacy.map_choice("Vencida", legacy.INVOICE_STATUS, ["PAID"]), "OVERDUE")
        self.assertEqual(legacy.map_choice("PAID", legacy.INVOICE_STATUS, ["PAID"]), "PAID")
        self.assertIsNone(legacy.map_choice("Cancelada", legacy.INVOICE_STATUS, ["PAID"]))


class ParseExportTest(SimpleTestCase):
    def test_prefixed_and_stringified_collections(self):
        export = legacy.parse_export({
            "sativar-clients": json.dumps([{"id": "c1", "name": "A", "status": "Ativo", "plans": []}]),
            "expenseCategories": [{"id": "x", "name": "Rent"}],
            "sativar-companySettings": {"id": "single-settings", "name": "Co"},
        })
        self.assertEqual(len(export["clients"]), 1)
        self.assertEqual(export["plans"], [])
        self.assertEqual(export["expense_categories"][0]["name"], "Rent")
        self.assertEqual(export["settings"]["name"], "Co")

    def test_rejects_non_object(self):
        with self.assertRaises(ValueError):
            legacy.parse_export([])


class RecordDecodingTest(SimpleTestCase):
    def test_plan(self):
        plan = legacy.decode_plan({"id": "p", "name": "Mensal", "type": "recurring",
                                   "recurrenceValue": 1, "recurrencePeriod": "meses", "price": 49.9})
        self.assertEqual(plan.plan_type, "RECURRING")
        self.assertEqual(plan.recurrence_period, "MONTHS")
        self.assertEqual(plan.price, Decimal("49.90"))

    def test_plan_with_unknown_period(self):
        plan = legacy.decode_plan({"id": "p", "name": "X", "type": "recurring",
                                   "recurrenceValue": 1, "recurrencePeriod": "semanas"})
        self.assertIsNone(plan.recurrence_period)

    def test_plan_with_fractional_recurrence_value(self):
        for raw_value, expected in ((30.0, 30), (1.5, 1), ("30", None), (True, None), (float("nan"), None)):
            plan = legacy.decode_plan({"id": "p", "name": "X", "type": "recurring",
                                       "recurrenceValue": raw_value, "recurrencePeriod": "dias"})
            self.assertEqual(plan.recurrence_value, expected, raw_value)

    def test_client(self):
        client = legacy.decode_client({
            "id": "c", "name": "Loja", "status": "Inativo",
            "plans": [{"planId": "p", "planActivationDate": "2024-01-01T00:00:00Z"}],
        })
        self.assertEqual(client.status, "INACTIVE")
        self.assertEqual(client.plans[0].plan_id, legacy.to_uuid("p"))

    def test_invoice(self):
        invoice = legacy.decode_invoice({
            "id": "i", "clientId": "c", "planId": "p", "status": "Pendente", "amount": 10,
            "dueDate": "2024-06-02T00:00:00Z", "issueDate": "2024-05-30T00:00:00Z",
        })
        self.assertEqual(invoice.status, "PENDING")
        self.assertEqual(invoice.client_id, legacy.to_uuid("c"))
        self.assertIsNone(invoice.payment_date)
