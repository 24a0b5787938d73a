"""
Unit tests for renewal projection.
"""
from datetime import date, datetime, timedelta, timezone as dt_timezone
from uuid import uuid4
from django.test import SimpleTestCase, override_settings
from django.utils import timezone

from apps.clients.dtos import ClientDTO, SubscriptionDTO
from apps.core.legacy import decode_plan
from apps.invoices.dtos import InvoiceDTO
from apps.plans.dtos import PlanDTO
from apps.notifications.renewals import project_renewals, compute_next_due_date, calendar_day


def at(year, month, day, hour=0):
    return timezone.make_aware(datetime(year, month, day, hour))


def make_plan(value=30, period='DAYS', plan_type='RECURRING', name="P1"):
    return PlanDTO(id=uuid4(), name=name, plan_type=plan_type,
                   recurrence_value=value, recurrence_period=period)


def make_client(*subscriptions, status='ACTIVE', name="C1"):
    return ClientDTO(
        id=uuid4(), name=name, status=status,
        plans=tuple(SubscriptionDTO(plan_id=p.id, activation_date=d) for p, d in subscriptions),
    )


def make_invoice(client, plan, due):
    return InvoiceDTO(id=uuid4(), client_id=client.id, plan_id=plan.id, due_date=due, status='PAID')


class LiteralScenarioTest(SimpleTestCase):
    def setUp(self):
        self.now = at(2024, 6, 1)
        self.plan = make_plan(value=30, period='DAYS')
        self.client = make_client((self.plan, at(2024, 1, 1)))

    def test_alert_for_next_cycle(self):
        invoices = [make_invoice(self.client, self.plan, at(2024, 5, 3))]

        alerts = project_renewals([self.client], [self.plan], invoices, now=self.now, lookahead_days=5)

        self.assertEqual(len(alerts), 1)
        alert = alerts[0]
        self.assertEqual(alert.client_id, self.client.id)
        self.assertEqual(alert.plan_id, self.plan.id)
        self.assertEqual(alert.client_name, "C1")
        self.assertEqual(alert.plan_name, "P1")
        self.assertEqual(alert.next_due_date, at(2024, 6, 2))

    def test_existing_invoice_on_same_day_suppresses(self):
        invoices = [
            make_invoice(self.client, self.plan, at(2024, 5, 3)),
            make_invoice(self.client, self.plan, at(2024, 6, 2)),
        ]
        self.assertEqual(
            project_renewals([self.client], [self.plan], invoices, now=self.now, lookahead_days=5),
            [],
        )


class ProjectionPropertiesTest(SimpleTestCase):
    def setUp(self):
        self.now = at(2024, 6, 1, 12)

    def test_idempotent(self):
        plan = make_plan()
        client = make_client((plan, at(2024, 1, 1)))
        invoices = [make_invoice(client, plan, self.now - timedelta(days=28))]

        first = project_renewals([client], [plan], invoices, now=self.now)
        second = project_renewals([client], [plan], invoices, now=self.now)
        self.assertEqual(set(first), set(second))
        self.assertEqual(len(first), 1)

    def test_inactive_clients_excluded(self):
        plan = make_plan()
        client = make_client((plan, self.now + timedelta(days=1)), status='INACTIVE')
        self.assertEqual(project_renewals([client], [plan], [], now=self.now), [])

    def test_one_time_plans_excluded(self):
        plan = make_plan(value=None, period=None, plan_type='ONE_TIME')
        client = make_client((plan, self.now + timedelta(days=1)))
        self.assertEqual(project_renewals([client], [plan], [], now=self.now), [])

    def test_unknown_plan_skipped(self):
        plan = make_plan()
        client = make_client((plan, self.now + timedelta(days=1)))
        self.assertEqual(project_renewals([client], [], [], now=self.now), [])

    def test_window_is_exclusive_at_both_ends(self):
        plan = make_plan(value=10, period='DAYS')
        client = make_client((plan, at(2024, 1, 1)))

        at_now = [make_invoice(client, plan, self.now - timedelta(days=10))]
        at_end = [make_invoice(client, plan, self.now - timedelta(days=5))]
        inside = [make_invoice(client, plan, self.now - timedelta(days=9))]

        self.assertEqual(project_renewals([client], [plan], at_now, now=self.now, lookahead_days=5), [])
        self.assertEqual(project_renewals([client], [plan], at_end, now=self.now, lookahead_days=5), [])
        self.assertEqual(len(project_renewals([client], [plan], inside, now=self.now, lookahead_days=5)), 1)

    def test_invoice_on_projected_day_means_no_alert(self):
        plan = make_plan(value=30, period='DAYS')
        client = make_client((plan, at(2024, 1, 1)))
        invoices = [make_invoice(client, plan, at(2024, 5, 3, 9))]
        alerts = project_renewals([client], [plan], invoices, now=self.now)
        self.assertEqual([a.next_due_date for a in alerts], [at(2024, 6, 2, 9)])

        # Issued earlier in the day than projected; still the same cycle
        invoices.append(make_invoice(client, plan, at(2024, 6, 2, 7)))
        self.assertEqual(project_renewals([client], [plan], invoices, now=self.now), [])

    def test_no_history_alerts_at_activation(self):
        plan = make_plan()
        activation = self.now + timedelta(days=3)
        client = make_client((plan, activation))

        alerts = project_renewals([client], [plan], [], now=self.now)
        self.assertEqual(len(alerts), 1)
        self.assertEqual(alerts[0].next_due_date, activation)

    def test_no_history_far_future_activation_not_alerted(self):
        plan = make_plan()
        client = make_client((plan, self.now + timedelta(days=5)))
        self.assertEqual(project_renewals([client], [plan], [], now=self.now, lookahead_days=5), [])

    def test_no_history_past_activation(self):
        plan = make_plan()
        client = make_client((plan, at(2023, 1, 1)))

        self.assertEqual(len(project_renewals([client], [plan], [], now=self.now)), 1)
        self.assertEqual(
            project_renewals([client], [plan], [], now=self.now, include_past_activations=False),
            [],
        )

    def test_no_history_ignores_malformed_recurrence(self):
        plan = make_plan(value=None, period=None)
        client = make_client((plan, self.now + timedelta(days=1)))
        self.assertEqual(len(project_renewals([client], [plan], [], now=self.now)), 1)

    def test_malformed_recurrence_with_history_skipped(self):
        for value, period in ((None, 'DAYS'), (0, 'DAYS'), (-3, 'MONTHS'), (1, 'WEEKS'), (1, None)):
            plan = make_plan(value=value, period=period)
            client = make_client((plan, at(2024, 1, 1)))
            invoices = [make_invoice(client, plan, self.now - timedelta(days=1))]
            self.assertEqual(project_renewals([client], [plan], invoices, now=self.now), [])

    def test_duplicate_subscriptions_are_independent(self):
        plan = make_plan()
        client = make_client((plan, self.now + timedelta(days=1)), (plan, self.now + timedelta(days=2)))
        alerts = project_renewals([client], [plan], [], now=self.now)
        self.assertEqual(
            sorted(a.next_due_date for a in alerts),
            [self.now + timedelta(days=1), self.now + timedelta(days=2)],
        )

    def test_invoices_of_other_clients_do_not_count(self):
        plan = make_plan()
        client = make_client((plan, self.now + timedelta(days=1)), name="A")
        other = make_client((plan, at(2024, 1, 1)), name="B")
        invoices = [make_invoice(other, plan, self.now + timedelta(days=1))]

        alerts = project_renewals([client, other], [plan], invoices, now=self.now)
        self.assertEqual([a.client_name for a in alerts], ["A"])


    def test_undated_invoice_does_not_break_other_clients(self):
        plan = make_plan()
        good = make_client((plan, self.now + timedelta(days=1)), name="Good")
        bad = make_client((plan, self.now + timedelta(days=2)), name="Bad")
        invoices = [make_invoice(bad, plan, None)]

        alerts = project_renewals([good, bad], [plan], invoices, now=self.now)
        self.assertEqual([a.client_name for a in alerts], ["Good"])

    def test_undated_invoice_ignored_next_to_dated_ones(self):
        plan = make_plan(value=30, period="DAYS")
        client = make_client((plan, at(2024, 1, 1)))
        invoices = [
            make_invoice(client, plan, None),
            make_invoice(client, plan, self.now - timedelta(days=28)),
        ]
        alerts = project_renewals([client], [plan], invoices, now=self.now)
        self.assertEqual([a.next_due_date for a in alerts], [self.now + timedelta(days=2)])

class NextDueDateTest(SimpleTestCase):
    def test_fixed_day_units(self):
        start = at(2024, 1, 31)
        self.assertEqual(compute_next_due_date(start, make_plan(2, 'DAYS')), start + timedelta(days=2))
        self.assertEqual(compute_next_due_date(start, make_plan(1, 'MONTHS')), start + timedelta(days=30))
        self.assertEqual(compute_next_due_date(start, make_plan(2, 'YEARS')), start + timedelta(days=730))
        self.assertIsNone(compute_next_due_date(start, make_plan(1, 'FORTNIGHTS')))

    def test_fractional_export_value_is_truncated(self):
        start = at(2024, 1, 31)
        plan = decode_plan({"id": "p", "name": "X", "type": "recurring",
                            "recurrenceValue": 1.5, "recurrencePeriod": "meses"})
        self.assertEqual(compute_next_due_date(start, plan), start + timedelta(days=30))

    @override_settings(TIME_ZONE="America/Sao_Paulo")
    def test_calendar_day_uses_local_time_zone(self):
        # 02:00 UTC is still the previous evening in Sao Paulo (UTC-3)
        instant = datetime(2024, 6, 2, 2, tzinfo=dt_timezone.utc)
        self.assertEqual(calendar_day(instant), date(2024, 6, 1))
