import json
from decimal import Decimal
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from .models import Plan, PlanType, RecurrencePeriod
from .schemas import PlanIn, PlanUpdate
from .services import create_plan, update_plan, delete_plan, get_plan_dto

User = get_user_model()


class PlanServiceTest(TestCase):
    def test_recurring_plan_requires_recurrence(self):
        with self.assertRaises(ValueError):
            create_plan(PlanIn(name="Monthly", price=Decimal('50.00'), plan_type=PlanType.RECURRING))
        with self.assertRaises(ValueError):
            create_plan(PlanIn(name="Monthly", plan_type=PlanType.RECURRING,
                               recurrence_value=0, recurrence_period=RecurrencePeriod.MONTHS))

    def test_one_time_plan_drops_recurrence(self):
        plan = create_plan(PlanIn(name="Setup", plan_type=PlanType.ONE_TIME,
                                  recurrence_value=3, recurrence_period=RecurrencePeriod.DAYS))
        self.assertIsNone(plan.recurrence_value)
        self.assertIsNone(plan.recurrence_period)

    def test_negative_price_rejected(self):
        with self.assertRaises(ValueError):
            create_plan(PlanIn(name="Bad", price=Decimal('-1'), plan_type=PlanType.ONE_TIME))

    def test_partial_update_keeps_other_fields(self):
        plan = create_plan(PlanIn(name="Monthly", price=Decimal('50.00'), recurrence_value=1,
                                  recurrence_period=RecurrencePeriod.MONTHS))
        updated = update_plan(plan.id, PlanUpdate(price=Decimal('60.00')))
        self.assertEqual(updated.price, Decimal('60.00'))
        self.assertEqual(updated.recurrence_period, RecurrencePeriod.MONTHS)

    def test_dto_and_delete(self):
        plan = create_plan(PlanIn(name="Yearly", recurrence_value=1, recurrence_period=RecurrencePeriod.YEARS))
        dto = get_plan_dto(plan.id)
        self.assertEqual(dto.name, "Yearly")
        self.assertTrue(delete_plan(plan.id))
        self.assertFalse(delete_plan(plan.id))
        self.assertIsNone(get_plan_dto(plan.id))


class PlanAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/plans').status_code, 401)

    def test_create_and_list(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/plans',
            data=json.dumps({'name': 'Monthly', 'price': '99.90', 'recurrence_value': 1,
                             'recurrence_period': 'MONTHS'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['plan_type'], 'RECURRING')

        listing = self.client.get('/api/plans').json()
        self.assertEqual([p['name'] for p in listing], ['Monthly'])

    def test_invalid_plan_is_400(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/plans',
            data=json.dumps({'name': 'Monthly'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_missing_plan_is_404(self):
        self.client.force_login(self.user)
        missing = Plan(name="x").id
        self.assertEqual(self.client.get(f'/api/plans/{missing}').status_code, 404)
