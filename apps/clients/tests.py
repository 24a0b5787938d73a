import json
from datetime import datetime, timezone as dt_timezone
from uuid import uuid4
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.plans.models import Plan, RecurrencePeriod
from apps.invoices.models import Invoice
from .models import Client as Customer, ClientPlan, ClientStatus
from .schemas import ClientIn, ClientUpdate, SubscriptionSchema
from .services import create_client, update_client, delete_client, get_client_dto

User = get_user_model()


class ClientServiceTest(TestCase):
    def setUp(self):
        self.plan = Plan.objects.create(name="Monthly", recurrence_value=1, recurrence_period=RecurrencePeriod.MONTHS)
        self.activation = datetime(2024, 1, 15, tzinfo=dt_timezone.utc)

    def test_create_with_subscriptions_keeps_order(self):
        other = Plan.objects.create(name="Yearly", recurrence_value=1, recurrence_period=RecurrencePeriod.YEARS)
        client = create_client(ClientIn(name="Acme", plans=[
            SubscriptionSchema(plan_id=other.id, activation_date=self.activation),
            SubscriptionSchema(plan_id=self.plan.id, activation_date=self.activation),
        ]))
        dto = get_client_dto(client.id)
        self.assertEqual([s.plan_id for s in dto.plans], [other.id, self.plan.id])
        self.assertEqual(dto.status, ClientStatus.ACTIVE)

    def test_same_plan_can_be_subscribed_twice(self):
        client = create_client(ClientIn(name="Acme", plans=[
            SubscriptionSchema(plan_id=self.plan.id, activation_date=self.activation),
            SubscriptionSchema(plan_id=self.plan.id, activation_date=self.activation),
        ]))
        self.assertEqual(ClientPlan.objects.filter(client=client).count(), 2)

    def test_unknown_plan_rolls_back(self):
        with self.assertRaises(ValueError):
            create_client(ClientIn(name="Acme", plans=[
                SubscriptionSchema(plan_id=uuid4(), activation_date=self.activation),
            ]))
        self.assertFalse(Customer.objects.exists())

    def test_update_replaces_plans_only_when_given(self):
        client = create_client(ClientIn(name="Acme", plans=[
            SubscriptionSchema(plan_id=self.plan.id, activation_date=self.activation),
        ]))
        update_client(client.id, ClientUpdate(notes="VIP"))
        self.assertEqual(ClientPlan.objects.filter(client=client).count(), 1)

        update_client(client.id, ClientUpdate(plans=[]))
        self.assertEqual(ClientPlan.objects.filter(client=client).count(), 0)

    def test_blank_name_rejected(self):
        with self.assertRaises(ValueError):
            create_client(ClientIn(name="  "))

    def test_delete_cascades_to_invoices(self):
        client = create_client(ClientIn(name="Acme"))
        Invoice.objects.create(
            client_id=client.id, plan_id=self.plan.id,
            issue_date=self.activation, due_date=self.activation,
        )
        self.assertTrue(delete_client(client.id))
        self.assertFalse(Invoice.objects.filter(client_id=client.id).exists())
        self.assertFalse(delete_client(client.id))


class ClientAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')
        self.plan = Plan.objects.create(name="Monthly", recurrence_value=1, recurrence_period=RecurrencePeriod.MONTHS)

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/clients').status_code, 401)

    def test_create_and_get(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/clients',
            data=json.dumps({
                'name': 'Acme',
                'whatsapp': '+55 11 99999-0000',
                'plans': [{'plan_id': str(self.plan.id), 'activation_date': '2024-01-15T00:00:00Z'}],
            }),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data['plans']), 1)

        detail = self.client.get(f"/api/clients/{data['id']}")
        self.assertEqual(detail.json()['whatsapp'], '+55 11 99999-0000')

    def test_delete_missing_is_404(self):
        self.client.force_login(self.user)
        self.assertEqual(self.client.delete(f'/api/clients/{uuid4()}').status_code, 404)
