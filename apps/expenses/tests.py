import json
from datetime import date
from decimal import Decimal
from uuid import uuid4
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from .models import Expense, ExpenseCategory, ExpenseStatus
from .schemas import ExpenseIn, ExpenseUpdate, CategoryIn
from . import services

User = get_user_model()


class ExpenseServiceTest(TestCase):
    def test_create_with_category(self):
        category = services.create_category(CategoryIn(name="Rent"))
        expense = services.create_expense(ExpenseIn(
            description="Office", amount=Decimal('1500.00'), due_date=date(2024, 6, 5),
            category_id=category.id,
        ))
        self.assertEqual(expense.category.name, "Rent")
        self.assertEqual(expense.status, ExpenseStatus.PENDING)

    def test_unknown_category_rejected(self):
        with self.assertRaises(ValueError):
            services.create_expense(ExpenseIn(
                description="Office", amount=Decimal('1'), due_date=date(2024, 6, 5), category_id=uuid4(),
            ))

    def test_duplicate_category_name_rejected(self):
        services.create_category(CategoryIn(name="Rent"))
        with self.assertRaises(ValueError):
            services.create_category(CategoryIn(name=" rent "))

    def test_deleting_category_detaches_expenses(self):
        category = services.create_category(CategoryIn(name="Rent"))
        expense = services.create_expense(ExpenseIn(
            description="Office", amount=Decimal('1500.00'), due_date=date(2024, 6, 5),
            category_id=category.id,
        ))
        self.assertTrue(services.delete_category(category.id))
        expense.refresh_from_db()
        self.assertIsNone(expense.category_id)

    def test_mark_paid(self):
        expense = services.create_expense(ExpenseIn(
            description="Internet", amount=Decimal('100.00'), due_date=date(2024, 6, 5),
        ))
        updated = services.update_expense(expense.id, ExpenseUpdate(status=ExpenseStatus.PAID))
        self.assertEqual(updated.status, ExpenseStatus.PAID)
        self.assertIsNone(services.update_expense(uuid4(), ExpenseUpdate(status=ExpenseStatus.PAID)))


class ExpenseAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/expenses').status_code, 401)
        self.assertEqual(self.client.get('/api/expenses/categories').status_code, 401)

    def test_create_and_list(self):
        self.client.force_login(self.user)
        category = ExpenseCategory.objects.create(name="Utilities")
        response = self.client.post(
            '/api/expenses',
            data=json.dumps({'description': 'Power', 'amount': '230.50', 'due_date': '2024-06-10',
                             'category_id': str(category.id)}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['category_name'], 'Utilities')

        listing = self.client.get('/api/expenses').json()
        self.assertEqual(len(listing), 1)
        self.assertEqual(Expense.objects.count(), 1)

    def test_blank_category_is_400(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/expenses/categories',
            data=json.dumps({'name': ' '}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)
