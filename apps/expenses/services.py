"""
Expense and expense category services.
"""
import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from .models import Expense, ExpenseCategory, ExpenseStatus
from .dtos import ExpenseDTO
from .schemas import ExpenseIn, ExpenseUpdate, CategoryIn

logger = logging.getLogger(__name__)


def to_expense_dto(expense: Expense) -> ExpenseDTO:
    return ExpenseDTO(
        id=expense.id,
        description=expense.description,
        amount=expense.amount,
        due_date=expense.due_date,
        status=expense.status,
        category_id=expense.category_id,
    )


def list_expense_dtos() -> List[ExpenseDTO]:
    return [to_expense_dto(e) for e in Expense.objects.all()]


# =============================================================================
# Expenses
# =============================================================================

def _validate(expense: Expense) -> None:
    if not (expense.description or '').strip():
        raise ValueError("Description is required")
    if expense.amount is None or Decimal(expense.amount) < 0:
        raise ValueError("Amount must not be negative")
    if expense.status not in ExpenseStatus.values:
        raise ValueError(f"Unknown expense status: {expense.status}")
    if expense.category_id and not ExpenseCategory.objects.filter(id=expense.category_id).exists():
        raise ValueError(f"Category {expense.category_id} does not exist")


def list_expenses(status: Optional[str] = None) -> List[Expense]:
    queryset = Expense.objects.select_related('category')
    if status:
        queryset = queryset.filter(status=status)
    return list(queryset)


def get_expense(expense_id: UUID) -> Optional[Expense]:
    try:
        return Expense.objects.select_related('category').get(id=expense_id)
    except Expense.DoesNotExist:
        return None


def create_expense(payload: ExpenseIn) -> Expense:
    expense = Expense(**payload.dict())
    _validate(expense)
    expense.save()
    logger.info("Created expense %s", expense.id)
    return get_expense(expense.id)


def update_expense(expense_id: UUID, payload: ExpenseUpdate) -> Optional[Expense]:
    expense = get_expense(expense_id)
    if expense is None:
        return None

    for attr, value in payload.dict(exclude_unset=True).items():
        setattr(expense, attr, value)
    _validate(expense)
    expense.save()
    logger.info("Updated expense %s", expense.id)
    return get_expense(expense.id)


def delete_expense(expense_id: UUID) -> bool:
    deleted, _ = Expense.objects.filter(id=expense_id).delete()
    if deleted:
        logger.info("Deleted expense %s", expense_id)
    return bool(deleted)


# =============================================================================
# Categories
# =============================================================================

def _clean_category_name(name: str) -> str:
    name = (name or '').strip()
    if not name:
        raise ValueError("Category name is required")
    return name


def list_categories() -> List[ExpenseCategory]:
    return list(ExpenseCategory.objects.all())


def create_category(payload: CategoryIn) -> ExpenseCategory:
    name = _clean_category_name(payload.name)
    if ExpenseCategory.objects.filter(name__iexact=name).exists():
        raise ValueError(f"Category '{name}' already exists")
    category = ExpenseCategory.objects.create(name=name)
    logger.info("Created expense category %s", category.name)
    return category


def update_category(category_id: UUID, payload: CategoryIn) -> Optional[ExpenseCategory]:
    try:
        category = ExpenseCategory.objects.get(id=category_id)
    except ExpenseCategory.DoesNotExist:
        return None

    name = _clean_category_name(payload.name)
    if ExpenseCategory.objects.filter(name__iexact=name).exclude(id=category_id).exists():
        raise ValueError(f"Category '{name}' already exists")
    category.name = name
    category.save()
    return category


def delete_category(category_id: UUID) -> bool:
    """Delete a category. Its expenses are kept without category."""
    deleted, _ = ExpenseCategory.objects.filter(id=category_id).delete()
    if deleted:
        logger.info("Deleted expense category %s", category_id)
    return bool(deleted)
