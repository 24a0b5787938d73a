"""
Expenses API endpoints.
"""
from typing import List, Optional
from uuid import UUID
from ninja import Router
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from .schemas import ExpenseIn, ExpenseUpdate, ExpenseOut, CategoryIn, CategoryOut
from . import services

router = Router(tags=["Expenses"])


# =============================================================================
# Categories
# =============================================================================

@router.get("/categories", response=List[CategoryOut], auth=None)
def get_categories(request: HttpRequest):
    require_auth(request)
    return services.list_categories()


@router.post("/categories", response=CategoryOut, auth=None)
def create_category_api(request: HttpRequest, payload: CategoryIn):
    require_auth(request)
    try:
        return services.create_category(payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.put("/categories/{category_id}", response=CategoryOut, auth=None)
def update_category_api(request: HttpRequest, category_id: UUID, payload: CategoryIn):
    require_auth(request)
    try:
        category = services.update_category(category_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not category:
        raise HttpError(404, "Category not found")
    return category


@router.delete("/categories/{category_id}", response={204: None}, auth=None)
def delete_category_api(request: HttpRequest, category_id: UUID):
    """Delete a category; its expenses become uncategorized."""
    require_auth(request)
    if not services.delete_category(category_id):
        raise HttpError(404, "Category not found")
    return 204, None


# =============================================================================
# Expenses
# =============================================================================

@router.get("", response=List[ExpenseOut], auth=None)
def get_expenses(request: HttpRequest, status: Optional[str] = None):
    require_auth(request)
    return services.list_expenses(status=status)


@router.get("/{expense_id}", response=ExpenseOut, auth=None)
def get_expense_detail(request: HttpRequest, expense_id: UUID):
    require_auth(request)
    expense = services.get_expense(expense_id)
    if not expense:
        raise HttpError(404, "Expense not found")
    return expense


@router.post("", response=ExpenseOut, auth=None)
def create_expense_api(request: HttpRequest, payload: ExpenseIn):
    require_auth(request)
    try:
        return services.create_expense(payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.put("/{expense_id}", response=ExpenseOut, auth=None)
def update_expense_api(request: HttpRequest, expense_id: UUID, payload: ExpenseUpdate):
    require_auth(request)
    try:
        expense = services.update_expense(expense_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not expense:
        raise HttpError(404, "Expense not found")
    return expense


@router.delete("/{expense_id}", response={204: None}, auth=None)
def delete_expense_api(request: HttpRequest, expense_id: UUID):
    require_auth(request)
    if not services.delete_expense(expense_id):
        raise HttpError(404, "Expense not found")
    return 204, None
