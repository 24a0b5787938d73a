"""
Dashboard analytics: monthly revenue and expenses, trends and notices.

Months are calendar months in the configured local timezone.
"""
import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from django.db.models import Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from apps.clients.models import Client, ClientStatus
from apps.expenses.models import Expense, ExpenseStatus
from apps.invoices.models import Invoice, InvoiceStatus
from .dtos import MonthSummaryDTO, MonthlyTrendDTO, NoticeDTO

logger = logging.getLogger(__name__)

NOTICE_WINDOW_DAYS = 5
ZERO = Decimal('0.00')


# =============================================================================
# Helpers
# =============================================================================

def _local_today() -> date:
    return timezone.localdate()


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Aware [start, end) datetimes of a local calendar month."""
    next_year, next_month = _shift_month(year, month, 1)
    start = timezone.make_aware(datetime(year, month, 1))
    end = timezone.make_aware(datetime(next_year, next_month, 1))
    return start, end


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """
    Percentage change from previous to current.

    With no previous value the change is 100 when anything happened
    this month and 0 otherwise.
    """
    if not previous:
        return Decimal('100') if current > 0 else Decimal('0')
    change = (current - previous) / previous * 100
    return change.quantize(Decimal('0.1'))


def _month_revenue(year: int, month: int) -> Decimal:
    start, end = _month_bounds(year, month)
    result = Invoice.objects.filter(
        status=InvoiceStatus.PAID,
        payment_date__gte=start,
        payment_date__lt=end,
    ).aggregate(total=Sum('amount'))
    return result['total'] or ZERO


def _month_expenses(year: int, month: int) -> Decimal:
    next_year, next_month = _shift_month(year, month, 1)
    result = Expense.objects.filter(
        status=ExpenseStatus.PAID,
        due_date__gte=date(year, month, 1),
        due_date__lt=date(next_year, next_month, 1),
    ).aggregate(total=Sum('amount'))
    return result['total'] or ZERO


# =============================================================================
# Summary
# =============================================================================

def get_month_summary(today: Optional[date] = None) -> MonthSummaryDTO:
    """
    Revenue, expenses and profit for the current month, with the change
    against the previous month and the client counts.
    """
    today = today or _local_today()
    prev_year, prev_month = _shift_month(today.year, today.month, -1)

    revenue = _month_revenue(today.year, today.month)
    previous_revenue = _month_revenue(prev_year, prev_month)
    expenses = _month_expenses(today.year, today.month)
    previous_expenses = _month_expenses(prev_year, prev_month)

    start, end = _month_bounds(today.year, today.month)
    active_clients = Client.objects.filter(status=ClientStatus.ACTIVE).count()
    new_clients = Client.objects.filter(created_at__gte=start, created_at__lt=end).count()

    logger.info("Computed dashboard summary for %s-%02d", today.year, today.month)

    return MonthSummaryDTO(
        year=today.year,
        month=today.month,
        revenue=revenue,
        revenue_change=percent_change(revenue, previous_revenue),
        expenses=expenses,
        expense_change=percent_change(expenses, previous_expenses),
        profit=revenue - expenses,
        active_clients=active_clients,
        new_clients=new_clients,
    )


# =============================================================================
# Trends
# =============================================================================

def get_monthly_trends(months: int = 6, today: Optional[date] = None) -> List[MonthlyTrendDTO]:
    """
    Revenue and expenses for the last `months` months, oldest first.
    Months without activity are included with zero totals.
    """
    today = today or _local_today()
    start_year, start_month = _shift_month(today.year, today.month, -(months - 1))
    start, _ = _month_bounds(start_year, start_month)
    _, end = _month_bounds(today.year, today.month)

    revenue_by_month = Invoice.objects.filter(
        status=InvoiceStatus.PAID,
        payment_date__gte=start,
        payment_date__lt=end,
    ).annotate(
        month=TruncMonth('payment_date', tzinfo=timezone.get_current_timezone())
    ).values('month').annotate(
        total=Sum('amount')
    )

    next_year, next_month = _shift_month(today.year, today.month, 1)
    expenses_by_month = Expense.objects.filter(
        status=ExpenseStatus.PAID,
        due_date__gte=date(start_year, start_month, 1),
        due_date__lt=date(next_year, next_month, 1),
    ).annotate(
        month=TruncMonth('due_date')
    ).values('month').annotate(
        total=Sum('amount')
    )

    revenue_dict = {(item['month'].year, item['month'].month): item['total'] for item in revenue_by_month}
    expense_dict = {(item['month'].year, item['month'].month): item['total'] for item in expenses_by_month}

    trends = []
    for offset in range(months):
        key = _shift_month(start_year, start_month, offset)
        trends.append(MonthlyTrendDTO(
            year=key[0],
            month=key[1],
            revenue=revenue_dict.get(key, ZERO),
            expenses=expense_dict.get(key, ZERO),
        ))

    return trends


# =============================================================================
# Important notices
# =============================================================================

def _notice_label(days: int) -> str:
    if days == 0:
        return "Due today"
    if days < 0:
        return f"Overdue {-days} day(s)"
    return f"Due in {days} day(s)"


def get_important_notices(today: Optional[date] = None) -> List[NoticeDTO]:
    """
    Unpaid invoices already overdue or due within the next few days,
    sorted by due date.
    """
    today = today or _local_today()
    window_end = timezone.make_aware(
        datetime.combine(today + timedelta(days=NOTICE_WINDOW_DAYS + 1), datetime.min.time())
    )

    invoices = Invoice.objects.exclude(
        status=InvoiceStatus.PAID
    ).filter(
        due_date__lt=window_end
    ).order_by('due_date')

    notices = []
    for invoice in invoices:
        days = (timezone.localtime(invoice.due_date).date() - today).days
        notices.append(NoticeDTO(
            invoice_id=invoice.id,
            client_name=invoice.client_name,
            plan_name=invoice.plan_name,
            amount=invoice.amount,
            due_date=invoice.due_date,
            days=days,
            label=_notice_label(days),
            overdue=days < 0,
        ))

    return notices
