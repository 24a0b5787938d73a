import uuid
from decimal import Decimal
from django.db import models


class PlanType(models.TextChoices):
    RECURRING = 'RECURRING', 'Recurring'
    ONE_TIME = 'ONE_TIME', 'One-time'


class RecurrencePeriod(models.TextChoices):
    DAYS = 'DAYS', 'Days'
    MONTHS = 'MONTHS', 'Months'
    YEARS = 'YEARS', 'Years'


class Plan(models.Model):
    """
    A service plan offered to clients.
    Recurring plans are billed every `recurrence_value` x `recurrence_period`.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    plan_type = models.CharField(
        max_length=20,
        choices=PlanType.choices,
        default=PlanType.RECURRING
    )
    recurrence_value = models.PositiveIntegerField(null=True, blank=True)
    recurrence_period = models.CharField(
        max_length=10,
        choices=RecurrencePeriod.choices,
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_recurring(self) -> bool:
        return self.plan_type == PlanType.RECURRING
