import uuid
from decimal import Decimal
from django.db import models


class InvoiceStatus(models.TextChoices):
    PAID = 'PAID', 'Paid'
    PENDING = 'PENDING', 'Pending'
    OVERDUE = 'OVERDUE', 'Overdue'


class PaymentMethod(models.TextChoices):
    PIX = 'PIX', 'Pix'
    CREDIT_CARD = 'CREDIT_CARD', 'Credit card'
    DEBIT_CARD = 'DEBIT_CARD', 'Debit card'


class Invoice(models.Model):
    """
    A bill issued to a client for a plan.
    Client and plan names are denormalized so the invoice survives renames.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client_id = models.UUIDField(db_index=True)  # No FK - modular boundary
    plan_id = models.UUIDField(db_index=True)
    client_name = models.CharField(max_length=255, blank=True)
    plan_name = models.CharField(max_length=255, blank=True)

    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    issue_date = models.DateTimeField()
    due_date = models.DateTimeField(db_index=True)

    status = models.CharField(
        max_length=10,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.PENDING
    )

    payment_date = models.DateTimeField(null=True, blank=True)
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        null=True,
        blank=True
    )
    payment_notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-issue_date']
        indexes = [
            models.Index(fields=['client_id', 'plan_id'], name='invoice_client_plan_idx'),
        ]

    def __str__(self):
        return f"{self.client_name} - {self.plan_name} ({self.due_date:%Y-%m-%d})"

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID
