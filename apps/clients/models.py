import uuid
from django.db import models


class ClientStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    INACTIVE = 'INACTIVE', 'Inactive'


class Client(models.Model):
    """
    A customer of the business.
    Plan subscriptions live in ClientPlan.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    tax_id = models.CharField(max_length=30, blank=True, help_text="CPF or CNPJ")
    contact_name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    whatsapp = models.CharField(max_length=30, blank=True)
    notes = models.TextField(blank=True)

    status = models.CharField(
        max_length=10,
        choices=ClientStatus.choices,
        default=ClientStatus.ACTIVE
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class ClientPlan(models.Model):
    """
    A client's subscription to a plan.
    The same plan may be subscribed more than once; entries are independent.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='plans')
    plan_id = models.UUIDField(db_index=True)  # No FK - modular boundary
    activation_date = models.DateTimeField()
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ['position', 'activation_date']

    def __str__(self):
        return f"{self.client_id} -> {self.plan_id} ({self.activation_date:%Y-%m-%d})"
