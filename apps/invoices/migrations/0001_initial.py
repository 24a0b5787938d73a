import uuid
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Invoice',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('client_id', models.UUIDField(db_index=True)),
                ('plan_id', models.UUIDField(db_index=True)),
                ('client_name', models.CharField(blank=True, max_length=255)),
                ('plan_name', models.CharField(blank=True, max_length=255)),
                ('amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('issue_date', models.DateTimeField()),
                ('due_date', models.DateTimeField(db_index=True)),
                ('status', models.CharField(choices=[('PAID', 'Paid'), ('PENDING', 'Pending'), ('OVERDUE', 'Overdue')], default='PENDING', max_length=10)),
                ('payment_date', models.DateTimeField(blank=True, null=True)),
                ('payment_method', models.CharField(blank=True, choices=[('PIX', 'Pix'), ('CREDIT_CARD', 'Credit card'), ('DEBIT_CARD', 'Debit card')], max_length=20, null=True)),
                ('payment_notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-issue_date'],
                'indexes': [models.Index(fields=['client_id', 'plan_id'], name='invoice_client_plan_idx')],
            },
        ),
    ]
