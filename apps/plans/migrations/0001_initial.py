import uuid
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Plan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('plan_type', models.CharField(choices=[('RECURRING', 'Recurring'), ('ONE_TIME', 'One-time')], default='RECURRING', max_length=20)),
                ('recurrence_value', models.PositiveIntegerField(blank=True, null=True)),
                ('recurrence_period', models.CharField(blank=True, choices=[('DAYS', 'Days'), ('MONTHS', 'Months'), ('YEARS', 'Years')], max_length=10, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
    ]
