from django.contrib import admin
from .models import Invoice


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ['client_name', 'plan_name', 'amount', 'due_date', 'status', 'payment_method']
    list_filter = ['status', 'payment_method']
    search_fields = ['client_name', 'plan_name']
    date_hierarchy = 'due_date'
