from django.contrib import admin
from .models import Plan


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ['name', 'plan_type', 'price', 'recurrence_value', 'recurrence_period']
    list_filter = ['plan_type', 'recurrence_period']
    search_fields = ['name']
