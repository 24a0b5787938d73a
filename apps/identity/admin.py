from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class SativarUserAdmin(UserAdmin):
    list_display = ['email', 'name', 'is_active', 'is_staff']
    search_fields = ['email', 'name']
    ordering = ['email']
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('name',)}),
    )
