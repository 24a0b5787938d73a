"""
API Schemas for Company app.
"""
from typing import Optional
from datetime import datetime
from ninja import Schema


class CompanySettingsIn(Schema):
    name: str = ""
    cpf: str = ""
    cnpj: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""


class CompanySettingsOut(Schema):
    id: str
    name: str
    cpf: str
    cnpj: str
    address: str
    phone: str
    email: str
    website: str
    logo_url: Optional[str] = None
    updated_at: datetime

    @staticmethod
    def resolve_logo_url(obj):
        return obj.logo.url if obj.logo else None
