"""
API Schemas for Clients app.
"""
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from ninja import Schema

from .models import ClientStatus


class SubscriptionSchema(Schema):
    plan_id: UUID
    activation_date: datetime


class ClientIn(Schema):
    name: str
    tax_id: str = ""
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    whatsapp: str = ""
    notes: str = ""
    status: str = ClientStatus.ACTIVE
    plans: List[SubscriptionSchema] = []


class ClientUpdate(Schema):
    name: Optional[str] = None
    tax_id: Optional[str] = None
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    plans: Optional[List[SubscriptionSchema]] = None


class ClientOut(Schema):
    id: UUID
    name: str
    tax_id: str
    contact_name: str
    email: str
    phone: str
    whatsapp: str
    notes: str
    status: str
    created_at: datetime
    plans: List[SubscriptionSchema]

    @staticmethod
    def resolve_plans(obj):
        return [
            {'plan_id': sub.plan_id, 'activation_date': sub.activation_date}
            for sub in obj.plans.all()
        ]
