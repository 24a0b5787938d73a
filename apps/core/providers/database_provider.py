"""
Database provider - reads through the Django ORM.
"""
from typing import List

from apps.clients.dtos import ClientDTO
from apps.clients.services import list_client_dtos
from apps.core.data_provider import DataProvider
from apps.invoices.dtos import InvoiceDTO
from apps.invoices.services import list_invoice_dtos
from apps.plans.dtos import PlanDTO
from apps.plans.services import list_plan_dtos


class DatabaseDataProvider(DataProvider):

    def list_clients(self) -> List[ClientDTO]:
        return list_client_dtos()

    def list_plans(self) -> List[PlanDTO]:
        return list_plan_dtos()

    def list_invoices(self) -> List[InvoiceDTO]:
        return list_invoice_dtos()
