"""
DataProvider - read access to clients, plans and invoices.

The renewal check receives a provider instead of
querying storage directly. The provider is chosen once from the
DATA_PROVIDER setting.

Usage:
    from apps.core.data_provider import get_data_provider

    provider = get_data_provider()
    clients = provider.list_clients()

Configuration:
    DATA_PROVIDER=database  # Django ORM (default)
    DATA_PROVIDER=json      # Local-storage export at DATA_FILE_PATH
"""
import logging
from abc import ABC, abstractmethod
from typing import List

from django.conf import settings

from apps.clients.dtos import ClientDTO
from apps.invoices.dtos import InvoiceDTO
from apps.plans.dtos import PlanDTO

logger = logging.getLogger(__name__)


class DataProvider(ABC):
    """
    Abstract read interface.

    Implementations:
    - DatabaseDataProvider: Django ORM
    - JsonFileDataProvider: local-storage export file
    """

    @abstractmethod
    def list_clients(self) -> List[ClientDTO]:
        pass

    @abstractmethod
    def list_plans(self) -> List[PlanDTO]:
        pass

    @abstractmethod
    def list_invoices(self) -> List[InvoiceDTO]:
        pass


def get_data_provider() -> DataProvider:
    """Get the configured provider based on the DATA_PROVIDER setting."""
    backend = getattr(settings, 'DATA_PROVIDER', 'database')

    if backend == 'database':
        from apps.core.providers.database_provider import DatabaseDataProvider
        return DatabaseDataProvider()
    elif backend == 'json':
        from apps.core.providers.json_provider import JsonFileDataProvider
        return JsonFileDataProvider(settings.DATA_FILE_PATH)
    else:
        raise ValueError(f"Unknown DATA_PROVIDER: {backend}")
