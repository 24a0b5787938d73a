"""
JSON file provider - reads a browser local-storage export.

The file is read on every call so each read sees the current snapshot.
"""
import logging
from pathlib import Path
from typing import List, Union

from apps.clients.dtos import ClientDTO
from apps.core.data_provider import DataProvider
from apps.core.legacy import load_export, decode_client, decode_plan, decode_invoice
from apps.invoices.dtos import InvoiceDTO
from apps.plans.dtos import PlanDTO

logger = logging.getLogger(__name__)


class JsonFileDataProvider(DataProvider):

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _collection(self, name: str) -> list:
        records = load_export(self.path)[name]
        logger.debug("[JSON] Read %d %s from %s", len(records), name, self.path)
        return records

    def list_clients(self) -> List[ClientDTO]:
        return [decode_client(r) for r in self._collection('clients')]

    def list_plans(self) -> List[PlanDTO]:
        return [decode_plan(r) for r in self._collection('plans')]

    def list_invoices(self) -> List[InvoiceDTO]:
        return [decode_invoice(r) for r in self._collection('invoices')]
