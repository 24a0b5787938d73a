"""
Data Transfer Objects for system operations.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class DatabaseStatusDTO:
    success: bool
    message: str


@dataclass(frozen=True)
class MigrationResultDTO:
    """Number of records written per collection by an import."""
    clients: int = 0
    plans: int = 0
    invoices: int = 0
    expenses: int = 0
    categories: int = 0
    settings: bool = False

    @property
    def message(self) -> str:
        return (
            f"Imported {self.clients} clients, {self.plans} plans, "
            f"{self.invoices} invoices, {self.expenses} expenses and "
            f"{self.categories} categories"
        )
