"""DTOs for Company app."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompanySettingsDTO:
    """Company identity printed on invoices."""
    name: str = ""
    cpf: str = ""
    cnpj: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    logo_url: Optional[str] = None

    @property
    def document(self) -> str:
        """CNPJ when present, otherwise CPF."""
        return self.cnpj or self.cpf
