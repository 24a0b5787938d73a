"""
Company settings services.

There is exactly one settings row, keyed by SETTINGS_ID.
"""
import logging
import os
from typing import Optional

from django.core.files.base import File

from .models import CompanySettings, SETTINGS_ID
from .dtos import CompanySettingsDTO
from .schemas import CompanySettingsIn

logger = logging.getLogger(__name__)

ALLOWED_LOGO_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.svg', '.webp'}
MAX_LOGO_SIZE = 2 * 1024 * 1024


def get_company_settings() -> Optional[CompanySettings]:
    """The saved settings, or None when they were never saved."""
    return CompanySettings.objects.filter(id=SETTINGS_ID).first()


def get_company_settings_dto() -> CompanySettingsDTO:
    """
    Settings as a DTO for cross-app use (invoice PDF header).
    Returns an empty DTO when nothing was saved.
    """
    obj = get_company_settings()
    if obj is None:
        return CompanySettingsDTO()
    return CompanySettingsDTO(
        name=obj.name,
        cpf=obj.cpf,
        cnpj=obj.cnpj,
        address=obj.address,
        phone=obj.phone,
        email=obj.email,
        website=obj.website,
        logo_url=obj.logo.url if obj.logo else None,
    )


def save_company_settings(payload: CompanySettingsIn) -> CompanySettings:
    """Create or replace the settings row. The logo is kept."""
    obj, created = CompanySettings.objects.update_or_create(
        id=SETTINGS_ID,
        defaults=payload.dict(),
    )
    logger.info("%s company settings", "Created" if created else "Updated")
    return obj


def save_company_logo(upload: File, filename: Optional[str] = None) -> CompanySettings:
    """
    Store a logo through the default file storage.

    Raises:
        ValueError: on unsupported extension or oversized file
    """
    name = filename or getattr(upload, 'name', '') or 'logo'
    ext = os.path.splitext(name)[1].lower()
    if ext not in ALLOWED_LOGO_EXTENSIONS:
        raise ValueError(f"Unsupported logo type: {ext or 'none'}")
    if upload.size is not None and upload.size > MAX_LOGO_SIZE:
        raise ValueError("Logo must be at most 2 MB")

    obj, _ = CompanySettings.objects.get_or_create(id=SETTINGS_ID)
    if obj.logo:
        obj.logo.delete(save=False)
    obj.logo.save(f"logo{ext}", upload, save=True)

    logger.info("Saved company logo at %s", obj.logo.name)
    return obj
