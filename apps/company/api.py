"""
Company settings API endpoints.
"""
from typing import Optional
from ninja import Router, File
from ninja.files import UploadedFile
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from .schemas import CompanySettingsIn, CompanySettingsOut
from .services import get_company_settings, save_company_settings, save_company_logo

router = Router(tags=["Company"])


@router.get("/company", response=Optional[CompanySettingsOut], auth=None)
def get_company_settings_api(request: HttpRequest):
    """Saved company settings, or null when never saved."""
    require_auth(request)
    return get_company_settings()


@router.put("/company", response=CompanySettingsOut, auth=None)
def save_company_settings_api(request: HttpRequest, payload: CompanySettingsIn):
    require_auth(request)
    return save_company_settings(payload)


@router.post("/company/logo", response=CompanySettingsOut, auth=None)
def upload_company_logo(request: HttpRequest, file: UploadedFile = File(...)):
    """Upload the logo printed on invoices."""
    require_auth(request)
    try:
        return save_company_logo(file, file.name)
    except ValueError as e:
        raise HttpError(400, str(e))
