from decimal import Decimal
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from helpers.normalize import normalize_payload
from helpers.responses import handle_service_error
from services import settings_service

router = APIRouter(prefix="/settings")


class SettingsUpdate(BaseModel):
    starting_balance: Optional[Decimal] = None
    invoice_prefix: Optional[str] = None
    override_invoice_start_number: Optional[int] = None
    company_name: Optional[str] = None
    person_name: Optional[str] = None
    default_tax_rate: Optional[Decimal] = None


@router.get("")
def get_settings():
    try:
        return {"settings": settings_service.get_settings()}
    except Exception as e:
        return handle_service_error(e, "load settings")


@router.put("")
def save_settings(body: SettingsUpdate):
    # blank strings clear a text field; omitted fields stay untouched
    fields = normalize_payload(body.model_dump(exclude_unset=True))
    try:
        settings = settings_service.update_settings(fields)
    except Exception as e:
        return handle_service_error(e, "save settings")
    return {"success": True, "settings": settings}
