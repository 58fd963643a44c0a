from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from helpers.normalize import normalize_payload
from helpers.responses import handle_service_error
from services import recipient_service

router = APIRouter(prefix="/recipients")


class RecipientCreate(BaseModel):
    name: str = Field(min_length=2)
    country: str = Field(min_length=2)
    company: Optional[str] = None
    email: Optional[str] = None
    street: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None


@router.get("")
def list_recipients():
    try:
        recipients = recipient_service.list_recipients()
    except Exception as e:
        return handle_service_error(e, "list recipients")
    return {"count": len(recipients), "recipients": recipients}


@router.post("", status_code=201)
def create_recipient(body: RecipientCreate):
    try:
        recipient = recipient_service.create_recipient(**normalize_payload(body.model_dump()))
    except Exception as e:
        return handle_service_error(e, "create recipient")
    return {"success": True, "recipient": recipient}


@router.delete("/{recipient_id}")
def delete_recipient(recipient_id: int):
    try:
        recipient_service.delete_recipient(recipient_id)
    except Exception as e:
        return handle_service_error(e, "delete recipient")
    return {"success": True}
