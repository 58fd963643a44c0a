from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from helpers.responses import handle_service_error
from services import invoice_service

router = APIRouter(prefix="/invoices")


class LineItem(BaseModel):
    description: str = Field(min_length=2)
    quantity: Decimal = Field(gt=0, lt=10**9)
    unit_price: Decimal = Field(gt=0, lt=10**10)
    tax_rate: Decimal = Field(ge=0, le=100)


class InvoiceCreate(BaseModel):
    recipient_id: int = Field(gt=0)
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    items: List[LineItem] = Field(min_length=1)


class StatusUpdate(BaseModel):
    status: str


@router.get("")
def list_invoices():
    try:
        invoices = invoice_service.list_invoices()
    except Exception as e:
        return handle_service_error(e, "list invoices")
    return {"count": len(invoices), "invoices": invoices}


@router.post("", status_code=201)
def create_invoice(body: InvoiceCreate):
    try:
        invoice = invoice_service.create_invoice(
            recipient_id=body.recipient_id,
            items=[item.model_dump() for item in body.items],
            issue_date=body.issue_date,
            due_date=body.due_date,
            notes=body.notes,
        )
    except Exception as e:
        return handle_service_error(e, "create invoice")
    return {"success": True, "invoice": invoice}


@router.post("/{invoice_id}/status")
def update_invoice_status(invoice_id: int, body: StatusUpdate):
    try:
        invoice_service.mark_invoice_status(invoice_id, body.status.strip().upper())
    except Exception as e:
        return handle_service_error(e, "update invoice status")
    return {"success": True}


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: int):
    try:
        invoice_service.delete_invoice(invoice_id)
    except Exception as e:
        return handle_service_error(e, "delete invoice")
    return {"success": True}
