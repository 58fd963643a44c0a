from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from helpers.responses import handle_service_error
from services.invoice_service import get_dashboard_summary

router = APIRouter()


@router.get("/")
def root():
    return RedirectResponse(url="/dashboard")


@router.get("/dashboard")
def dashboard():
    """
    Invoice count, gross total across all invoices and the five latest invoices.
    """
    try:
        return get_dashboard_summary(latest=5)
    except Exception as e:
        return handle_service_error(e, "load dashboard")
