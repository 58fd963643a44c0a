import logging
from datetime import date, timedelta
from decimal import Decimal

import config
from db import get_db
from models.forecast_models import INCOME_STATUSES, INVOICE_STATUSES, IncomeSource
from repositories import invoices_repository as repo
from repositories.recipients_repository import get_recipient
from services.settings_service import get_next_invoice_number
from utils.dates import normalize_date
from utils.money import round_money

logger = logging.getLogger(__name__)


class InvoiceValidationError(ValueError):
    pass


def calculate_totals(items):
    """
    Net, tax and gross totals of the line items.

    Each item needs quantity, unit_price and tax_rate (percent).
    Sums are exact; the three totals are rounded to cents at the end.
    """
    net = Decimal("0")
    tax = Decimal("0")
    for item in items:
        line_net = Decimal(str(item["quantity"])) * Decimal(str(item["unit_price"]))
        net += line_net
        tax += line_net * Decimal(str(item["tax_rate"])) / Decimal("100")

    return {
        "net": round_money(net),
        "tax": round_money(tax),
        "gross": round_money(net + tax),
    }


def create_invoice(*, recipient_id, items, issue_date=None, due_date=None, notes=None, today=None):
    """Number, total and store a new invoice in DRAFT status.

    ``issue_date`` defaults to today and ``due_date`` to the issue date plus
    the configured payment term.
    """
    if not items:
        raise InvoiceValidationError("At least one line item is required")

    today = normalize_date(today) if today is not None else date.today()
    issue = normalize_date(issue_date) if issue_date else today
    due = normalize_date(due_date) if due_date else issue + timedelta(days=config.INVOICE_DUE_DAYS)
    totals = calculate_totals(items)

    conn = get_db()
    try:
        if get_recipient(conn, recipient_id) is None:
            raise InvoiceValidationError(f"Recipient {recipient_id} does not exist")

        # numbering, header and line items commit together or not at all
        conn.begin()
        try:
            number = get_next_invoice_number(conn, today)
            invoice_id = repo.insert_invoice(
                conn,
                number=number,
                recipient_id=recipient_id,
                issue_date=issue,
                due_date=due,
                total_net=totals["net"],
                total_tax=totals["tax"],
                total_gross=totals["gross"],
                notes=notes,
                items=items,
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        invoice = repo.get_invoice(conn, invoice_id)
    finally:
        conn.close()

    logger.info("Created invoice %s for recipient %d (gross %s, due %s)",
                number, recipient_id, totals["gross"], due.isoformat())
    return invoice


def list_invoices(limit=None):
    conn = get_db()
    try:
        invoices = repo.get_all_invoices(conn, limit=limit)
        for invoice in invoices:
            invoice["line_items"] = repo.get_line_items(conn, invoice["id"])
        return invoices
    finally:
        conn.close()


def mark_invoice_status(invoice_id, status):
    if status not in INVOICE_STATUSES:
        raise InvoiceValidationError(
            f"Unknown status {status!r}; expected one of {', '.join(INVOICE_STATUSES)}"
        )

    conn = get_db()
    try:
        updated = repo.update_status(conn, invoice_id, status)
    finally:
        conn.close()

    if not updated:
        raise LookupError(f"Invoice {invoice_id} not found")
    logger.info("Invoice %d marked %s", invoice_id, status)


def delete_invoice(invoice_id):
    conn = get_db()
    try:
        deleted = repo.delete_invoice(conn, invoice_id)
    finally:
        conn.close()

    if not deleted:
        raise LookupError(f"Invoice {invoice_id} not found")
    logger.info("Deleted invoice %d", invoice_id)


def get_dashboard_summary(latest=5):
    """Invoice count, gross total and the most recent invoices."""
    conn = get_db()
    try:
        stats = repo.get_invoice_stats(conn)
        invoices = repo.get_all_invoices(conn, limit=latest)
    finally:
        conn.close()

    return {
        "stats": {"count": stats["count"], "gross": round_money(stats["gross"])},
        "invoices": invoices,
    }


def list_income_sources(conn=None):
    """PAID and SENT invoices as forecast income, ordered by due date."""
    own_conn = conn is None
    if own_conn:
        conn = get_db()
    try:
        rows = repo.get_invoices_by_status(conn, INCOME_STATUSES)
    finally:
        if own_conn:
            conn.close()

    return [
        IncomeSource(
            id=row["id"],
            number=row["number"],
            due_date=normalize_date(row["due_date"]),
            total_gross=round_money(row["total_gross"]),
            status=row["status"],
        )
        for row in rows
    ]
