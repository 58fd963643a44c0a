import logging
from datetime import date

import config
from db import get_db
from repositories import settings_repository as repo
from repositories.invoices_repository import count_invoices_issued_between
from utils.money import round_money

logger = logging.getLogger(__name__)


def get_settings(conn=None):
    own_conn = conn is None
    if own_conn:
        conn = get_db()
    try:
        return repo.get_or_create_settings(conn)
    finally:
        if own_conn:
            conn.close()


def update_settings(fields):
    """Store the given settings; amounts are rounded to cents."""
    if fields.get("starting_balance") is not None:
        fields["starting_balance"] = round_money(fields["starting_balance"])
    if fields.get("default_tax_rate") is not None:
        rate = round_money(fields["default_tax_rate"])
        if not 0 <= rate <= 100:
            raise ValueError("default_tax_rate must be between 0 and 100")
        fields["default_tax_rate"] = rate
    if fields.get("override_invoice_start_number") is not None \
            and fields["override_invoice_start_number"] < 0:
        raise ValueError("override_invoice_start_number must not be negative")

    conn = get_db()
    try:
        settings = repo.update_settings(conn, fields)
    finally:
        conn.close()

    logger.info("Updated settings: %s", sorted(fields))
    return settings


def get_starting_balance(conn=None):
    settings = get_settings(conn)
    return round_money(settings.get("starting_balance") or 0)


def update_starting_balance(balance):
    return update_settings({"starting_balance": balance})["starting_balance"]


def format_invoice_number(prefix, year, sequence):
    return f"{prefix}-{year}-{sequence:04d}"


def get_next_invoice_number(conn, today=None):
    """Next number as PREFIX-YEAR-NNNN, counting invoices issued this calendar year."""
    today = today or date.today()
    settings = repo.get_or_create_settings(conn)
    issued = count_invoices_issued_between(
        conn, date(today.year, 1, 1), date(today.year, 12, 31)
    )
    start = settings.get("override_invoice_start_number")
    if start is None:
        start = 1
    prefix = (settings.get("invoice_prefix") or "").strip() or config.INVOICE_PREFIX
    return format_invoice_number(prefix, today.year, start + issued)
