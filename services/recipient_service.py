import logging

from db import get_db
from repositories import recipients_repository as repo
from repositories.invoices_repository import count_invoices_for_recipient

logger = logging.getLogger(__name__)


class RecipientInUseError(ValueError):
    pass


class RecipientValidationError(ValueError):
    pass


def validate_required(field, value):
    value = (value or "").strip()
    if len(value) < 2:
        raise RecipientValidationError(f"{field} must have at least 2 characters")
    return value


def list_recipients():
    conn = get_db()
    try:
        return repo.list_recipients(conn)
    finally:
        conn.close()


def create_recipient(*, name, country, company=None, email=None,
                     street=None, postal_code=None, city=None):
    """Store a recipient; the country code is kept upper-case."""
    name = validate_required("name", name)
    country = validate_required("country", country).upper()

    conn = get_db()
    try:
        recipient = repo.insert_recipient(
            conn,
            name=name,
            country=country,
            company=company,
            email=email or None,
            street=street,
            postal_code=postal_code,
            city=city,
        )
    finally:
        conn.close()

    logger.info("Created recipient %d (%s)", recipient["id"], recipient["name"])
    return recipient


def delete_recipient(recipient_id):
    """Delete a recipient unless invoices still reference it."""
    conn = get_db()
    try:
        invoice_count = count_invoices_for_recipient(conn, recipient_id)
        if invoice_count > 0:
            raise RecipientInUseError(
                f"Recipient {recipient_id} cannot be deleted, "
                f"{invoice_count} invoice(s) still reference it"
            )
        deleted = repo.delete_recipient(conn, recipient_id)
    finally:
        conn.close()

    if not deleted:
        raise LookupError(f"Recipient {recipient_id} not found")
    logger.info("Deleted recipient %d", recipient_id)
