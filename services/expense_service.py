import logging
from decimal import Decimal, InvalidOperation

from db import get_db
from models.forecast_models import OneOffExpense, RecurringExpense
from repositories import expenses_repository as repo
from services.forecast_service import compute_first_occurrence
from utils.dates import normalize_date
from utils.money import round_money

logger = logging.getLogger(__name__)


class ExpenseValidationError(ValueError):
    pass


def validate_day_of_month(day_of_month):
    if isinstance(day_of_month, bool) or not isinstance(day_of_month, int) \
            or not 1 <= day_of_month <= 31:
        raise ExpenseValidationError("day_of_month must be between 1 and 31")
    return day_of_month


def validate_amount(amount):
    try:
        amount = round_money(amount)
    except InvalidOperation as exc:
        raise ExpenseValidationError("amount must be a number") from exc
    if not amount.is_finite():
        raise ExpenseValidationError("amount must be a number")
    if amount <= Decimal("0"):
        raise ExpenseValidationError("amount must be positive")
    return amount


def validate_name(name):
    name = (name or "").strip()
    if not name:
        raise ExpenseValidationError("name is required")
    return name


def to_recurring_expense(row):
    return RecurringExpense(
        id=row["id"],
        name=row["name"],
        amount=round_money(row["amount"]),
        day_of_month=row["day_of_month"],
        first_occurrence=normalize_date(row["first_occurrence"]),
        active=bool(row["active"]),
    )


def to_one_off_expense(row):
    return OneOffExpense(
        id=row["id"],
        name=row["name"],
        amount=round_money(row["amount"]),
        date=normalize_date(row["date"]),
        active=bool(row["active"]),
    )


# -----------------------------
# Recurring monthly expenses
# -----------------------------

def list_recurring_expenses(active_only=False, conn=None):
    own_conn = conn is None
    if own_conn:
        conn = get_db()
    try:
        rows = repo.get_all_recurring_expenses(conn, active_only=active_only)
        return [to_recurring_expense(r) for r in rows]
    finally:
        if own_conn:
            conn.close()


def create_recurring_expense(*, name, amount, day_of_month, now=None):
    """Validate and store a recurring expense.

    ``first_occurrence`` is derived from ``now`` so a new expense never lands
    on a day of the current month that has already passed.
    """
    name = validate_name(name)
    amount = validate_amount(amount)
    day_of_month = validate_day_of_month(day_of_month)
    first_occurrence = compute_first_occurrence(day_of_month, now)

    conn = get_db()
    try:
        row = repo.insert_recurring_expense(
            conn,
            name=name,
            amount=amount,
            day_of_month=day_of_month,
            first_occurrence=first_occurrence,
        )
    finally:
        conn.close()

    logger.info("Created recurring expense %s (%s on day %d, first %s)",
                name, amount, day_of_month, first_occurrence.isoformat())
    return to_recurring_expense(row)


def update_recurring_expense(expense_id, **fields):
    """Partial update; only the given fields change."""
    if "name" in fields:
        fields["name"] = validate_name(fields["name"])
    if "amount" in fields:
        fields["amount"] = validate_amount(fields["amount"])
    if "day_of_month" in fields:
        fields["day_of_month"] = validate_day_of_month(fields["day_of_month"])
    if "first_occurrence" in fields:
        fields["first_occurrence"] = normalize_date(fields["first_occurrence"])

    conn = get_db()
    try:
        row = repo.update_recurring_expense(conn, expense_id, fields)
    finally:
        conn.close()

    if row is None:
        raise LookupError(f"Recurring expense {expense_id} not found")
    logger.info("Updated recurring expense %d: %s", expense_id, sorted(fields))
    return to_recurring_expense(row)


def delete_recurring_expense(expense_id):
    conn = get_db()
    try:
        deleted = repo.delete_recurring_expense(conn, expense_id)
    finally:
        conn.close()

    if not deleted:
        raise LookupError(f"Recurring expense {expense_id} not found")
    logger.info("Deleted recurring expense %d", expense_id)


# -----------------------------
# One-off expenses
# -----------------------------

def list_one_off_expenses(active_only=False, conn=None):
    own_conn = conn is None
    if own_conn:
        conn = get_db()
    try:
        rows = repo.get_all_one_off_expenses(conn, active_only=active_only)
        return [to_one_off_expense(r) for r in rows]
    finally:
        if own_conn:
            conn.close()


def create_one_off_expense(*, name, amount, date):
    name = validate_name(name)
    amount = validate_amount(amount)
    expense_date = normalize_date(date)

    conn = get_db()
    try:
        row = repo.insert_one_off_expense(conn, name=name, amount=amount, date=expense_date)
    finally:
        conn.close()

    logger.info("Created one-off expense %s (%s on %s)", name, amount, expense_date.isoformat())
    return to_one_off_expense(row)


def update_one_off_expense(expense_id, **fields):
    if "name" in fields:
        fields["name"] = validate_name(fields["name"])
    if "amount" in fields:
        fields["amount"] = validate_amount(fields["amount"])
    if "date" in fields:
        fields["date"] = normalize_date(fields["date"])

    conn = get_db()
    try:
        row = repo.update_one_off_expense(conn, expense_id, fields)
    finally:
        conn.close()

    if row is None:
        raise LookupError(f"One-off expense {expense_id} not found")
    logger.info("Updated one-off expense %d: %s", expense_id, sorted(fields))
    return to_one_off_expense(row)


def delete_one_off_expense(expense_id):
    conn = get_db()
    try:
        deleted = repo.delete_one_off_expense(conn, expense_id)
    finally:
        conn.close()

    if not deleted:
        raise LookupError(f"One-off expense {expense_id} not found")
    logger.info("Deleted one-off expense %d", expense_id)
