### Forecast service projects the account balance month by month from invoice income,
### recurring monthly expenses and one-off expenses.
import logging
from datetime import date
from decimal import Decimal

from models.forecast_models import (
    EXPENSE,
    INCOME,
    INCOME_STATUSES,
    ForecastEntry,
    ForecastTransaction,
)
from utils.dates import add_months, clamp_day, first_of_month, in_window, month_window, normalize_date
from utils.money import round_money

logger = logging.getLogger(__name__)


def get_occurrence_in_month(day_of_month, month_start):
    """Date of a day-of-month bill in the given month, clamped for short months."""
    start = normalize_date(month_start)
    return date(start.year, start.month, clamp_day(start.year, start.month, day_of_month))


def compute_first_occurrence(day_of_month, now=None):
    """First date a newly created recurring expense is due.

    This month's occurrence if it is still ahead of ``now``, otherwise next
    month's. An occurrence falling on today counts as already passed.
    """
    today = normalize_date(now) if now is not None else date.today()

    occ_date = get_occurrence_in_month(day_of_month, today)
    if occ_date <= today:
        occ_date = get_occurrence_in_month(day_of_month, add_months(today, 1))
    return occ_date


def project_recurring_expense(expense, month_start):
    """Return the expense's transaction for the month, or None if it does not occur."""
    if not expense.active:
        return None

    occ_date = get_occurrence_in_month(expense.day_of_month, month_start)
    if occ_date < normalize_date(expense.first_occurrence):
        return None

    return ForecastTransaction(
        date=occ_date,
        description=expense.name,
        amount=expense.amount,
        kind=EXPENSE,
    )


def select_recurring_expenses(expenses, month_start):
    transactions = []
    for expense in expenses:
        txn = project_recurring_expense(expense, month_start)
        if txn is not None:
            transactions.append(txn)
    return transactions


def select_one_off_expenses(expenses, month_start):
    window = month_window(month_start)
    return [
        ForecastTransaction(
            date=normalize_date(expense.date),
            description=expense.name,
            amount=expense.amount,
            kind=EXPENSE,
        )
        for expense in expenses
        if expense.active and in_window(expense.date, window)
    ]


def select_invoice_income(invoices, month_start):
    window = month_window(month_start)
    return [
        ForecastTransaction(
            date=normalize_date(invoice.due_date),
            description=f"Invoice {invoice.number}",
            amount=invoice.total_gross,
            kind=INCOME,
        )
        for invoice in invoices
        if invoice.status in INCOME_STATUSES and in_window(invoice.due_date, window)
    ]


def build_month_entry(month_start, opening_balance, recurring_expenses, one_off_expenses, invoices):
    """Compute one month of the forecast from the balance carried into it."""
    _, month_end = month_window(month_start)

    # merge order is the tie-break for same-day items: income, recurring, one-off
    merged = (
        select_invoice_income(invoices, month_start)
        + select_recurring_expenses(recurring_expenses, month_start)
        + select_one_off_expenses(one_off_expenses, month_start)
    )
    transactions = sorted(merged, key=lambda txn: txn.date)

    income = sum((t.amount for t in transactions if t.kind == INCOME), Decimal("0"))
    expenses = sum((t.amount for t in transactions if t.kind == EXPENSE), Decimal("0"))

    return ForecastEntry(
        month_end_date=month_end,
        balance=round_money(opening_balance + income - expenses),
        income=round_money(income),
        expenses=round_money(expenses),
        transactions=transactions,
    )


def generate_forecast(starting_balance, months, recurring_expenses, one_off_expenses, invoices, today=None):
    """Project the balance over ``months`` consecutive months starting with the current one.

    Pure function of its arguments and ``today`` (defaults to ``date.today()``).
    A horizon of zero or less yields an empty list.
    """
    if months <= 0:
        return []
    if today is None:
        today = date.today()

    # snapshot the inputs so lazy iterables are only consumed once
    recurring_expenses = list(recurring_expenses)
    one_off_expenses = list(one_off_expenses)
    invoices = list(invoices)

    start = first_of_month(today)

    forecast = []
    balance = round_money(starting_balance)
    for offset in range(months):
        entry = build_month_entry(
            add_months(start, offset),
            balance,
            recurring_expenses,
            one_off_expenses,
            invoices,
        )
        balance = entry.balance
        forecast.append(entry)

    logger.debug(
        "Forecast of %d months from %s: %d recurring, %d one-off, %d invoices",
        months, start.isoformat(), len(recurring_expenses), len(one_off_expenses), len(invoices),
    )
    return forecast
