from datetime import date

import config
from db import get_db
from services.expense_service import list_one_off_expenses, list_recurring_expenses
from services.forecast_service import generate_forecast
from services.invoice_service import list_income_sources
from services.settings_service import get_starting_balance


def load_forecast_inputs():
    """Read a snapshot of everything the forecast needs in one connection."""
    conn = get_db()
    try:
        return {
            "starting_balance": get_starting_balance(conn),
            "recurring_expenses": list_recurring_expenses(active_only=True, conn=conn),
            "one_off_expenses": list_one_off_expenses(active_only=True, conn=conn),
            "invoices": list_income_sources(conn),
        }
    finally:
        conn.close()


def calculate_monthly_projection(months=None, as_of_date=None):
    """Monthly forecast from stored expenses, invoices and the settings balance.

    Recomputed on every call; nothing is cached or written.
    Returns ``(starting_balance, forecast)``.
    """
    if months is None:
        months = config.FORECAST_MONTHS
    today = as_of_date or date.today()

    inputs = load_forecast_inputs()
    forecast = generate_forecast(
        inputs["starting_balance"],
        months,
        inputs["recurring_expenses"],
        inputs["one_off_expenses"],
        inputs["invoices"],
        today=today,
    )
    return inputs["starting_balance"], forecast
