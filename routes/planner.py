from datetime import date as date_type
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Form
from pydantic import BaseModel

import config
from helpers.responses import handle_service_error
from services import expense_service
from services.forecast_dto import ForecastResponseDTO
from services.projection_service import calculate_monthly_projection
from services.settings_service import update_starting_balance
from utils.money import format_money, parse_money

router = APIRouter(prefix="/planner")


class RecurringExpenseCreate(BaseModel):
    name: str
    amount: Decimal
    day_of_month: int


class RecurringExpenseUpdate(BaseModel):
    name: Optional[str] = None
    amount: Optional[Decimal] = None
    day_of_month: Optional[int] = None
    first_occurrence: Optional[date_type] = None
    active: Optional[bool] = None


class OneOffExpenseCreate(BaseModel):
    name: str
    amount: Decimal
    date: date_type


class OneOffExpenseUpdate(BaseModel):
    name: Optional[str] = None
    amount: Optional[Decimal] = None
    date: Optional[date_type] = None
    active: Optional[bool] = None


def serialize_recurring(expense):
    return {
        "id": expense.id,
        "name": expense.name,
        "amount": format_money(expense.amount),
        "day_of_month": expense.day_of_month,
        "first_occurrence": expense.first_occurrence.isoformat(),
        "active": expense.active,
    }


def serialize_one_off(expense):
    return {
        "id": expense.id,
        "name": expense.name,
        "amount": format_money(expense.amount),
        "date": expense.date.isoformat(),
        "active": expense.active,
    }


# -------------------------
# PLANNER OVERVIEW
# -------------------------

@router.get("")
def planner_overview():
    """
    Recurring and one-off expenses, the starting balance and the
    forecast over the configured horizon.
    """
    try:
        recurring = expense_service.list_recurring_expenses()
        one_off = expense_service.list_one_off_expenses()
        starting_balance, forecast = calculate_monthly_projection(months=config.FORECAST_MONTHS)
    except Exception as e:
        return handle_service_error(e, "load planner")

    return {
        "expenses": [serialize_recurring(e) for e in recurring],
        "single_expenses": [serialize_one_off(e) for e in one_off],
        "starting_balance": format_money(starting_balance),
        "forecast": ForecastResponseDTO.from_forecast(starting_balance, forecast).to_dict()["entries"],
    }


# -------------------------
# RECURRING EXPENSES
# -------------------------

@router.post("/expenses", status_code=201)
def create_expense(body: RecurringExpenseCreate):
    try:
        expense = expense_service.create_recurring_expense(
            name=body.name, amount=body.amount, day_of_month=body.day_of_month
        )
    except Exception as e:
        return handle_service_error(e, "create expense")
    return {"success": True, "expense": serialize_recurring(expense)}


@router.patch("/expenses/{expense_id}")
def update_expense(expense_id: int, body: RecurringExpenseUpdate):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        expense = expense_service.update_recurring_expense(expense_id, **fields)
    except Exception as e:
        return handle_service_error(e, "update expense")
    return {"success": True, "expense": serialize_recurring(expense)}


@router.delete("/expenses/{expense_id}")
def delete_expense(expense_id: int):
    try:
        expense_service.delete_recurring_expense(expense_id)
    except Exception as e:
        return handle_service_error(e, "delete expense")
    return {"success": True}


# -------------------------
# ONE-OFF EXPENSES
# -------------------------

@router.post("/single-expenses", status_code=201)
def create_single_expense(body: OneOffExpenseCreate):
    try:
        expense = expense_service.create_one_off_expense(
            name=body.name, amount=body.amount, date=body.date
        )
    except Exception as e:
        return handle_service_error(e, "create single expense")
    return {"success": True, "expense": serialize_one_off(expense)}


@router.patch("/single-expenses/{expense_id}")
def update_single_expense(expense_id: int, body: OneOffExpenseUpdate):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        expense = expense_service.update_one_off_expense(expense_id, **fields)
    except Exception as e:
        return handle_service_error(e, "update single expense")
    return {"success": True, "expense": serialize_one_off(expense)}


@router.delete("/single-expenses/{expense_id}")
def delete_single_expense(expense_id: int):
    try:
        expense_service.delete_one_off_expense(expense_id)
    except Exception as e:
        return handle_service_error(e, "delete single expense")
    return {"success": True}


# -------------------------
# STARTING BALANCE FORM SUBMISSION
# -------------------------

@router.post("/balance")
def update_balance(starting_balance: str = Form(...)):
    """
    Handles the starting balance form; accepts entries like "1,250.00" or "(40)".
    """
    try:
        balance = update_starting_balance(parse_money(starting_balance))
    except Exception as e:
        return handle_service_error(e, "update starting balance")
    return {"success": True, "starting_balance": format_money(balance)}
