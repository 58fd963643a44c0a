from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

INCOME = "income"
EXPENSE = "expense"

# Invoice statuses whose gross total is projected as income on the due date.
# SENT invoices are assumed to be paid on time.
INCOME_STATUSES = ("PAID", "SENT")
INVOICE_STATUSES = ("DRAFT", "SENT", "PAID", "CANCELLED")


@dataclass(frozen=True)
class RecurringExpense:
    name: str
    amount: Decimal
    day_of_month: int
    first_occurrence: date
    active: bool = True
    id: Optional[int] = None


@dataclass(frozen=True)
class OneOffExpense:
    name: str
    amount: Decimal
    date: date
    active: bool = True
    id: Optional[int] = None


@dataclass(frozen=True)
class IncomeSource:
    """Invoice fields the forecast needs."""
    number: str
    due_date: date
    total_gross: Decimal
    status: str
    id: Optional[int] = None


@dataclass(frozen=True)
class ForecastTransaction:
    date: date
    description: str
    amount: Decimal
    kind: str  # INCOME | EXPENSE


@dataclass(frozen=True)
class ForecastEntry:
    month_end_date: date
    balance: Decimal
    income: Decimal
    expenses: Decimal
    transactions: List[ForecastTransaction] = field(default_factory=list)
