"""Unit tests for the monthly cash-flow forecast engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from conftest import invoice, one_off, recurring
from models.forecast_models import EXPENSE, INCOME
from services.forecast_dto import ForecastResponseDTO
from services.forecast_service import (
    build_month_entry,
    compute_first_occurrence,
    generate_forecast,
    project_recurring_expense,
    select_invoice_income,
    select_one_off_expenses,
)

TODAY = date(2024, 4, 17)


def test_scenario_single_month():
    forecast = generate_forecast(
        Decimal("1000.00"),
        1,
        [recurring(amount="50.00", day=15, first=date(2024, 4, 1))],
        [],
        [invoice(due=date(2024, 4, 10), gross="500.00", status="SENT")],
        today=TODAY,
    )

    assert len(forecast) == 1
    entry = forecast[0]
    assert entry.month_end_date == date(2024, 4, 30)
    assert entry.income == Decimal("500.00")
    assert entry.expenses == Decimal("50.00")
    assert entry.balance == Decimal("1450.00")
    assert [(t.kind, t.date, t.amount) for t in entry.transactions] == [
        (INCOME, date(2024, 4, 10), Decimal("500.00")),
        (EXPENSE, date(2024, 4, 15), Decimal("50.00")),
    ]
    assert entry.transactions[0].description == "Invoice RE-2024-0001"
    assert entry.transactions[1].description == "Rent"


@pytest.mark.parametrize("months", [0, -1, -12])
def test_non_positive_horizon_returns_empty(months):
    assert generate_forecast(Decimal("10"), months, [recurring()], [one_off()], [invoice()], today=TODAY) == []


def test_twelve_month_horizon_spans_consecutive_month_ends():
    forecast = generate_forecast(Decimal("0"), 12, [], [], [], today=TODAY)

    assert [entry.month_end_date for entry in forecast] == [
        date(2024, 4, 30),
        date(2024, 5, 31),
        date(2024, 6, 30),
        date(2024, 7, 31),
        date(2024, 8, 31),
        date(2024, 9, 30),
        date(2024, 10, 31),
        date(2024, 11, 30),
        date(2024, 12, 31),
        date(2025, 1, 31),
        date(2025, 2, 28),
        date(2025, 3, 31),
    ]


def test_no_sources_keeps_balance_flat():
    forecast = generate_forecast(Decimal("250.00"), 3, [], [], [], today=TODAY)

    assert [entry.balance for entry in forecast] == [Decimal("250.00")] * 3
    assert all(entry.transactions == [] for entry in forecast)


def test_balance_recurrence_holds_every_month():
    starting = Decimal("1200.00")
    forecast = generate_forecast(
        starting,
        12,
        [recurring(amount="99.99", day=31), recurring(name="Phone", amount="19.90", day=3)],
        [one_off(amount="450.00", when=date(2024, 8, 12))],
        [
            invoice(number="A", due=date(2024, 5, 2), gross="1190.00"),
            invoice(number="B", due=date(2024, 11, 30), gross="833.33", status="PAID"),
        ],
        today=TODAY,
    )

    assert forecast[0].balance == starting + forecast[0].income - forecast[0].expenses
    for previous, current in zip(forecast, forecast[1:]):
        assert current.balance == previous.balance + current.income - current.expenses


def test_long_horizon_threads_balance_to_the_last_month():
    forecast = generate_forecast(
        Decimal("10000.00"), 600, [recurring(amount="10.00", day=1)], [], [], today=TODAY
    )

    assert len(forecast) == 600
    assert forecast[-1].month_end_date == date(2074, 3, 31)
    assert forecast[-1].balance == Decimal("4000.00")


def test_recurring_day_31_clamps_to_short_months():
    forecast = generate_forecast(
        Decimal("0"), 11, [recurring(day=31, first=date(2024, 1, 1))], [], [], today=date(2024, 2, 5)
    )
    dates = [entry.transactions[0].date for entry in forecast]

    assert dates[0] == date(2024, 2, 29)
    assert dates[2] == date(2024, 4, 30)
    assert dates[4] == date(2024, 6, 30)
    assert dates[10] == date(2024, 12, 31)
    assert all(entry.month_end_date == d for entry, d in zip(forecast, dates))


def test_first_occurrence_gates_early_months():
    expense = recurring(day=5, first=date(2024, 4, 5))
    forecast = generate_forecast(Decimal("0"), 6, [expense], [], [], today=date(2024, 1, 10))

    assert [len(entry.transactions) for entry in forecast] == [0, 0, 0, 1, 1, 1]
    assert forecast[3].transactions[0].date == date(2024, 4, 5)


def test_first_occurrence_time_of_day_is_ignored():
    expense = recurring(day=15, first=datetime(2024, 4, 15, 18, 30))

    txn = project_recurring_expense(expense, date(2024, 4, 1))

    assert txn is not None
    assert txn.date == date(2024, 4, 15)


def test_recurring_expense_has_no_end_date():
    forecast = generate_forecast(Decimal("0"), 36, [recurring(first=date(2020, 1, 1))], [], [], today=TODAY)

    assert all(len(entry.transactions) == 1 for entry in forecast)


def test_inactive_expenses_are_skipped():
    forecast = generate_forecast(
        Decimal("0"),
        1,
        [recurring(active=False)],
        [one_off(when=date(2024, 4, 20), active=False)],
        [],
        today=TODAY,
    )

    assert forecast[0].expenses == Decimal("0.00")


def test_same_day_ties_follow_merge_order():
    day = date(2024, 4, 15)
    entry = build_month_entry(
        date(2024, 4, 1),
        Decimal("0"),
        [recurring(name="Rent", day=15)],
        [one_off(name="Repair", when=day)],
        [invoice(number="X", due=day)],
    )

    assert [t.description for t in entry.transactions] == ["Invoice X", "Rent", "Repair"]


def test_same_day_items_within_a_source_keep_input_order():
    day = date(2024, 4, 9)
    transactions = select_one_off_expenses(
        [one_off(name="First", when=day), one_off(name="Second", when=day)], date(2024, 4, 1)
    )

    assert [t.description for t in transactions] == ["First", "Second"]


def test_only_paid_and_sent_invoices_count_as_income():
    invoices = [
        invoice(number="draft", status="DRAFT"),
        invoice(number="sent", status="SENT"),
        invoice(number="paid", status="PAID"),
        invoice(number="cancelled", status="CANCELLED"),
    ]

    income = select_invoice_income(invoices, date(2024, 4, 1))

    assert [t.description for t in income] == ["Invoice sent", "Invoice paid"]


def test_month_boundaries_use_calendar_dates():
    invoices = [
        invoice(number="late", due=datetime(2024, 4, 30, 23, 59)),
        invoice(number="next", due=datetime(2024, 5, 1, 0, 0)),
    ]
    one_offs = [one_off(name="first-day", when=datetime(2024, 4, 1, 8, 0))]

    april = build_month_entry(date(2024, 4, 1), Decimal("0"), [], one_offs, invoices)
    may = build_month_entry(date(2024, 5, 1), Decimal("0"), [], one_offs, invoices)

    assert [t.description for t in april.transactions] == ["first-day", "Invoice late"]
    assert april.transactions[1].date == date(2024, 4, 30)
    assert [t.description for t in may.transactions] == ["Invoice next"]


def test_forecast_is_deterministic():
    args = (
        Decimal("1000.00"),
        12,
        [recurring(day=31), recurring(name="Gym", amount="29.00", day=1)],
        [one_off(when=date(2024, 6, 1))],
        [invoice(due=date(2024, 6, 1)), invoice(number="B", due=date(2024, 9, 30), status="PAID")],
    )

    first = generate_forecast(*args, today=TODAY)
    second = generate_forecast(*args, today=TODAY)

    assert first == second
    assert (
        ForecastResponseDTO.from_forecast(args[0], first).to_dict()
        == ForecastResponseDTO.from_forecast(args[0], second).to_dict()
    )


def test_float_starting_balance_is_rounded_to_cents():
    forecast = generate_forecast(1000.1, 1, [], [], [], today=TODAY)

    assert forecast[0].balance == Decimal("1000.10")


def test_generators_are_consumed_once():
    expenses = (e for e in [recurring(day=1)])

    forecast = generate_forecast(Decimal("0"), 3, expenses, [], [], today=TODAY)

    assert [len(entry.transactions) for entry in forecast] == [1, 1, 1]


@pytest.mark.parametrize(
    "now, day, expected",
    [
        (date(2024, 4, 20), 15, date(2024, 5, 15)),
        (date(2024, 4, 20), 25, date(2024, 4, 25)),
        (date(2024, 4, 20), 20, date(2024, 5, 20)),
        (date(2024, 4, 20), 31, date(2024, 4, 30)),
        (date(2024, 1, 30), 30, date(2024, 2, 29)),
        (date(2024, 12, 31), 31, date(2025, 1, 31)),
        (datetime(2024, 4, 20, 9, 15), 21, date(2024, 4, 21)),
    ],
)
def test_compute_first_occurrence(now, day, expected):
    assert compute_first_occurrence(day, now) == expected


def test_new_expense_never_backdates_into_current_month():
    now = date(2024, 4, 20)
    expense = recurring(day=10, first=compute_first_occurrence(10, now))

    forecast = generate_forecast(Decimal("0"), 2, [expense], [], [], today=now)

    assert forecast[1].transactions[0].date == date(2024, 5, 10)
