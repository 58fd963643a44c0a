"""Shared fixtures: every test that touches storage gets its own DuckDB file."""

from datetime import date
from decimal import Decimal

import pytest

import config
from db import init_db
from models.forecast_models import IncomeSource, OneOffExpense, RecurringExpense


@pytest.fixture()
def db_file(tmp_path, monkeypatch):
    path = tmp_path / "planner.duckdb"
    monkeypatch.setattr(config, "DB_FILE", str(path))
    init_db()
    return path


@pytest.fixture()
def client(db_file):
    from fastapi.testclient import TestClient

    from main import app

    with TestClient(app) as test_client:
        yield test_client


def recurring(name="Rent", amount="50.00", day=15, first=date(2024, 1, 1), active=True):
    return RecurringExpense(
        name=name,
        amount=Decimal(amount),
        day_of_month=day,
        first_occurrence=first,
        active=active,
    )


def one_off(name="Laptop", amount="100.00", when=date(2024, 4, 1), active=True):
    return OneOffExpense(name=name, amount=Decimal(amount), date=when, active=active)


def invoice(number="RE-2024-0001", due=date(2024, 4, 10), gross="500.00", status="SENT"):
    return IncomeSource(number=number, due_date=due, total_gross=Decimal(gross), status=status)
