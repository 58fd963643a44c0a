from dataclasses import asdict, dataclass
from typing import List

from utils.money import format_money


@dataclass
class ForecastTransactionDTO:
    date: str  # ISO format YYYY-MM-DD
    description: str
    amount: str  # fixed point, two decimals
    kind: str


@dataclass
class ForecastEntryDTO:
    """Single month in the forecast timeline."""
    month_end_date: str  # ISO format
    balance: str
    income: str
    expenses: str
    transactions: List[ForecastTransactionDTO]


@dataclass
class ForecastResponseDTO:
    """Complete monthly forecast response."""
    starting_balance: str
    months: int
    entries: List[ForecastEntryDTO]

    @classmethod
    def from_forecast(cls, starting_balance, forecast):
        """Convert ForecastEntry objects into a JSON-serializable DTO."""
        return cls(
            starting_balance=format_money(starting_balance),
            months=len(forecast),
            entries=[
                ForecastEntryDTO(
                    month_end_date=entry.month_end_date.isoformat(),
                    balance=format_money(entry.balance),
                    income=format_money(entry.income),
                    expenses=format_money(entry.expenses),
                    transactions=[
                        ForecastTransactionDTO(
                            date=txn.date.isoformat(),
                            description=txn.description,
                            amount=format_money(txn.amount),
                            kind=txn.kind,
                        )
                        for txn in entry.transactions
                    ],
                )
                for entry in forecast
            ],
        )

    def to_dict(self):
        return asdict(self)
