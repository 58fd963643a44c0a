from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def round_money(value) -> Decimal:
    """Quantize an amount to currency precision (two decimal places)."""
    if not isinstance(value, Decimal):
        # floats go through str() so 0.1 stays 0.10
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value) -> str:
    return f"{round_money(value):.2f}"


def parse_money(value: str) -> Decimal:
    if value is None:
        raise ValueError("missing money value")

    normalized = value.strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace("€", "").replace(",", "").strip()

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = round_money(Decimal(normalized))
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    return -amount if is_negative else amount
