# helpers/normalize.py


def rows_to_dicts(result):
    """
    Convert a DuckDB result into a list of column-keyed dicts
    """
    columns = [col[0] for col in result.description]
    return [dict(zip(columns, row)) for row in result.fetchall()]


def row_to_dict(result):
    rows = rows_to_dicts(result)
    return rows[0] if rows else None


def normalize_payload(payload: dict):
    """
    Drop unset fields and turn blank strings into None so optional
    columns are cleared instead of storing ''
    """
    normalized = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip() or None
        normalized[key] = value
    return normalized
