from helpers.normalize import row_to_dict, rows_to_dicts

# -----------------------------
# Expenses Repository
# -----------------------------

RECURRING_COLUMNS = ("name", "amount", "day_of_month", "first_occurrence", "active")
ONE_OFF_COLUMNS = ("name", "amount", "date", "active")


def _update(conn, table, allowed, expense_id, fields):
    """
    Apply a partial update; only whitelisted column names reach the SQL.
    Returns the updated row or None if the id does not exist.
    """
    changes = {k: v for k, v in fields.items() if k in allowed}
    if changes:
        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn.execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?",
            [*changes.values(), expense_id]
        )
    return row_to_dict(conn.execute(f"SELECT * FROM {table} WHERE id = ?", (expense_id,)))


def _delete(conn, table, expense_id):
    deleted = conn.execute(
        f"DELETE FROM {table} WHERE id = ? RETURNING id", (expense_id,)
    ).fetchone()
    return deleted is not None


def get_all_recurring_expenses(conn, active_only=False):
    """
    Return recurring expenses ordered by day of month.
    - active_only: skip deactivated expenses
    """
    query = "SELECT * FROM recurring_expenses"
    if active_only:
        query += " WHERE active = TRUE"
    query += " ORDER BY day_of_month, id"
    return rows_to_dicts(conn.execute(query))


def insert_recurring_expense(conn, name, amount, day_of_month, first_occurrence, active=True):
    return row_to_dict(conn.execute(
        """
        INSERT INTO recurring_expenses (name, amount, day_of_month, first_occurrence, active)
        VALUES (?, ?, ?, ?, ?)
        RETURNING *
        """,
        (name, amount, day_of_month, first_occurrence, active)
    ))


def update_recurring_expense(conn, expense_id, fields):
    return _update(conn, "recurring_expenses", RECURRING_COLUMNS, expense_id, fields)


def delete_recurring_expense(conn, expense_id):
    return _delete(conn, "recurring_expenses", expense_id)


def get_all_one_off_expenses(conn, active_only=False):
    query = "SELECT * FROM one_off_expenses"
    if active_only:
        query += " WHERE active = TRUE"
    query += " ORDER BY date, id"
    return rows_to_dicts(conn.execute(query))


def insert_one_off_expense(conn, name, amount, date, active=True):
    return row_to_dict(conn.execute(
        """
        INSERT INTO one_off_expenses (name, amount, date, active)
        VALUES (?, ?, ?, ?)
        RETURNING *
        """,
        (name, amount, date, active)
    ))


def update_one_off_expense(conn, expense_id, fields):
    return _update(conn, "one_off_expenses", ONE_OFF_COLUMNS, expense_id, fields)


def delete_one_off_expense(conn, expense_id):
    return _delete(conn, "one_off_expenses", expense_id)
