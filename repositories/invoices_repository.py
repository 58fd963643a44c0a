from helpers.normalize import row_to_dict, rows_to_dicts

# -----------------------------
# Invoices Repository
# -----------------------------

INVOICE_SELECT = """
    SELECT i.id, i.number, i.recipient_id, r.name AS recipient_name,
           i.issue_date, i.due_date, i.status, i.notes,
           i.total_net, i.total_tax, i.total_gross, i.created_at
    FROM invoices i
    LEFT JOIN recipients r ON i.recipient_id = r.id
"""


def insert_invoice(conn, number, recipient_id, issue_date, due_date,
                   total_net, total_tax, total_gross, notes=None, items=()):
    """
    Inserts an invoice and its line items, positions numbered from 1.
    Returns the new invoice id.
    """
    try:
        invoice_id = conn.execute(
            """
            INSERT INTO invoices
            (number, recipient_id, issue_date, due_date, notes, total_net, total_tax, total_gross)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING id
            """,
            (number, recipient_id, issue_date, due_date, notes, total_net, total_tax, total_gross)
        ).fetchone()[0]
    except Exception as e:
        msg = str(e).lower()
        if "unique" in msg or "duplicate" in msg:
            raise ValueError(f"Invoice number {number} already exists")
        else:
            raise

    for position, item in enumerate(items, start=1):
        conn.execute(
            """
            INSERT INTO invoice_line_items
            (invoice_id, position, description, quantity, unit_price, tax_rate)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (invoice_id, position, item["description"], item["quantity"],
             item["unit_price"], item["tax_rate"])
        )

    return invoice_id


def get_invoice(conn, invoice_id):
    invoice = row_to_dict(conn.execute(INVOICE_SELECT + " WHERE i.id = ?", (invoice_id,)))
    if invoice:
        invoice["line_items"] = get_line_items(conn, invoice_id)
    return invoice


def get_line_items(conn, invoice_id):
    return rows_to_dicts(conn.execute(
        """
        SELECT id, position, description, quantity, unit_price, tax_rate
        FROM invoice_line_items
        WHERE invoice_id = ?
        ORDER BY position
        """,
        (invoice_id,)
    ))


def get_all_invoices(conn, limit=None):
    """
    Returns invoices newest first.
    - limit: optional, max number of rows
    """
    query = INVOICE_SELECT + " ORDER BY i.issue_date DESC, i.id DESC"
    params = []
    if limit:
        query += " LIMIT ?"
        params.append(limit)
    return rows_to_dicts(conn.execute(query, params))


def get_invoices_by_status(conn, statuses):
    """
    Returns invoices with one of the given statuses ordered by due date.
    """
    placeholders = ", ".join("?" for _ in statuses)
    return rows_to_dicts(conn.execute(
        f"""
        SELECT id, number, due_date, total_gross, status
        FROM invoices
        WHERE status IN ({placeholders})
        ORDER BY due_date, id
        """,
        list(statuses)
    ))


def count_invoices_issued_between(conn, start, end):
    return conn.execute(
        "SELECT COUNT(*) FROM invoices WHERE issue_date BETWEEN ? AND ?",
        (start, end)
    ).fetchone()[0]


def count_invoices_for_recipient(conn, recipient_id):
    return conn.execute(
        "SELECT COUNT(*) FROM invoices WHERE recipient_id = ?", (recipient_id,)
    ).fetchone()[0]


def get_invoice_stats(conn):
    count, gross = conn.execute(
        "SELECT COUNT(*), COALESCE(SUM(total_gross), 0) FROM invoices"
    ).fetchone()
    return {"count": count, "gross": gross}


def update_status(conn, invoice_id, status):
    """
    Updates the status of an invoice. Returns False if the id does not exist.
    """
    updated = conn.execute(
        "UPDATE invoices SET status = ? WHERE id = ? RETURNING id",
        (status, invoice_id)
    ).fetchone()
    return updated is not None


def delete_invoice(conn, invoice_id):
    conn.execute("DELETE FROM invoice_line_items WHERE invoice_id = ?", (invoice_id,))
    deleted = conn.execute(
        "DELETE FROM invoices WHERE id = ? RETURNING id", (invoice_id,)
    ).fetchone()
    return deleted is not None
