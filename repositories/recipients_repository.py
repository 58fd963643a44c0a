from helpers.normalize import row_to_dict, rows_to_dicts

# -----------------------------
# Recipients Repository
# -----------------------------


def insert_recipient(conn, name, country, company=None, email=None,
                     street=None, postal_code=None, city=None):
    return row_to_dict(conn.execute(
        """
        INSERT INTO recipients (name, company, email, street, postal_code, city, country)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        RETURNING *
        """,
        (name, company, email, street, postal_code, city, country)
    ))


def get_recipient(conn, recipient_id):
    return row_to_dict(conn.execute(
        "SELECT * FROM recipients WHERE id = ?", (recipient_id,)
    ))


def list_recipients(conn):
    """Return all recipients, newest first."""
    return rows_to_dicts(conn.execute(
        "SELECT * FROM recipients ORDER BY created_at DESC, id DESC"
    ))


def delete_recipient(conn, recipient_id):
    deleted = conn.execute(
        "DELETE FROM recipients WHERE id = ? RETURNING id", (recipient_id,)
    ).fetchone()
    return deleted is not None
