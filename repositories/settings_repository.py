from helpers.normalize import row_to_dict

# -----------------------------
# Settings Repository
# -----------------------------

SETTINGS_ID = 1

SETTINGS_COLUMNS = (
    "starting_balance",
    "invoice_prefix",
    "override_invoice_start_number",
    "company_name",
    "person_name",
    "default_tax_rate",
)


def get_or_create_settings(conn):
    """
    Return the settings row, creating it with defaults if missing.
    """
    conn.execute(f"""
        INSERT INTO settings (id)
        SELECT {SETTINGS_ID}
        WHERE NOT EXISTS (SELECT 1 FROM settings WHERE id = {SETTINGS_ID});
    """)
    return row_to_dict(conn.execute("SELECT * FROM settings WHERE id = ?", (SETTINGS_ID,)))


def update_settings(conn, fields):
    """
    Upsert the settings row with the given columns; unknown keys are ignored.
    """
    get_or_create_settings(conn)
    changes = {k: v for k, v in fields.items() if k in SETTINGS_COLUMNS}
    if changes:
        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn.execute(
            f"UPDATE settings SET {assignments} WHERE id = ?",
            [*changes.values(), SETTINGS_ID]
        )
    return row_to_dict(conn.execute("SELECT * FROM settings WHERE id = ?", (SETTINGS_ID,)))
