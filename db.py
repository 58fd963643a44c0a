import duckdb
import logging

import config

# -----------------------------
# Logging
# -----------------------------
logging.basicConfig(
    filename=config.LOG_FILE,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)

def log_info(msg):
    logging.info(msg)
    print(msg)

def log_error(msg):
    logging.error(msg)
    print(msg)

# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection to the configured database file.
    """
    return duckdb.connect(config.DB_FILE)

# -----------------------------
# Initialize database schema
# -----------------------------
SEQUENCES = (
    "recipients_id_seq",
    "invoices_id_seq",
    "invoice_line_items_id_seq",
    "recurring_expenses_id_seq",
    "one_off_expenses_id_seq",
)

def init_db():
    conn = get_db()
    try:
        for seq in SEQUENCES:
            conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {seq} START 1")

        # Recipients table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS recipients (
            id INTEGER PRIMARY KEY DEFAULT nextval('recipients_id_seq'),
            name VARCHAR NOT NULL,
            company VARCHAR,
            email VARCHAR,
            street VARCHAR,
            postal_code VARCHAR,
            city VARCHAR,
            country VARCHAR NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Recipients table ensured.")

        # Invoices table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS invoices (
            id INTEGER PRIMARY KEY DEFAULT nextval('invoices_id_seq'),
            number VARCHAR NOT NULL UNIQUE,
            recipient_id INTEGER NOT NULL,
            issue_date DATE NOT NULL,
            due_date DATE NOT NULL,
            status VARCHAR NOT NULL DEFAULT 'DRAFT'
                CHECK(status IN ('DRAFT','SENT','PAID','CANCELLED')),
            notes TEXT,
            total_net DECIMAL(12,2) NOT NULL,
            total_tax DECIMAL(12,2) NOT NULL,
            total_gross DECIMAL(12,2) NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Invoices table ensured.")

        # Invoice line items table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS invoice_line_items (
            id INTEGER PRIMARY KEY DEFAULT nextval('invoice_line_items_id_seq'),
            invoice_id INTEGER NOT NULL,
            position INTEGER NOT NULL,
            description TEXT NOT NULL,
            quantity DECIMAL(12,3) NOT NULL,
            unit_price DECIMAL(12,2) NOT NULL,
            tax_rate DECIMAL(5,2) NOT NULL
        );
        """)
        log_info("Invoice line items table ensured.")

        # Recurring monthly expenses table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS recurring_expenses (
            id INTEGER PRIMARY KEY DEFAULT nextval('recurring_expenses_id_seq'),
            name VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL,
            day_of_month INTEGER NOT NULL CHECK(day_of_month BETWEEN 1 AND 31),
            first_occurrence DATE NOT NULL,
            active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Recurring expenses table ensured.")

        # One-off expenses table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS one_off_expenses (
            id INTEGER PRIMARY KEY DEFAULT nextval('one_off_expenses_id_seq'),
            name VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL,
            date DATE NOT NULL,
            active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("One-off expenses table ensured.")

        # Settings table (single row, id = 1)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS settings (
            id INTEGER PRIMARY KEY,
            starting_balance DECIMAL(12,2) DEFAULT 0,
            invoice_prefix VARCHAR,
            override_invoice_start_number INTEGER DEFAULT 1,
            company_name VARCHAR,
            person_name VARCHAR,
            default_tax_rate DECIMAL(5,2)
        );
        """)
        log_info("Settings table ensured.")

        # Indexes
        conn.execute("CREATE INDEX IF NOT EXISTS idx_line_items_invoice ON invoice_line_items(invoice_id);")
        log_info("Indexes created/ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log_info("Database setup complete and connection closed.")
