import os

# -----------------------------
# Runtime configuration
# -----------------------------
DB_FILE = os.getenv("PLANNER_DB_FILE", "planner.duckdb")
LOG_FILE = os.getenv("PLANNER_LOG_FILE", "planner.log")

# Number of months the planner projects forward, starting with the current one
FORECAST_MONTHS = int(os.getenv("PLANNER_FORECAST_MONTHS", "12"))

# Invoices without an explicit due date are due this many days after issue
INVOICE_DUE_DAYS = int(os.getenv("PLANNER_INVOICE_DUE_DAYS", "14"))
INVOICE_PREFIX = os.getenv("PLANNER_INVOICE_PREFIX", "RE")

# Upper bound accepted for the forecast horizon over the API
MAX_FORECAST_MONTHS = int(os.getenv("PLANNER_MAX_FORECAST_MONTHS", "600"))
