from fastapi import FastAPI

from db import init_db
from routes import dashboard, forecast, invoices, planner, recipients, settings

app = FastAPI(title="Invoice Planner")


@app.on_event("startup")
def startup():
    init_db()


app.include_router(dashboard.router)
app.include_router(forecast.router)
app.include_router(planner.router)
app.include_router(invoices.router)
app.include_router(recipients.router)
app.include_router(settings.router)
