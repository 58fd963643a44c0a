from fastapi import APIRouter, Query
from datetime import date
from typing import Optional
import config
from helpers.responses import error_response, handle_service_error
from services.projection_service import calculate_monthly_projection
from services.forecast_dto import ForecastResponseDTO

router = APIRouter()


@router.get("/forecast")
def get_monthly_forecast(
    months: Optional[int] = Query(None, le=config.MAX_FORECAST_MONTHS),
    as_of_date: Optional[str] = Query(None),
):
    """
    Return a deterministic month-by-month balance projection.

    Query Parameters:
        months (optional): Horizon in months, current month first.
                           Defaults to the configured horizon; 0 or less returns no entries.
                           Capped at MAX_FORECAST_MONTHS.
        as_of_date (optional): Reference date in ISO format (YYYY-MM-DD).
                              Defaults to today if not provided.

    Returns:
        ForecastResponseDTO: JSON with one entry per month (month end, balance,
        income, expenses, ordered transactions). Amounts are two-decimal strings.

    Read-only; recomputed from stored data on every request.
    """
    if as_of_date:
        try:
            as_of = date.fromisoformat(as_of_date)
        except ValueError:
            return error_response(400, "Invalid date format. Use YYYY-MM-DD.")
    else:
        as_of = None

    try:
        starting_balance, forecast = calculate_monthly_projection(months=months, as_of_date=as_of)
    except Exception as e:
        return handle_service_error(e, "compute forecast")

    return ForecastResponseDTO.from_forecast(starting_balance, forecast).to_dict()
