# helpers/responses.py
import logging

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str):
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def handle_service_error(exc: Exception, action: str):
    """
    Map a service exception onto the JSON error shape:
    LookupError -> 404, ValueError -> 400, anything else -> 500 (logged)
    """
    if isinstance(exc, LookupError):
        return error_response(404, str(exc))
    if isinstance(exc, ValueError):
        return error_response(400, str(exc))
    logger.exception("Failed to %s", action)
    return error_response(500, f"Failed to {action}")
