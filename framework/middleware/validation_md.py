from typing import Dict, List, Tuple
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from framework.config import settings
from framework.logging.logger import get_logger
from framework.problem_details import validation_problem_response

logger = get_logger("validation_middleware")

INT32_MAX = 2_147_483_647
INVALID_VALUE_MESSAGE = "The value '{0}' is not valid."


def allowed_query_ranges() -> Dict[str, Tuple[int, int]]:
    """Inclusive bounds for integer query parameters checked on every request."""
    return {
        "limit": (1, settings.MAX_ITEMS_PER_PAGE),
        "offset": (0, INT32_MAX),
    }


def validate_query_params(query_params) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for key, (minimum, maximum) in allowed_query_ranges().items():
        if key not in query_params:
            continue

        raw_value = query_params.get(key)
        try:
            value = int(raw_value)
        except (TypeError, ValueError):
            value = None

        if value is None or not (minimum <= value <= maximum):
            errors.setdefault(key, []).append(INVALID_VALUE_MESSAGE.format(raw_value or ""))
    return errors


class QueryValidationMiddleware(BaseHTTPMiddleware):
    """Rejects out-of-range `limit` / `offset` query parameters before routing."""

    async def dispatch(self, request: Request, call_next):
        errors = validate_query_params(request.query_params)
        if errors:
            logger.warning(f"Rejected query parameters | Path: {request.url.path} | Errors: {errors}")
            return validation_problem_response(request, errors)

        return await call_next(request)
