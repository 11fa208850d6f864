from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from framework.logging.logger import get_logger, format_route, action_name
from framework.problem_details import problem_details_factory
from framework.exceptions.errors import ModelValidationException

logger = get_logger("exception_handler")


def request_validation_errors(exc: RequestValidationError) -> dict:
    """Group FastAPI validation errors by field, dropping the body/query/path prefix."""
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        field = ".".join(loc) or "__root__"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler: converts every failure into a problem response."""
    factory = problem_details_factory

    if isinstance(exc, ModelValidationException):
        logger.warning(f"ValidationError | Action: {action_name(request)} | Errors: {exc.errors}")
        problem = factory.create_validation_problem_details(request, exc.errors)
        return factory.to_response(problem)

    if isinstance(exc, RequestValidationError):
        errors = request_validation_errors(exc)
        logger.warning(f"ValidationError | Action: {action_name(request)} | Errors: {errors}")
        problem = factory.create_validation_problem_details(request, errors)
        return factory.to_response(problem)

    if isinstance(exc, StarletteHTTPException):
        logger.info(f"HTTPException | Route: {format_route(request)} | Status: {exc.status_code}")
        detail = exc.detail if isinstance(exc.detail, str) else None
        problem = factory.create_problem_details(request, status_code=exc.status_code, detail=detail)
        return factory.to_response(problem, headers=getattr(exc, "headers", None))

    if isinstance(exc, SQLAlchemyError):
        logger.opt(exception=exc).critical(
            f"DatabaseError while executing Action: {action_name(request)} | Route: {format_route(request)}"
        )
        problem = factory.create_problem_details(request, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return factory.to_response(problem)

    logger.opt(exception=exc).error(
        f"Unhandled exception while executing Action: {action_name(request)} | "
        f"Route: {format_route(request)} | Exception: {exc!r}"
    )
    problem = factory.create_problem_details(request, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return factory.to_response(problem)
