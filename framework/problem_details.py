"""
Problem details (RFC 9457) for error responses.
"""

from http import HTTPStatus
from typing import Dict, List, Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from framework.logging.logger import get_logger

logger = get_logger("problem_details")

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

DEFAULT_STATUS = 500
DEFAULT_TITLE = "An error occurred while processing your request."
VALIDATION_TITLE = "One or more validation errors occurred."

REQUEST_ID_EXTENSION = "requestId"
TRACE_ID_EXTENSION = "traceId"

_RFC9110 = "https://datatracker.ietf.org/doc/html/rfc9110#section-"

# Status code -> section of RFC 9110 defining its semantics
HTTP_STATUS_TYPE_URIS: Dict[int, str] = {
    # 4xx
    400: _RFC9110 + "15.5.1",
    401: _RFC9110 + "15.5.2",
    402: _RFC9110 + "15.5.3",
    403: _RFC9110 + "15.5.4",
    404: _RFC9110 + "15.5.5",
    405: _RFC9110 + "15.5.6",
    406: _RFC9110 + "15.5.7",
    407: _RFC9110 + "15.5.8",
    408: _RFC9110 + "15.5.9",
    409: _RFC9110 + "15.5.10",
    410: _RFC9110 + "15.5.11",
    411: _RFC9110 + "15.5.12",
    412: _RFC9110 + "15.5.13",
    413: _RFC9110 + "15.5.14",
    414: _RFC9110 + "15.5.15",
    415: _RFC9110 + "15.5.16",
    416: _RFC9110 + "15.5.17",
    417: _RFC9110 + "15.5.18",
    418: _RFC9110 + "15.5.19",
    421: _RFC9110 + "15.5.20",
    422: _RFC9110 + "15.5.21",
    426: _RFC9110 + "15.5.22",
    # 5xx
    500: _RFC9110 + "15.6.1",
    501: _RFC9110 + "15.6.2",
    502: _RFC9110 + "15.6.3",
    503: _RFC9110 + "15.6.4",
    504: _RFC9110 + "15.6.5",
    505: _RFC9110 + "15.6.6",
}


class ProblemDetails(BaseModel):
    """Problem document; extra keys are serialized as extension members."""

    model_config = ConfigDict(extra="allow")

    type: str
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None


class ValidationProblemDetails(ProblemDetails):
    errors: Dict[str, List[str]] = Field(default_factory=dict)


class ProblemDetailsFactory:
    """Builds problem documents with defaults derived from the request."""

    def create_problem_details(
        self,
        request: Request,
        status_code: Optional[int] = None,
        title: Optional[str] = None,
        type: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ) -> ProblemDetails:
        if request is None:
            raise ValueError("request must not be None")

        problem = ProblemDetails(
            **self._members(request, status_code, title, type, detail, instance),
            **self._extensions(request),
        )
        logger.debug(f"Created ProblemDetails: {problem.model_dump_json(exclude_none=True)}")
        return problem

    def create_validation_problem_details(
        self,
        request: Request,
        errors: Dict[str, List[str]],
        status_code: int = 400,
        title: Optional[str] = None,
        type: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ) -> ValidationProblemDetails:
        if request is None:
            raise ValueError("request must not be None")
        if errors is None:
            raise ValueError("errors must not be None")

        problem = ValidationProblemDetails(
            **self._members(request, status_code, title or VALIDATION_TITLE, type, detail, instance),
            errors={field: list(messages) for field, messages in errors.items()},
            **self._extensions(request),
        )
        logger.debug(f"Created ValidationProblemDetails: {problem.model_dump_json(exclude_none=True)}")
        return problem

    @staticmethod
    def to_response(problem: ProblemDetails, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
        return JSONResponse(
            status_code=problem.status,
            content=problem.model_dump(mode="json", exclude_none=True),
            media_type=PROBLEM_JSON_MEDIA_TYPE,
            headers=headers,
        )

    @staticmethod
    def _members(request, status_code, title, type, detail, instance) -> dict:
        status = status_code or DEFAULT_STATUS
        if title is None:
            title = DEFAULT_TITLE if status == DEFAULT_STATUS else _status_phrase(status)
        if type is None:
            type = HTTP_STATUS_TYPE_URIS.get(status, HTTP_STATUS_TYPE_URIS[400])
        if instance is None:
            instance = f"{request.method} {request.url.path}"
        return {"type": type, "title": title, "status": status, "detail": detail, "instance": instance}

    @staticmethod
    def _extensions(request: Request) -> dict:
        return {
            REQUEST_ID_EXTENSION: getattr(request.state, "request_id", None),
            TRACE_ID_EXTENSION: getattr(request.state, "trace_id", None),
        }


def _status_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return DEFAULT_TITLE


problem_details_factory = ProblemDetailsFactory()


def problem_response(request: Request, status_code: int, detail: Optional[str] = None) -> JSONResponse:
    """Shortcut for handlers returning a plain problem (e.g. 404)."""
    problem = problem_details_factory.create_problem_details(request, status_code=status_code, detail=detail)
    return problem_details_factory.to_response(problem)


def validation_problem_response(
    request: Request, errors: Dict[str, List[str]], detail: Optional[str] = None
) -> JSONResponse:
    problem = problem_details_factory.create_validation_problem_details(request, errors, detail=detail)
    return problem_details_factory.to_response(problem)
