"""Response helpers shared by the catalog routers."""

from typing import Optional
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from framework.problem_details import validation_problem_response

KEY_MISMATCH_MESSAGE = "The specified key '{0}' does not match the entity key '{1}'."

# Documented alternative responses for OpenAPI
NO_CONTENT = {204: {"description": "No matching entities"}}
NOT_FOUND = {404: {"description": "Entity does not exist or is hidden"}}


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def key_mismatch(request: Request, key: int, entity_key: Optional[int]) -> Optional[JSONResponse]:
    """Validation problem when the body id disagrees with the path id; None when they match or body has no id."""
    if entity_key is None or entity_key == key:
        return None

    message = KEY_MISMATCH_MESSAGE.format(key, entity_key)
    return validation_problem_response(request, {"id": [message]}, detail=message)
