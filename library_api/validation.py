"""
Request Validation

validate_request() builds a FastAPI dependency that checks parts of the
incoming request against pydantic models, in the order given:

    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request(
            (IdParams, RequestPart.PARAMS),
            (SubjectUpdate, RequestPart.BODY),
        )),
    ]

Rules:
- Each part is validated in lax mode, so query strings like "2" or
  "true" are coerced to int/bool and defaults are filled in.
- Every field error of the failing part is reported, joined with ", ".
- A query key given more than once arrives as a list, so a single-value
  field rejects it instead of silently keeping the last value.
- The first failing part ends the request with a 400 envelope; later
  parts are not looked at and the route handler never runs.
- Validated models replace the raw values: they are returned to the
  handler and stored on request.state.validated.
"""

import json
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import Request
from pydantic import BaseModel, ValidationError

from library_api.exceptions import RequestValidationFailed

# Location prefixes FastAPI adds to its own validation errors
_FRAMEWORK_LOCATIONS = {"body", "query", "path", "header", "cookie"}


class RequestPart(str, Enum):
    """Which part of the request a schema applies to."""

    PARAMS = "params"
    QUERY = "query"
    BODY = "body"


@dataclass
class ValidatedRequest:
    """Validated (and coerced) request parts, None where not validated."""

    params: Any = None
    query: Any = None
    body: Any = None


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> str:
    """
    Render pydantic/FastAPI errors as one message.

    Example:
        '"name" string should have at least 3 characters, "review" field required'
    """
    messages = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _FRAMEWORK_LOCATIONS:
            location = location[1:]

        message = str(error.get("msg", "is invalid"))
        message = message.removeprefix("Value error, ")
        message = message[:1].lower() + message[1:]

        if location:
            messages.append(f'"{".".join(location)}" {message}')
        else:
            messages.append(message)
    return ", ".join(messages)


def _query_values(request: Request) -> dict[str, Any]:
    """Query string as a dict; a repeated key keeps all of its values as a list."""
    values: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        if key not in values:
            values[key] = value
        elif isinstance(values[key], list):
            values[key].append(value)
        else:
            values[key] = [values[key], value]
    return values


async def _read_part(request: Request, part: RequestPart) -> Any:
    if part is RequestPart.PARAMS:
        return dict(request.path_params)
    if part is RequestPart.QUERY:
        return _query_values(request)

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise RequestValidationFailed("Request body must be valid JSON.") from None


def validate_request(
    *rules: tuple[type[BaseModel], RequestPart],
) -> Callable[[Request], Awaitable[ValidatedRequest]]:
    """
    Create a dependency validating request parts in order.

    Args:
        rules: (schema, part) pairs, checked first to last

    Returns:
        Async dependency returning a ValidatedRequest

    Raises (from the dependency):
        RequestValidationFailed: on the first part that does not validate
    """

    async def dependency(request: Request) -> ValidatedRequest:
        validated = ValidatedRequest()

        for schema, part in rules:
            raw = await _read_part(request, part)
            try:
                value = schema.model_validate(raw)
            except ValidationError as exc:
                raise RequestValidationFailed(format_validation_errors(exc.errors())) from exc
            setattr(validated, part.value, value)

        request.state.validated = validated
        return validated

    return dependency
