from __future__ import annotations

"""
Request body helpers.

Bodies are accepted as raw JSON and only then read into the request models,
so a wrongly shaped body (an array, a string where an object was expected)
reaches the service as "nothing supplied" instead of failing parsing.
"""

from typing import Any, Optional, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_body(model: Type[ModelT], body: Any) -> Optional[ModelT]:
    """Read a JSON object into `model`; None when `body` is not an object.

    Typed fields that do not validate are reported as a malformed request.
    """
    if isinstance(body, model):
        return body
    if not isinstance(body, dict):
        return None
    try:
        return model.model_validate(body)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


def as_text(value: Any) -> Optional[str]:
    """`value` when it is a non-empty string, else None."""
    if isinstance(value, str) and value:
        return value
    return None


__all__ = ["parse_body", "as_text"]
