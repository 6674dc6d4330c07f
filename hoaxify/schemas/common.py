"""Shared schemas and field types."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator


def coerce_scalar(value: Any) -> Any:
    """Numbers and booleans arrive in their string form; anything else is left for the field validators."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


# Request text field: accepts any JSON value so validation.py decides the message
TextField = Annotated[Any, BeforeValidator(coerce_scalar)]


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    timestamp: int
    path: str
    validationErrors: dict[str, str] | None = None
