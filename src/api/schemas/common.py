"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FieldError(BaseModel):
    """One field-level validation problem."""

    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None
    errors: list[FieldError] | None = None


def reject_explicit_nulls(values: Any, fields: frozenset[str]) -> Any:
    """Refuse ``null`` for fields that may be omitted but never cleared."""
    if not isinstance(values, dict):
        return values
    for key, value in values.items():
        name = key if key in fields else _snake(key)
        if name in fields and value is None:
            raise ValueError(f"{key} cannot be null")
    return values


def _snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)
