"""
Application error taxonomy.

Services raise these; ``main.create_app`` maps them onto HTTP responses. The
messages are safe to show to clients and never carry storage-level detail.
"""

from __future__ import annotations

from typing import Any

from fastapi import status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

REQUEST_SECTIONS = ("body", "path", "query", "cookie", "header")


class AppError(Exception):
    """Base class for errors that are reported to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message}


class ValidationError(AppError):
    """Caller input failed validation; carries one entry per offending field."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]], message: str | None = None):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def from_pydantic(
        cls, exc: PydanticValidationError, model: type[BaseModel] | None = None
    ) -> ValidationError:
        return cls(field_errors(exc.errors(), model))

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class DuplicateEmail(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email is already registered"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _public_name(name: str, model: type[BaseModel] | None) -> str:
    if model is not None and name in model.model_fields:
        return model.model_fields[name].alias or name
    return to_camel(name) if "_" in name else name


def field_errors(
    errors: list[dict[str, Any]], model: type[BaseModel] | None = None
) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``[{"field", "message"}]`` items.

    Body fields are reported under their camelCase name whichever key the
    client sent; path and query parameters keep their declared name.
    """
    items = []
    for error in errors:
        loc = list(error.get("loc", ()))
        section = loc.pop(0) if loc and loc[0] in REQUEST_SECTIONS else "body"
        parts = [str(part) for part in loc]
        if parts and section == "body":
            parts[0] = _public_name(parts[0], model)
        items.append(
            {
                "field": ".".join(parts) or "__root__",
                "message": error.get("msg", "Invalid value"),
            }
        )
    return items
