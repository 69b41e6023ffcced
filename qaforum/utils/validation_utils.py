from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)


@dataclass
class Validation(Generic[T]):
    """Outcome of checking untrusted input against a model: a value or an error."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate(model: type[T], data: Any, error: str) -> Validation[T]:
    try:
        return Validation(value=model.model_validate(data))
    except ValidationError:
        return Validation(error=error)


async def read_json(request: Request) -> Any:
    """Decode the request body, treating a missing or malformed body as ``None``."""
    try:
        return await request.json()
    except ValueError:
        return None
