"""
Repairs API — Input Validation
===============================

What:  Parses the raw pieces of a request (id text, body bytes, content type)
       into typed values.
How:   Every parser returns a ValidationResult: either `value` is set, or
       `error` holds a short reason. Routine bad input never raises here; the
       repair service decides which application exception a failure becomes.

    parse_repair_id("12")    → ValidationResult(value=12)
    parse_repair_id("abc")   → ValidationResult(error="'abc' is not an integer")
    parse_json_object(b"[]") → ValidationResult(error="expected a JSON object")
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from repairs_api.schemas.repair import RepairCreate, RepairUpdate

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")

# Far above any id the store will hand out, far below int()'s conversion limit
MAX_ID_DIGITS = 32


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Tagged success/failure of a single validation step."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult[T]":
        return cls(error=error)


def parse_repair_id(raw: Any) -> ValidationResult[int]:
    """
    Parse an id taken from a path segment or a JSON body.

    Accepts ints (not bools) and strings made only of an optional sign and
    at most MAX_ID_DIGITS ASCII digits, surrounding whitespace allowed.
    "12abc", "1.5", "" and non-ASCII digits such as "\u0661" are rejected.
    """
    if isinstance(raw, bool):
        return ValidationResult.failure(f"{raw!r} is not an integer")
    if isinstance(raw, int):
        return ValidationResult.success(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if _INTEGER_RE.match(text):
            if len(text.lstrip("+-")) > MAX_ID_DIGITS:
                return ValidationResult.failure(f"id of {len(text)} digits is too long")
            return ValidationResult.success(int(text))
        return ValidationResult.failure(f"{raw!r} is not an integer")
    if raw is None:
        return ValidationResult.failure("id is missing")
    return ValidationResult.failure(f"{type(raw).__name__} is not an integer")


def parse_json_object(raw: bytes) -> ValidationResult[Dict[str, Any]]:
    """Decode a request body that must be a single JSON object."""
    if not raw or not raw.strip():
        return ValidationResult.failure("body is empty")
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        return ValidationResult.failure(f"body is not valid JSON ({e})")
    if not isinstance(data, dict):
        return ValidationResult.failure("expected a JSON object")
    return ValidationResult.success(data)


def _validate_model(model: Type[ModelT], data: Dict[str, Any]) -> ValidationResult[ModelT]:
    if "id" in data:
        return ValidationResult.failure("id must not be supplied in the body")
    try:
        return ValidationResult.success(model.model_validate(data))
    except PydanticValidationError as e:
        return ValidationResult.failure(_describe(e))


def validate_create(data: Dict[str, Any]) -> ValidationResult[RepairCreate]:
    return _validate_model(RepairCreate, data)


def validate_update(data: Dict[str, Any]) -> ValidationResult[RepairUpdate]:
    return _validate_model(RepairUpdate, data)


def _describe(error: PydanticValidationError) -> str:
    # First problem only; e.g. "assignedTo: Field required"
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def is_json_content_type(content_type: Optional[str]) -> bool:
    """True for `application/json`, with or without parameters such as charset."""
    if not content_type:
        return False
    return "application/json" in content_type.lower()
