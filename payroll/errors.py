"""Typed exceptions for the payroll engine.

Every exception carries a machine-readable ``code`` so callers can map a
failure to a user-facing message without parsing the text.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError


class PayrollError(Exception):
    """Base exception for all payroll engine errors."""

    code: str = "PAYROLL_ERROR"


class ValidationError(PayrollError, ValueError):
    """Input violates a precondition of a calculation."""

    code: str = "INVALID_INPUT"

    def __init__(self, message: str, code: str | None = None, field: str | None = None) -> None:
        if code is not None:
            self.code = code
        self.field = field
        super().__init__(message)


class RateSetNotFoundError(PayrollError, LookupError):
    """No rate set is configured for the requested year."""

    code: str = "RATE_SET_NOT_FOUND"

    def __init__(self, year: int, available: list[int]) -> None:
        self.year = year
        self.available = available
        listed = ", ".join(str(y) for y in available)
        super().__init__(f"Unknown tax year: {year}. Available: {listed}")


class RateTableError(PayrollError):
    """Rate configuration is malformed."""

    code: str = "RATE_TABLE_ERROR"


# pydantic error types that mean the date of birth could not be read
_DATE_ERROR_TYPES = {"date_parsing", "date_from_datetime_parsing", "date_type", "date_from_datetime_inexact"}


def from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """Translate the first pydantic error into a coded ValidationError."""
    error: dict[str, Any] = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    message = f"{field}: {error.get('msg', 'invalid value')}" if field else str(exc)

    if field == "date_of_birth" and error.get("type") in _DATE_ERROR_TYPES:
        return ValidationError(message, code="INVALID_DATE_OF_BIRTH", field=field)
    return ValidationError(message, field=field or None)
