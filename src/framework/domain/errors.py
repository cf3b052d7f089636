"""Domain errors shared by every bounded context.

Validation is batch-oriented: checks append FieldError entries to a
FieldErrorCollector and a single FieldValidationError is raised once all
checks have run, so a client can render every problem in one round trip.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class FieldError:
    """A single validation failure scoped to a request field (e.g. ``options[2].tolls``)."""

    field: str
    code: str
    message: str
    value: Any = None

    def with_prefix(self, prefix: str) -> "FieldError":
        """Return a copy whose field path is nested under ``prefix``."""
        return FieldError(f"{prefix}.{self.field}", self.code, self.message, self.value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FieldValidationError(Exception):
    """Aggregated validation failure carrying every collected FieldError."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")

    @property
    def codes(self) -> List[str]:
        return [e.code for e in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": "Validation failed",
            "errors": [e.to_dict() for e in self.errors],
        }


class NotFoundError(Exception):
    """Raised when a requested aggregate does not exist."""


class OperationFailedError(Exception):
    """Unrecoverable failure while applying changes to the store.

    The surrounding transaction has been rolled back when this is raised.
    """


class FieldErrorCollector:
    """Accumulates field errors and raises them all at once."""

    def __init__(self) -> None:
        self._errors: List[FieldError] = []

    def add_error(self, field: str, code: str, message: str, value: Any = None) -> None:
        self._errors.append(FieldError(field, code, message, value))

    def extend(self, errors: Iterable[FieldError], prefix: Optional[str] = None) -> None:
        for error in errors:
            self._errors.append(error.with_prefix(prefix) if prefix else error)

    @property
    def errors(self) -> List[FieldError]:
        return list(self._errors)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def throw_if_errors(self) -> None:
        if self._errors:
            raise FieldValidationError(self._errors)
