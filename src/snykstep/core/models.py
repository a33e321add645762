from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class Severity(str, Enum):
    """Snyk severity levels, lowest first.

    The declaration order is the order shown in the severity dropdown.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def get_if_present(cls, value: Optional[str]) -> Optional["Severity"]:
        """Look up a severity by its value, ignoring case and whitespace.

        Returns None for missing or unrecognized input instead of raising.
        """
        if value is None:
            return None
        normalized = str(value).strip().lower()
        for severity in cls:
            if severity.value == normalized:
                return severity
        return None


DEFAULT_SEVERITY = Severity.LOW


class ValidationKind(str, Enum):
    """Outcome of a form field check."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class FormValidation:
    """Field-level validation result reported back to the UI.

    Validation callbacks return these instead of raising.
    """

    kind: ValidationKind
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "FormValidation":
        return cls(ValidationKind.OK)

    @classmethod
    def warning(cls, message: str) -> "FormValidation":
        return cls(ValidationKind.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "FormValidation":
        return cls(ValidationKind.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind == ValidationKind.OK

    @property
    def is_error(self) -> bool:
        return self.kind == ValidationKind.ERROR


@dataclass
class Option:
    """A single dropdown entry."""

    name: str
    value: str
    selected: bool = False


@dataclass
class ListBoxModel:
    """Ordered dropdown options for a form field."""

    options: List[Option] = field(default_factory=list)

    def add(self, name: str, value: Optional[str] = None) -> "ListBoxModel":
        """Append an option. The value defaults to the display name."""
        self.options.append(Option(name=name, value=name if value is None else value))
        return self

    def contains(self, value: str) -> bool:
        return any(option.value == value for option in self.options)

    def values(self) -> List[str]:
        return [option.value for option in self.options]

    def names(self) -> List[str]:
        return [option.name for option in self.options]

    def __iter__(self) -> Iterator[Option]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)
