"""Base classes for lint results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a lint issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single lint issue."""

    code: str
    message: str
    severity: Severity
    activity: str | None = None
    constraint_index: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        location = ""
        if self.activity:
            location = f" [{self.activity}]"
        elif self.constraint_index is not None:
            location = f" [#{self.constraint_index}]"
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class ValidationResult:
    """Result of running the lint on a model."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[ValidationIssue]:
        """Get all info-level issues."""
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """Check if the model is valid (no errors)."""
        return not self.has_errors

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def _add(
        self,
        severity: Severity,
        code: str,
        message: str,
        activity: str | None,
        constraint_index: int | None,
        details: dict[str, Any],
    ) -> None:
        self.issues.append(
            ValidationIssue(
                code=code,
                message=message,
                severity=severity,
                activity=activity,
                constraint_index=constraint_index,
                details=details,
            )
        )

    def add_error(
        self,
        code: str,
        message: str,
        activity: str | None = None,
        constraint_index: int | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue."""
        self._add(Severity.ERROR, code, message, activity, constraint_index, details)

    def add_warning(
        self,
        code: str,
        message: str,
        activity: str | None = None,
        constraint_index: int | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self._add(Severity.WARNING, code, message, activity, constraint_index, details)

    def add_info(
        self,
        code: str,
        message: str,
        activity: str | None = None,
        constraint_index: int | None = None,
        **details: Any,
    ) -> None:
        """Add an informational issue."""
        self._add(Severity.INFO, code, message, activity, constraint_index, details)

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)
