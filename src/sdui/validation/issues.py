"""Validation issue and report types."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Issue severity. Only ERROR makes a tree unusable."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationIssue:
    """One finding about one node."""

    message: str
    component_id: str | None = None
    field: str | None = None
    value: Any | None = None
    severity: Severity = Severity.ERROR
    suggestion: str | None = None
    path: str = ""

    def nested(self, segment: str, prefix: str) -> "ValidationIssue":
        """Re-home a child's issue under its parent position."""
        return replace(
            self,
            message=f"{prefix}{self.message}",
            path=f"{segment}.{self.path}" if self.path else segment,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "component_id": self.component_id,
            "field": self.field,
            "value": self.value,
            "severity": self.severity.value,
            "suggestion": self.suggestion,
            "path": self.path,
        }

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.message}"


@dataclass(frozen=True)
class ValidationReport:
    """Ordered issues from one validation run."""

    issues: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    @property
    def infos(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.INFO]

    @property
    def is_valid(self) -> bool:
        """True when no Error-severity issue was found."""
        return not any(i.severity is Severity.ERROR for i in self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self):
        return iter(self.issues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "info_count": len(self.infos),
            "issues": [issue.to_dict() for issue in self.issues],
        }
