"""Recursive validation of component trees."""

from .issues import Severity, ValidationIssue, ValidationReport
from .validator import (
    ComponentValidator,
    default_validator,
    validate,
    validate_all,
    is_valid,
)

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "ComponentValidator",
    "default_validator",
    "validate",
    "validate_all",
    "is_valid",
]
