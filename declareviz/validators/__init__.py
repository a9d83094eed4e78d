"""Non-blocking lint for Declare models."""

from .base import Severity, ValidationIssue, ValidationResult
from .constraint_kinds import check_constraint_kinds
from .reference_integrity import check_reference_integrity
from .runner import check_model_file, run_checks

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_constraint_kinds",
    "check_reference_integrity",
    "check_model_file",
    "run_checks",
]
