"""Validation result types shared by model and relationship validation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: Optional[str] = None
    element_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "elementId": self.element_id,
        }


@dataclass(frozen=True)
class ValidationWarning:
    code: str
    message: str
    field: Optional[str] = None
    element_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "elementId": self.element_id,
        }


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a validation run.

    `summary` is only filled for relationship-set validation, where it holds
    the relationship count per category.
    """
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)

    def error_codes(self) -> List[str]:
        return [error.code for error in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "isValid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }
        if self.summary:
            data["validationSummary"] = dict(self.summary)
        return data
