"""
Validation result domain model.
"""
from typing import Dict, List, Optional


class ValidationResult:
    """Outcome of checking a preview for expected order fields."""

    def __init__(
        self,
        errors: Optional[List[str]] = None,
        warnings: Optional[List[str]] = None,
        matched_fields: Optional[Dict[str, str]] = None
    ):
        self.errors = errors or []
        self.warnings = warnings or []
        self.matched_fields = matched_fields or {}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __repr__(self):
        return f"ValidationResult(is_valid={self.is_valid}, errors={len(self.errors)}, warnings={len(self.warnings)})"
