"""
Validation Service for order file previews.
Checks headers for expected order fields and flags structural problems.
"""
import logging
from collections import Counter
from typing import Dict, List, Optional
from src.core import config
from src.models.validation_result import ValidationResult

logger = logging.getLogger(__name__)

MATCH_EXACT = "exact"
MATCH_CONTAINS = "contains"


def _normalize(text: str) -> str:
    return "".join(text.split()).lower()


class ValidationService:
    """Service for validating previewed order data."""

    def __init__(
        self,
        expected_fields: Optional[Dict[str, List[str]]] = None,
        match_mode: Optional[str] = None
    ):
        self.expected_fields = (
            expected_fields if expected_fields is not None else config.settings.expected_order_fields
        )
        self.match_mode = (match_mode or config.settings.field_match_mode).lower()

    def validate(self, headers: List[str], rows: List[Dict[str, str]]) -> ValidationResult:
        """
        Validate headers and preview rows. Never raises.

        Args:
            headers: Header labels in file order
            rows: Preview rows keyed by header

        Returns:
            ValidationResult with errors, warnings and matched fields
        """
        result = ValidationResult()

        if not headers:
            result.errors.append("No header row found")
            return result

        for field, aliases in self.expected_fields.items():
            header = self._find_header(headers, [field] + list(aliases))
            if header is None:
                result.errors.append(f"Missing required column: {field}")
            else:
                result.matched_fields[field] = header

        duplicates = [header for header, count in Counter(headers).items() if count > 1]
        if duplicates:
            result.warnings.append(f"Duplicate columns: {', '.join(duplicates)}")

        if not rows:
            result.warnings.append("No data rows found")
        else:
            empty_rows = [
                str(index) for index, row in enumerate(rows, start=1)
                if not any(value.strip() for value in row.values())
            ]
            if empty_rows:
                result.warnings.append(f"Empty rows: {', '.join(empty_rows)}")

        logger.debug("Validated %d headers: %s", len(headers), result)
        return result

    def _find_header(self, headers: List[str], patterns: List[str]) -> Optional[str]:
        normalized = [(header, _normalize(header)) for header in headers]
        for pattern in patterns:
            target = _normalize(pattern)
            if not target:
                continue
            for header, key in normalized:
                if key == target:
                    return header
            if self.match_mode == MATCH_CONTAINS:
                for header, key in normalized:
                    if target in key:
                        return header
        return None
