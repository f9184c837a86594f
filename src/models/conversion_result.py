"""
Conversion domain models.
Row-level errors and the outcome of generating a purchase order.
"""
from typing import List, Optional


class RowError:
    """A source row that could not be mapped."""

    def __init__(self, row: int, message: str, field: Optional[str] = None):
        self.row = row
        self.message = message
        self.field = field

    def __repr__(self):
        return f"RowError(row={self.row}, field={self.field}, message={self.message})"


class ConversionOutput:
    """Generated workbook content produced by the converter, not yet stored."""

    def __init__(self, content: bytes, processed_rows: int, total_rows: int, errors: List[RowError]):
        self.content = content
        self.processed_rows = processed_rows
        self.total_rows = total_rows
        self.errors = errors


class ConversionResult:
    """A stored, generated purchase order."""

    def __init__(self, file_name: str, processed_rows: int, total_rows: int, errors: List[RowError]):
        self.file_name = file_name
        self.processed_rows = processed_rows
        self.total_rows = total_rows
        self.errors = list(errors)

    def __repr__(self):
        return (
            f"ConversionResult(file_name={self.file_name}, processed_rows={self.processed_rows}, "
            f"errors={len(self.errors)})"
        )
