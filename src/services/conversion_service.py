"""
Conversion Service.
Maps source order rows onto a copy of the purchase order template.
"""
import io
import logging
import os
from typing import BinaryIO, Dict, List, Optional, Tuple
from openpyxl import load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.worksheet.worksheet import Worksheet
from src.core import config
from src.core.exceptions import (
    SourceUnreadableException,
    TemplateMissingException,
    UnreadableFileException
)
from src.models.conversion_result import ConversionOutput, RowError
from src.models.mapping_definition import MappingDefinition, MappingRule
from src.services.tabular_reader import TabularReader

logger = logging.getLogger(__name__)


class RowMappingError(Exception):
    """Raised when a single source row cannot be mapped."""
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class ConversionService:
    """Service that produces purchase order workbooks from source files."""

    def __init__(self, reader: Optional[TabularReader] = None, header_row: Optional[int] = None):
        self.reader = reader or TabularReader()
        self.header_row = header_row or config.settings.template_header_row

    def convert(
        self,
        source: BinaryIO,
        extension: str,
        template_path: str,
        mapping: MappingDefinition
    ) -> ConversionOutput:
        """
        Convert every source row into the template.

        A row that cannot be mapped is recorded as a RowError and skipped;
        the rest of the batch continues.

        Args:
            source: Uploaded source file
            extension: Source file extension
            template_path: Path of the template workbook, never modified
            mapping: Mapping definition to apply

        Returns:
            ConversionOutput with the generated workbook bytes

        Raises:
            TemplateMissingException: If the template cannot be located or opened
            SourceUnreadableException: If the source file cannot be read
            ValidationException: If the mapping rules are malformed
        """
        rules = mapping.resolve_rules()

        if not os.path.isfile(template_path):
            raise TemplateMissingException(
                "Purchase order template not found", details=os.path.basename(template_path)
            )
        try:
            workbook = load_workbook(template_path)
        except Exception as e:
            raise TemplateMissingException("Purchase order template could not be opened", details=str(e)) from e

        try:
            data = self.reader.read_all(source, extension)
        except UnreadableFileException as e:
            raise SourceUnreadableException("Uploaded file could not be read", details=e.details or e.message) from e

        worksheet = workbook.worksheets[0]
        columns = self._target_columns(worksheet, rules)

        errors: List[RowError] = []
        processed = 0
        total = 0
        next_row = self.header_row + 1
        for index, row in enumerate(data.rows, start=1):
            if not any(value.strip() for value in row.values()):
                continue
            total += 1
            try:
                values = self._map_row(row, rules)
            except RowMappingError as e:
                errors.append(RowError(row=index, field=e.field, message=e.message))
                continue

            for target, value in values.items():
                cell = worksheet.cell(row=next_row, column=columns[target], value=value)
                if isinstance(value, str):
                    cell.data_type = "s"
            next_row += 1
            processed += 1

        buffer = io.BytesIO()
        workbook.save(buffer)

        logger.info(
            "Converted %d of %d rows with mapping '%s' (%d errors)",
            processed, total, mapping.name, len(errors)
        )
        return ConversionOutput(
            content=buffer.getvalue(),
            processed_rows=processed,
            total_rows=total,
            errors=errors
        )

    def _target_columns(self, worksheet: Worksheet, rules: List[MappingRule]) -> Dict[str, int]:
        """Column index per target; targets missing from the header row are appended."""
        columns = {}
        last_column = 0
        for cell in worksheet[self.header_row]:
            if cell.value is None or str(cell.value).strip() == "":
                continue
            columns.setdefault(str(cell.value).strip(), cell.column)
            last_column = max(last_column, cell.column)

        for rule in rules:
            if rule.target not in columns:
                last_column += 1
                worksheet.cell(row=self.header_row, column=last_column, value=rule.target)
                columns[rule.target] = last_column
        return columns

    def _map_row(self, row: Dict[str, str], rules: List[MappingRule]) -> Dict[str, object]:
        values = {}
        for rule in rules:
            raw = row.get(rule.source)
            if raw is None or raw.strip() == "":
                if rule.required:
                    reason = "missing column" if raw is None else "empty value"
                    raise RowMappingError(rule.source, f"Required field '{rule.source}' is missing ({reason})")
                raw = rule.default
            if raw == "":
                continue
            value = self._apply_transform(rule, raw)
            if isinstance(value, str) and ILLEGAL_CHARACTERS_RE.search(value):
                raise RowMappingError(rule.source, f"Value in '{rule.source}' contains control characters")
            values[rule.target] = value
        return values

    @staticmethod
    def _apply_transform(rule: MappingRule, value: str):
        if rule.transform == 'trim':
            return value.strip()
        if rule.transform == 'upper':
            return value.upper()
        if rule.transform == 'lower':
            return value.lower()
        if rule.transform == 'number':
            number, ok = _parse_number(value)
            if not ok:
                raise RowMappingError(rule.source, f"'{value}' in '{rule.source}' is not a number")
            return number
        return value


def _parse_number(value: str) -> Tuple[object, bool]:
    text = value.strip().replace(",", "")
    try:
        return int(text), True
    except ValueError:
        pass
    try:
        return float(text), True
    except ValueError:
        return None, False
