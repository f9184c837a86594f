"""
Tabular Reader for order files.
Parses CSV and Excel content into headers and header-keyed string rows.
"""
import csv
import io
import logging
from datetime import date, datetime, time
from typing import BinaryIO, Dict, List, Optional
from openpyxl import load_workbook
from src.core import config
from src.core.exceptions import UnreadableFileException
from src.models.tabular_data import TabularData

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {'.csv'}
EXCEL_EXTENSIONS = {'.xlsx', '.xls'}


class TabularReader:
    """Reads order files into TabularData."""

    def __init__(self, preview_row_limit: Optional[int] = None):
        self.preview_row_limit = preview_row_limit or config.settings.preview_row_limit

    def read_preview(self, file: BinaryIO, extension: str) -> TabularData:
        """Read the header and at most preview_row_limit data rows."""
        return self.read(file, extension, max_rows=self.preview_row_limit)

    def read_all(self, file: BinaryIO, extension: str) -> TabularData:
        """Read the header and every data row."""
        return self.read(file, extension, max_rows=None)

    def read(self, file: BinaryIO, extension: str, max_rows: Optional[int] = None) -> TabularData:
        """
        Parse a CSV or Excel file.

        Args:
            file: Binary file object positioned at the start
            extension: Lower-case extension including the dot
            max_rows: Maximum data rows to return, None for all

        Returns:
            TabularData with headers and rows

        Raises:
            UnreadableFileException: If the file cannot be opened or parsed
        """
        extension = extension.lower()
        if extension in CSV_EXTENSIONS:
            return self._read_csv(file, max_rows)
        if extension in EXCEL_EXTENSIONS:
            return self._read_excel(file, max_rows)
        raise UnreadableFileException(f"Cannot read files of type '{extension}'")

    def _read_csv(self, file: BinaryIO, max_rows: Optional[int]) -> TabularData:
        try:
            content = file.read().decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise UnreadableFileException("File must be a valid UTF-8 encoded CSV", details=str(e)) from e
        except Exception as e:
            raise UnreadableFileException("Failed to read CSV file", details=str(e)) from e

        headers: List[str] = []
        rows: List[Dict[str, str]] = []
        try:
            for record in csv.reader(io.StringIO(content)):
                values = [value.strip() for value in record]
                if not any(values):
                    continue
                if not headers:
                    headers = values
                    continue
                if max_rows is not None and len(rows) >= max_rows:
                    break
                rows.append(self._to_row(headers, values))
        except csv.Error as e:
            raise UnreadableFileException("Failed to parse CSV file", details=str(e)) from e

        return TabularData(headers=headers, rows=rows)

    def _read_excel(self, file: BinaryIO, max_rows: Optional[int]) -> TabularData:
        try:
            workbook = load_workbook(file, read_only=True, data_only=True)
        except Exception as e:
            raise UnreadableFileException("Failed to open Excel workbook", details=str(e)) from e

        try:
            if not workbook.worksheets:
                return TabularData(headers=[], rows=[])
            worksheet = workbook.worksheets[0]

            row_iter = worksheet.iter_rows(values_only=True)
            header_cells = next(row_iter, None)
            if header_cells is None:
                return TabularData(headers=[], rows=[])
            headers = self._excel_headers(header_cells)

            rows: List[Dict[str, str]] = []
            for cells in row_iter:
                if max_rows is not None and len(rows) >= max_rows:
                    break
                rows.append(self._to_row(headers, [self._cell_to_str(value) for value in cells]))
        except Exception as e:
            raise UnreadableFileException("Failed to read Excel worksheet", details=str(e)) from e
        finally:
            workbook.close()

        return TabularData(headers=headers, rows=rows)

    @staticmethod
    def _excel_headers(cells) -> List[str]:
        """Header labels for row 1; blank cells get a unique Column<N> label."""
        labels = [TabularReader._cell_to_str(value) for value in cells]
        taken = {label for label in labels if label}

        headers = []
        for index, label in enumerate(labels, start=1):
            if not label:
                candidate = f"Column{index}"
                suffix = 2
                while candidate in taken:
                    candidate = f"Column{index}_{suffix}"
                    suffix += 1
                taken.add(candidate)
                label = candidate
            headers.append(label)
        return headers

    @staticmethod
    def _to_row(headers: List[str], values: List[str]) -> Dict[str, str]:
        # duplicate headers keep the last value, absent trailing cells are ""
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        return row

    @staticmethod
    def _cell_to_str(value) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        return str(value).strip()
