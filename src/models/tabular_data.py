"""
Tabular data domain model.
Headers plus header-keyed rows as read from a CSV or Excel file.
"""
from typing import Dict, List


class TabularData:
    """Headers and string-valued rows of a tabular file."""

    def __init__(self, headers: List[str], rows: List[Dict[str, str]]):
        self.headers = headers
        self.rows = rows

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __repr__(self):
        return f"TabularData(headers={self.headers}, rows={self.row_count})"
