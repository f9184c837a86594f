"""
Shared test fixtures and utilities.
"""
import io
import os
import pytest
from openpyxl import Workbook

TEMPLATE_HEADERS = ["Order No", "Product Name", "Quantity", "Recipient"]


def build_workbook(rows) -> bytes:
    """Build an .xlsx file in memory from a list of row value lists."""
    workbook = Workbook()
    worksheet = workbook.active
    for row in rows:
        worksheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes():
    """Factory fixture turning row lists into .xlsx content."""
    return build_workbook


@pytest.fixture
def template_path(tmp_path):
    """Purchase order template with a single header row."""
    path = tmp_path / "templates" / "purchase_order.xlsx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(build_workbook([TEMPLATE_HEADERS]))
    return str(path)


@pytest.fixture
def local_settings(tmp_path, template_path):
    """Point settings at a temporary local storage root and template directory."""
    env = {
        'STORAGE_BACKEND': 'local',
        'STORAGE_ROOT': str(tmp_path / "storage"),
        'TEMPLATE_DIR': os.path.dirname(template_path),
        'DEFAULT_TEMPLATE': os.path.basename(template_path),
        'ENVIRONMENT': 'test',
    }
    previous = {key: os.environ.get(key) for key in env}
    os.environ.update(env)

    from src.core import config, dependencies
    config.settings = config.Settings()
    dependencies.clear_caches()

    yield config.settings

    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    config.settings = config.Settings()
    dependencies.clear_caches()
