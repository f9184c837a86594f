"""
File Gateway Service.
Accepts uploaded order files and serves generated purchase orders.
"""
import logging
import os
import re
import time
import uuid
from typing import Optional
from src.core import config
from src.core.exceptions import FileTooLargeException, NotFoundException, UnsupportedTypeException
from src.models.uploaded_file import UploadedFile
from src.repositories.storage_repository import StorageRepository

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"
OUTPUT_PREFIX = "generated"

ALLOWED_EXTENSIONS = {'.xlsx', '.xls', '.csv'}
ALLOWED_CONTENT_TYPES = {
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.ms-excel',
    'text/csv',
    'application/csv',
    'text/plain',
    'application/octet-stream',
}
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

_SAFE_NAME = re.compile(r'[\w\-.]+')


class FileGatewayService:
    """Service for storing uploads and generated files."""

    def __init__(self, storage: StorageRepository, max_file_size_mb: Optional[int] = None):
        self.storage = storage
        self.max_file_size_mb = max_file_size_mb or config.settings.max_file_size_mb

    def store(self, content: bytes, original_name: str, content_type: Optional[str] = None) -> UploadedFile:
        """
        Validate and persist an uploaded order file.

        Args:
            content: Raw file content
            original_name: File name as sent by the client
            content_type: Declared MIME type, if any

        Returns:
            UploadedFile describing the stored file

        Raises:
            UnsupportedTypeException: If extension or declared type is not accepted
            FileTooLargeException: If content exceeds the size ceiling
            PersistenceException: If storage fails
        """
        extension = os.path.splitext(original_name or "")[1].lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedTypeException(
                "Unsupported file type. Only Excel (.xlsx, .xls) or CSV files can be uploaded.",
                details=f"Got '{extension or original_name}'"
            )

        declared = (content_type or "").split(";")[0].strip().lower()
        if declared and declared not in ALLOWED_CONTENT_TYPES:
            raise UnsupportedTypeException(
                "Unsupported file type. Only Excel (.xlsx, .xls) or CSV files can be uploaded.",
                details=f"Declared content type '{declared}'"
            )

        max_size_bytes = self.max_file_size_mb * 1024 * 1024
        if len(content) > max_size_bytes:
            raise FileTooLargeException(
                f"File size ({len(content) / (1024 * 1024):.2f}MB) exceeds maximum allowed size "
                f"of {self.max_file_size_mb}MB"
            )

        file_id = self._generate_file_id(extension)
        storage_key = f"{UPLOAD_PREFIX}/{file_id}"
        self.storage.put(storage_key, content, declared or None)

        logger.info("Stored upload '%s' as %s (%d bytes)", original_name, file_id, len(content))
        return UploadedFile(
            file_id=file_id,
            original_name=original_name,
            storage_key=storage_key,
            extension=extension,
            size=len(content),
            content_type=declared or None
        )

    def retrieve(self, file_id: str) -> bytes:
        """
        Return the content of a stored upload.

        Raises:
            NotFoundException: If no upload matches file_id
        """
        return self._get(UPLOAD_PREFIX, file_id, "Uploaded file")

    def store_output(self, content: bytes, file_name: str) -> str:
        """Persist a generated purchase order under file_name."""
        if not self._is_safe_name(file_name):
            raise NotFoundException(f"Invalid output file name '{file_name}'")
        return self.storage.put(f"{OUTPUT_PREFIX}/{file_name}", content, XLSX_CONTENT_TYPE)

    def retrieve_output(self, file_name: str) -> bytes:
        """
        Return the content of a generated purchase order.

        Raises:
            NotFoundException: If file_name was never generated
        """
        return self._get(OUTPUT_PREFIX, file_name, "File")

    def _get(self, prefix: str, name: str, label: str) -> bytes:
        if not self._is_safe_name(name):
            raise NotFoundException(f"{label} '{name}' not found")
        try:
            return self.storage.get(f"{prefix}/{name}")
        except NotFoundException as e:
            raise NotFoundException(f"{label} '{name}' not found") from e

    @staticmethod
    def _is_safe_name(name: str) -> bool:
        return bool(name) and bool(_SAFE_NAME.fullmatch(name)) and ".." not in name

    @staticmethod
    def _generate_file_id(extension: str) -> str:
        """
        Generate a unique upload identifier.

        Format: {epoch_ms}-{8 hex chars}{extension}
        """
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"
