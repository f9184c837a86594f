"""
Uploaded File domain model.
Represents an order file accepted by the upload gateway.
"""
from datetime import datetime
from typing import Optional


class UploadedFile:
    """Domain model for a stored upload."""

    def __init__(
        self,
        file_id: str,
        original_name: str,
        storage_key: str,
        extension: str,
        size: int,
        content_type: Optional[str] = None,
        created_at: Optional[datetime] = None
    ):
        self.file_id = file_id
        self.original_name = original_name
        self.storage_key = storage_key
        self.extension = extension
        self.size = size
        self.content_type = content_type
        self.created_at = created_at or datetime.utcnow()

    def __repr__(self):
        return f"UploadedFile(file_id={self.file_id}, original_name={self.original_name}, size={self.size})"
