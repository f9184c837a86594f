"""
Custom exceptions for the Purchase Order Converter API.
Provides specific error types for different failure scenarios.
"""
from typing import Optional


class OrderConverterException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationException(OrderConverterException):
    """Raised when request data is invalid."""
    pass


class UnsupportedTypeException(OrderConverterException):
    """Raised when an uploaded file is not an accepted spreadsheet type."""
    pass


class FileTooLargeException(UnsupportedTypeException):
    """Raised when an uploaded file exceeds the size ceiling."""
    pass


class UnreadableFileException(OrderConverterException):
    """Raised when a spreadsheet or CSV file cannot be parsed."""
    pass


class NotFoundException(OrderConverterException):
    """Raised when a stored file or mapping does not exist."""
    pass


class PersistenceException(OrderConverterException):
    """Raised when a storage write or read fails."""
    pass


class CorruptRecordException(OrderConverterException):
    """Raised when a stored mapping record cannot be deserialized."""
    pass


class TemplateMissingException(OrderConverterException):
    """Raised when the output template cannot be located or opened."""
    pass


class SourceUnreadableException(OrderConverterException):
    """Raised when the uploaded source file cannot be opened for conversion."""
    pass
