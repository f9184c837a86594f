"""
Order Service for business logic.
Orchestrates the upload, mapping, generation and download workflow.
"""
import io
import logging
import os
import re
import uuid
from datetime import datetime
from typing import BinaryIO, Optional
from src.core import config
from src.core.exceptions import ValidationException
from src.models.conversion_result import ConversionResult
from src.models.mapping_definition import MappingDefinition
from src.models.dto.order_dto import (
    GenerateRequest,
    GenerateResponse,
    MappingRequest,
    MappingResponse,
    MappingSaveResponse,
    RowErrorResponse,
    UploadResponse,
    ValidationResponse
)
from src.repositories.mapping_repository import MappingRepository
from src.services.conversion_service import ConversionService
from src.services.file_gateway_service import FileGatewayService
from src.services.tabular_reader import TabularReader
from src.services.validation_service import ValidationService

logger = logging.getLogger(__name__)

DOWNLOAD_PATH = "/api/orders/download"
DEFAULT_TEMPLATE_TYPES = {None, "", "standard", "default"}
_TEMPLATE_TYPE = re.compile(r'[\w\-]+')


class OrderService:
    """Service for purchase order operations."""

    def __init__(
        self,
        gateway: FileGatewayService,
        mapping_repository: MappingRepository,
        reader: TabularReader = None,
        validation_service: ValidationService = None,
        conversion_service: ConversionService = None
    ):
        self.gateway = gateway
        self.mapping_repository = mapping_repository
        self.reader = reader or TabularReader()
        self.validation_service = validation_service or ValidationService()
        self.conversion_service = conversion_service or ConversionService(reader=self.reader)

    def upload_order_file(self, file: BinaryIO, filename: str, content_type: Optional[str] = None) -> UploadResponse:
        """
        Store an order file and return its preview and validation.

        Raises:
            UnsupportedTypeException: If the file type is not accepted
            FileTooLargeException: If the file exceeds the size ceiling
            UnreadableFileException: If the file cannot be parsed
        """
        content = file.read()
        uploaded = self.gateway.store(content, filename, content_type)

        preview = self.reader.read_preview(io.BytesIO(content), uploaded.extension)
        validation = self.validation_service.validate(preview.headers, preview.rows)

        return UploadResponse(
            file_name=uploaded.original_name,
            file_id=uploaded.file_id,
            headers=preview.headers,
            preview_data=preview.rows,
            total_rows=preview.row_count,
            validation=ValidationResponse(
                is_valid=validation.is_valid,
                errors=validation.errors,
                warnings=validation.warnings,
                matched_fields=validation.matched_fields
            ),
            message=f"File uploaded successfully. Previewing {preview.row_count} rows."
        )

    def save_mapping(self, request: MappingRequest) -> MappingSaveResponse:
        """
        Persist a mapping definition under its name, replacing any previous one.

        Raises:
            ValidationException: If the name or rules are invalid
            PersistenceException: If storage fails
        """
        mapping = MappingDefinition(
            name=request.mapping_name,
            source_fields=request.source_fields,
            target_fields=request.target_fields,
            rules=request.mapping_rules,
            created_at=datetime.utcnow()
        )
        if not mapping.resolve_rules():
            raise ValidationException("Mapping must define at least one source to target rule")

        mapping_id = self.mapping_repository.save(mapping)
        return MappingSaveResponse(message="Mapping saved successfully.", mapping_id=mapping_id)

    def get_mapping(self, name: str) -> MappingResponse:
        """
        Raises:
            NotFoundException: If no mapping exists under name
            CorruptRecordException: If the stored mapping is unreadable
        """
        mapping = self.mapping_repository.load(name)
        return MappingResponse(
            name=mapping.name,
            created_at=mapping.created_at,
            source_fields=mapping.source_fields,
            target_fields=mapping.target_fields,
            rules=mapping.rules
        )

    def generate_order(self, request: GenerateRequest) -> GenerateResponse:
        """
        Generate a purchase order from an uploaded file and a saved mapping.

        Raises:
            NotFoundException: If the upload or mapping does not exist
            TemplateMissingException: If the template cannot be located
            SourceUnreadableException: If the upload cannot be read
        """
        content = self.gateway.retrieve(request.file_id)
        mapping = self.mapping_repository.load(request.mapping_id)
        template_path = self.resolve_template(request.template_type)
        extension = os.path.splitext(request.file_id)[1].lower()

        output = self.conversion_service.convert(io.BytesIO(content), extension, template_path, mapping)

        file_name = self._generate_output_name()
        self.gateway.store_output(output.content, file_name)
        result = ConversionResult(
            file_name=file_name,
            processed_rows=output.processed_rows,
            total_rows=output.total_rows,
            errors=output.errors
        )
        logger.info("Generated %s from %s", result, request.file_id)

        return GenerateResponse(
            generated_file=result.file_name,
            download_url=f"{DOWNLOAD_PATH}/{result.file_name}",
            processed_rows=result.processed_rows,
            total_rows=result.total_rows,
            errors=[
                RowErrorResponse(row=error.row, field=error.field, message=error.message)
                for error in result.errors
            ],
            message="Purchase order generated successfully."
        )

    def download_order(self, file_name: str) -> bytes:
        """
        Raises:
            NotFoundException: If file_name was never generated
        """
        return self.gateway.retrieve_output(file_name)

    def resolve_template(self, template_type: Optional[str]) -> str:
        """
        Template path for a requested template type.

        The default types select the configured default template; any other
        type selects <template_dir>/<template_type>.xlsx.
        """
        settings = config.settings
        if template_type in DEFAULT_TEMPLATE_TYPES:
            return settings.default_template_path
        if not _TEMPLATE_TYPE.fullmatch(template_type):
            raise ValidationException(f"Invalid template type '{template_type}'")
        return os.path.join(settings.template_dir, f"{template_type}.xlsx")

    @staticmethod
    def _generate_output_name() -> str:
        """
        Generate a unique name for a generated purchase order.

        Format: purchase_order_{YYYYmmdd_HHMMSS}_{8 hex chars}.xlsx
        """
        now = datetime.utcnow()
        return f"purchase_order_{now:%Y%m%d_%H%M%S}_{uuid.uuid4().hex[:8]}.xlsx"
