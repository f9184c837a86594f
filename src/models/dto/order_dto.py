"""
Data Transfer Objects for the purchase order API.
Defines request and response schemas for API endpoints.
Field names on the wire are camelCase; Python attributes are snake_case.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class ValidationResponse(BaseModel):
    """Validation outcome for an uploaded file preview."""
    is_valid: bool = Field(..., alias="isValid")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    matched_fields: Dict[str, str] = Field(default_factory=dict, alias="matchedFields")

    class Config:
        populate_by_name = True


class UploadResponse(BaseModel):
    """Response schema for an accepted order file upload."""
    success: bool = True
    file_name: str = Field(..., alias="fileName", description="Original file name")
    file_id: str = Field(..., alias="fileId", description="Generated identifier of the stored file")
    headers: List[str]
    preview_data: List[Dict[str, str]] = Field(..., alias="previewData")
    total_rows: int = Field(..., alias="totalRows", description="Number of preview rows")
    validation: ValidationResponse
    message: str

    class Config:
        populate_by_name = True


class MappingRequest(BaseModel):
    """Request schema for saving a field mapping."""
    mapping_name: str = Field(..., alias="mappingName", min_length=1, max_length=100)
    source_fields: List[str] = Field(default_factory=list, alias="sourceFields")
    target_fields: List[str] = Field(default_factory=list, alias="targetFields")
    mapping_rules: Dict[str, Any] = Field(default_factory=dict, alias="mappingRules")

    @field_validator('mapping_name')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Mapping name cannot be empty")
        return v.strip()

    class Config:
        populate_by_name = True


class MappingSaveResponse(BaseModel):
    """Response schema for a saved mapping."""
    success: bool = True
    message: str
    mapping_id: str = Field(..., alias="mappingId")

    class Config:
        populate_by_name = True


class MappingResponse(BaseModel):
    """Response schema for a stored mapping definition."""
    name: str
    created_at: datetime = Field(..., alias="createdAt")
    source_fields: List[str] = Field(..., alias="sourceFields")
    target_fields: List[str] = Field(..., alias="targetFields")
    rules: Dict[str, Any]

    class Config:
        populate_by_name = True


class GenerateRequest(BaseModel):
    """Request schema for generating a purchase order."""
    file_id: str = Field(..., alias="fileId", min_length=1)
    mapping_id: str = Field(..., alias="mappingId", min_length=1)
    template_type: Optional[str] = Field(default=None, alias="templateType")

    class Config:
        populate_by_name = True


class RowErrorResponse(BaseModel):
    """A source row that was skipped during generation."""
    row: int
    field: Optional[str] = None
    message: str


class GenerateResponse(BaseModel):
    """Response schema for a generated purchase order."""
    success: bool = True
    generated_file: str = Field(..., alias="generatedFile")
    download_url: str = Field(..., alias="downloadUrl")
    processed_rows: int = Field(..., alias="processedRows")
    total_rows: int = Field(..., alias="totalRows")
    errors: List[RowErrorResponse] = Field(default_factory=list)
    message: str

    class Config:
        populate_by_name = True
