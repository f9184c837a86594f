"""
Purchase order API routes.
Handles HTTP endpoints for uploads, mappings, generation and downloads.
"""
import io
from fastapi import APIRouter, Depends, UploadFile, File, status
from fastapi.responses import StreamingResponse
from src.services.order_service import OrderService
from src.core.dependencies import get_order_service
from src.models.dto.order_dto import (
    GenerateRequest,
    GenerateResponse,
    MappingRequest,
    MappingResponse,
    MappingSaveResponse,
    UploadResponse
)

router = APIRouter(prefix="/api/orders")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("/upload", tags=["Uploads"], response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_order_file(
    order_file: UploadFile = File(..., alias="orderFile", description="Excel or CSV order file"),
    order_service: OrderService = Depends(get_order_service)
):
    """
    Upload an order file and preview it.

    Returns the headers, the first 20 data rows and a validation result.
    """
    return order_service.upload_order_file(order_file.file, order_file.filename, order_file.content_type)


@router.post("/mapping", tags=["Mappings"], response_model=MappingSaveResponse)
async def save_mapping(
    request: MappingRequest,
    order_service: OrderService = Depends(get_order_service)
):
    """
    Save a field mapping under its name.

    - **mappingName**: Unique name, an existing mapping with the same name is replaced
    - **mappingRules**: Source field to target field (or rule object)
    """
    return order_service.save_mapping(request)


@router.get("/mapping/{mapping_name}", tags=["Mappings"], response_model=MappingResponse)
async def get_mapping(
    mapping_name: str,
    order_service: OrderService = Depends(get_order_service)
):
    """Retrieve a saved field mapping."""
    return order_service.get_mapping(mapping_name)


@router.post("/generate", tags=["Orders"], response_model=GenerateResponse)
async def generate_order(
    request: GenerateRequest,
    order_service: OrderService = Depends(get_order_service)
):
    """
    Generate a purchase order from an uploaded file and a saved mapping.

    Rows that cannot be mapped are skipped and listed in **errors**.
    """
    return order_service.generate_order(request)


@router.get("/download/{file_name}", tags=["Orders"])
async def download_order(
    file_name: str,
    order_service: OrderService = Depends(get_order_service)
):
    """Download a generated purchase order."""
    content = order_service.download_order(file_name)
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'}
    )
