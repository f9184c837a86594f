"""
Core configuration for the Purchase Order Converter API.
Manages environment variables, storage and template settings.
"""
import os
from typing import Dict, List
from pydantic_settings import BaseSettings


DEFAULT_EXPECTED_ORDER_FIELDS = {
    "product": ["product", "item", "상품명", "품목"],
    "quantity": ["qty", "quantity", "수량"],
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    s3_bucket_name: str = os.getenv("S3_BUCKET_NAME", "")

    # Storage: "local" keeps files under storage_root, "s3" uses the bucket
    storage_backend: str = os.getenv("STORAGE_BACKEND", "local")
    storage_root: str = os.getenv("STORAGE_ROOT", "storage")

    # Templates
    template_dir: str = os.getenv("TEMPLATE_DIR", "templates")
    default_template: str = os.getenv("DEFAULT_TEMPLATE", "purchase_order.xlsx")
    template_header_row: int = int(os.getenv("TEMPLATE_HEADER_ROW", "1"))

    # API Configuration
    api_title: str = os.getenv("API_TITLE", "Purchase Order Converter API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # File Upload Limits
    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
    preview_row_limit: int = int(os.getenv("PREVIEW_ROW_LIMIT", "20"))

    # Validation
    expected_order_fields: Dict[str, List[str]] = DEFAULT_EXPECTED_ORDER_FIELDS
    field_match_mode: str = os.getenv("FIELD_MATCH_MODE", "contains")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")

    @property
    def default_template_path(self) -> str:
        """Full path of the template used when no template type is requested."""
        return os.path.join(self.template_dir, self.default_template)

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
