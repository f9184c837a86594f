"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories.
"""
from functools import lru_cache
from src.core import config
from src.repositories.storage_repository import StorageRepository
from src.repositories.s3_repository import S3Repository
from src.repositories.local_repository import LocalStorageRepository
from src.repositories.mapping_repository import MappingRepository
from src.services.file_gateway_service import FileGatewayService
from src.services.tabular_reader import TabularReader
from src.services.validation_service import ValidationService
from src.services.conversion_service import ConversionService
from src.services.order_service import OrderService


@lru_cache()
def get_storage_repository() -> StorageRepository:
    """Get the configured StorageRepository singleton instance."""
    if config.settings.storage_backend.lower() == "s3":
        return S3Repository()
    return LocalStorageRepository()


@lru_cache()
def get_mapping_repository() -> MappingRepository:
    """Get MappingRepository singleton instance."""
    return MappingRepository(storage=get_storage_repository())


@lru_cache()
def get_file_gateway_service() -> FileGatewayService:
    """Get FileGatewayService singleton instance."""
    return FileGatewayService(storage=get_storage_repository())


@lru_cache()
def get_tabular_reader() -> TabularReader:
    """Get TabularReader singleton instance."""
    return TabularReader()


@lru_cache()
def get_order_service() -> OrderService:
    """Get OrderService singleton instance with injected dependencies."""
    reader = get_tabular_reader()
    return OrderService(
        gateway=get_file_gateway_service(),
        mapping_repository=get_mapping_repository(),
        reader=reader,
        validation_service=ValidationService(),
        conversion_service=ConversionService(reader=reader)
    )


def clear_caches() -> None:
    """Drop cached singletons so the next request rebuilds them from settings."""
    for provider in (
        get_storage_repository,
        get_mapping_repository,
        get_file_gateway_service,
        get_tabular_reader,
        get_order_service
    ):
        provider.cache_clear()
