"""
Mapping Repository.
Persists mapping definitions as one JSON document per mapping name.
"""
import json
import logging
import re
from src.core.exceptions import CorruptRecordException, NotFoundException, ValidationException
from src.models.mapping_definition import MappingDefinition
from src.repositories.storage_repository import StorageRepository

logger = logging.getLogger(__name__)

MAPPING_PREFIX = "mappings"
_NAME_PATTERN = re.compile(r'[\w][\w .\-]{0,99}')


class MappingRepository:
    """Name-keyed, last-write-wins store for mapping definitions."""

    def __init__(self, storage: StorageRepository):
        self.storage = storage

    @staticmethod
    def validate_name(name: str) -> None:
        """
        Raises:
            ValidationException: If name cannot be used as a record key
        """
        if not name or not _NAME_PATTERN.fullmatch(name):
            raise ValidationException(
                f"Invalid mapping name '{name}'. Use letters, digits, spaces, '-', '_' or '.'"
            )

    def _key(self, name: str) -> str:
        return f"{MAPPING_PREFIX}/{name}.json"

    def save(self, mapping: MappingDefinition) -> str:
        """
        Save a mapping definition, overwriting any record with the same name.

        Returns:
            The mapping id (its name)

        Raises:
            ValidationException: If the name is invalid
            PersistenceException: If the storage location is unwritable
        """
        self.validate_name(mapping.name)
        document = json.dumps(mapping.to_dict(), ensure_ascii=False, indent=2)
        self.storage.put(self._key(mapping.name), document.encode('utf-8'), 'application/json')
        logger.info("Saved mapping '%s' with %d rules", mapping.name, len(mapping.rules))
        return mapping.name

    def load(self, name: str) -> MappingDefinition:
        """
        Load a mapping definition by name.

        Raises:
            NotFoundException: If no record exists for name
            CorruptRecordException: If the stored record cannot be deserialized
        """
        try:
            self.validate_name(name)
        except ValidationException as e:
            raise NotFoundException(f"Mapping '{name}' not found") from e

        try:
            raw = self.storage.get(self._key(name))
        except NotFoundException as e:
            raise NotFoundException(f"Mapping '{name}' not found") from e

        try:
            return MappingDefinition.from_dict(json.loads(raw.decode('utf-8')))
        except (UnicodeDecodeError, ValueError, KeyError, TypeError) as e:
            raise CorruptRecordException(f"Mapping '{name}' is corrupt", details=str(e)) from e
