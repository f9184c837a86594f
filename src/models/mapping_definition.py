"""
Mapping definition domain model.
A named description of how source columns map onto template columns.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from src.core.exceptions import ValidationException

SUPPORTED_TRANSFORMS = {'trim', 'upper', 'lower', 'number'}


class MappingRule:
    """Single source field to target column correspondence."""

    def __init__(
        self,
        source: str,
        target: str,
        transform: Optional[str] = None,
        required: bool = False,
        default: str = ""
    ):
        self.source = source
        self.target = target
        self.transform = transform
        self.required = required
        self.default = default

    def __repr__(self):
        return f"MappingRule(source={self.source}, target={self.target}, transform={self.transform})"


class MappingDefinition:
    """Domain model for a persisted field mapping."""

    def __init__(
        self,
        name: str,
        source_fields: Optional[List[str]] = None,
        target_fields: Optional[List[str]] = None,
        rules: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None
    ):
        self.name = name
        self.source_fields = list(source_fields or [])
        self.target_fields = list(target_fields or [])
        self.rules = dict(rules or {})
        self.created_at = created_at or datetime.utcnow()

    def resolve_rules(self) -> List[MappingRule]:
        """
        Expand the stored rules into MappingRule objects.

        An empty rules dict pairs source_fields and target_fields by position.

        Raises:
            ValidationException: If a rule is malformed
        """
        if not self.rules:
            return [
                MappingRule(source=source, target=target)
                for source, target in zip(self.source_fields, self.target_fields)
                if source and target
            ]

        resolved = []
        for source, entry in self.rules.items():
            if isinstance(entry, str):
                if not entry.strip():
                    raise ValidationException(f"Rule for '{source}' has an empty target")
                resolved.append(MappingRule(source=source, target=entry.strip()))
            elif isinstance(entry, dict):
                target = str(entry.get('target') or '').strip()
                if not target:
                    raise ValidationException(f"Rule for '{source}' has no target")
                transform = entry.get('transform')
                if transform is not None and transform not in SUPPORTED_TRANSFORMS:
                    raise ValidationException(
                        f"Unsupported transform '{transform}' for '{source}'. "
                        f"Supported: {', '.join(sorted(SUPPORTED_TRANSFORMS))}"
                    )
                default = entry.get('default')
                resolved.append(MappingRule(
                    source=source,
                    target=target,
                    transform=transform,
                    required=bool(entry.get('required', False)),
                    default="" if default is None else str(default)
                ))
            else:
                raise ValidationException(
                    f"Rule for '{source}' must be a target name or an object, got {type(entry).__name__}"
                )
        return resolved

    def to_dict(self) -> dict:
        """Serialize to the persisted JSON layout."""
        return {
            'name': self.name,
            'createdAt': self.created_at.isoformat(),
            'sourceFields': self.source_fields,
            'targetFields': self.target_fields,
            'rules': self.rules
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MappingDefinition":
        """
        Build a definition from its persisted JSON layout.

        Raises:
            KeyError, TypeError, ValueError: If the document has the wrong shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        rules = data.get('rules') or {}
        if not isinstance(rules, dict):
            raise TypeError("rules must be an object")
        return cls(
            name=data['name'],
            source_fields=data.get('sourceFields') or [],
            target_fields=data.get('targetFields') or [],
            rules=rules,
            created_at=datetime.fromisoformat(data['createdAt'])
        )

    def __repr__(self):
        return f"MappingDefinition(name={self.name}, rules={len(self.rules)})"
