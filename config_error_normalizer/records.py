from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ValidationError:
    """One failure reported by a schema validator.

    ``data_path`` is relative to the configuration root: ``""`` for the root
    itself, ``.name`` for a property and ``[0]`` for an array item.
    ``children`` is only set on combinator errors or after merging.
    """

    data_path: str
    keyword: str
    params: Mapping[str, Any] = field(default_factory=dict)
    message: str = ''
    parent_schema: Any = None
    children: Optional[Tuple['ValidationError', ...]] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> 'ValidationError':
        """Build a record from an ajv-style error object (camelCase keys)."""
        children = raw.get('children')
        return cls(
            data_path=raw.get('dataPath') or '',
            keyword=raw.get('keyword') or '',
            params=dict(raw.get('params') or {}),
            message=raw.get('message') or '',
            parent_schema=raw.get('parentSchema'),
            children=tuple(cls.from_dict(c) for c in children) if children else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation used when dumping an unrecognised error."""
        raw: Dict[str, Any] = {
            'dataPath': self.data_path,
            'keyword': self.keyword,
            'params': dict(self.params),
            'message': self.message,
        }
        if self.children:
            raw['children'] = [c.to_dict() for c in self.children]
        return raw
