from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional, Tuple

from .accessors import descend, get_schema_part
from .schema_nodes import (
    ArraySchema,
    BooleanSchema,
    CombinatorSchema,
    EnumSchema,
    InstanceOfSchema,
    NumberSchema,
    ObjectSchema,
    RefSchema,
    StringSchema,
    classify,
    is_truthy,
)

RECURSIVE_MARKER = '(recursive)'


def _literal(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def _dump(node: Any) -> str:
    try:
        return json.dumps(node, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        # circular structures built in Python rather than loaded from JSON
        return repr(node)


def _number_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def first_paragraph(text: Any) -> str:
    text = str(text).strip()
    cut = text.find('\n\n')
    return text if cut < 0 else text[:cut]


class SchemaTextRenderer:
    """Renders schema fragments as short type descriptions.

    ``root_schema`` is the document every ``$ref`` is resolved against.
    """

    def __init__(self, root_schema: Any):
        self.root_schema = root_schema

    def resolve_ref(self, ref: str) -> Any:
        return get_schema_part(self.root_schema, ref)

    def render(self, node: Any, extra_path: Optional[Iterable[str]] = None) -> str:
        """Type text for ``node`` followed by the first paragraph of its description."""
        if extra_path is not None:
            node = descend(node, extra_path)

        seen: List[Any] = []
        while isinstance(node, dict) and node.get('$ref') is not None:
            if any(node is s for s in seen):
                break
            seen.append(node)
            node = self.resolve_ref(node['$ref'])

        text = self.format_schema(node)
        description = node.get('description') if isinstance(node, dict) else None
        if description is not None:
            text += '\n' + first_paragraph(description)
        return text

    def format_schema(self, node: Any, ancestors: Tuple[Any, ...] = ()) -> str:
        """Render ``node`` on one line.

        ``ancestors`` holds the nodes entered by following a ``$ref`` on the
        way here. A ``$ref`` resolving to one of them renders as
        '(recursive)'. Nested items and properties pass it on unchanged.
        """
        schema = classify(node)

        if isinstance(schema, StringSchema):
            if schema.min_length == 1:
                return 'non-empty string'
            if schema.min_length is not None and schema.min_length > 1:
                return f"string (min length {_number_text(schema.min_length)})"
            return 'string'
        if isinstance(schema, BooleanSchema):
            return 'boolean'
        if isinstance(schema, NumberSchema):
            return 'number'
        if isinstance(schema, ObjectSchema):
            return self._format_object(schema, ancestors)
        if isinstance(schema, ArraySchema):
            return f"[{self.format_schema(schema.items, ancestors)}]"
        if isinstance(schema, InstanceOfSchema):
            return 'function' if schema.tag == 'Function' else 'RegExp'
        if isinstance(schema, RefSchema):
            target = self.resolve_ref(schema.ref)
            if any(target is a for a in ancestors):
                return RECURSIVE_MARKER
            return self.format_schema(target, ancestors + (target,))
        if isinstance(schema, CombinatorSchema):
            return schema.separator.join(self.format_schema(m, ancestors) for m in schema.members)
        if isinstance(schema, EnumSchema):
            return ' | '.join(_literal(v) for v in schema.values)
        return _dump(schema.node)

    def _format_object(self, schema: ObjectSchema, ancestors: Tuple[Any, ...]) -> str:
        if schema.properties is not None:
            entries = [
                name if name in schema.required else f"{name}?"
                for name in schema.properties
            ]
            if is_truthy(schema.additional_properties):
                entries.append('...')
            return f"object {{ {', '.join(entries)} }}"
        if is_truthy(schema.additional_properties):
            value_text = self.format_schema(schema.additional_properties, ancestors)
            return f"object {{ <key>: {value_text} }}"
        return 'object'
