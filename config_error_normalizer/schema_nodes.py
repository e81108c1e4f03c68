"""Typed views over raw JSON-Schema fragments.

``classify`` looks at which keys a fragment carries and returns one variant,
checking them in the order the renderer gives them priority. Every variant
keeps the raw ``node`` so ``$ref`` targets can be compared by identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

COMBINATOR_KEYWORDS = ('allOf', 'oneOf', 'anyOf')
INSTANCEOF_TAGS = ('Function', 'RegExp')


def is_truthy(value: Any) -> bool:
    """JSON truthiness: empty objects and arrays still count as present."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class StringSchema:
    node: Any
    min_length: Optional[float] = None


@dataclass(frozen=True)
class BooleanSchema:
    node: Any


@dataclass(frozen=True)
class NumberSchema:
    node: Any


@dataclass(frozen=True)
class ObjectSchema:
    node: Any
    properties: Optional[dict] = None
    required: Tuple[str, ...] = ()
    additional_properties: Any = None


@dataclass(frozen=True)
class ArraySchema:
    node: Any
    items: Any = None


@dataclass(frozen=True)
class InstanceOfSchema:
    node: Any
    tag: str = ''


@dataclass(frozen=True)
class RefSchema:
    node: Any
    ref: str = ''


@dataclass(frozen=True)
class CombinatorSchema:
    node: Any
    keyword: str = 'oneOf'
    members: Tuple[Any, ...] = ()

    @property
    def separator(self) -> str:
        return ' & ' if self.keyword == 'allOf' else ' | '


@dataclass(frozen=True)
class EnumSchema:
    node: Any
    values: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class RawSchema:
    node: Any


SchemaVariant = Union[
    StringSchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    ArraySchema,
    InstanceOfSchema,
    RefSchema,
    CombinatorSchema,
    EnumSchema,
    RawSchema,
]


def classify(node: Any) -> SchemaVariant:
    if not isinstance(node, dict):
        return RawSchema(node)

    schema_type = node.get('type')
    if schema_type == 'string':
        min_length = node.get('minLength')
        return StringSchema(node, min_length if _is_number(min_length) else None)
    if schema_type == 'boolean':
        return BooleanSchema(node)
    if schema_type == 'number':
        return NumberSchema(node)
    if schema_type == 'object':
        properties = node.get('properties')
        required = node.get('required')
        return ObjectSchema(
            node,
            properties=properties if isinstance(properties, dict) else None,
            required=tuple(required) if isinstance(required, list) else (),
            additional_properties=node.get('additionalProperties'),
        )
    if schema_type == 'array':
        return ArraySchema(node, node.get('items'))

    tag = node.get('instanceof')
    if tag in INSTANCEOF_TAGS:
        return InstanceOfSchema(node, tag)

    ref = node.get('$ref')
    if ref is not None:
        return RefSchema(node, ref if isinstance(ref, str) else str(ref))

    for keyword in COMBINATOR_KEYWORDS:
        members = node.get(keyword)
        if isinstance(members, list):
            return CombinatorSchema(node, keyword, tuple(members))

    values = node.get('enum')
    if isinstance(values, list):
        return EnumSchema(node, tuple(values))

    return RawSchema(node)
