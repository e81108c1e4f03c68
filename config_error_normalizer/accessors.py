from __future__ import annotations

from typing import Any, Iterable, Optional

from .paths import split_ref
from .schema_nodes import is_truthy


def _step(node: Any, key: str) -> Optional[Any]:
    if isinstance(node, dict):
        return node.get(key)
    if isinstance(node, list) and key.isascii() and key.isdecimal():
        index = int(key)
        return node[index] if index < len(node) else None
    return None


def descend(node: Any, segments: Iterable[str]) -> Any:
    """Walk into ``node`` one key at a time.

    A segment that is missing (or holds null, false, 0 or '') is skipped and
    the walk stays on the last node it reached. Empty objects are entered.
    """
    current = node
    for segment in segments:
        inner = _step(current, segment)
        if is_truthy(inner):
            current = inner
    return current


def get_schema_part(root_schema: Any, ref: str) -> Any:
    """Resolve a ``$ref`` against the root schema document, best effort."""
    return descend(root_schema, split_ref(ref))
