from __future__ import annotations

import re
from typing import Iterable, List, Union

_IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


def unescape_pointer_segment(segment: str) -> str:
    """Undo JSON-pointer escaping: '~1' is '/', '~0' is '~'."""
    return segment.replace('~1', '/').replace('~0', '~')


def split_ref(ref: str) -> List[str]:
    """Split a ``$ref`` like '#/definitions/Foo' into its key segments.

    The first segment (the document marker, usually '#') is dropped.
    """
    if ref is None:
        return []
    if not isinstance(ref, str):
        ref = str(ref)
    return [unescape_pointer_segment(p) for p in ref.split('/')[1:]]


def property_accessor(name: Union[str, int]) -> str:
    """Render one step of a data path: '.name', "['odd-name']" or '[0]'."""
    if isinstance(name, int) and not isinstance(name, bool):
        return f"[{name}]"
    name = str(name)
    if _IDENTIFIER.match(name):
        return f".{name}"
    escaped = name.replace('\\', '\\\\').replace("'", "\\'")
    return f"['{escaped}']"


def format_data_path(segments: Iterable[Union[str, int]]) -> str:
    """Join instance path segments into a data path. The root is ''."""
    return ''.join(property_accessor(s) for s in segments)
