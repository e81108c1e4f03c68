from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from .records import ValidationError


def merge_errors(errors: Iterable[ValidationError]) -> List[ValidationError]:
    """Fold overlapping errors into a shallow tree.

    Errors are processed in order. When a new error's data path is a substring
    of the path of errors already collected, those errors (and their own
    children, flattened) become children of the new error, which takes their
    place at the end of the output. A root error ('') therefore absorbs
    everything reported before it.

    Containment is a plain substring test, so '.foo' also absorbs '.foobar'.
    Input records are never modified.
    """
    merged: List[ValidationError] = []
    for error in errors:
        path = error.data_path
        kept: List[ValidationError] = []
        absorbed: List[ValidationError] = []
        for existing in merged:
            if path not in existing.data_path:
                kept.append(existing)
                continue
            if existing.children:
                absorbed.extend(existing.children)
            absorbed.append(replace(existing, children=None))

        if absorbed:
            children = tuple(error.children or ()) + tuple(absorbed)
            error = replace(error, children=children)
        kept.append(error)
        merged = kept
    return merged

