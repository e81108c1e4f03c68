from __future__ import annotations

import json
import re
from typing import Any, Iterable, List, Optional

from .error_tree import merge_errors
from .records import ValidationError
from .schema_text import SchemaTextRenderer

REPORT_HEADER = 'Configuration is invalid.'
DATA_PATH_ROOT = 'configuration'
ERROR_BULLET = ' - '
DETAIL_BULLET = ' * '
INDENT = '   '

OUTPUT_FILENAME_PATH = 'configuration.output.filename'
OUTPUT_FILENAME_HINT = (
    'Please use output.path to specify absolute path and output.filename for the file name.'
)

_TYPE_SENTENCES = {
    'object': 'should be an object.',
    'string': 'should be a string.',
    'boolean': 'should be a boolean.',
    'number': 'should be a number.',
}

# a newline that is not the last character of the text
_INNER_NEWLINE = re.compile(r'\n(?!\Z)')


def indent(text: str, prefix: str, first_line: bool = False) -> str:
    """Prefix every line of ``text``; the first one only if ``first_line``."""
    text = _INNER_NEWLINE.sub('\n' + prefix, text)
    return prefix + text if first_line else text


class MessageFormatter:
    """Turns one merged validation error into a sentence for the user."""

    def __init__(self, renderer: SchemaTextRenderer):
        self.renderer = renderer

    def schema_text(self, schema: Any, extra_path: Optional[Iterable[str]] = None) -> str:
        return self.renderer.render(schema, extra_path)

    def format(self, error: ValidationError) -> str:
        path = f"{DATA_PATH_ROOT}{error.data_path}"
        keyword = error.keyword
        params = error.params or {}

        if keyword == 'additionalProperties':
            name = params.get('additionalProperty')
            return (
                f"{path} has an unknown property '{name}'. These properties are valid:\n"
                f"{self.schema_text(error.parent_schema)}"
            )

        if keyword in ('oneOf', 'anyOf'):
            message = f"{path} should be one of these:\n{self.schema_text(error.parent_schema)}"
            if error.children:
                # the same cause is often reported by several branches
                details = dict.fromkeys(
                    DETAIL_BULLET + indent(self.format(child), INDENT)
                    for child in error.children
                )
                message += '\nDetails:\n' + '\n'.join(details)
            return message

        if keyword == 'enum':
            parent = error.parent_schema
            values = parent.get('enum') if isinstance(parent, dict) else None
            if isinstance(values, list) and len(values) == 1:
                return f"{path} should be {self.schema_text(parent)}"
            return f"{path} should be one of these:\n{self.schema_text(parent)}"

        if keyword == 'allOf':
            return f"{path} should be:\n{self.schema_text(error.parent_schema)}"

        if keyword == 'type':
            expected = params.get('type')
            if expected in _TYPE_SENTENCES:
                return f"{path} {_TYPE_SENTENCES[expected]}"
            if expected == 'array':
                return f"{path} should be an array:\n{self.schema_text(error.parent_schema)}"
            return f"{path} should be {expected}:\n{self.schema_text(error.parent_schema)}"

        if keyword == 'instanceof':
            return f"{path} should be an instance of {self.schema_text(error.parent_schema)}."

        if keyword == 'required':
            missing = str(params.get('missingProperty') or '')
            if missing.startswith('.'):
                missing = missing[1:]
            return (
                f"{path} misses the property '{missing}'.\n"
                f"{self.schema_text(error.parent_schema, ['properties', missing])}"
            )

        if keyword in ('minLength', 'minItems'):
            if params.get('limit') == 1:
                return f"{path} should not be empty."
            return f"{path} {error.message}"

        if keyword == 'absolutePath':
            message = f"{path}: {error.message}"
            if path == OUTPUT_FILENAME_PATH:
                message += '\n' + OUTPUT_FILENAME_HINT
            return message

        raw = json.dumps(error.to_dict(), indent=2, ensure_ascii=False, default=str)
        return f"{path} {error.message} ({raw}).\n{self.schema_text(error.parent_schema)}"


def format_errors(errors: Iterable[ValidationError], schema: Any) -> List[str]:
    """One bulleted entry per merged error, in report order."""
    formatter = MessageFormatter(SchemaTextRenderer(schema))
    return [
        ERROR_BULLET + indent(formatter.format(error), INDENT)
        for error in merge_errors(errors)
    ]


def normalize_error_messages(errors: Iterable[ValidationError], schema: Any) -> str:
    """Render validator errors for ``schema`` as a report for the user."""
    return REPORT_HEADER + '\n' + '\n'.join(format_errors(errors, schema))
