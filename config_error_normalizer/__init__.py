"""Readable reports for JSON-Schema validation errors.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- fold overlapping validator errors into a tree
- render schema fragments as short type descriptions
- turn each error into a sentence for the user
The `jsonschema` adapter and the config reader sit around that core.
"""

from .error_tree import merge_errors
from .errors import ConfigReadError, InvalidConfigurationError, NormalizerError
from .formatter import MessageFormatter, normalize_error_messages
from .records import ValidationError
from .schema_text import SchemaTextRenderer
from .validation import iter_validation_errors, validate_config

__all__ = [
    "ConfigReadError",
    "InvalidConfigurationError",
    "MessageFormatter",
    "NormalizerError",
    "SchemaTextRenderer",
    "ValidationError",
    "iter_validation_errors",
    "merge_errors",
    "normalize_error_messages",
    "validate_config",
]
