from __future__ import annotations

from typing import Any, Optional, Tuple

from .errors import InvalidConfigurationError
from .io_utils import read_config_content
from .schema_text import SchemaTextRenderer
from .validation import validate_config


def load_document(file_obj, label: str) -> Tuple[Optional[Any], str]:
    if file_obj is None:
        return None, f"No {label} uploaded."
    try:
        data = read_config_content(file_obj)
    except Exception as e:
        return None, f"Error reading {label}: {str(e)}"
    return data, f"Loaded {label}."


def validate_handler(config_file, schema_file) -> Tuple[str, str]:
    """Return ``(report, status)`` for the uploaded config and schema."""
    config, config_status = load_document(config_file, "config")
    if config is None:
        return "", config_status
    schema, schema_status = load_document(schema_file, "schema")
    if schema is None:
        return "", schema_status

    try:
        validate_config(config, schema)
    except InvalidConfigurationError as e:
        return str(e), f"Found {len(e.errors)} validation error(s)."
    except Exception as e:
        return "", f"Error during validation: {str(e)}"
    return "Configuration is valid.", "No validation errors."


def describe_schema_handler(schema_file) -> Tuple[str, str]:
    """Short type description of the uploaded schema's root."""
    schema, status = load_document(schema_file, "schema")
    if schema is None:
        return "", status
    return SchemaTextRenderer(schema).render(schema), status
