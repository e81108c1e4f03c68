"""Adapter between the ``jsonschema`` validator and the normalizer.

``jsonschema`` nests the branch failures of ``oneOf``/``anyOf`` under
``error.context`` and reports several unknown or missing properties in one
error. The records produced here are flat instead: branch errors come before
their combinator error and every property gets its own record, which is the
shape ``merge_errors`` folds back into a tree.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Iterator, List, Optional

from jsonschema import Draft7Validator, exceptions, validators

from .errors import InvalidConfigurationError
from .formatter import normalize_error_messages
from .paths import format_data_path, property_accessor
from .records import ValidationError

logger = logging.getLogger(__name__)

_WINDOWS_ABSOLUTE = re.compile(r'^[A-Za-z]:[\\/]')


def _is_instance_of(instance: Any, tag: str) -> bool:
    if tag == 'Function':
        return callable(instance)
    if tag == 'RegExp':
        return isinstance(instance, re.Pattern)
    return any(cls.__name__ == tag for cls in type(instance).__mro__)


def instanceof_keyword(validator, tag, instance, schema):
    tags = tag if isinstance(tag, list) else [tag]
    if not any(_is_instance_of(instance, t) for t in tags):
        yield exceptions.ValidationError('should pass "instanceof" keyword validation')


def is_absolute_path(value: str) -> bool:
    return value.startswith('/') or bool(_WINDOWS_ABSOLUTE.match(value))


def absolute_path_keyword(validator, expected, instance, schema):
    if not isinstance(instance, str):
        return
    literal = json.dumps(instance)
    if expected and not is_absolute_path(instance):
        yield exceptions.ValidationError(f"The provided value {literal} is not an absolute path!")
    elif not expected and is_absolute_path(instance):
        yield exceptions.ValidationError(
            f"A relative path is expected. However, the provided value {literal} is an absolute path!"
        )


ConfigValidator = validators.extend(
    Draft7Validator,
    {
        'instanceof': instanceof_keyword,
        'absolutePath': absolute_path_keyword,
    },
)


def build_validator(schema: Any):
    return ConfigValidator(schema)


def _unknown_properties(error: exceptions.ValidationError) -> List[str]:
    instance = error.instance if isinstance(error.instance, dict) else {}
    schema = error.schema if isinstance(error.schema, dict) else {}
    properties = schema.get('properties', {})
    patterns = '|'.join(schema.get('patternProperties', {}))
    return [
        name for name in instance
        if name not in properties and not (patterns and re.search(patterns, name))
    ]


def _missing_property(error: exceptions.ValidationError) -> str:
    required = error.validator_value if isinstance(error.validator_value, list) else []
    instance = error.instance if isinstance(error.instance, dict) else {}
    missing = [name for name in required if name not in instance]
    for name in missing:
        if error.message == f"{name!r} is a required property":
            return name
    return missing[0] if missing else ''


def convert_error(error: exceptions.ValidationError) -> Iterator[ValidationError]:
    """Yield the records for one ``jsonschema`` error, branch errors first."""
    for child in error.context or ():
        yield from convert_error(child)

    keyword = error.validator
    data_path = format_data_path(error.absolute_path)
    value = error.validator_value

    if keyword == 'additionalProperties':
        for name in _unknown_properties(error) or ['']:
            yield ValidationError(
                data_path, keyword, {'additionalProperty': name}, error.message, error.schema
            )
        return

    if keyword == 'required':
        params = {'missingProperty': property_accessor(_missing_property(error))}
    elif keyword == 'type':
        params = {'type': value[0] if isinstance(value, list) and value else value}
    elif keyword in ('minLength', 'minItems', 'maxLength', 'maxItems', 'minimum', 'maximum'):
        params = {'limit': value}
    elif keyword == 'enum':
        params = {'allowedValues': value}
    else:
        params = {keyword: value}
    yield ValidationError(data_path, keyword, params, error.message, error.schema)


def iter_validation_errors(config: Any, schema: Any) -> Iterator[ValidationError]:
    """Validate ``config`` and yield flat error records in validator order."""
    for error in build_validator(schema).iter_errors(config):
        yield from convert_error(error)


def validate_config(
    config: Any,
    schema: Any,
    error_message: Optional[Callable[[str, List[ValidationError]], str]] = None,
) -> None:
    """Raise ``InvalidConfigurationError`` with a rendered report if ``config`` is invalid.

    ``error_message`` may rewrap the report, e.g. to add the config file name.
    """
    errors = list(iter_validation_errors(config, schema))
    if not errors:
        return
    logger.debug("Configuration has %d validation error(s)", len(errors))
    report = normalize_error_messages(errors, schema)
    if error_message is not None:
        report = error_message(report, errors)
    raise InvalidConfigurationError(report, errors)
