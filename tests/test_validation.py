from __future__ import annotations

import re

import pytest

from config_error_normalizer import InvalidConfigurationError, iter_validation_errors, validate_config

API_KEY_SCHEMA = {
    "type": "object",
    "properties": {"apiKey": {"type": "string", "minLength": 1}},
    "required": ["apiKey"],
}

RULE_SCHEMA = {
    "definitions": {
        "rule": {
            "type": "object",
            "properties": {
                "test": {"type": "string"},
                "rules": {"type": "array", "items": {"$ref": "#/definitions/rule"}},
            },
            "additionalProperties": False,
        }
    },
    "type": "object",
    "properties": {"rules": {"type": "array", "items": {"$ref": "#/definitions/rule"}}},
}


def _report(config, schema) -> str:
    with pytest.raises(InvalidConfigurationError) as ei:
        validate_config(config, schema)
    return str(ei.value)


def test_valid_config_passes() -> None:
    assert validate_config({"apiKey": "secret"}, API_KEY_SCHEMA) is None


def test_missing_required_property() -> None:
    records = list(iter_validation_errors({}, API_KEY_SCHEMA))
    assert [(r.data_path, r.keyword, r.params) for r in records] == [
        ("", "required", {"missingProperty": ".apiKey"})
    ]
    assert _report({}, API_KEY_SCHEMA) == (
        "Configuration is invalid.\n"
        " - configuration misses the property 'apiKey'.\n"
        "   non-empty string"
    )


def test_each_missing_property_gets_a_record() -> None:
    schema = {"type": "object", "required": ["a", "b"]}
    records = list(iter_validation_errors({}, schema))
    assert [r.params["missingProperty"] for r in records] == [".a", ".b"]


def test_empty_string_is_reported_as_empty() -> None:
    assert _report({"apiKey": ""}, API_KEY_SCHEMA) == (
        "Configuration is invalid.\n - configuration.apiKey should not be empty."
    )


def test_unknown_properties_are_split() -> None:
    schema = {"type": "object", "properties": {"a": {}, "b": {}}, "additionalProperties": False}
    records = list(iter_validation_errors({"a": 1, "foo": 2, "bar": 3}, schema))
    assert [r.params["additionalProperty"] for r in records] == ["foo", "bar"]

    assert _report({"foo": 2}, schema) == (
        "Configuration is invalid.\n"
        " - configuration has an unknown property 'foo'. These properties are valid:\n"
        "   object { a?, b? }"
    )


def test_one_of_branches_become_details() -> None:
    schema = {
        "type": "object",
        "properties": {
            "entry": {"oneOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}]}
        },
    }
    records = list(iter_validation_errors({"entry": 5}, schema))
    assert [r.keyword for r in records] == ["type", "type", "oneOf"]
    assert {r.data_path for r in records} == {".entry"}

    assert _report({"entry": 5}, schema) == (
        "Configuration is invalid.\n"
        " - configuration.entry should be one of these:\n"
        "   string | [string]\n"
        "   Details:\n"
        "    * configuration.entry should be a string.\n"
        "    * configuration.entry should be an array:\n"
        "      [string]"
    )


def test_nested_paths_through_refs() -> None:
    report = _report({"rules": [{"tset": "x"}]}, RULE_SCHEMA)
    assert report == (
        "Configuration is invalid.\n"
        " - configuration.rules[0] has an unknown property 'tset'. These properties are valid:\n"
        "   object { test?, rules? }"
    )


def test_instanceof_keyword() -> None:
    schema = {"type": "object", "properties": {"hook": {"instanceof": "Function"}}}
    assert validate_config({"hook": len}, schema) is None
    assert "configuration.hook should be an instance of function." in _report({"hook": "nope"}, schema)


def test_instanceof_regexp() -> None:
    schema = {"type": "object", "properties": {"test": {"instanceof": "RegExp"}}}
    assert validate_config({"test": re.compile(r"\.js$")}, schema) is None
    assert "should be an instance of RegExp." in _report({"test": r"\.js$"}, schema)


def test_absolute_path_keyword_with_hint() -> None:
    schema = {
        "type": "object",
        "properties": {
            "output": {
                "type": "object",
                "properties": {
                    "filename": {"type": "string", "absolutePath": False},
                    "path": {"type": "string", "absolutePath": True},
                },
            }
        },
    }
    assert validate_config({"output": {"filename": "out.js", "path": "/tmp/dist"}}, schema) is None

    report = _report({"output": {"filename": "/tmp/out.js"}}, schema)
    assert 'configuration.output.filename: A relative path is expected. However, the provided value "/tmp/out.js" is an absolute path!' in report
    assert "is an absolute path!\n   Please use output.path" in report

    report = _report({"output": {"path": "dist"}}, schema)
    assert report.endswith('configuration.output.path: The provided value "dist" is not an absolute path!')


def test_error_message_callback_wraps_report() -> None:
    with pytest.raises(InvalidConfigurationError) as ei:
        validate_config({}, API_KEY_SCHEMA, error_message=lambda report, errors: f"app.yml is invalid:\n{report}")
    assert str(ei.value).startswith("app.yml is invalid:\nConfiguration is invalid.")
    assert len(ei.value.errors) == 1
