from __future__ import annotations

import json
import logging
import os
import tomllib
from copy import deepcopy
from dataclasses import dataclass
from importlib import resources
from typing import Any, Dict, Optional

import json5
import yaml
from dotenv import dotenv_values

from .errors import ConfigReadError

logger = logging.getLogger(__name__)

# lookup order used by find_and_read_config
CONFIG_EXTENSIONS = ('.yml', '.yaml', '.json', '.json5', '.toml')
FILE_SPEC_PREFIX = 'file:'


def parse_config_text(content: str, file_name: str) -> Any:
    """Parse config text, picking the parser from the file extension."""
    lowered = file_name.lower()
    try:
        if lowered.endswith('.json'):
            return json.loads(content)
        if lowered.endswith('.json5'):
            return json5.loads(content)
        if lowered.endswith('.toml'):
            return tomllib.loads(content)
        if lowered.endswith(('.yml', '.yaml')):
            return yaml.safe_load(content)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigReadError(f"Cannot parse {file_name}: {e}") from e
    raise ConfigReadError(f"Unsupported config format: {file_name}")


def read_config(config_file: str, project_dir: Optional[str] = None) -> Any:
    with open(config_file, 'r', encoding='utf-8') as f:
        content = f.read()
    result = parse_config_text(content, config_file)

    if project_dir is not None:
        relative = os.path.relpath(config_file, project_dir)
        shown = config_file if relative.startswith('..') else relative
        logger.info("Using %s configuration file", shown)
    return result


def find_and_read_config(project_dir: str, config_filename: str) -> Optional[Any]:
    """Read the first existing '<config_filename><ext>' in ``project_dir``."""
    for ext in CONFIG_EXTENSIONS:
        data = _read_if_exists(os.path.join(project_dir, f"{config_filename}{ext}"), project_dir)
        if data is not None:
            return data
    logger.debug("No %s config found in %s", config_filename, project_dir)
    return None


def read_config_content(file_obj):
    """Read a config or schema from an uploaded file or file path."""
    if file_obj is None:
        raise ConfigReadError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return parse_config_text(content, getattr(file_obj, 'name', '') or '.json')

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    return read_config(path)


@dataclass(frozen=True)
class ConfigRequest:
    """Where and under which names to look for a tool's configuration.

    ``package_metadata`` is the already parsed metadata file, if the caller
    has it; otherwise ``metadata_file`` in ``project_dir`` is read.
    """

    package_key: str
    config_filename: str
    project_dir: str
    package_metadata: Optional[Dict[str, Any]] = None
    metadata_file: str = 'package.json'


def _read_if_exists(config_file: str, project_dir: Optional[str] = None) -> Optional[Any]:
    try:
        return read_config(config_file, project_dir)
    except (FileNotFoundError, NotADirectoryError):
        return None


def deep_assign(target: Any, *sources: Any) -> Any:
    """Merge ``sources`` into a copy of ``target``, recursing into dicts.

    Lists and scalars are replaced; keys whose value is None are skipped.
    """
    result = deepcopy(target) if isinstance(target, dict) else {}
    for source in sources:
        if not isinstance(source, dict):
            continue
        for key, value in source.items():
            if value is None:
                continue
            previous = result.get(key)
            if isinstance(previous, dict) and isinstance(value, dict):
                result[key] = deep_assign(previous, value)
            else:
                result[key] = deepcopy(value)
    return result


def load_config(request: ConfigRequest) -> Optional[Any]:
    """Config stored under ``package_key`` in the metadata, else the config file."""
    metadata = request.package_metadata
    if metadata is None:
        metadata = _read_if_exists(os.path.join(request.project_dir, request.metadata_file))

    data = metadata.get(request.package_key) if isinstance(metadata, dict) else None
    if data is None:
        return find_and_read_config(request.project_dir, request.config_filename)
    logger.debug("Using %s from %s", request.package_key, request.metadata_file)
    return data


def get_config(
    request: ConfigRequest,
    config_path: Optional[str] = None,
    config_from_options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Explicit or discovered config, with ``config_from_options`` merged on top."""
    if config_path is None:
        file_or_package_config = load_config(request)
    else:
        path = os.path.join(request.project_dir, config_path)
        file_or_package_config = read_config(path, request.project_dir)
    return deep_assign(file_or_package_config or {}, config_from_options)


def _resolve_package_resource(spec: str) -> Optional[str]:
    package, _, resource = spec.partition('/')
    if not package or not resource:
        return None
    try:
        path = resources.files(package).joinpath(resource)
    except (ModuleNotFoundError, TypeError, ValueError):
        return None
    return str(path) if path.is_file() else None


def load_parent_config(request: ConfigRequest, spec: str) -> Any:
    """Read the config named by an ``extends`` value.

    'file:<path>' is resolved against the project directory only. A bare
    value is tried there first, then as '<package>/<resource>' data shipped
    inside an installed Python package.
    """
    is_file_spec = spec.startswith(FILE_SPEC_PREFIX)
    if is_file_spec:
        spec = spec[len(FILE_SPEC_PREFIX):]

    parent_config = _read_if_exists(os.path.join(request.project_dir, spec), request.project_dir)
    if parent_config is None and not is_file_spec:
        resolved = _resolve_package_resource(spec)
        if resolved is not None:
            parent_config = read_config(resolved, request.project_dir)

    if parent_config is None:
        raise ConfigReadError(f"Cannot find parent config file: {spec}")
    return parent_config


def load_env(env_file: str) -> Optional[Dict[str, str]]:
    """Load ``env_file`` into ``os.environ`` without overriding existing variables.

    ``${VAR}`` references are expanded. Returns the parsed values, or None
    when the file does not exist.
    """
    if not os.path.isfile(env_file):
        return None

    parsed = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
    for key, value in parsed.items():
        if key not in os.environ:
            os.environ[key] = value
    logger.debug("Loaded %d variable(s) from %s", len(parsed), env_file)
    return parsed
