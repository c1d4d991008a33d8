"""
Reading and writing alpha-crop configuration files.

JSON, YAML and TOML files are read, chosen by file suffix; JSON and YAML
can be written back. String values may reference environment variables
as ``${NAME}`` or ``${NAME:default}``.
"""

import json
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..exceptions import ConfigurationError
from .models import Config

PathLike = Union[str, Path]

ENV_PREFIX = "ALPHA_CROP_"

_ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _read_json(path: Path) -> Any:
    with path.open('r', encoding='utf-8') as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with path.open('r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _read_toml(path: Path) -> Any:
    with path.open('rb') as f:
        return tomllib.load(f)


_READERS = {
    '.json': _read_json,
    '.yaml': _read_yaml,
    '.yml': _read_yaml,
    '.toml': _read_toml,
}

_SYNTAX_ERRORS = (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError)


def load_config(config_path: PathLike) -> Config:
    """
    Load and validate a configuration file.

    Environment references are expanded before validation; ``ALPHA_CROP_NAME``
    is tried before ``NAME``.

    Raises:
        ConfigurationError: If the file is missing, unreadable, of an
            unknown format, or fails validation
    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ConfigurationError(
            f"Unsupported configuration format: {path.suffix or path.name}",
            {"supported": ", ".join(_READERS)},
        )

    try:
        data = reader(path)
    except _SYNTAX_ERRORS as e:
        kind = path.suffix.lstrip('.').upper()
        raise ConfigurationError(f"Invalid {kind} in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping")

    return load_config_from_dict(_expand_env(data))


def load_config_from_dict(config_data: Dict[str, Any]) -> Config:
    """
    Validate a configuration mapping.

    Raises:
        ConfigurationError: Listing every invalid field as ``section -> key: reason``
    """
    try:
        return Config.model_validate(config_data)
    except ValidationError as e:
        problems = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(
            "Configuration validation failed:\n" + "\n".join(problems)
        ) from e


def save_config(config: Config, output_path: PathLike) -> None:
    """Write ``config`` as JSON or YAML, chosen by the file suffix."""
    path = Path(output_path)
    data = config.model_dump(mode='json')

    suffix = path.suffix.lower()
    if suffix == '.json':
        text = json.dumps(data, indent=2, ensure_ascii=False)
    elif suffix in ('.yaml', '.yml'):
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        raise ConfigurationError(f"Unsupported format for saving: {suffix or path.name}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')


def _expand_env(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(_env_value, value)
    return value


def _env_value(match: "re.Match[str]") -> str:
    name, default = match.group(1), match.group(2)
    for key in (ENV_PREFIX + name, name):
        if key in os.environ:
            return os.environ[key]
    # Unresolved references are left as written
    return default if default is not None else match.group(0)
