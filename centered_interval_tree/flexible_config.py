"""
YAML configuration with includes, environment substitution and dot-notation overrides.

Usage:
    interval-tree-query --config queries.yaml --tree.open_ended true
    interval-tree-query --config queries.yaml --queries.points.0 42

A config file may name a base file with ``include: base.yaml``; the including
file wins on conflicts. ``${VAR}`` and ``$VAR`` are replaced from the
environment before the YAML is parsed.
"""

import argparse
import math
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .logging_config import get_logger

logger = get_logger(__name__)


ENV_REFERENCE = re.compile(r'\$(?:\{(?P<braced>[^}]+)\}|(?P<bare>\w+))')


def substitute_env_vars(content: str) -> str:
    """Replace ``${VAR}`` and ``$VAR`` with the environment; unknown names stay as written."""
    def lookup(match: re.Match) -> str:
        name = match.group('braced') or match.group('bare')
        if name in os.environ:
            return os.environ[name]
        logger.warning(f"Environment variable '{name}' not found, keeping placeholder")
        return match.group(0)

    return ENV_REFERENCE.sub(lookup, content)


def deep_merge_configs(base_config: Dict[Any, Any], override_config: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Merge override_config over base_config without touching either.

    Sections present on both sides merge recursively, so an including file
    only restates the keys it changes. Lists from both sides are joined base
    first (e.g. inline intervals or queries added on top of a shared file).
    Anything else is taken from the override.
    """
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge_configs(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            value = [*current, *value]
        merged[key] = value
    return merged


def load_yaml_config(file_path: Union[str, Path], _visited: Optional[set] = None) -> Dict[Any, Any]:
    """
    Load a YAML config file, resolving ``include`` directives.

    Args:
        file_path: Path to the YAML file
        _visited: Files already on the include chain

    Returns:
        Merged configuration dictionary

    Raises:
        FileNotFoundError: If the file or an included file does not exist
        ValueError: On invalid YAML or a circular include
    """
    visited = set() if _visited is None else _visited
    file_path = Path(file_path).resolve()

    if str(file_path) in visited:
        raise ValueError(f"Circular include detected: {file_path}")
    visited.add(str(file_path))

    if not file_path.exists():
        raise FileNotFoundError(f"Could not find file: {file_path}")

    content = substitute_env_vars(file_path.read_text(encoding='utf-8'))
    try:
        config = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file {file_path}: {e}")
    if not isinstance(config, dict):
        raise ValueError(f"Top level of {file_path} must be a mapping")

    if 'include' in config:
        include_file = Path(config.pop('include'))
        if not include_file.is_absolute():
            include_file = file_path.parent / include_file
        base_config = load_yaml_config(include_file, visited.copy())
        config = deep_merge_configs(base_config, config)

    return config


def convert_value(value: str) -> Any:
    """
    Read a command line override as bool, int or float where it is one.

    Anything else (including nan/inf) stays a string, so query coordinates
    given on the command line are checked by the query runner, not here.
    """
    lowered = value.strip().lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def _step(current: Any, key: str) -> Any:
    if isinstance(current, list):
        if not key.isdigit():
            raise ValueError(f"Cannot use non-numeric key '{key}' for list access")
        return current[int(key)]
    return current[key]


def get_nested_value(dictionary: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """Get a value from a nested dictionary using dot notation, with list index support."""
    current = dictionary
    try:
        for key in key_path.split('.'):
            current = _step(current, key)
    except (KeyError, TypeError, IndexError, ValueError):
        return default
    return current


def set_nested_value(dictionary: Dict[str, Any], key_path: str, value: Any) -> None:
    """
    Set a value in a nested dictionary using dot notation, creating missing dicts.

    Raises:
        ValueError: If a non-numeric key addresses a list
        IndexError: If a list index is out of range
    """
    keys = key_path.split('.')
    current = dictionary
    for key in keys[:-1]:
        if isinstance(current, dict) and key not in current:
            current[key] = {}
        current = _step(current, key)

    final_key = keys[-1]
    if isinstance(current, list):
        if not final_key.isdigit():
            raise ValueError(f"Cannot use non-numeric key '{final_key}' for list access")
        current[int(final_key)] = value
    else:
        current[final_key] = value


class FlexibleConfig(dict):
    """Dictionary with dot-notation access for nested values and list indices."""

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a value using dot notation.

        Examples:
            config.get('tree.open_ended', False)
            config.get('queries.ranges.0')
        """
        return get_nested_value(self, key_path, default)

    def set(self, key_path: str, value: Any) -> None:
        set_nested_value(self, key_path, value)

    def has(self, key_path: str) -> bool:
        marker = object()
        return get_nested_value(self, key_path, marker) is not marker


def apply_overrides(config: Dict[str, Any], overrides: List[str]) -> None:
    """
    Apply ``--key.path value`` pairs to config in place.

    A key followed by another ``--`` option (or nothing) is set to True.
    """
    i = 0
    while i < len(overrides):
        if not overrides[i].startswith('--'):
            logger.warning(f"Ignoring positional argument: {overrides[i]}")
            i += 1
            continue
        key = overrides[i][2:]
        if i + 1 < len(overrides) and not overrides[i + 1].startswith('--'):
            value = convert_value(overrides[i + 1])
            i += 2
        else:
            value = True
            i += 1
        set_nested_value(config, key, value)
        logger.info(f"Override: {key} = {value}")


def parse_flexible_config(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None):
    """
    Parse command line arguments together with a YAML config and dot-notation overrides.

    Adds ``--config`` to the parser; any argument the parser does not know
    is treated as an override.

    Returns:
        Tuple (args, config) with config a FlexibleConfig
    """
    parser.add_argument('--config', help='Path to YAML configuration file')
    args, unknown = parser.parse_known_args(argv)

    config = FlexibleConfig()
    if args.config:
        config.update(load_yaml_config(args.config))
        logger.info(f"Loaded configuration from: {args.config}")

    apply_overrides(config, unknown)
    return args, config
