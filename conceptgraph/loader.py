"""
Configuration Loading
=====================

Builds engine configuration and profiles from structured sources: JSON or
YAML files, plain dictionaries, and environment variables.

A file may hold a configuration mapping, a profile list, or both::

    # engine.yaml
    config:
      base_value: 2.5
      strict: true
    profiles:
      - name: support
        priority: 1
        quantum_level: 2.95
        max_hop_distance: 3
        kind: professional
        protocols:
          subject_identification: true
          marker_template: "Topic: {topic}"

Every loaded configuration passes through the invariant enforcer before
it is returned, so callers never see a drifted configuration.

Example:
    config = load_config("engine.yaml")
    registry = ProfileRegistry(load_profiles("engine.yaml"))
    processor = ConceptProcessor(config=config, registry=registry)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .config import EngineConfig
from .errors import ConfigurationError
from .invariants import InvariantEnforcer
from .profiles import Profile

logger = logging.getLogger(__name__)

ENV_PREFIX = 'CONCEPTGRAPH_'

_BOOL_FIELDS = frozenset({'enforce_invariant', 'strict'})
_INT_FIELDS = frozenset({'top_concepts'})
_OPTIONAL_FIELDS = frozenset({'learn_strength'})
_TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'false', 'no', 'off'})

PathLike = Union[str, Path]


def read_document(path: PathLike) -> Any:
    """
    Parse a JSON or YAML file.

    Args:
        path: File ending in ``.json``, ``.yaml`` or ``.yml``

    Returns:
        Parsed document; an empty YAML file yields an empty dict.

    Raises:
        ConfigurationError: On an unsupported extension or unparsable content.
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        try:
            if suffix == '.json':
                return json.load(f)
            if suffix in ('.yaml', '.yml'):
                return yaml.safe_load(f) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not parse {path}: {e}", path=str(path)) from e
    raise ConfigurationError(
        f"Unsupported configuration format '{suffix}' (expected .json, .yaml or .yml)",
        path=str(path)
    )


def config_from_dict(data: Mapping[str, Any]) -> EngineConfig:
    """
    Build a validated configuration from a mapping.

    A mapping with a ``config`` key is unwrapped first.

    Raises:
        ConfigurationError: On unknown keys or unusable values.
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    if 'config' in data:
        data = data['config'] or {}
    return InvariantEnforcer().validate(EngineConfig.from_dict(dict(data)))


def profiles_from_dict(data: Union[Mapping[str, Any], List[Mapping[str, Any]]]) -> List[Profile]:
    """
    Build profiles from a list of profile mappings.

    A mapping with a ``profiles`` key is unwrapped first.

    Raises:
        ConfigurationError: If a profile definition is invalid.
    """
    if isinstance(data, Mapping):
        data = data.get('profiles') or []
    if not isinstance(data, list):
        raise ConfigurationError(
            f"Profiles must be a list, got {type(data).__name__}"
        )
    return [Profile.from_dict(entry) for entry in data]


def load_config(path: PathLike) -> EngineConfig:
    """
    Load a validated configuration from a JSON or YAML file.

    Args:
        path: Configuration file path

    Returns:
        EngineConfig with invariant repairs applied.
    """
    config = config_from_dict(read_document(path))
    logger.info("Loaded configuration from %s", path)
    return config


def load_profiles(path: PathLike) -> List[Profile]:
    """
    Load profiles from a JSON or YAML file.

    Args:
        path: File holding a ``profiles`` list (or a bare list)

    Returns:
        Profiles in file order.
    """
    profiles = profiles_from_dict(read_document(path))
    logger.info("Loaded %d profiles from %s", len(profiles), path)
    return profiles


def _parse_env_value(name: str, raw: str) -> Any:
    value = raw.strip()
    if name in _OPTIONAL_FIELDS and value.lower() in ('', 'none', 'null'):
        return None
    if name in _BOOL_FIELDS:
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"{name} must be a boolean, got {raw!r}", param=name)
    try:
        if name in _INT_FIELDS:
            return int(value)
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be numeric, got {raw!r}", param=name) from e


def config_from_env(
    prefix: str = ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
    base: Optional[EngineConfig] = None
) -> EngineConfig:
    """
    Build a configuration from environment variables.

    ``CONCEPTGRAPH_BASE_VALUE=2.5`` sets ``base_value``; variables that do
    not name a configuration field are ignored.

    Args:
        prefix: Variable name prefix
        environ: Mapping to read instead of ``os.environ``
        base: Configuration the variables override (defaults to defaults)

    Returns:
        EngineConfig with invariant repairs applied.

    Raises:
        ConfigurationError: If a variable cannot be parsed or the result
            is unusable.
    """
    environ = os.environ if environ is None else environ
    known = set(EngineConfig.__dataclass_fields__)
    overrides: Dict[str, Any] = {}
    for key, raw in environ.items():
        if not key.startswith(prefix):
            continue
        name = key[len(prefix):].lower()
        if name in known:
            overrides[name] = _parse_env_value(name, raw)

    if overrides:
        logger.info("Configuration overrides from environment: %s", sorted(overrides))
    config = (base or EngineConfig()).copy(**overrides)
    return InvariantEnforcer().validate(config)
