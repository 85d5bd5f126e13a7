import copy
import logging
import os
import pathlib
from typing import Any, cast

import pydantic
import ruamel.yaml

from critpath import exceptions
from critpath.config import models

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CRITPATH_CONFIG"
LOCAL_CONFIG_NAME = ".critpath.yaml"


def get_global_config_path() -> pathlib.Path:
    """Get user-level config path (~/.config/critpath/config.yaml)."""
    return pathlib.Path.home() / ".config" / "critpath" / "config.yaml"


def get_local_config_path() -> pathlib.Path:
    """Get working-directory config path (./.critpath.yaml)."""
    return pathlib.Path.cwd() / LOCAL_CONFIG_NAME


def load_config_file(path: pathlib.Path) -> dict[str, Any]:
    """Load YAML config as plain dict, empty if the file is missing."""
    if not path.exists():
        return {}

    try:
        yaml = ruamel.yaml.YAML(typ="safe")
        with path.open() as f:
            data = yaml.load(f)
    except ruamel.yaml.YAMLError as e:
        raise exceptions.ConfigError(f"Invalid YAML in {path}: {e}") from e
    except PermissionError:
        raise exceptions.ConfigError(f"Permission denied reading {path}") from None
    except OSError as e:
        raise exceptions.ConfigError(f"Error reading {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise exceptions.ConfigError(f"Config in {path} must be a mapping")
    return cast("dict[str, Any]", data)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base, recursively for nested dicts."""
    result = copy.deepcopy(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            nested_override = cast("dict[str, Any]", val)
            result[key] = deep_merge(result[key], nested_override)
        else:
            result[key] = copy.deepcopy(val)
    return result


def config_layers(
    explicit: pathlib.Path | None = None,
) -> list[tuple[models.ConfigSource, pathlib.Path]]:
    """List config files in merge order (later overrides earlier).

    Global and local files are optional. A path given explicitly or through
    $CRITPATH_CONFIG must exist.
    """
    layers = [
        (models.ConfigSource.GLOBAL, get_global_config_path()),
        (models.ConfigSource.LOCAL, get_local_config_path()),
    ]
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        layers.append((models.ConfigSource.ENV, pathlib.Path(env_path)))
    if explicit is not None:
        layers.append((models.ConfigSource.EXPLICIT, explicit))

    for source, path in layers:
        if source in (models.ConfigSource.ENV, models.ConfigSource.EXPLICIT) and not path.exists():
            raise exceptions.ConfigError(f"Config file not found: {path}")
    return [(source, path) for source, path in layers if path.exists()]


def load_config(explicit: pathlib.Path | None = None) -> models.CritpathConfig:
    """Load and merge configs: defaults < global < local < $CRITPATH_CONFIG < explicit."""
    merged = models.CritpathConfig.get_default().model_dump()
    for source, path in config_layers(explicit):
        logger.debug(f"Reading {source} config from {path}")
        merged = deep_merge(merged, load_config_file(path))

    try:
        return models.CritpathConfig.model_validate(merged)
    except pydantic.ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise exceptions.ConfigError(f"Invalid configuration: {details}") from e
