from critpath.config.io import (
    CONFIG_ENV_VAR,
    config_layers,
    deep_merge,
    get_global_config_path,
    get_local_config_path,
    load_config,
    load_config_file,
)
from critpath.config.models import (
    CONFIG_KEY_DESCRIPTIONS,
    AnalysisConfig,
    ConfigSource,
    CritpathConfig,
    DisplayConfig,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "config_layers",
    "CONFIG_KEY_DESCRIPTIONS",
    "AnalysisConfig",
    "ConfigSource",
    "CritpathConfig",
    "DisplayConfig",
    "deep_merge",
    "get_global_config_path",
    "get_local_config_path",
    "load_config",
    "load_config_file",
]
