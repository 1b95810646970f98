from __future__ import annotations

from .schema import Config, ConvConfig, RegionConfig, TreeConfig
from .loader import ConfigError, load_config, loads_config, to_dict, validate_config

__all__ = [
    "Config",
    "RegionConfig",
    "TreeConfig",
    "ConvConfig",
    "ConfigError",
    "load_config",
    "loads_config",
    "validate_config",
    "to_dict",
]
