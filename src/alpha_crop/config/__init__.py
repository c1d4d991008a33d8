"""
Configuration system with Pydantic models and validation.

Provides configuration management with type safety, validation, and
support for JSON, YAML and TOML files.
"""

from .models import (
    Config,
    DirectoryConfig,
    BoundsConfig,
    CropConfig,
    LoggingConfig,
    LogLevel,
)
from .loader import (
    load_config,
    load_config_from_dict,
    save_config,
)

__all__ = [
    # Configuration models
    "Config",
    "DirectoryConfig",
    "BoundsConfig",
    "CropConfig",
    "LoggingConfig",
    "LogLevel",
    # Configuration loading
    "load_config",
    "load_config_from_dict",
    "save_config",
]
