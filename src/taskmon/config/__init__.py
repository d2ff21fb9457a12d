"""
Configuration management for the taskmon package.

This module resolves command-line flags, environment variables and the
optional TOML settings file into a validated run configuration.
"""

from .builder import (
    BASE_URL_ENV_VAR,
    PING_KEY_ENV_VAR,
    build_run_configuration,
    resolve_identity,
)
from .loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    load_settings_data,
    load_toml_file,
    resolve_config_path,
)
from .settings import Settings, validate_settings

__all__ = [
    "BASE_URL_ENV_VAR",
    "PING_KEY_ENV_VAR",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "Settings",
    "build_run_configuration",
    "load_settings_data",
    "load_toml_file",
    "resolve_config_path",
    "resolve_identity",
    "validate_settings",
]
