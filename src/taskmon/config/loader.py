"""
Settings file loading utilities.

This module handles locating and parsing the optional TOML settings file
that provides defaults for the ping service connection.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..validation import ErrorSeverity, ValidationError, handle_config_error

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TASK_MON_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/task-mon/config.toml")


def load_toml_file(file_path: Path, description: str = "settings file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.debug(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description} {file_path}",
            severity=ErrorSeverity.DEBUG,
            reraise=True,
            logger=logger
        )
        raise


def resolve_config_path(explicit: Optional[str], environ: Mapping[str, str]) -> Optional[Path]:
    """
    Decide which settings file to read, if any.

    An explicit ``--config`` path wins over ``$TASK_MON_CONFIG``; both must
    exist. Otherwise the default location is used only when it exists.

    Returns:
        Path to load, or None when no settings file applies
    """
    if explicit:
        return Path(explicit).expanduser()
    if environ.get(CONFIG_ENV_VAR):
        return Path(environ[CONFIG_ENV_VAR]).expanduser()

    default_path = DEFAULT_CONFIG_PATH.expanduser()
    if default_path.is_file():
        return default_path
    return None


def load_settings_data(explicit: Optional[str] = None,
                       environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Load the ``[healthchecks]`` table of the applicable settings file.

    Returns:
        The table contents, or an empty dict when there is no settings file
    """
    environ = os.environ if environ is None else environ
    config_path = resolve_config_path(explicit, environ)
    if config_path is None:
        return {}

    data = load_toml_file(config_path)
    section = data.get("healthchecks", {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[healthchecks] in {config_path} must be a table",
            field_name="healthchecks",
            value=section
        )
    return section
