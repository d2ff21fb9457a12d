"""
Run configuration assembly.

Resolves command-line flags, environment variables and settings-file values
into the single immutable ``RunConfiguration`` of an invocation. Precedence
is flag, then environment variable, then settings file, then built-in
default. All checks happen here, before any command runs or ping is sent.
"""

import argparse
import logging
from typing import Mapping, Optional

from ..models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    CaptureMode,
    CheckIdentity,
    DetailLevel,
    RunConfiguration,
)
from ..validation import (
    ValidationError,
    validate_base_url,
    validate_check_uuid,
    validate_non_empty_string,
    validate_ping_key,
    validate_positive_float,
    validate_slug,
)
from .settings import MAX_TIMEOUT_SECONDS, Settings

logger = logging.getLogger(__name__)

BASE_URL_ENV_VAR = "HEALTHCHECKS_BASE_URL"
PING_KEY_ENV_VAR = "HEALTHCHECKS_PING_KEY"


def _first_set(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def resolve_identity(uuid: Optional[str], slug: Optional[str],
                     ping_key: Optional[str]) -> CheckIdentity:
    """
    Build the check identity from a UUID or a slug + ping key.

    Raises:
        ValidationError: If neither or both are given, or a value is malformed
    """
    if uuid and slug:
        raise ValidationError("--uuid and --slug are mutually exclusive", field_name="uuid")
    if uuid:
        return CheckIdentity(uuid=validate_check_uuid(uuid, "--uuid"))
    if slug:
        if not ping_key:
            raise ValidationError(
                f"--slug requires a ping key (--ping-key or ${PING_KEY_ENV_VAR})",
                field_name="ping_key"
            )
        return CheckIdentity(
            slug=validate_slug(slug, "--slug"),
            ping_key=validate_ping_key(ping_key, "--ping-key"),
        )
    raise ValidationError("one of --uuid or --slug is required", field_name="uuid")


def _check_flag_conflicts(args: argparse.Namespace) -> None:
    if args.ping_only and (args.detailed or args.env):
        raise ValidationError("--ping-only cannot be used with --detailed or --env", field_name="ping_only")
    if args.log and args.time:
        raise ValidationError("--log cannot be used with --time", field_name="log")
    if args.env and not args.detailed:
        raise ValidationError("--env requires --detailed", field_name="env")


def build_run_configuration(args: argparse.Namespace, environ: Mapping[str, str],
                            settings: Optional[Settings] = None) -> RunConfiguration:
    """
    Assemble the run configuration.

    Args:
        args: Parsed command-line namespace
        environ: Process environment used for variable fallbacks
        settings: Values from the settings file, if any

    Returns:
        The validated, immutable RunConfiguration

    Raises:
        ValidationError: On any invalid or conflicting input
    """
    settings = settings or Settings()
    _check_flag_conflicts(args)

    command = tuple(args.command or ())
    if not command:
        raise ValidationError("no command given after '--'", field_name="command")
    validate_non_empty_string(command[0], "command")

    ping_key = _first_set(args.ping_key, environ.get(PING_KEY_ENV_VAR), settings.ping_key)
    identity = resolve_identity(args.uuid, args.slug, ping_key)

    base_url = validate_base_url(
        _first_set(args.base_url, environ.get(BASE_URL_ENV_VAR), settings.base_url) or DEFAULT_BASE_URL,
        "--base-url",
    )

    if args.timeout is not None:
        timeout = validate_positive_float(args.timeout, max_value=MAX_TIMEOUT_SECONDS, field_name="--timeout")
    else:
        timeout = settings.timeout or DEFAULT_TIMEOUT_SECONDS

    if args.ping_only:
        capture_mode = CaptureMode.NONE
    elif args.head:
        capture_mode = CaptureMode.HEAD
    else:
        capture_mode = CaptureMode.TAIL

    if args.env:
        detail_level = DetailLevel.DETAILED_ENV
    elif args.detailed:
        detail_level = DetailLevel.DETAILED
    else:
        detail_level = DetailLevel.BASIC

    config = RunConfiguration(
        identity=identity,
        command=command,
        base_url=base_url,
        user_agent=_first_set(args.user_agent, settings.user_agent),
        report_on_start=args.time,
        capture_mode=capture_mode,
        detail_level=detail_level,
        verbose=args.verbose,
        log_only=args.log,
        timeout=timeout,
    )
    logger.debug(f"Run configuration: {config}")
    return config
