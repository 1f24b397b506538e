"""Configuration module for the ginkgo tester."""

from .duration import format_duration, parse_duration
from .flags import FLAGS, PROG_NAME, FlagSpec, build_command, parse_flags
from .settings import (
    ARTIFACTS_ENV,
    DEFAULT_TIMEOUT,
    KUBECONFIG_ENV,
    LOG_FORMAT,
    LOG_LEVEL_ENV,
    RUN_DIR_ENV,
    TESTER_VERSION_ENV,
    TesterConfig,
    default_config,
    get_log_level,
    get_tester_version,
)

__all__ = [
    # Settings
    "ARTIFACTS_ENV",
    "DEFAULT_TIMEOUT",
    "KUBECONFIG_ENV",
    "LOG_FORMAT",
    "LOG_LEVEL_ENV",
    "RUN_DIR_ENV",
    "TESTER_VERSION_ENV",
    "TesterConfig",
    "default_config",
    "get_log_level",
    "get_tester_version",
    # Flags
    "FLAGS",
    "PROG_NAME",
    "FlagSpec",
    "build_command",
    "parse_flags",
    # Durations
    "format_duration",
    "parse_duration",
]
