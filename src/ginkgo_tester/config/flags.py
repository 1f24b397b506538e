import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import click

from ..errors import ConfigurationError
from .duration import format_duration, parse_duration
from .settings import TesterConfig, default_config

logger = logging.getLogger(__name__)

__all__ = ["FLAGS", "PROG_NAME", "FlagSpec", "build_command", "parse_flags"]

PROG_NAME = "kubetest2-tester-ginkgo"


class DurationParamType(click.ParamType):
    """Go duration syntax (``24h``, ``1h30m``); negative values are rejected."""

    name = "duration"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> timedelta:
        if isinstance(value, timedelta):
            return value
        try:
            parsed = parse_duration(str(value))
        except ValueError as exc:
            self.fail(str(exc), param, ctx)
        if parsed < timedelta(0):
            self.fail(f"duration must be non-negative, got {value!r}", param, ctx)
        return parsed


class EnvVarParamType(click.ParamType):
    name = "KEY=VALUE"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> str:
        text = str(value)
        key, sep, _ = text.partition("=")
        if not sep or not key:
            self.fail(f"expected KEY=VALUE, got {text!r}", param, ctx)
        return text


@dataclass(frozen=True)
class FlagSpec:
    """One row of the flag table: ``--name`` populates ``TesterConfig.<field>``."""

    name: str
    field: str
    default: Any
    help: str
    type: Any = str
    multiple: bool = False

    @property
    def opt(self) -> str:
        return f"--{self.name}"

    def to_option(self) -> click.Option:
        if isinstance(self.default, timedelta):
            show_default: bool | str = format_duration(self.default)
        else:
            show_default = not self.multiple
        return click.Option(
            [self.opt, self.field],
            type=self.type,
            default=self.default,
            multiple=self.multiple,
            show_default=show_default,
            help=self.help,
        )


_DEFAULTS = default_config()

FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(
        "flake-attempts",
        "flake_attempts",
        _DEFAULTS.flake_attempts,
        "Make up to this many attempts to run each spec.",
        type=click.IntRange(min=1),
    ),
    FlagSpec(
        "ginkgo-args",
        "ginkgo_args",
        _DEFAULTS.ginkgo_args,
        "Additional arguments supported by the ginkgo binary.",
    ),
    FlagSpec(
        "parallel",
        "parallel",
        _DEFAULTS.parallel,
        "Run this many tests in parallel at once.",
        type=click.IntRange(min=1),
    ),
    FlagSpec("skip-regex", "skip_regex", _DEFAULTS.skip_regex, "Regular expression of jobs to skip."),
    FlagSpec(
        "focus-regex", "focus_regex", _DEFAULTS.focus_regex, "Regular expression of jobs to focus on."
    ),
    FlagSpec(
        "timeout",
        "timeout",
        _DEFAULTS.timeout,
        "How long (in golang duration format) to wait for ginkgo tests to complete.",
        type=DurationParamType(),
    ),
    FlagSpec(
        "env",
        "env",
        _DEFAULTS.env,
        "List of env variables to pass to ginkgo libraries. Repeat for each KEY=VALUE.",
        type=EnvVarParamType(),
        multiple=True,
    ),
    FlagSpec("repo", "repo", _DEFAULTS.repo, "Git repo to clone for the test."),
    FlagSpec(
        "kubeconfig",
        "kubeconfig",
        _DEFAULTS.kubeconfig,
        "Path to the kubeconfig file. Defaults to $KUBECONFIG.",
    ),
)


def build_command() -> click.Command:
    def _callback(**values: Any) -> TesterConfig:
        values["env"] = tuple(values["env"])
        return default_config().with_overrides(**values)

    return click.Command(
        PROG_NAME,
        callback=_callback,
        params=[spec.to_option() for spec in FLAGS],
        context_settings={"help_option_names": ["-h", "--help"]},
        help="Clone a git repository and run its ginkgo e2e suite.",
    )


def _bad_parameter_flag(exc: click.BadParameter) -> str:
    if exc.param is not None and exc.param.opts:
        return exc.param.opts[0]
    return exc.param_hint if isinstance(exc.param_hint, str) else "unknown"


def parse_flags(argv: Sequence[str]) -> TesterConfig | None:
    """Parse command-line flags into a TesterConfig.

    Returns:
        The parsed configuration, or None when ``-h``/``--help`` was given
        (flag documentation has already been written to stdout).

    Raises:
        ConfigurationError: For unknown, malformed or out-of-range flags.
    """
    command = build_command()
    try:
        result = command.main(args=list(argv), prog_name=PROG_NAME, standalone_mode=False)
    except click.NoSuchOption as exc:
        raise ConfigurationError(exc.option_name, exc.format_message()) from exc
    except click.BadOptionUsage as exc:
        raise ConfigurationError(exc.option_name, exc.format_message()) from exc
    except click.BadParameter as exc:
        raise ConfigurationError(_bad_parameter_flag(exc), exc.format_message()) from exc
    except click.UsageError as exc:
        raise ConfigurationError("arguments", exc.format_message()) from exc

    if isinstance(result, TesterConfig):
        logger.debug("Parsed configuration: %s", result)
        return result
    return None
