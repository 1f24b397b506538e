import shlex

from ..config.duration import format_duration
from ..config.settings import TesterConfig
from ..errors import ArgParseError

ARG_SEPARATOR = "--"


def split_ginkgo_args(raw: str) -> list[str]:
    """Split ``--ginkgo-args`` with POSIX shell quoting rules.

    >>> split_ginkgo_args("--foo bar --baz 'qux quux'")
    ['--foo', 'bar', '--baz', 'qux quux']
    """
    try:
        return shlex.split(raw, posix=True)
    except ValueError as exc:
        raise ArgParseError(raw, str(exc)) from exc


def build_suite_args(config: TesterConfig, kubeconfig: str, report_dir: str) -> list[str]:
    """Flags forwarded to the suite binary, i.e. everything after ``--``."""
    return [
        f"--kubeconfig={kubeconfig}",
        f"--ginkgo.skip={config.skip_regex}",
        f"--ginkgo.focus={config.focus_regex}",
        f"--report-dir={report_dir}",
        f"--ginkgo.timeout={format_duration(config.timeout)}",
    ]


def build_ginkgo_args(
    config: TesterConfig,
    *,
    kubeconfig: str,
    report_dir: str,
    e2e_test_path: str,
) -> list[str]:
    """Assemble the ginkgo argument vector.

    The order is fixed: extra runner args as given, ``--nodes=<N>``, the
    suite binary, ``--``, then the suite flags. ginkgo forwards everything
    after the separator to the suite untouched.

    Raises:
        ArgParseError: If ``config.ginkgo_args`` has unbalanced quotes.
    """
    args = split_ginkgo_args(config.ginkgo_args)
    args.extend([f"--nodes={config.parallel}", e2e_test_path, ARG_SEPARATOR])
    args.extend(build_suite_args(config, kubeconfig, report_dir))
    return args
