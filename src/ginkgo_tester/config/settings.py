import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import timedelta

logger = logging.getLogger(__name__)

__all__ = [
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
]

# Well-known kubetest2 environment
RUN_DIR_ENV = "KUBETEST2_RUN_DIR"
KUBECONFIG_ENV = "KUBECONFIG"
ARTIFACTS_ENV = "ARTIFACTS"

LOG_LEVEL_ENV = "GINKGO_TESTER_LOG_LEVEL"
# Stamped into metadata.json as "tester-version"; release builds set it
TESTER_VERSION_ENV = "GINKGO_TESTER_VERSION"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

DEFAULT_TIMEOUT = timedelta(hours=24)

# Binaries looked up in the run directory after the clone
GINKGO_BINARY = "ginkgo"
E2E_TEST_BINARY = "e2e.test"
KUBECTL_BINARY = "kubectl"


def get_log_level(environ: Mapping[str, str] | None = None) -> int:
    env = os.environ if environ is None else environ
    level_name = env.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    return getattr(logging, level_name, logging.INFO)


def get_tester_version(environ: Mapping[str, str] | None = None) -> str:
    from .. import __version__

    env = os.environ if environ is None else environ
    return env.get(TESTER_VERSION_ENV, "").strip() or __version__


@dataclass(frozen=True)
class TesterConfig:
    __test__ = False

    flake_attempts: int = 1
    ginkgo_args: str = ""
    parallel: int = 1
    skip_regex: str = ""
    focus_regex: str = ""
    timeout: timedelta = DEFAULT_TIMEOUT
    env: tuple[str, ...] = field(default_factory=tuple)
    repo: str = ""
    kubeconfig: str = ""  # Optional; falls back to $KUBECONFIG at test time

    def with_overrides(self, **overrides: object) -> "TesterConfig":
        return replace(self, **overrides)


def default_config() -> TesterConfig:
    """Return a configuration holding the tester defaults.

    flake_attempts and parallel start at 1, timeout at 24h, and no
    environment overrides are set, so the child inherits the parent's env.
    """
    return TesterConfig()
