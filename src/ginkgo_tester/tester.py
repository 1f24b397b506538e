import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from . import artifacts
from .config.settings import (
    E2E_TEST_BINARY,
    GINKGO_BINARY,
    KUBECONFIG_ENV,
    KUBECTL_BINARY,
    TesterConfig,
    get_tester_version,
)
from .errors import BinaryNotFoundError, KubeconfigMissingError, TesterError
from .repo import clone_repo, resolve_run_dir
from .runner import build_child_env, build_ginkgo_args, resolve_binary, run_inherited

logger = logging.getLogger(__name__)


class TesterState(str, Enum):
    __test__ = False

    CONFIGURED = "configured"
    REPO_CLONED = "repo_cloned"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Tester:
    """Clones the test repository and drives one ginkgo run.

    Lifecycle: CONFIGURED -> REPO_CLONED -> RUNNING -> SUCCEEDED | FAILED.
    Any error is terminal; nothing is retried.
    """

    __test__ = False

    def __init__(self, config: TesterConfig, environ: Mapping[str, str] | None = None) -> None:
        self.config = config
        self._environ = environ
        self.state = TesterState.CONFIGURED

        self.kubeconfig_path = config.kubeconfig
        self.run_dir: Path | None = None

        # Set by acquire_test_package()
        self.e2e_test_path = ""
        self.ginkgo_path = ""
        self.kubectl_path = ""

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def init_run_dir(self) -> Path:
        self.run_dir = resolve_run_dir(self.environ)
        return self.run_dir

    def _get_run_dir(self) -> Path:
        if self.run_dir is None:
            return self.init_run_dir()
        return self.run_dir

    def pretest_setup(self) -> None:
        clone_repo(self.config.repo, self._get_run_dir())
        self.state = TesterState.REPO_CLONED

    def resolve_kubeconfig(self) -> str:
        if not self.kubeconfig_path:
            kubeconfig = self.environ.get(KUBECONFIG_ENV)
            if kubeconfig is None:
                raise KubeconfigMissingError()
            self.kubeconfig_path = kubeconfig
        return self.kubeconfig_path

    def acquire_test_package(self) -> None:
        """Locate ginkgo, the e2e suite binary and kubectl.

        PATH is searched first, then ``_output/bin`` and the root of the
        run directory. kubectl is optional.
        """
        run_dir = self._get_run_dir()
        search_dirs = [run_dir / "_output" / "bin", run_dir]
        self.ginkgo_path = resolve_binary(GINKGO_BINARY, search_dirs)
        self.e2e_test_path = resolve_binary(E2E_TEST_BINARY, search_dirs)
        try:
            self.kubectl_path = resolve_binary(KUBECTL_BINARY, search_dirs)
        except BinaryNotFoundError:
            logger.debug("kubectl not found; continuing without it")

    def test(self) -> None:
        try:
            self._test()
        except TesterError:
            self.state = TesterState.FAILED
            raise
        self.state = TesterState.SUCCEEDED

    def _test(self) -> None:
        artifacts.write_version_to_metadata(get_tester_version(self.environ), self.environ)

        self.pretest_setup()
        kubeconfig = self.resolve_kubeconfig()
        self.acquire_test_package()

        ginkgo_args = build_ginkgo_args(
            self.config,
            kubeconfig=kubeconfig,
            report_dir=str(artifacts.base_dir(self.environ)),
            e2e_test_path=self.e2e_test_path,
        )

        logger.info("Running ginkgo test as %s %s", self.ginkgo_path, ginkgo_args)
        self.state = TesterState.RUNNING
        run_inherited(
            [self.ginkgo_path, *ginkgo_args],
            env=build_child_env(self.config.env),
        )
