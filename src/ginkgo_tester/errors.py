class TesterError(Exception):
    """Base exception for the ginkgo tester."""

    error_code: str = "TESTER_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(TesterError):
    """A flag is unknown, malformed or out of range."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, flag: str, detail: str) -> None:
        self.flag = flag
        super().__init__(f"invalid flag {flag}: {detail}")


class RunEnvironmentError(TesterError):
    """The run directory cannot be resolved."""

    error_code = "RUN_ENVIRONMENT_ERROR"


class CloneError(TesterError):
    """The source repository could not be cloned."""

    error_code = "CLONE_ERROR"

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        super().__init__(f"failed to clone repo {url!r}: {detail}")


class KubeconfigMissingError(TesterError):
    error_code = "KUBECONFIG_MISSING"

    def __init__(self) -> None:
        super().__init__("kubeconfig path not provided")


class ArgParseError(TesterError):
    """--ginkgo-args could not be split into words."""

    error_code = "ARG_PARSE_ERROR"

    def __init__(self, raw: str, detail: str) -> None:
        self.raw = raw
        super().__init__(f"error parsing --ginkgo-args {raw!r}: {detail}")


class BinaryNotFoundError(TesterError):
    error_code = "BINARY_NOT_FOUND"

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        suffix = f" ({detail})" if detail else ""
        super().__init__(f"binary '{name}' not found{suffix}")


class MetadataError(TesterError):
    """metadata.json in the artifacts directory is unreadable."""

    error_code = "METADATA_ERROR"


class TestRunError(TesterError):
    """The test runner exited non-zero."""

    __test__ = False  # keep pytest from collecting this class
    error_code = "TEST_RUN_FAILED"

    def __init__(self, command: list[str], returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        name = command[0] if command else "test runner"
        super().__init__(f"{name} exited with code {returncode}")


__all__ = [
    "ArgParseError",
    "BinaryNotFoundError",
    "CloneError",
    "ConfigurationError",
    "KubeconfigMissingError",
    "MetadataError",
    "RunEnvironmentError",
    "TestRunError",
    "TesterError",
]
