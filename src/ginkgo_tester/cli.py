import logging
import sys
from collections.abc import Sequence

from dotenv import find_dotenv, load_dotenv

from .config import LOG_FORMAT, get_log_level, parse_flags
from .errors import ConfigurationError, TesterError, TestRunError
from .tester import Tester

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2


def execute(argv: Sequence[str]) -> int:
    """Parse flags and run the tester.

    Returns 0 on success or when ``--help`` was requested. Errors propagate
    to the caller.
    """
    config = parse_flags(argv)
    if config is None:
        return 0

    tester = Tester(config)
    tester.init_run_dir()
    tester.test()
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    load_dotenv(find_dotenv(usecwd=True))

    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)

    args = sys.argv[1:] if argv is None else list(argv)
    try:
        code = execute(args)
    except TestRunError as exc:
        logger.critical("failed to run ginkgo tester: %s", exc)
        # negative return codes mean the child died from a signal
        code = exc.returncode if exc.returncode > 0 else 128 - exc.returncode
    except ConfigurationError as exc:
        logger.critical("failed to initialize tester: %s", exc)
        code = EXIT_USAGE
    except TesterError as exc:
        logger.critical("failed to run ginkgo tester: %s", exc)
        code = EXIT_FAILURE
    sys.exit(code)


if __name__ == "__main__":
    main()
