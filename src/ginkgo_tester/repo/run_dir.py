import logging
import os
from collections.abc import Mapping
from pathlib import Path

from ..config.settings import RUN_DIR_ENV
from ..errors import RunEnvironmentError

logger = logging.getLogger(__name__)


def resolve_run_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the directory the repository is cloned into.

    ``$KUBETEST2_RUN_DIR`` wins when it is set (even to an empty string);
    otherwise the current working directory is used.

    Raises:
        RunEnvironmentError: If the current working directory cannot be read.
    """
    env = os.environ if environ is None else environ
    if RUN_DIR_ENV in env:
        run_dir = Path(env[RUN_DIR_ENV])
        logger.debug("Using %s: %s", RUN_DIR_ENV, run_dir)
        return run_dir

    # default to the cwd when kubetest2 did not export the run dir
    try:
        cwd = os.getcwd()
    except OSError as exc:
        raise RunEnvironmentError(f"failed to set run dir: {exc}") from exc
    return Path(cwd)
