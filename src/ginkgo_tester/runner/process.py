import logging
import os
import shutil
import subprocess  # nosec B404 - the tester exists to launch ginkgo
from collections.abc import Mapping, Sequence
from pathlib import Path

import psutil

from ..errors import BinaryNotFoundError, TesterError, TestRunError

logger = logging.getLogger(__name__)


def resolve_binary(name: str, search_dirs: Sequence[Path] = ()) -> str:
    """Resolve an executable to an absolute path.

    Names containing a path separator must exist as given. Bare names are
    looked up on PATH first, then in ``search_dirs`` in order.

    Raises:
        BinaryNotFoundError: If nothing matches.
    """
    if not name:
        raise BinaryNotFoundError(name, "empty executable name")

    if any(sep in name for sep in (os.sep, "/", "\\")):
        path = Path(name)
        if path.exists():
            return str(path)
        raise BinaryNotFoundError(name)

    resolved = shutil.which(name)
    if resolved:
        return resolved

    for directory in search_dirs:
        candidate = directory / name
        if candidate.exists():
            return str(candidate)

    raise BinaryNotFoundError(
        name,
        "ensure it is installed and on PATH"
        + (f" or located in one of: {', '.join(str(d) for d in search_dirs)}" if search_dirs else ""),
    )


def build_child_env(env: Sequence[str]) -> dict[str, str] | None:
    """Turn ``KEY=VALUE`` overrides into a child environment.

    A non-empty list replaces the parent environment outright; an empty list
    returns None so the child inherits it.
    """
    if not env:
        return None
    child_env: dict[str, str] = {}
    for entry in env:
        key, _, value = entry.partition("=")
        child_env[key] = value
    return child_env


def kill_process_tree(pid: int) -> None:
    try:
        parent = psutil.Process(pid)
    except psutil.Error:
        return

    for child in parent.children(recursive=True):
        try:
            child.kill()
        except psutil.Error:
            pass
    try:
        parent.kill()
    except psutil.Error:
        pass


def run_inherited(
    command: Sequence[str],
    env: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> None:
    """Run ``command`` with stdout/stderr passed straight to ours and wait for it.

    If the wait is interrupted (Ctrl-C, SystemExit from a signal handler) the
    child and its descendants are killed before the exception propagates.

    Raises:
        BinaryNotFoundError: If the executable does not exist.
        TestRunError: If the process exits non-zero.
    """
    argv = list(command)
    logger.debug("Spawning %s (cwd=%s)", argv, cwd)
    try:
        process = subprocess.Popen(  # nosec B603 - argv is assembled, never shell-parsed
            argv,
            env=dict(env) if env is not None else None,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        raise BinaryNotFoundError(argv[0] if argv else "", str(exc)) from exc
    except OSError as exc:
        raise TesterError(f"failed to start {argv[0] if argv else 'process'}: {exc}") from exc

    with process:
        try:
            returncode = process.wait()
        except BaseException:
            logger.warning("Interrupted; killing process tree of pid %s", process.pid)
            kill_process_tree(process.pid)
            process.wait()
            raise

    if returncode != 0:
        raise TestRunError(argv, returncode)
    logger.debug("%s exited cleanly", argv[0])
