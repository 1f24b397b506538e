import logging
import subprocess  # nosec B404
from pathlib import Path

from ..errors import CloneError

logger = logging.getLogger(__name__)


def _format_git_error(stdout: str, stderr: str, returncode: int) -> str:
    detail = (stderr or stdout or "").strip()
    if detail:
        return f"git exited with code {returncode}: {detail}"
    return f"git exited with code {returncode}"


def clone_repo(url: str, target: str | Path) -> Path:
    """Clone ``url`` into ``target`` with a single full ``git clone``.

    The clone is not incremental: git refuses a non-empty target directory,
    and that refusal surfaces as a CloneError like any other failure. No
    timeout is applied.

    Args:
        url: Repository URL or local path understood by git.
        target: Directory to clone into; created by git when missing.

    Returns:
        The target directory.

    Raises:
        CloneError: If git is unavailable or the clone does not complete.
    """
    target_path = Path(target)
    if not url.strip():
        raise CloneError(url, "repository URL is empty")

    logger.info("Cloning %s into %s", url, target_path)
    try:
        result = subprocess.run(  # nosec B603 B607
            ["git", "clone", "--", url, str(target_path)],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CloneError(url, f"git CLI not found: {exc}") from exc
    except OSError as exc:
        raise CloneError(url, str(exc)) from exc

    if result.returncode != 0:
        raise CloneError(url, _format_git_error(result.stdout, result.stderr, result.returncode))

    logger.debug("Clone of %s finished", url)
    return target_path
