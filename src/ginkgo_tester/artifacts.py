import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from .config.settings import ARTIFACTS_ENV
from .errors import MetadataError

logger = logging.getLogger(__name__)

METADATA_FILE = "metadata.json"
VERSION_KEY = "tester-version"


def base_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the artifacts directory shared with the kubetest2 harness.

    Uses ``$ARTIFACTS`` when set, otherwise ``<cwd>/_artifacts``.
    """
    env = os.environ if environ is None else environ
    configured = env.get(ARTIFACTS_ENV, "").strip()
    if configured:
        return Path(configured)
    return Path.cwd() / "_artifacts"


def write_version_to_metadata(version: str, environ: Mapping[str, str] | None = None) -> Path:
    """Merge ``{"tester-version": version}`` into ``<artifacts>/metadata.json``.

    Existing keys written by the deployer are preserved.

    Raises:
        MetadataError: If the existing file is not a JSON object or the
            directory cannot be written.
    """
    artifacts_dir = base_dir(environ)
    path = artifacts_dir / METADATA_FILE

    metadata: dict[str, object] = {}
    if path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise MetadataError(f"cannot read {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise MetadataError(f"{path} does not contain a JSON object")
        metadata = loaded

    metadata[VERSION_KEY] = version

    try:
        artifacts_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(metadata, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError as exc:
        raise MetadataError(f"cannot write {path}: {exc}") from exc

    logger.debug("Wrote %s=%s to %s", VERSION_KEY, version, path)
    return path
