import shutil
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest

from ginkgo_tester.config import TesterConfig, default_config


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in [
        "KUBETEST2_RUN_DIR",
        "KUBECONFIG",
        "ARTIFACTS",
        "GINKGO_TESTER_LOG_LEVEL",
        "GINKGO_TESTER_VERSION",
    ]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_config() -> TesterConfig:
    return default_config().with_overrides(repo="https://example.invalid/e2e.git")


@pytest.fixture
def run_env(tmp_path: Path) -> dict[str, str]:
    """A kubetest2-style environment rooted in tmp_path."""
    return {
        "KUBETEST2_RUN_DIR": str(tmp_path / "run"),
        "ARTIFACTS": str(tmp_path / "artifacts"),
        "KUBECONFIG": str(tmp_path / "kubeconfig"),
    }


@pytest.fixture
def fake_clone(monkeypatch: pytest.MonkeyPatch) -> Generator[list[tuple[str, Path]], None, None]:
    """Replace the git clone with one that drops ginkgo/e2e.test into _output/bin."""
    calls: list[tuple[str, Path]] = []

    def _clone(url: str, target: str | Path) -> Path:
        target_path = Path(target)
        calls.append((url, target_path))
        bin_dir = target_path / "_output" / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        for name in ("ginkgo", "e2e.test"):
            path = bin_dir / name
            path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
            path.chmod(0o755)
        return target_path

    monkeypatch.setattr("ginkgo_tester.tester.clone_repo", _clone)
    monkeypatch.setattr("shutil.which", lambda _name: None)
    yield calls


@pytest.fixture
def local_git_repo(tmp_path: Path) -> Path:
    """A committed local repository usable as a clone source."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    src = tmp_path / "src-repo"
    src.mkdir()
    env_args = ["-c", "user.name=tester", "-c", "user.email=tester@example.invalid"]
    subprocess.run(["git", "init", "-q", str(src)], check=True)
    (src / "README.md").write_text("e2e\n", encoding="utf-8")
    subprocess.run(["git", "-C", str(src), "add", "README.md"], check=True)
    subprocess.run(
        ["git", *env_args, "-C", str(src), "commit", "-q", "-m", "init"],
        check=True,
    )
    return src
