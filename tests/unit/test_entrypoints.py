import logging
import os
import runpy
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import ginkgo_tester.cli as cli_mod
from ginkgo_tester.errors import CloneError, TestRunError


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_mod, "load_dotenv", lambda *args, **kwargs: False)


def test_python_m_entrypoint_calls_cli_main(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"count": 0}

    def _fake_main() -> None:
        called["count"] += 1

    monkeypatch.setattr(cli_mod, "main", _fake_main)

    runpy.run_module("ginkgo_tester", run_name="__main__")
    assert called["count"] == 1


class TestExecute:
    def test_help_skips_clone_and_run(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(cli_mod, "Tester") as tester_cls:
            assert cli_mod.execute(["--help"]) == 0

        tester_cls.assert_not_called()
        assert "--repo" in capsys.readouterr().out

    def test_runs_tester(self) -> None:
        tester = MagicMock()
        with patch.object(cli_mod, "Tester", return_value=tester) as tester_cls:
            assert cli_mod.execute(["--parallel=2", "--repo=https://example.invalid/x.git"]) == 0

        config = tester_cls.call_args.args[0]
        assert config.parallel == 2
        tester.init_run_dir.assert_called_once_with()
        tester.test.assert_called_once_with()


class TestMain:
    def test_help_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("ginkgo_tester.repo.git.subprocess.run") as git:
            with pytest.raises(SystemExit) as exc_info:
                cli_mod.main(["-h"])

        assert exc_info.value.code == 0
        git.assert_not_called()
        assert "--timeout" in capsys.readouterr().out

    def test_success_exits_zero(self) -> None:
        with patch.object(cli_mod, "execute", return_value=0):
            with pytest.raises(SystemExit) as exc_info:
                cli_mod.main([])
        assert exc_info.value.code == 0

    def test_bad_flag_exits_usage(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.CRITICAL, logger="ginkgo_tester.cli"):
            with pytest.raises(SystemExit) as exc_info:
                cli_mod.main(["--bogus"])

        assert exc_info.value.code == cli_mod.EXIT_USAGE
        assert "--bogus" in caplog.text

    def test_test_run_error_propagates_exit_code(self) -> None:
        with patch.object(cli_mod, "execute", side_effect=TestRunError(["ginkgo"], 7)):
            with pytest.raises(SystemExit) as exc_info:
                cli_mod.main([])
        assert exc_info.value.code == 7

    def test_signal_exit_maps_to_shell_convention(self) -> None:
        with patch.object(cli_mod, "execute", side_effect=TestRunError(["ginkgo"], -15)):
            with pytest.raises(SystemExit) as exc_info:
                cli_mod.main([])
        assert exc_info.value.code == 143

    def test_other_errors_exit_one(self, caplog: pytest.LogCaptureFixture) -> None:
        with patch.object(cli_mod, "execute", side_effect=CloneError("u", "boom")):
            with caplog.at_level(logging.CRITICAL, logger="ginkgo_tester.cli"):
                with pytest.raises(SystemExit) as exc_info:
                    cli_mod.main([])

        assert exc_info.value.code == 1
        assert "failed to clone repo" in caplog.text


class TestDotenv:
    def test_loads_env_file_from_working_directory(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        import dotenv

        monkeypatch.setattr(cli_mod, "load_dotenv", dotenv.load_dotenv)
        # setenv then delenv so monkeypatch removes whatever load_dotenv sets
        monkeypatch.setenv("GINKGO_TESTER_DOTENV_CHECK", "placeholder")
        monkeypatch.delenv("GINKGO_TESTER_DOTENV_CHECK")
        (tmp_path / ".env").write_text("GINKGO_TESTER_DOTENV_CHECK=loaded\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        with patch.object(cli_mod, "execute", return_value=0):
            with pytest.raises(SystemExit):
                cli_mod.main([])

        assert os.environ.get("GINKGO_TESTER_DOTENV_CHECK") == "loaded"
