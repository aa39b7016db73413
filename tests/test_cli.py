"""Tests for the apkpin entry point and its error boundary."""

import logging
from unittest.mock import MagicMock, patch

import pytest

import apkpin
from constants import ExitCodes
from exceptions import StagingError


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("APKPIN_BRANCH", "APKPIN_INPUT", "APKPIN_OUTPUT", "APKPIN_CONFIG",
                "APKPIN_LOG_LEVEL", "APKPIN_OS_RELEASE", "APKPIN_STAGING_DIR"):
        monkeypatch.delenv(var, raising=False)


def _page(version):
    return MagicMock(status_code=200, text=f'<td class="version">{version}</td>')


class TestRun:
    """Test exit codes and outputs of a full CLI run."""

    @patch("catalog.client.catalog_pkg.safe_get")
    def test_success(self, mock_safe_get, tmp_path, clean_env):
        (tmp_path / "apk.txt").write_text("nginx=1.2.3\n", encoding="utf-8")
        out = tmp_path / "apk-lock.txt"
        mock_safe_get.return_value = _page("1.24.0-r0")

        code = apkpin.run([
            "-b", "3.17", "-i", str(tmp_path / "apk.txt"), "-o", str(out),
            "--staging-dir", str(tmp_path), "--arch", "x86_64", "-q",
        ])

        assert code == ExitCodes.SUCCESS.value
        assert out.read_text(encoding="utf-8") == "nginx=1.24.0-r0\n"
        params = mock_safe_get.call_args.kwargs["params"]
        assert params["branch"] == "v3.17"
        assert params["name"] == "nginx"

    @patch("catalog.client.catalog_pkg.safe_get", return_value=None)
    def test_nothing_resolved_still_succeeds(self, _mock_safe_get, tmp_path, clean_env):
        (tmp_path / "apk.txt").write_text("nginx\n", encoding="utf-8")
        out = tmp_path / "apk-lock.txt"
        out.write_text("X=1.0.0\n", encoding="utf-8")

        code = apkpin.run([
            "-b", "edge", "-i", str(tmp_path / "apk.txt"), "-o", str(out), "--arch", "x86_64",
        ])

        assert code == ExitCodes.SUCCESS.value
        assert out.read_text(encoding="utf-8") == "X=1.0.0\n"

    @patch("catalog.client.catalog_pkg.safe_get")
    def test_branch_from_environment(self, mock_safe_get, tmp_path, clean_env, monkeypatch):
        (tmp_path / "apk.txt").write_text("curl\n", encoding="utf-8")
        monkeypatch.setenv("APKPIN_BRANCH", "3.18")
        mock_safe_get.return_value = _page("8.5.0-r0")

        code = apkpin.run([
            "-i", str(tmp_path / "apk.txt"), "-o", str(tmp_path / "out.txt"), "--arch", "x86_64",
        ])

        assert code == ExitCodes.SUCCESS.value
        assert mock_safe_get.call_args.kwargs["params"]["branch"] == "v3.18"

    def test_missing_input_is_file_error(self, tmp_path, clean_env, caplog):
        code = apkpin.run(["-b", "edge", "-i", str(tmp_path / "missing.txt")])
        assert code == ExitCodes.FILE_ERROR.value
        assert "missing.txt" in caplog.text

    @patch("catalog.client.catalog_pkg.safe_get")
    def test_wrong_distribution_is_fatal(self, mock_safe_get, tmp_path, clean_env):
        release = tmp_path / "os-release"
        release.write_text("ID=fedora\nVERSION_ID=40\n", encoding="utf-8")
        (tmp_path / "apk.txt").write_text("nginx\n", encoding="utf-8")
        out = tmp_path / "apk-lock.txt"

        code = apkpin.run([
            "-i", str(tmp_path / "apk.txt"), "-o", str(out), "--os-release", str(release),
        ])

        assert code == ExitCodes.DISTRIBUTION_ERROR.value
        mock_safe_get.assert_not_called()
        assert not out.exists()

    def test_bad_config_is_config_error(self, tmp_path, clean_env):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("unknown_option: 1\n", encoding="utf-8")
        assert apkpin.run(["-c", str(cfg)]) == ExitCodes.CONFIG_ERROR.value

    @patch("apkpin.run_pipeline", side_effect=StagingError("disk full", operation="begin", target="/tmp"))
    def test_staging_error_is_file_error(self, _mock_pipeline, clean_env):
        assert apkpin.run(["-b", "edge"]) == ExitCodes.FILE_ERROR.value

    @patch("apkpin.run_pipeline", side_effect=KeyError("surprise"))
    def test_unexpected_error_is_logged_with_traceback(self, _mock_pipeline, clean_env, caplog):
        code = apkpin.run(["-b", "edge"])
        assert code == ExitCodes.UNEXPECTED_ERROR.value
        assert any(record.exc_info for record in caplog.records)

    def test_logfile(self, tmp_path, clean_env):
        log_path = tmp_path / "apkpin.log"
        apkpin.run(["-b", "edge", "-i", str(tmp_path / "missing.txt"), "--logfile", str(log_path)])
        assert "missing.txt" in log_path.read_text(encoding="utf-8")

    def test_main_exits_with_code(self, clean_env):
        with patch("apkpin.run", return_value=3):
            with pytest.raises(SystemExit) as exc_info:
                apkpin.main()
        assert exc_info.value.code == 3
