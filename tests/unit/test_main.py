"""
Unit tests for the main module — composition root.

Tests verify structlog configuration, the wired resolution and the exit
behavior of main() against documents written to a temporary directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from structlog.testing import capture_logs

from cert_topology.config import AppSettings
from cert_topology.domain.document import RawDocument
from cert_topology.main import _report_topology, configure_structlog, main, resolve
from cert_topology.railway import ErrorCode, ResultAssertions
from cert_topology.validator import validate_document

VALID = b"""
certificates:
  root:
    type: rootCA
  web:
    type: server
    issuer: root
"""

INVALID = b"""
certificates:
  web:
    type: server
    issuer: ghost
"""


class TestConfigureStructlog:
    """Verify structlog configuration function."""

    def test_configure_structlog_sets_log_level(self) -> None:
        configure_structlog("WARNING")
        assert structlog.get_logger() is not None

    def test_configure_structlog_invalid_level_falls_back(self) -> None:
        """
        GIVEN an invalid log_level string
        WHEN configure_structlog is called
        THEN it falls back to INFO (no crash).
        """
        configure_structlog("NONEXISTENT")
        assert structlog.get_logger() is not None


class TestResolve:
    def test_resolves_configured_file(self, tmp_path: Path) -> None:
        path = tmp_path / "topology.yaml"
        path.write_bytes(VALID)
        topology = ResultAssertions.assert_success(resolve(AppSettings(_env_file=None, config_file=path)))
        assert topology.names == ("root", "web")

    def test_missing_file(self, tmp_path: Path) -> None:
        result = resolve(AppSettings(_env_file=None, config_file=tmp_path / "absent.yaml"))
        ResultAssertions.assert_failure(result, ErrorCode.DOCUMENT_READ_ERROR)

    def test_crash_inside_resolution_is_unexpected_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """
        GIVEN resolution raises instead of returning a failure
        WHEN resolve runs
        THEN the failure is UNEXPECTED_ERROR, not a document error.
        """

        def crash(*args: object, **kwargs: object) -> None:
            raise RuntimeError("boom")

        monkeypatch.setattr("cert_topology.main.load_topology", crash)
        result = resolve(AppSettings(_env_file=None, config_file=tmp_path / "topology.yaml"))
        error = ResultAssertions.assert_failure(result, ErrorCode.UNEXPECTED_ERROR)
        assert error.context["operation"] == "ResolveTopology"
        assert isinstance(error.exception, RuntimeError)


class TestReportTopology:
    def test_looping_chain_logged_as_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN two intermediates issuing each other, resolved with cycle detection off
        WHEN the topology is reported
        THEN their chains are logged as None and the summary still follows.
        """
        raw = RawDocument.model_validate(
            {
                "certificates": {
                    "ca-a": {"type": "intermediateCA", "issuer": "ca-b"},
                    "ca-b": {"type": "intermediateCA", "issuer": "ca-a"},
                }
            }
        )
        topology = ResultAssertions.assert_success(validate_document(raw, detect_issuer_cycles=False))
        monkeypatch.setattr("cert_topology.main.log", structlog.get_logger())
        with capture_logs() as logs:
            _report_topology(topology)
        assert [entry["chain"] for entry in logs if entry["event"] == "certificate.resolved"] == [None, None]
        assert logs[-1]["event"] == "topology.resolved"


class TestMain:
    def test_valid_document_returns_normally(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "topology.yaml"
        path.write_bytes(VALID)
        monkeypatch.setenv("CERT_TOPOLOGY_CONFIG_FILE", str(path))
        main([])

    def test_invalid_document_exits_1(self, tmp_path: Path) -> None:
        path = tmp_path / "topology.yaml"
        path.write_bytes(INVALID)
        with pytest.raises(SystemExit) as excinfo:
            main(["--config_file", str(path)])
        assert excinfo.value.code == 1

    def test_invalid_settings_exit_1(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setenv("CERT_TOPOLOGY_LOG_LEVEL", "LOUD")
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "Configuration error" in capsys.readouterr().err
