"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from pbxwrite.config.logging import configure_from_settings, configure_logging
from pbxwrite.config.settings import PbxSettings
from pbxwrite.domain.objects import PBXSourcesBuildPhase
from pbxwrite.domain.project import Project
from pbxwrite.services.check import CheckService
from pbxwrite.services.telemetry import enable_telemetry


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pbx = logging.getLogger("pbxwrite")
    pbx_level = pbx.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pbx.setLevel(pbx_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("pbxwrite").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("pbxwrite").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("pbxwrite.test")
        log.warning("hello world", key="val")
        # Smoke test — verify no exception; format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("pbxwrite.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pbxwrite.test"
        assert "timestamp" in parsed

    def test_stdlib_module_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        Project().add_object(PBXSourcesBuildPhase())

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Added PBXSourcesBuildPhase as object 0"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "pbxwrite.domain.project"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        Project().add_object(PBXSourcesBuildPhase())

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=False)
        assert len(logging.getLogger().handlers) == 1

    def test_configure_from_settings(self) -> None:
        configure_from_settings(PbxSettings(verbose=True))
        assert logging.getLogger("pbxwrite").level == logging.DEBUG

    def test_custom_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        Project().add_object(PBXSourcesBuildPhase())

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["logger"] == "pbxwrite.domain.project"

    @pytest.mark.usefixtures("_reset_telemetry")
    def test_span_logs_share_the_handler(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        enable_telemetry()

        CheckService().check(Project())

        events = [json.loads(line) for line in stream.getvalue().splitlines()]
        spans = [e for e in events if e["event"] == "span.complete"]
        assert spans[0]["span_name"] == "CheckService.check"
        assert spans[0]["phases"] == ["root_object", "references"]
        assert spans[0]["logger"] == "pbxwrite.telemetry"
