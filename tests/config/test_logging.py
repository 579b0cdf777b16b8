"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from cikit.config.logging import bind_target, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    cikit = logging.getLogger("cikit")
    cikit_level = cikit.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    cikit.setLevel(cikit_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("cikit").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("cikit").level == logging.WARNING

    def test_urllib3_stays_quiet(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("cikit.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "cikit.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("cikit.services.packaging").debug("Packaging %s", "linux/amd64")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Packaging linux/amd64"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "cikit.services.packaging"


class TestBindTarget:
    def test_target_added_to_every_line(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_target("packages")
        logging.getLogger("cikit.test").warning("first")
        structlog.get_logger("cikit.test").warning("second")
        lines = [json.loads(line) for line in capfd.readouterr().err.strip().splitlines()]
        assert [line["target"] for line in lines] == ["packages", "packages"]

    def test_rebinding_replaces_target(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_target("test")
        bind_target("clean")
        logging.getLogger("cikit.test").warning("hello")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["target"] == "clean"
