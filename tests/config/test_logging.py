"""Tests for structlog configuration and store events."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from genealogy import GenealogySettings, GenealogyStore
from genealogy.config.logging import configure_from_settings, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Restore the package logger state after each test."""
    pkg = logging.getLogger("genealogy")
    original_handlers = pkg.handlers[:]
    original_level = pkg.level
    original_propagate = pkg.propagate
    yield
    pkg.handlers = original_handlers
    pkg.setLevel(original_level)
    pkg.propagate = original_propagate
    structlog.reset_defaults()


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("genealogy").level == logging.DEBUG

    def test_leaves_root_logger_alone(self) -> None:
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        configure_logging(verbose=True)
        assert root.handlers == handlers
        assert root.level == level
        assert logging.getLogger("genealogy").propagate is False

    def test_repeat_calls_replace_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=False, log_json=True)
        pkg = logging.getLogger("genealogy")
        ours = [h for h in pkg.handlers if h.get_name() == "genealogy-structlog"]
        assert len(ours) == 1

    def test_keeps_foreign_handlers(self) -> None:
        pkg = logging.getLogger("genealogy")
        foreign = logging.NullHandler()
        pkg.addHandler(foreign)
        configure_logging(verbose=True)
        assert foreign in pkg.handlers

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("genealogy").level == logging.WARNING

    def test_from_settings(self) -> None:
        configure_from_settings(GenealogySettings(verbose=True))
        assert logging.getLogger("genealogy").level == logging.DEBUG

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("genealogy.test")
        log.warning("json test", answer=42)
        parsed = _json_lines(capfd.readouterr().err)[-1]
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "genealogy.test"
        assert "timestamp" in parsed


class TestStoreEvents:
    def test_verbose_store_emits_debug_events(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        store = GenealogyStore("S", settings=GenealogySettings())
        store.create("A", ["S"])
        store.remove("A")

        events = {line["event"]: line for line in _json_lines(capfd.readouterr().err)}
        assert events["entity_created"]["entity"] == "A"
        assert events["cascade_removed"]["removed"] == 1
        assert events["cascade_removed"]["logger"] == "genealogy.core.store"

    def test_rollback_event(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        store = GenealogyStore("S", settings=GenealogySettings())
        store.create("A", ["S"])
        store.create("B", ["S"])
        capfd.readouterr()
        with pytest.raises(KeyError):
            store.connect("B", ["A", "ghost"])

        events = [line["event"] for line in _json_lines(capfd.readouterr().err)]
        assert "connect_rolled_back" in events
        assert "edges_connected" not in events

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        store = GenealogyStore("S", settings=GenealogySettings())
        store.create("A", ["S"])
        assert capfd.readouterr().err == ""
