# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

import logging
import sys

import pytest

from logdash.util.logging import Logger, getLogger
from logdash.util.logging.manager import LoggingManager, log_uncaught_exception
from logdash.util.mixins import LoggableMixin


class Scanner(LoggableMixin):
    pass


class NamedScanner(LoggableMixin):
    instance_name = "prescan"


@pytest.mark.logging
class TestLogger:
    def test_getLogger_returns_logger(self, caplog):
        logger = getLogger("testLogger")
        assert isinstance(logger, Logger)
        with caplog.at_level(logging.INFO):
            logger.debug("debug message")
            logger.info("info message")
            logger.error("error message")
        assert "debug message" not in caplog.text
        assert "info message" in caplog.text
        assert "error message" in caplog.text

    def test_getLogger_with_parent(self):
        parent = getLogger("parentLogger")
        child = getLogger("childLogger", parent=parent)
        assert child.parent is parent
        assert child.name == "parentLogger.childLogger"

    def test_getLogger_with_loggable_parent(self):
        scanner = Scanner()
        child = getLogger("child", parent=scanner)
        assert child.name == "Scanner.child"

    def test_getLogger_from_object(self):
        assert getLogger(Scanner()).name == "Scanner"

    def test_isEnabledFor_handlers(self):
        logger = getLogger("enabledLogger")
        assert logger.isEnabledFor(logging.INFO)
        assert logger.isEnabledForTty(logging.INFO)
        assert logger.isEnabledFor(logging.INFO, handler="tty")
        assert not logger.isEnabledForFile(logging.INFO)

    def test_isEnabledFor_invalid_handler(self):
        logger = getLogger("invalidHandlerLogger")
        with pytest.raises(ValueError, match="Unknown handler"):
            logger.isEnabledFor(logging.INFO, handler="invalid")


@pytest.mark.logging
class TestLoggableMixin:
    def test_named_after_class(self):
        assert Scanner().log.name == "Scanner"

    def test_named_after_instance_name(self):
        assert NamedScanner().log.name == "prescan"

    def test_logger_is_cached(self):
        scanner = Scanner()
        assert scanner.log is scanner.log


@pytest.mark.logging
class TestDebugFile:
    def test_debug_messages_reach_the_file(self, tmp_path):
        path = tmp_path / "logs" / "debug.log"
        manager = LoggingManager()
        logger = getLogger("debugFileLogger")

        manager.open_debug_file(path)
        try:
            assert logger.isEnabledForFile(logging.DEBUG)
            logger.debug("first debug line")
            logger.info("second line", extra={"handler": "tty"})
        finally:
            manager.close_debug_file()

        text = path.read_text(encoding="UTF-8")
        assert "first debug line" in text
        assert "second line" not in text
        assert manager.dh is None

    def test_reopen_replaces_handler(self, tmp_path):
        manager = LoggingManager()
        try:
            first = manager.open_debug_file(tmp_path / "a.log")
            second = manager.open_debug_file(tmp_path / "b.log")
            assert manager.dh is second
            assert first not in logging.root.handlers
        finally:
            manager.close_debug_file()

    def test_close_without_file(self):
        manager = LoggingManager()
        manager.close_debug_file()
        assert manager.dh is None


@pytest.mark.logging
class TestUncaughtExceptions:
    def test_logged_as_critical(self, caplog):
        try:
            raise RuntimeError("boom")  # noqa: TRY301
        except RuntimeError as exc:
            err = exc

        with caplog.at_level(logging.CRITICAL):
            log_uncaught_exception(RuntimeError, err, err.__traceback__)
        assert caplog.records[-1].levelno == logging.CRITICAL
        assert caplog.records[-1].exc_info[1] is err

    def test_system_exit_is_not_logged(self, caplog, monkeypatch):
        seen = []
        monkeypatch.setattr(sys, "__excepthook__", lambda *args: seen.append(args[0]))
        log_uncaught_exception(SystemExit, SystemExit(1), None)
        assert seen == [SystemExit]
        assert not caplog.records
