from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from overscan_control import logging_utils


@pytest.fixture(autouse=True)
def _restore_controller_logger():
    logger = logging.getLogger(logging_utils.LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


def test_resolve_logs_dir_prefers_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("OVERSCAN_LOG_DIR", str(tmp_path / "custom"))
    target = logging_utils.resolve_logs_dir(tmp_path)
    assert target == tmp_path / "custom" / "OverscanControl"
    assert target.is_dir()


def test_resolve_logs_dir_uses_xdg_state(tmp_path, monkeypatch):
    monkeypatch.delenv("OVERSCAN_LOG_DIR", raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    target = logging_utils.resolve_logs_dir(tmp_path, log_dir_name="Unit")
    assert target == tmp_path / "state" / "overscan" / "logs" / "Unit"


def test_rotating_handler_retention(tmp_path):
    handler = logging_utils.build_rotating_file_handler(tmp_path, "x.log", retention=3, max_bytes=1024)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.maxBytes == 1024
    finally:
        handler.close()

    handler = logging_utils.build_rotating_file_handler(tmp_path, "y.log", retention=0)
    try:
        assert handler.backupCount == 0
    finally:
        handler.close()


def test_resolve_log_level():
    assert logging_utils.resolve_log_level(True) == logging.DEBUG
    assert logging_utils.resolve_log_level(False) == logging.INFO


def test_configure_logging_replaces_file_handler(tmp_path, monkeypatch):
    monkeypatch.delenv("OVERSCAN_PROPAGATE_LOGS", raising=False)
    logger = logging_utils.configure_logging(debug_enabled=True, retention=2, log_dir=tmp_path)
    logging_utils.configure_logging(debug_enabled=False, retention=2, log_dir=tmp_path)

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert logger.level == logging.INFO
    assert logger.propagate is False

    logger.warning("axis write failed")
    file_handlers[0].flush()
    assert "axis write failed" in (tmp_path / logging_utils.LOG_FILENAME).read_text(encoding="utf-8")


def test_configure_logging_propagation_opt_in(tmp_path, monkeypatch):
    monkeypatch.setenv("OVERSCAN_PROPAGATE_LOGS", "yes")
    logger = logging_utils.configure_logging(debug_enabled=False, retention=1, log_dir=tmp_path)
    assert logger.propagate is True
