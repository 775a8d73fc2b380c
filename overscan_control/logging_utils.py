"""Log directory resolution and rotating-file setup for the overscan controller."""
from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "Overscan.Controller"
LOG_FILENAME = "overscan-controller.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_TRUTHY = {"1", "true", "yes", "on"}


def resolve_logs_dir(base_path: Path, log_dir_name: str = "OverscanControl") -> Path:
    """
    Resolve the directory to store controller logs.

    Strategy:
    - Use OVERSCAN_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `base_path/logs`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get("OVERSCAN_LOG_DIR")
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "overscan" / "logs")
    candidates.append(cache_home / "overscan" / "logs")
    candidates.append(Path(base_path) / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logging(
    *,
    debug_enabled: bool,
    retention: int,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Attach a rotating file handler to the controller logger.

    Propagation to the root logger stays off unless OVERSCAN_PROPAGATE_LOGS is set.
    Calling this twice replaces the previously attached file handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(debug_enabled))
    logger.propagate = os.environ.get("OVERSCAN_PROPAGATE_LOGS", "").lower() in _TRUTHY

    for existing in list(logger.handlers):
        if isinstance(existing, RotatingFileHandler):
            logger.removeHandler(existing)
            existing.close()

    target_dir = log_dir if log_dir is not None else resolve_logs_dir(Path.cwd())
    handler = build_rotating_file_handler(
        target_dir,
        LOG_FILENAME,
        retention=retention,
        formatter=logging.Formatter(LOG_FORMAT),
    )
    logger.addHandler(handler)
    return logger
