"""Configuration helpers for the overscan controller."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from overscan_control.collaborators import (
    DEFAULT_MODE_PATH,
    DEFAULT_OUTPUT_MODE,
    DEFAULT_WINDOW_AXIS_PATH,
)
from overscan_control.overscan_geometry import DEFAULT_OFFSET_STEP, MAX_PERCENT, MIN_PERCENT

_LOGGER = logging.getLogger("Overscan.Controller")

LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20


@dataclass(frozen=True)
class ControllerConfig:
    """Tunables for the position manager and its file-backed collaborators."""

    offset_step: int = DEFAULT_OFFSET_STEP
    min_percent: int = MIN_PERCENT
    max_percent: int = MAX_PERCENT
    window_axis_path: str = DEFAULT_WINDOW_AXIS_PATH
    mode_path: Optional[str] = DEFAULT_MODE_PATH
    osd_mouse_path: Optional[str] = None
    default_mode: str = DEFAULT_OUTPUT_MODE
    log_retention: int = 5
    debug: bool = False


def _int(value: Any, fallback: int) -> int:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _bool(value: Any, fallback: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off", ""}:
            return False
        return fallback
    return bool(value)


def _optional_str(value: Any, fallback: Optional[str]) -> Optional[str]:
    if value is None:
        return fallback
    text = str(value).strip()
    return text or None


def _percent_range(data: Dict[str, Any], defaults: ControllerConfig) -> tuple[int, int]:
    minimum = max(1, min(_int(data.get("min_percent"), defaults.min_percent), 100))
    maximum = max(1, min(_int(data.get("max_percent"), defaults.max_percent), 100))
    if minimum > maximum:
        _LOGGER.warning(
            "min_percent %d exceeds max_percent %d; using defaults %d-%d",
            minimum,
            maximum,
            defaults.min_percent,
            defaults.max_percent,
        )
        return defaults.min_percent, defaults.max_percent
    return minimum, maximum


def load_controller_config(path: Path) -> ControllerConfig:
    """Read controller settings from a JSON file, falling back per field."""
    defaults = ControllerConfig()
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        _LOGGER.debug("Controller config not found at %s; using defaults", path)
        return defaults
    except OSError as exc:
        _LOGGER.warning("Failed to read controller config %s: %s", path, exc)
        return defaults

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        _LOGGER.warning("Failed to parse %s; using default controller config (%s)", path, exc)
        return defaults
    if not isinstance(data, dict):
        _LOGGER.warning("Controller config at %s is not a JSON object; using defaults", path)
        return defaults

    min_percent, max_percent = _percent_range(data, defaults)
    retention = _int(data.get("log_retention"), defaults.log_retention)
    default_mode = _optional_str(data.get("default_mode"), defaults.default_mode) or defaults.default_mode
    return ControllerConfig(
        offset_step=max(1, _int(data.get("offset_step"), defaults.offset_step)),
        min_percent=min_percent,
        max_percent=max_percent,
        window_axis_path=_optional_str(data.get("window_axis_path"), defaults.window_axis_path)
        or defaults.window_axis_path,
        mode_path=_optional_str(data.get("mode_path"), defaults.mode_path),
        osd_mouse_path=_optional_str(data.get("osd_mouse_path"), defaults.osd_mouse_path),
        default_mode=default_mode,
        log_retention=max(LOG_RETENTION_MIN, min(retention, LOG_RETENTION_MAX)),
        debug=_bool(data.get("debug"), defaults.debug),
    )
