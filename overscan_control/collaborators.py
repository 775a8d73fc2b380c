"""Driver and settings collaborators consumed by the position manager.

The manager only depends on the two protocols below. The concrete classes are
file-backed stand-ins for the framebuffer sysfs node and the output-mode
settings service, good enough to drive a real device or a test directory.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Tuple

from overscan_control.display_modes import resolve_bound
from overscan_control.overscan_geometry import Position, format_axis

_LOGGER_NAME = "Overscan.Controller"
_LOGGER = logging.getLogger(_LOGGER_NAME)

DEFAULT_WINDOW_AXIS_PATH = "/sys/class/graphics/fb0/window_axis"
DEFAULT_MODE_PATH = "/sys/class/display/mode"
DEFAULT_OUTPUT_MODE = "1080p60hz"


class AxisWriter(Protocol):
    def write_axis(self, path: str, value: str) -> None:
        ...


class OutputModeProvider(Protocol):
    def get_current_output_mode(self) -> str:
        ...

    def get_position(self, mode: str) -> Position:
        ...

    def save_position(self, left: int, top: int, width: int, height: int) -> None:
        ...

    def set_osd_mouse(self, left: int, top: int, width: int, height: int) -> None:
        ...


class SysfsAxisWriter:
    """Write axis strings straight to a sysfs-style node."""

    def write_axis(self, path: str, value: str) -> None:
        _LOGGER.debug("Writing %r to %s", value, path)
        Path(path).write_text(value, encoding="ascii")


def _coerce_position(value: Any) -> Optional[Position]:
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        return None
    try:
        left, top, width, height = (int(item) for item in value)
    except (TypeError, ValueError):
        return None
    return (left, top, width, height)


class JsonOutputModeProvider:
    """JSON-backed output-mode settings.

    Layout of the settings file::

        {
          "output_mode": "720p60hz",
          "positions": {"720p60hz": [left, top, width, height]},
          "osd_mouse": [left, top, width, height]
        }

    The current mode comes from ``mode_path`` when that node is readable,
    then from ``output_mode``, then ``default_mode``.
    """

    def __init__(
        self,
        settings_path: Path,
        *,
        mode_path: Optional[Path] = None,
        default_mode: str = DEFAULT_OUTPUT_MODE,
        osd_mouse_path: Optional[str] = None,
        writer: Optional[AxisWriter] = None,
    ) -> None:
        self._path = Path(settings_path)
        self._mode_path = Path(mode_path) if mode_path is not None else None
        self._default_mode = default_mode
        self._osd_mouse_path = osd_mouse_path
        self._writer = writer if writer is not None else SysfsAxisWriter()

    @property
    def settings_path(self) -> Path:
        return self._path

    # Persistence ---------------------------------------------------------

    def _load(self) -> Dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            _LOGGER.warning("Failed to read position settings %s: %s", self._path, exc)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            _LOGGER.warning("Position settings at %s are not valid JSON; ignoring (%s)", self._path, exc)
            return {}
        if not isinstance(data, dict):
            _LOGGER.warning("Position settings at %s are not a JSON object; ignoring", self._path)
            return {}
        return data

    def _store(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")

    # OutputModeProvider ----------------------------------------------------

    def get_current_output_mode(self) -> str:
        if self._mode_path is not None:
            try:
                mode = self._mode_path.read_text(encoding="utf-8").strip()
            except OSError as exc:
                _LOGGER.debug("Mode node %s unreadable (%s); using stored mode", self._mode_path, exc)
            else:
                if mode:
                    return mode
        stored = self._load().get("output_mode")
        if isinstance(stored, str) and stored.strip():
            return stored.strip()
        return self._default_mode

    def set_output_mode(self, mode: str) -> None:
        data = self._load()
        data["output_mode"] = mode
        self._store(data)

    def get_position(self, mode: str) -> Position:
        positions = self._load().get("positions")
        entry = positions.get(mode) if isinstance(positions, dict) else None
        position = _coerce_position(entry)
        if position is None:
            if entry is not None:
                _LOGGER.debug("Ignoring malformed stored position for %s: %r", mode, entry)
            return resolve_bound(mode).full_position()
        return position

    def save_position(self, left: int, top: int, width: int, height: int) -> None:
        mode = self.get_current_output_mode()
        data = self._load()
        positions = data.get("positions")
        if not isinstance(positions, dict):
            positions = {}
        positions[mode] = [int(left), int(top), int(width), int(height)]
        data["positions"] = positions
        self._store(data)
        _LOGGER.debug("Saved position for %s: %s", mode, positions[mode])

    def set_osd_mouse(self, left: int, top: int, width: int, height: int) -> None:
        # Record first so a missing OSD node never leaves the store stale.
        data = self._load()
        data["osd_mouse"] = [int(left), int(top), int(width), int(height)]
        self._store(data)
        if self._osd_mouse_path:
            axis = format_axis(left, top, left + width - 1, top + height - 1)
            self._writer.write_axis(self._osd_mouse_path, axis)

    def last_osd_mouse(self) -> Optional[Tuple[int, int, int, int]]:
        return _coerce_position(self._load().get("osd_mouse"))
