"""HDMI display position (overscan) manager.

Keeps a zoom percent, turns it into a centred window on the current mode's
canvas, writes that window to the framebuffer axis node and persists it
through the output-mode settings collaborator.

This module stays free of device specifics; callers inject the collaborators.
"""
from __future__ import annotations

import logging
from typing import Optional

from overscan_control.collaborators import AxisWriter, OutputModeProvider
from overscan_control.config import ControllerConfig
from overscan_control.display_modes import resolve_bound
from overscan_control.overscan_geometry import (
    Bound,
    PreviousRectangle,
    Rectangle,
    apply_percent,
    clamp_percent,
    clamp_to_bound,
    derive_initial_percent,
    format_axis,
)

_LOGGER_NAME = "Overscan.Controller"
_LOGGER = logging.getLogger(_LOGGER_NAME)


class DisplayPositionManager:
    """Owns the zoom percent and the overscan rectangle derived from it.

    Not thread-safe; confine an instance to one owning thread.
    """

    def __init__(
        self,
        output_modes: OutputModeProvider,
        axis_writer: AxisWriter,
        *,
        config: Optional[ControllerConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._output_modes = output_modes
        self._axis_writer = axis_writer
        self._config = config if config is not None else ControllerConfig()
        self._logger = logger if logger is not None else _LOGGER

        self._current_mode: Optional[str] = None
        self._bound: Bound = resolve_bound(None)
        self._screen_rate = self._config.max_percent

        self._left = 0
        self._top = 0
        self._right = 0
        self._bottom = 0
        self._width = 0
        self._height = 0

        self._previous = PreviousRectangle()

        self.init_position()

    # State ---------------------------------------------------------------

    @property
    def config(self) -> ControllerConfig:
        return self._config

    @property
    def current_mode(self) -> Optional[str]:
        return self._current_mode

    @property
    def bound(self) -> Bound:
        return self._bound

    @property
    def current_rate_value(self) -> int:
        return self._screen_rate

    @property
    def rectangle(self) -> Rectangle:
        return Rectangle(
            left=self._left,
            top=self._top,
            right=self._right,
            bottom=self._bottom,
            width=self._width,
            height=self._height,
        )

    @property
    def previous(self) -> PreviousRectangle:
        return self._previous

    # Initialisation --------------------------------------------------------

    def _refresh_mode(self) -> str:
        mode = self._output_modes.get_current_output_mode()
        self._current_mode = mode
        self._bound = resolve_bound(mode)
        return mode

    def init_position(self) -> None:
        """Seed state from the current mode and its persisted position."""
        mode = self._refresh_mode()
        left, top, width, height = self._output_modes.get_position(mode)

        # Stored devices seed the persisted top into the previous *right*
        # slot and leave the previous top untouched. The dirty check below
        # compares previous top, so a non-zero persisted top reads as changed.
        # Kept as-is until the intended field is confirmed.
        self._left = left
        self._top = top
        self._width = width
        self._height = height
        self._previous = PreviousRectangle(
            left=left,
            top=self._previous.top,
            right=top,
            width=width,
            height=height,
        )

        self._screen_rate = self.initial_rate_value()
        self._logger.debug(
            "Position initialised: mode=%s bound=%dx%d position=%s rate=%d",
            mode,
            self._bound.max_right,
            self._bound.max_bottom,
            (left, top, width, height),
            self._screen_rate,
        )

    def initial_rate_value(self) -> int:
        self._refresh_mode()
        return derive_initial_percent(self._previous.left, self._bound, self._config.offset_step)

    # Zoom ------------------------------------------------------------------

    def _zoom(self, step: int) -> None:
        self._screen_rate = clamp_percent(
            self._screen_rate + step,
            self._config.min_percent,
            self._config.max_percent,
        )
        self.zoom_by_percent(self._screen_rate)

    def zoom_in(self) -> None:
        self._zoom(1)

    def zoom_out(self) -> None:
        self._zoom(-1)

    def zoom_by_percent(self, percent: int) -> bool:
        """Apply ``percent`` to the current mode's canvas.

        Out-of-range requests are ignored entirely: nothing is written or
        persisted. Returns True when the rectangle was applied.
        """
        if percent > self._config.max_percent:
            self._logger.debug("Ignoring zoom to %d%%: above %d%%", percent, self._config.max_percent)
            return False
        if percent < self._config.min_percent:
            self._logger.debug("Ignoring zoom to %d%%: below %d%%", percent, self._config.min_percent)
            return False

        self._refresh_mode()
        rect = apply_percent(percent, self._bound, self._config.offset_step)
        self._left = rect.left
        self._top = rect.top
        self._right = rect.right
        self._bottom = rect.bottom
        self._width = rect.width
        self._height = rect.height

        self._set_position(rect.left, rect.top, rect.right, rect.bottom)
        return True

    def zoom_by_position(self, x: int, y: int, w: int, h: int) -> None:
        """Place the window at an absolute position, bypassing the percent model.

        No clamping against the canvas; the caller owns validity.
        """
        right = x + w - 1
        bottom = y + h - 1
        self._logger.debug(
            "Applying absolute position: mode=%s axis=%s size=%dx%d",
            self._current_mode,
            (x, y, right, bottom),
            w,
            h,
        )
        self._write_axis(format_axis(x, y, right, bottom))
        self._persist(x, y, w, h)
        self._move_osd_mouse(x, y, w, h)

    def _set_position(self, left: int, top: int, right: int, bottom: int) -> None:
        left, top, right, bottom = clamp_to_bound(left, top, right, bottom, self._bound)
        width = self._width
        height = self._height
        self._logger.debug(
            "Applying position: mode=%s rate=%d axis=%s size=%dx%d",
            self._current_mode,
            self._screen_rate,
            (left, top, right, bottom),
            width,
            height,
        )
        self._write_axis(format_axis(left, top, right, bottom))
        self._persist(left, top, width, height)
        self._move_osd_mouse(left, top, width, height)

    # Collaborator calls ----------------------------------------------------

    def _write_axis(self, value: str) -> None:
        path = self._config.window_axis_path
        try:
            self._axis_writer.write_axis(path, value)
        except OSError as exc:
            self._logger.warning("Failed to write window axis %r to %s: %s", value, path, exc)

    def _persist(self, left: int, top: int, width: int, height: int) -> None:
        try:
            self._output_modes.save_position(left, top, width, height)
        except OSError as exc:
            self._logger.warning(
                "Failed to persist position %s: %s",
                (left, top, width, height),
                exc,
            )

    def _move_osd_mouse(self, left: int, top: int, width: int, height: int) -> None:
        try:
            self._output_modes.set_osd_mouse(left, top, width, height)
        except OSError as exc:
            self._logger.warning("Failed to move OSD mouse: %s", exc)

    # Persistence -----------------------------------------------------------

    def is_position_changed(self) -> bool:
        previous = self._previous
        return not (
            previous.left == self._left
            and previous.top == self._top
            and previous.width == self._width
            and previous.height == self._height
        )

    def save_display_position(self) -> bool:
        """Persist the current rectangle if it differs from the init snapshot."""
        if not self.is_position_changed():
            return False
        self._persist(self._left, self._top, self._width, self._height)
        return True
