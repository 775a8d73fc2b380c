from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from overscan_control.display_modes import resolve_bound

Position = Tuple[int, int, int, int]


class FakeOutputModes:
    """In-memory output-mode provider recording every persisted value."""

    def __init__(self, mode: str = "1080p60hz", positions: Optional[Dict[str, Position]] = None) -> None:
        self.mode = mode
        self.positions: Dict[str, Position] = dict(positions or {})
        self.saved: List[Position] = []
        self.osd_mouse: List[Position] = []
        self.fail_save = False

    def get_current_output_mode(self) -> str:
        return self.mode

    def get_position(self, mode: str) -> Position:
        if mode in self.positions:
            return self.positions[mode]
        return resolve_bound(mode).full_position()

    def save_position(self, left: int, top: int, width: int, height: int) -> None:
        if self.fail_save:
            raise OSError("settings store unavailable")
        self.saved.append((left, top, width, height))
        self.positions[self.mode] = (left, top, width, height)

    def set_osd_mouse(self, left: int, top: int, width: int, height: int) -> None:
        self.osd_mouse.append((left, top, width, height))


class RecordingAxisWriter:
    def __init__(self) -> None:
        self.writes: List[Tuple[str, str]] = []
        self.fail = False

    def write_axis(self, path: str, value: str) -> None:
        if self.fail:
            raise FileNotFoundError(path)
        self.writes.append((path, value))

    @property
    def values(self) -> List[str]:
        return [value for _path, value in self.writes]


@pytest.fixture
def output_modes() -> FakeOutputModes:
    return FakeOutputModes()


@pytest.fixture
def axis_writer() -> RecordingAxisWriter:
    return RecordingAxisWriter()


@pytest.fixture
def make_output_modes():
    return FakeOutputModes
