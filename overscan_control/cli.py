#!/usr/bin/env python3
"""Command-line driver for the overscan position manager."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from overscan_control.collaborators import JsonOutputModeProvider, SysfsAxisWriter
from overscan_control.config import ControllerConfig, load_controller_config
from overscan_control.logging_utils import configure_logging
from overscan_control.overscan_geometry import format_axis
from overscan_control.position_manager import DisplayPositionManager


def _config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "overscan"


def _default_config_path() -> Path:
    env = os.environ.get("OVERSCAN_CONFIG_PATH")
    if env:
        return Path(env).expanduser()
    return _config_home() / "controller.json"


def _default_settings_path() -> Path:
    env = os.environ.get("OVERSCAN_SETTINGS_PATH")
    if env:
        return Path(env).expanduser()
    return _config_home() / "positions.json"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Adjust the HDMI overscan window")
    parser.add_argument("--config", type=Path, default=_default_config_path(), help="Path to controller.json")
    parser.add_argument("--settings", type=Path, default=_default_settings_path(), help="Path to the position store")
    parser.add_argument("--log-dir", type=Path, help="Directory for the rotating log file")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG regardless of config")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show", help="Print mode, bound, rate and rectangle")
    commands.add_parser("zoom-in", help="Grow the window by one percent")
    commands.add_parser("zoom-out", help="Shrink the window by one percent")
    commands.add_parser("save", help="Persist the window if it changed since start-up")
    commands.add_parser("reset", help="Restore the full canvas")
    percent = commands.add_parser("percent", help="Zoom to an absolute percent")
    percent.add_argument("value", type=int)
    position = commands.add_parser("position", help="Place the window at an absolute position")
    position.add_argument("x", type=int)
    position.add_argument("y", type=int)
    position.add_argument("width", type=int)
    position.add_argument("height", type=int)
    return parser.parse_args(argv)


def build_manager(config: ControllerConfig, settings_path: Path) -> DisplayPositionManager:
    writer = SysfsAxisWriter()
    provider = JsonOutputModeProvider(
        settings_path,
        mode_path=Path(config.mode_path) if config.mode_path else None,
        default_mode=config.default_mode,
        osd_mouse_path=config.osd_mouse_path,
        writer=writer,
    )
    return DisplayPositionManager(provider, writer, config=config)


def _print_state(manager: DisplayPositionManager) -> None:
    bound = manager.bound
    rect = manager.rectangle
    print(f"mode: {manager.current_mode}")
    print(f"bound: {bound.max_right} {bound.max_bottom}")
    print(f"rate: {manager.current_rate_value}")
    print(f"position: {rect.left} {rect.top} {rect.width} {rect.height}")


def _print_axis(manager: DisplayPositionManager) -> None:
    print(f"axis: {format_axis(*manager.rectangle.axis())}")
    print(f"rate: {manager.current_rate_value}")


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    config = load_controller_config(args.config.expanduser())
    configure_logging(
        debug_enabled=config.debug or args.verbose,
        retention=config.log_retention,
        log_dir=args.log_dir,
    )
    manager = build_manager(config, args.settings.expanduser())

    if args.command == "show":
        _print_state(manager)
    elif args.command == "zoom-in":
        manager.zoom_in()
        _print_axis(manager)
    elif args.command == "zoom-out":
        manager.zoom_out()
        _print_axis(manager)
    elif args.command == "reset":
        manager.zoom_by_percent(config.max_percent)
        _print_axis(manager)
    elif args.command == "percent":
        if not manager.zoom_by_percent(args.value):
            print(
                f"error: percent must be within {config.min_percent}-{config.max_percent}; nothing applied",
                file=sys.stderr,
            )
            return 1
        _print_axis(manager)
    elif args.command == "position":
        manager.zoom_by_position(args.x, args.y, args.width, args.height)
        right = args.x + args.width - 1
        bottom = args.y + args.height - 1
        print(f"axis: {format_axis(args.x, args.y, right, bottom)}")
    elif args.command == "save":
        saved = manager.save_display_position()
        print("saved" if saved else "unchanged")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
