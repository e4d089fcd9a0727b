"""Command-line entry points: cycle-resize, move-resize, switch-to-app, cycle-apps.

Every script exits 0 once a failure has been handled and shown to the user;
only unexpected faults produce a non-zero exit code.
"""
from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, Sequence

import yaml

from winstep_cycle.catalog import Alignment
from winstep_cycle.errors import ArgumentError, WinstepError
from winstep_cycle.state import StateStore

from .commands import WindowCycler
from .config import NotificationConfig, WinstepConfig, load_config
from .desktop import Desktop, WindowsDesktop, desktop_available
from .notify import Notifier

DEFAULT_ALIGNMENT = Alignment.LEFT
MOVE_RESIZE_USAGE = "usage: move-resize dx dy dw dh (four signed numbers)"

# Wrong-typed YAML values surface as TypeError/AttributeError from the _apply_* helpers.
CONFIG_ERRORS = (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError)

logger = logging.getLogger(__name__)


class NoticeArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments as ``ArgumentError`` instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(f"{self.prog}: {message}")


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, help="Path to winstep.yaml (default: $WINSTEP_CONFIG or ~/.config/winstep).")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity.",
    )


def build_cycle_resize_parser() -> NoticeArgumentParser:
    parser = NoticeArgumentParser(
        prog="cycle-resize",
        description="Cycle the frontmost window through preset widths (l/r/c) or heights (t/b).",
    )
    parser.add_argument("alignment", nargs="?", default=DEFAULT_ALIGNMENT.value, help="One of l, r, c, t, b.")
    _add_common_options(parser)
    return parser


def build_move_resize_parser() -> NoticeArgumentParser:
    parser = NoticeArgumentParser(
        prog="move-resize",
        description="Move and resize the frontmost window by pixel deltas.",
    )
    parser.add_argument("deltas", nargs="*", help="dx dy dw dh")
    _add_common_options(parser)
    return parser


def build_switch_to_app_parser() -> NoticeArgumentParser:
    parser = NoticeArgumentParser(
        prog="switch-to-app",
        description="Bring an application to the front unless it already is.",
    )
    parser.add_argument("app_name", nargs="*", help="Application (process) name, e.g. chrome.exe.")
    _add_common_options(parser)
    return parser


def build_cycle_apps_parser() -> NoticeArgumentParser:
    parser = NoticeArgumentParser(
        prog="cycle-apps",
        description="Activate the next application from the configured list.",
    )
    _add_common_options(parser)
    return parser


def parse_alignment(value: Optional[str]) -> Alignment:
    alignment = Alignment.parse(value)
    if alignment is None:
        logger.warning("Unknown alignment %r; using %s", value, DEFAULT_ALIGNMENT.value)
        return DEFAULT_ALIGNMENT
    return alignment


def parse_deltas(values: Sequence[str]) -> List[float]:
    if len(values) != 4:
        raise ArgumentError(MOVE_RESIZE_USAGE)
    try:
        deltas = [float(value) for value in values]
    except ValueError as exc:
        raise ArgumentError(MOVE_RESIZE_USAGE) from exc
    if not all(math.isfinite(delta) for delta in deltas):
        raise ArgumentError(MOVE_RESIZE_USAGE)
    return deltas


def _configure_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format="[%(levelname)s] %(message)s")


def build_cycler(config: WinstepConfig, desktop: Desktop) -> WindowCycler:
    return WindowCycler(
        desktop=desktop,
        catalog=config.monitors.build_catalog(),
        cycle_store=StateStore(config.state.cycle_path),
        delta_store=StateStore(config.state.delta_path),
        apps=config.apps,
        reset_after=config.state.reset_after_s,
    )


def _run(
    args: argparse.Namespace,
    action: Callable[[WindowCycler], object],
    desktop: Optional[Desktop],
    notifier: Optional[Notifier],
) -> int:
    try:
        config = load_config(args.config)
    except CONFIG_ERRORS as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    notifier = notifier or Notifier(config.notifications)

    if desktop is None:
        if not desktop_available():
            print("winstep scripts must be run on Windows.", file=sys.stderr)
            return 1
        desktop = WindowsDesktop()

    try:
        action(build_cycler(config, desktop))
    except WinstepError as exc:
        notifier.notify(str(exc))
        return 0
    except Exception as exc:  # noqa: BLE001 - last-resort guard for the hotkey entry point
        logger.exception("Unexpected failure: %s", exc)
        return 1
    return 0


def _report_usage(exc: ArgumentError, notifier: Optional[Notifier]) -> int:
    """Surface a command-line mistake and exit without touching any window."""
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")
    if notifier is None:
        try:
            notifications = load_config().notifications
        except CONFIG_ERRORS:
            notifications = NotificationConfig()
        notifier = Notifier(notifications)
    notifier.notify(str(exc))
    return 0


def main_cycle_resize(
    argv: Optional[List[str]] = None,
    desktop: Optional[Desktop] = None,
    notifier: Optional[Notifier] = None,
) -> int:
    try:
        args = build_cycle_resize_parser().parse_args(argv)
    except ArgumentError as exc:
        return _report_usage(exc, notifier)
    _configure_logging(args)
    alignment = parse_alignment(args.alignment)
    return _run(args, lambda cycler: cycler.cycle_resize(alignment), desktop, notifier)


def main_move_resize(
    argv: Optional[List[str]] = None,
    desktop: Optional[Desktop] = None,
    notifier: Optional[Notifier] = None,
) -> int:
    try:
        args = build_move_resize_parser().parse_args(argv)
    except ArgumentError as exc:
        return _report_usage(exc, notifier)
    _configure_logging(args)

    def action(cycler: WindowCycler) -> object:
        dx, dy, dw, dh = parse_deltas(args.deltas)
        return cycler.move_resize(dx, dy, dw, dh)

    return _run(args, action, desktop, notifier)


def main_switch_to_app(
    argv: Optional[List[str]] = None,
    desktop: Optional[Desktop] = None,
    notifier: Optional[Notifier] = None,
) -> int:
    try:
        args = build_switch_to_app_parser().parse_args(argv)
    except ArgumentError as exc:
        return _report_usage(exc, notifier)
    _configure_logging(args)
    app_name = " ".join(args.app_name)
    return _run(args, lambda cycler: cycler.switch_to_app(app_name), desktop, notifier)


def main_cycle_apps(
    argv: Optional[List[str]] = None,
    desktop: Optional[Desktop] = None,
    notifier: Optional[Notifier] = None,
) -> int:
    try:
        args = build_cycle_apps_parser().parse_args(argv)
    except ArgumentError as exc:
        return _report_usage(exc, notifier)
    _configure_logging(args)
    return _run(args, lambda cycler: cycler.cycle_apps(), desktop, notifier)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main_cycle_resize())
