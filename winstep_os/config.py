"""Configuration structures for the winstep scripts.

Values originate from ``winstep.yaml`` (path from ``--config``, the
``WINSTEP_CONFIG`` environment variable, or the per-user default) and fall back
to the built-in defaults when the file or a key is missing. Geometry values are
screen pixels.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from winstep_cycle.catalog import (
    DEFAULT_SLACK_PX,
    PRIMARY_MONITOR,
    SECONDARY_MONITOR,
    GeometryCatalog,
    MonitorGeometry,
)
from winstep_cycle.engine import RESET_AFTER_S

CONFIG_ENV_VAR = "WINSTEP_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/winstep/winstep.yaml")


@dataclass(slots=True)
class StateConfig:
    """Where the per-script state files live and how long a cycle stays live."""

    dir: Path = Path("~/.local/state/winstep")
    cycle_file: str = "cycle-resize.state"
    delta_file: str = "move-resize.state"
    reset_after_s: float = RESET_AFTER_S

    @property
    def cycle_path(self) -> Path:
        return self.dir.expanduser() / self.cycle_file

    @property
    def delta_path(self) -> Path:
        return self.dir.expanduser() / self.delta_file


@dataclass(slots=True)
class MonitorsConfig:
    """Two-monitor layout; the secondary monitor starts at primary width minus slack."""

    primary: MonitorGeometry = PRIMARY_MONITOR
    secondary: MonitorGeometry = SECONDARY_MONITOR
    membership_slack_px: float = DEFAULT_SLACK_PX

    def build_catalog(self) -> GeometryCatalog:
        return GeometryCatalog.two_monitor(self.primary, self.secondary, self.membership_slack_px)


@dataclass(slots=True)
class NotificationConfig:
    """Controls how failures are surfaced to the user."""

    popup: bool = True
    title: str = "winstep"


@dataclass(slots=True)
class WinstepConfig:
    """Top-level configuration blob."""

    state: StateConfig = field(default_factory=StateConfig)
    monitors: MonitorsConfig = field(default_factory=MonitorsConfig)
    apps: List[str] = field(default_factory=lambda: ["chrome.exe", "Code.exe", "WindowsTerminal.exe"])
    notifications: NotificationConfig = field(default_factory=NotificationConfig)


def resolve_config_path(path: Optional[Path] = None) -> Path:
    if path is not None:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config(path: Optional[Path] = None) -> WinstepConfig:
    """Load configuration from YAML, falling back to defaults."""

    cfg_path = resolve_config_path(path)
    config = WinstepConfig()

    if not cfg_path.exists():
        return config

    with cfg_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {cfg_path} must contain a mapping at the top level")

    _apply_state_config(config.state, raw.get("state") or {})
    _apply_monitors_config(config.monitors, raw.get("monitors") or {})

    apps = raw.get("apps")
    if isinstance(apps, (list, tuple)):
        config.apps = [str(app) for app in apps if str(app).strip()]

    _apply_notification_config(config.notifications, raw.get("notifications") or {})
    return config


def _apply_state_config(config: StateConfig, data: Dict) -> None:
    if not data:
        return

    state_dir = data.get("dir")
    if state_dir:
        config.dir = Path(str(state_dir))

    if data.get("cycle_file"):
        config.cycle_file = str(data["cycle_file"])

    if data.get("delta_file"):
        config.delta_file = str(data["delta_file"])

    if "reset_after_s" in data:
        config.reset_after_s = float(data["reset_after_s"])


def _apply_monitors_config(config: MonitorsConfig, data: Dict) -> None:
    if not data:
        return

    if "membership_slack_px" in data:
        config.membership_slack_px = float(data["membership_slack_px"])

    primary_data = data.get("primary")
    if isinstance(primary_data, dict):
        config.primary = _monitor_from_dict(config.primary, primary_data)

    secondary_data = data.get("secondary")
    if isinstance(secondary_data, dict):
        config.secondary = _monitor_from_dict(config.secondary, secondary_data)


def _ratios(value: object, fallback: Tuple[float, ...]) -> Tuple[float, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(float(v) for v in value)
    return fallback


def _monitor_from_dict(base: MonitorGeometry, data: Dict) -> MonitorGeometry:
    return MonitorGeometry(
        name=str(data.get("name", base.name)),
        width=float(data.get("width", base.width)),
        height=float(data.get("height", base.height)),
        origin_x=float(data.get("origin_x", base.origin_x)),
        origin_y=float(data.get("origin_y", base.origin_y)),
        horizontal_ratios=_ratios(data.get("horizontal_ratios"), base.horizontal_ratios),
        vertical_ratios=_ratios(data.get("vertical_ratios"), base.vertical_ratios),
    )


def _apply_notification_config(config: NotificationConfig, data: Dict) -> None:
    if not data:
        return

    if "popup" in data:
        config.popup = bool(data["popup"])

    if data.get("title"):
        config.title = str(data["title"])


__all__ = [
    "CONFIG_ENV_VAR",
    "MonitorsConfig",
    "NotificationConfig",
    "StateConfig",
    "WinstepConfig",
    "load_config",
    "resolve_config_path",
]
