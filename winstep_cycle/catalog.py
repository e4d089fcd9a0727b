"""Static screen geometries and the ratio presets cycled on each monitor.

Values are expressed in screen pixels of the desktop coordinate space. The
catalog is pure data: nothing here talks to the OS.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class Alignment(str, Enum):
    """Anchor used when placing the window on its monitor."""

    LEFT = "l"
    RIGHT = "r"
    CENTER = "c"
    TOP = "t"
    BOTTOM = "b"

    @property
    def is_vertical(self) -> bool:
        """Top/Bottom cycle height; the other alignments cycle width."""
        return self in (Alignment.TOP, Alignment.BOTTOM)

    @classmethod
    def parse(cls, value: object) -> Optional["Alignment"]:
        """Resolve a letter (``l``) or full name (``left``); ``None`` when unknown."""
        if isinstance(value, Alignment):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        return None


def _check_ratios(name: str, ratios: Sequence[float]) -> Tuple[float, ...]:
    values = tuple(float(r) for r in ratios)
    if not values:
        raise ValueError(f"Monitor '{name}' needs at least one ratio")
    for ratio in values:
        if not 0.0 < ratio <= 1.0:
            raise ValueError(f"Monitor '{name}' ratio {ratio} must be within (0, 1]")
    return values


@dataclass(frozen=True)
class MonitorGeometry:
    """One display region together with its width and height presets.

    ``min_x`` (inclusive) and ``max_x`` (exclusive) bound the window x
    coordinates that count as being on this monitor; ``None`` leaves that side
    open.
    """

    name: str
    width: float
    height: float
    origin_x: float = 0.0
    origin_y: float = 0.0
    horizontal_ratios: Tuple[float, ...] = (0.5,)
    vertical_ratios: Tuple[float, ...] = (0.5,)
    min_x: Optional[float] = None
    max_x: Optional[float] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Monitor '{self.name}' must have a positive size")
        object.__setattr__(self, "horizontal_ratios", _check_ratios(self.name, self.horizontal_ratios))
        object.__setattr__(self, "vertical_ratios", _check_ratios(self.name, self.vertical_ratios))

    def contains(self, x: float) -> bool:
        if self.min_x is not None and x < self.min_x:
            return False
        if self.max_x is not None and x >= self.max_x:
            return False
        return True

    def ratios_for(self, alignment: Alignment) -> Tuple[float, ...]:
        """Return the preset sequence for the alignment class."""
        if alignment.is_vertical:
            return self.vertical_ratios
        return self.horizontal_ratios


@dataclass(frozen=True)
class GeometryCatalog:
    """Ordered monitor table; the first monitor containing x wins."""

    monitors: Tuple[MonitorGeometry, ...]
    default_index: int = -1

    def __post_init__(self) -> None:
        if not self.monitors:
            raise ValueError("Geometry catalog needs at least one monitor")
        object.__setattr__(self, "monitors", tuple(self.monitors))
        count = len(self.monitors)
        if not -count <= self.default_index < count:
            raise ValueError(f"Default monitor index {self.default_index} out of range for {count} monitors")

    @property
    def default_monitor(self) -> MonitorGeometry:
        return self.monitors[self.default_index]

    def select_monitor(self, x: float) -> MonitorGeometry:
        for monitor in self.monitors:
            if monitor.contains(x):
                return monitor
        return self.default_monitor

    @classmethod
    def two_monitor(
        cls,
        primary: MonitorGeometry,
        secondary: MonitorGeometry,
        slack_px: float = 200.0,
    ) -> "GeometryCatalog":
        """Partition the x axis at ``primary.width - slack_px``.

        Windows straddling the boundary by less than the slack still count as
        being on the primary monitor; everything at or beyond it belongs to the
        secondary one.
        """
        boundary = primary.width - slack_px
        primary = _with_bounds(primary, None, boundary)
        secondary = _with_bounds(secondary, boundary, None)
        return cls(monitors=(primary, secondary), default_index=1)


def _with_bounds(monitor: MonitorGeometry, min_x: Optional[float], max_x: Optional[float]) -> MonitorGeometry:
    return MonitorGeometry(
        name=monitor.name,
        width=monitor.width,
        height=monitor.height,
        origin_x=monitor.origin_x,
        origin_y=monitor.origin_y,
        horizontal_ratios=monitor.horizontal_ratios,
        vertical_ratios=monitor.vertical_ratios,
        min_x=min_x,
        max_x=max_x,
    )


PRIMARY_MONITOR = MonitorGeometry(
    name="primary",
    width=2560,
    height=1440,
    origin_x=0,
    origin_y=0,
    horizontal_ratios=(0.5, 0.67, 0.33, 0.25, 0.75),
    vertical_ratios=(0.5, 0.67, 0.33, 1.0),
)

# origin_y is a calibration value for the physical display arrangement; set it
# through the monitors.secondary.origin_y config key.
SECONDARY_MONITOR = MonitorGeometry(
    name="secondary",
    width=1920,
    height=1080,
    origin_x=2560,
    origin_y=0,
    horizontal_ratios=(0.5, 0.67, 0.33, 1.0),
    vertical_ratios=(0.5, 1.0),
)

DEFAULT_SLACK_PX = 200.0

DEFAULT_CATALOG = GeometryCatalog.two_monitor(PRIMARY_MONITOR, SECONDARY_MONITOR, DEFAULT_SLACK_PX)


__all__ = [
    "Alignment",
    "DEFAULT_CATALOG",
    "DEFAULT_SLACK_PX",
    "GeometryCatalog",
    "MonitorGeometry",
    "PRIMARY_MONITOR",
    "SECONDARY_MONITOR",
]
