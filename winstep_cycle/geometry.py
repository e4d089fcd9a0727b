"""Pure geometry math for placing a window on a monitor."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .catalog import Alignment, MonitorGeometry


@dataclass(frozen=True)
class Frame:
    """Window position and size in screen pixels (fractional values allowed)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def size(self) -> Tuple[float, float]:
        return self.width, self.height

    @property
    def is_valid(self) -> bool:
        values = (self.x, self.y, self.width, self.height)
        if not all(isinstance(v, (int, float)) and math.isfinite(v) for v in values):
            return False
        return self.width > 0 and self.height > 0

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height


def compute_geometry(
    monitor: MonitorGeometry,
    alignment: Alignment,
    ratio: float,
    current: Frame,
) -> Frame:
    """Map a preset ratio to the new window frame.

    Left/Right/Center take the full monitor height and ``ratio`` of its width.
    Top/Bottom keep the current x and width so they compose with an earlier
    horizontal placement, and take ``ratio`` of the monitor height.
    """
    if alignment is Alignment.LEFT:
        return Frame(monitor.origin_x, monitor.origin_y, monitor.width * ratio, monitor.height)
    if alignment is Alignment.RIGHT:
        x = monitor.origin_x + monitor.width * (1 - ratio)
        return Frame(x, monitor.origin_y, monitor.width * ratio, monitor.height)
    if alignment is Alignment.CENTER:
        x = monitor.origin_x + monitor.width * (1 - ratio) / 2
        return Frame(x, monitor.origin_y, monitor.width * ratio, monitor.height)
    if alignment is Alignment.TOP:
        return Frame(current.x, monitor.origin_y, current.width, monitor.height * ratio)
    if alignment is Alignment.BOTTOM:
        y = monitor.origin_y + monitor.height * (1 - ratio)
        return Frame(current.x, y, current.width, monitor.height * ratio)
    raise ValueError(f"Unsupported alignment: {alignment!r}")


def offset_frame(current: Frame, dx: float, dy: float, dw: float, dh: float) -> Frame:
    """Shift and grow/shrink a frame by deltas; size never drops below 1px."""
    return Frame(
        x=current.x + dx,
        y=current.y + dy,
        width=max(current.width + dw, 1.0),
        height=max(current.height + dh, 1.0),
    )


__all__ = ["Frame", "compute_geometry", "offset_frame"]
