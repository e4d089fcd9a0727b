"""Push computed geometry to the desktop and persist the cycle state."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from winstep_cycle.errors import StatePersistError
from winstep_cycle.geometry import Frame
from winstep_cycle.state import CycleState, StateStore

from .desktop import Desktop
from .resolver import ResolvedTarget

Logger = logging.Logger

# The OS works in whole pixels, so anything closer than this is already in place.
_PIXEL_TOLERANCE = 0.5


def _same(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
    return abs(a[0] - b[0]) < _PIXEL_TOLERANCE and abs(a[1] - b[1]) < _PIXEL_TOLERANCE


class Applier:
    """Applies frames without no-op set calls and saves state best-effort."""

    def __init__(self, desktop: Desktop, store: StateStore, logger: Optional[Logger] = None) -> None:
        self._desktop = desktop
        self._store = store
        self._logger = logger or logging.getLogger(__name__)

    def apply(self, target: ResolvedTarget, frame: Frame) -> bool:
        """Move/resize the target window; returns ``False`` when nothing changed.

        ``GeometryApplyError`` from the desktop propagates so the caller can skip
        persisting state.
        """
        current = target.geometry
        position = None if _same(current.position, frame.position) else frame.position
        size = None if _same(current.size, frame.size) else frame.size
        if position is None and size is None:
            self._logger.debug("Window of %s already at %s", target.process.name, frame.to_tuple())
            return False

        self._desktop.set_window_geometry(target.process, position=position, size=size)
        self._logger.info(
            "Placed %s at x=%s, y=%s, width=%s, height=%s",
            target.process.name,
            frame.x,
            frame.y,
            frame.width,
            frame.height,
        )
        return True

    def persist(self, state: CycleState) -> bool:
        """Save ``state``; a write failure is logged and reported as ``False``."""
        try:
            self._store.save(state)
        except StatePersistError as exc:
            self._logger.warning("State not saved: %s", exc)
            return False
        return True


__all__ = ["Applier"]
