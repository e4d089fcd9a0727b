"""Core of winstep: preset catalog, cycle state machine and geometry math.

Nothing in this package touches the desktop; the OS-facing shell lives in
``winstep_os`` and passes state, time and window geometry in explicitly.
"""

from .catalog import DEFAULT_CATALOG, Alignment, GeometryCatalog, MonitorGeometry
from .engine import RESET_AFTER_S, CycleStep, is_fresh, next_index
from .errors import ArgumentError, StatePersistError, WinstepError
from .geometry import Frame, compute_geometry, offset_frame
from .state import CycleState, StateStore

__all__ = [
    "Alignment",
    "ArgumentError",
    "CycleState",
    "CycleStep",
    "DEFAULT_CATALOG",
    "Frame",
    "GeometryCatalog",
    "MonitorGeometry",
    "RESET_AFTER_S",
    "StatePersistError",
    "StateStore",
    "WinstepError",
    "compute_geometry",
    "is_fresh",
    "next_index",
    "offset_frame",
]
