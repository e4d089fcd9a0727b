"""OS layer for winstep.

This package owns everything that touches the desktop: locating the frontmost
process and window, applying geometry, activating applications, surfacing
notices and the command-line entry points.

Implementations target Windows while remaining importable from other platforms
for tooling and tests.
"""

from .applier import Applier
from .commands import ActivationResult, PlacementResult, WindowCycler
from .config import WinstepConfig, load_config
from .desktop import (
    AppActivationError,
    Desktop,
    GeometryApplyError,
    ProcessHandle,
    TargetResolutionError,
    WindowsDesktop,
)
from .notify import Notifier
from .resolver import ResolvedTarget, TargetResolver

__all__ = [
    "ActivationResult",
    "AppActivationError",
    "Applier",
    "Desktop",
    "GeometryApplyError",
    "Notifier",
    "PlacementResult",
    "ProcessHandle",
    "ResolvedTarget",
    "TargetResolutionError",
    "TargetResolver",
    "WindowCycler",
    "WindowsDesktop",
    "WinstepConfig",
    "load_config",
]
