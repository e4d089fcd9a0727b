"""Find the window to operate on, reusing the cached identity when it still holds."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from winstep_cycle.geometry import Frame

from .desktop import Desktop, ProcessHandle

Logger = logging.Logger


@dataclass(frozen=True)
class ResolvedTarget:
    process: ProcessHandle
    geometry: Frame
    cache_hit: bool


class TargetResolver:
    """Resolves the frontmost process and its window geometry.

    The cache is a latency optimisation only: a cached process name is trusted
    only if that process is still frontmost, and cached geometry only when the
    focused window is the one it was recorded for. Every other path falls back to an authoritative query.
    """

    def __init__(self, desktop: Desktop, logger: Optional[Logger] = None) -> None:
        self._desktop = desktop
        self._logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        cached_name: Optional[str],
        cached_geometry: Optional[Frame] = None,
        cached_window_id: Optional[int] = None,
    ) -> ResolvedTarget:
        """Return the target; raises ``TargetResolutionError`` when nothing is focused.

        Cached geometry belongs to one window, so it is reused only when the
        focused window is that same window, not merely another window of the
        same process.
        """
        process = self._from_cache(cached_name)
        cache_hit = process is not None
        if process is None:
            process = self._desktop.frontmost_process()

        if (
            cache_hit
            and cached_geometry is not None
            and cached_geometry.is_valid
            and cached_window_id is not None
            and process.window_id == cached_window_id
        ):
            geometry = cached_geometry
            self._logger.debug("Reusing cached geometry for %s", process.name)
        else:
            geometry = self._desktop.get_window_geometry(process)

        return ResolvedTarget(process=process, geometry=geometry, cache_hit=cache_hit)

    def _from_cache(self, cached_name: Optional[str]) -> Optional[ProcessHandle]:
        if not cached_name:
            return None
        try:
            process = self._desktop.find_frontmost(cached_name)
            if process is None or not process.matches(cached_name):
                self._logger.debug("Cached process %s is no longer frontmost", cached_name)
                return None
        except Exception as exc:  # noqa: BLE001 - any lookup failure means a cache miss
            self._logger.debug("Cached process lookup for %s failed: %s", cached_name, exc)
            return None
        return process


__all__ = ["ResolvedTarget", "TargetResolver"]
