"""Command orchestration: one method per script, wiring core and desktop."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from winstep_cycle.catalog import Alignment, GeometryCatalog, MonitorGeometry
from winstep_cycle.engine import RESET_AFTER_S, is_fresh, next_index
from winstep_cycle.errors import ArgumentError
from winstep_cycle.geometry import Frame, compute_geometry, offset_frame
from winstep_cycle.state import CycleState, StateStore

from .applier import Applier
from .desktop import Desktop, TargetResolutionError
from .resolver import ResolvedTarget, TargetResolver

Logger = logging.Logger


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a cycle-resize or move-resize run."""

    process_name: str
    monitor: Optional[MonitorGeometry]
    frame: Frame
    ratio: Optional[float]
    effective_index: int
    changed: bool
    cache_hit: bool
    persisted: bool


@dataclass(frozen=True)
class ActivationResult:
    """Outcome of a switch-to-app or cycle-apps run."""

    app_name: str
    activated: bool


class WindowCycler:
    """Runs the winstep commands against an injected desktop and state stores."""

    def __init__(
        self,
        desktop: Desktop,
        catalog: GeometryCatalog,
        cycle_store: StateStore,
        delta_store: StateStore,
        apps: Sequence[str] = (),
        reset_after: float = RESET_AFTER_S,
        clock: Callable[[], float] = time.time,
        logger: Optional[Logger] = None,
    ) -> None:
        self._desktop = desktop
        self._catalog = catalog
        self._cycle_store = cycle_store
        self._delta_store = delta_store
        self._apps = list(apps)
        self._reset_after = reset_after
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._resolver = TargetResolver(desktop, logger=self._logger)

    def _resolve(self, state: Optional[CycleState], now: float) -> ResolvedTarget:
        # A window moved by hand between bursts must be re-read, so the cache
        # only counts while the previous run is recent.
        if is_fresh(state, now, self._reset_after):
            target = self._resolver.resolve(state.process_name, state.geometry, state.window_id)
        else:
            target = self._resolver.resolve(None)
        self._logger.debug(
            "Target %s at %s (cache %s)",
            target.process.name,
            target.geometry.to_tuple(),
            "hit" if target.cache_hit else "miss",
        )
        return target

    def cycle_resize(self, alignment: Alignment) -> PlacementResult:
        """Apply the next width (l/r/c) or height (t/b) preset to the frontmost window."""
        state = self._cycle_store.load()
        now = self._clock()
        target = self._resolve(state, now)

        monitor = self._catalog.select_monitor(target.geometry.x)
        ratios = monitor.ratios_for(alignment)
        step = next_index(state, alignment, now, len(ratios), self._reset_after)
        ratio = ratios[step.effective_index - 1]
        frame = compute_geometry(monitor, alignment, ratio, target.geometry)

        applier = Applier(self._desktop, self._cycle_store, logger=self._logger)
        changed = applier.apply(target, frame)
        persisted = applier.persist(
            CycleState(
                index=step.next_index,
                timestamp=now,
                alignment=alignment,
                process_name=target.process.name,
                geometry=frame,
                window_id=target.process.window_id,
            )
        )
        self._logger.info(
            "Preset %d/%d (%s) on monitor %s for %s",
            step.effective_index,
            len(ratios),
            ratio,
            monitor.name,
            target.process.name,
        )
        return PlacementResult(
            process_name=target.process.name,
            monitor=monitor,
            frame=frame,
            ratio=ratio,
            effective_index=step.effective_index,
            changed=changed,
            cache_hit=target.cache_hit,
            persisted=persisted,
        )

    def move_resize(self, dx: float, dy: float, dw: float, dh: float) -> PlacementResult:
        """Shift and grow/shrink the frontmost window by the given deltas."""
        state = self._delta_store.load()
        now = self._clock()
        target = self._resolve(state, now)

        frame = offset_frame(target.geometry, dx, dy, dw, dh)
        applier = Applier(self._desktop, self._delta_store, logger=self._logger)
        changed = applier.apply(target, frame)
        persisted = applier.persist(
            CycleState(
                index=1,
                timestamp=now,
                alignment=state.alignment if state is not None else Alignment.LEFT,
                process_name=target.process.name,
                geometry=frame,
                window_id=target.process.window_id,
            )
        )
        return PlacementResult(
            process_name=target.process.name,
            monitor=None,
            frame=frame,
            ratio=None,
            effective_index=1,
            changed=changed,
            cache_hit=target.cache_hit,
            persisted=persisted,
        )

    def _frontmost_name(self) -> Optional[str]:
        try:
            return self._desktop.frontmost_process().name
        except TargetResolutionError as exc:
            self._logger.debug("No frontmost process: %s", exc)
            return None

    def switch_to_app(self, app_name: str) -> ActivationResult:
        """Activate ``app_name`` unless it is already frontmost."""
        if not app_name or not app_name.strip():
            raise ArgumentError("switch-to-app needs an application name")
        app_name = app_name.strip()

        current = self._frontmost_name()
        if current is not None and current.casefold() == app_name.casefold():
            self._logger.info("%s is already frontmost", app_name)
            return ActivationResult(app_name=app_name, activated=False)

        self._desktop.activate_app(app_name)
        self._logger.info("Activated %s", app_name)
        return ActivationResult(app_name=app_name, activated=True)

    def cycle_apps(self) -> ActivationResult:
        """Activate the app after the frontmost one in the configured list."""
        if not self._apps:
            raise ArgumentError("cycle-apps has no applications configured")

        current = self._frontmost_name()
        folded = [app.casefold() for app in self._apps]
        if current is not None and current.casefold() in folded:
            position = (folded.index(current.casefold()) + 1) % len(self._apps)
        else:
            position = 0

        app_name = self._apps[position]
        if current is not None and current.casefold() == app_name.casefold():
            return ActivationResult(app_name=app_name, activated=False)

        self._desktop.activate_app(app_name)
        self._logger.info("Cycled to %s", app_name)
        return ActivationResult(app_name=app_name, activated=True)


__all__ = ["ActivationResult", "PlacementResult", "WindowCycler"]
