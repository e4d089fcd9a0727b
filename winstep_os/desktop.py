"""Desktop automation collaborator: processes, focus and window geometry.

``Desktop`` is the surface the commands call; ``WindowsDesktop`` implements it
on Windows with pygetwindow for window handles, ``user32`` for the foreground
window and psutil for process names. The module stays importable on other
platforms so the core and tests run anywhere.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple

from winstep_cycle.errors import WinstepError
from winstep_cycle.geometry import Frame

Logger = logging.Logger

_IS_WINDOWS = sys.platform.startswith("win32")

if _IS_WINDOWS:
    try:
        import psutil  # type: ignore
        import pygetwindow as gw  # type: ignore
    except Exception as exc:  # pragma: no cover - import error surfaced once
        raise ImportError("pygetwindow and psutil are required on Windows hosts") from exc

    import ctypes
    from ctypes import wintypes
else:  # pragma: no cover - used only when running tooling on non-Windows hosts
    gw = None  # type: ignore
    psutil = None  # type: ignore
    ctypes = None  # type: ignore
    wintypes = None  # type: ignore


class TargetResolutionError(WinstepError):
    """Raised when no frontmost window/process can be found."""


class GeometryApplyError(WinstepError):
    """Raised when the OS rejects a move or resize."""


class AppActivationError(WinstepError):
    """Raised when an application can neither be focused nor launched."""


@dataclass(frozen=True)
class ProcessHandle:
    """A process that owns a top-level window; ``window`` is backend specific."""

    name: str
    pid: int
    window: Any = None
    window_id: Optional[int] = None

    def matches(self, name: Optional[str]) -> bool:
        return bool(name) and self.name.casefold() == str(name).casefold()


class Desktop(Protocol):
    """Operations the commands need from the OS automation layer."""

    def list_processes(self) -> List[ProcessHandle]: ...

    def find_process(self, name: str) -> Optional[ProcessHandle]: ...

    def find_frontmost(self, name: str) -> Optional[ProcessHandle]: ...

    def frontmost_process(self) -> ProcessHandle: ...

    def get_window_geometry(self, process: ProcessHandle) -> Frame: ...

    def set_window_geometry(
        self,
        process: ProcessHandle,
        position: Optional[Tuple[float, float]] = None,
        size: Optional[Tuple[float, float]] = None,
    ) -> None: ...

    def activate_app(self, name: str) -> None: ...


def desktop_available() -> bool:
    return _IS_WINDOWS


def set_dpi_aware() -> None:
    """Enable DPI awareness so window coordinates are physical pixels.

    Must run once before any window operation; without it Windows reports
    virtualized coordinates on displays with scaling != 100%, which do not match
    the monitor catalog. No-op on non-Windows platforms.
    """
    if not _IS_WINDOWS:
        return

    try:
        assert ctypes is not None  # noqa: S101 - guarded by _IS_WINDOWS
        ctypes.windll.user32.SetProcessDPIAware()
    except Exception as exc:  # pragma: no cover - defensive guard
        logging.getLogger(__name__).warning("Failed to set DPI awareness: %s", exc)


class WindowsDesktop:
    """Win32 implementation of ``Desktop``."""

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

        if not _IS_WINDOWS:
            self._logger.warning("WindowsDesktop instantiated on non-Windows platform; operations will fail")
            return
        set_dpi_aware()

    def _require_windows(self) -> None:
        if not _IS_WINDOWS:
            raise RuntimeError("WindowsDesktop operations require Windows")

    def _window_pid(self, hwnd: int) -> int:
        assert ctypes is not None and wintypes is not None  # noqa: S101 - guarded by _require_windows
        pid = wintypes.DWORD()
        ctypes.windll.user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        return int(pid.value)

    def _handle_for(self, window: "gw.Win32Window") -> Optional[ProcessHandle]:
        hwnd = window._hWnd  # pylint: disable=protected-access
        pid = self._window_pid(hwnd)
        if not pid:
            return None
        try:
            name = psutil.Process(pid).name()
        except psutil.Error as exc:
            self._logger.debug("Cannot read process name for pid %s: %s", pid, exc)
            return None
        return ProcessHandle(name=name, pid=pid, window=window, window_id=int(hwnd))

    def list_processes(self) -> List[ProcessHandle]:
        """Processes owning a visible, titled top-level window (one entry per pid)."""
        self._require_windows()
        assert gw is not None  # noqa: S101

        handles: List[ProcessHandle] = []
        seen = set()
        for window in gw.getAllWindows():
            if not window.title or not window.visible:
                continue
            handle = self._handle_for(window)
            if handle is None or handle.pid in seen:
                continue
            seen.add(handle.pid)
            handles.append(handle)
        self._logger.debug("Enumerated %d windowed processes", len(handles))
        return handles

    def find_process(self, name: str) -> Optional[ProcessHandle]:
        """Any windowed process called ``name``; enumerates all windows."""
        for handle in self.list_processes():
            if handle.matches(name):
                return handle
        return None

    def find_frontmost(self, name: str) -> Optional[ProcessHandle]:
        """The foreground process if it is ``name``, else ``None``. Never enumerates."""
        self._require_windows()
        assert gw is not None  # noqa: S101
        active = gw.getActiveWindow()
        if active is None:
            return None
        handle = self._handle_for(active)
        if handle is None or not handle.matches(name):
            return None
        return handle

    def frontmost_process(self) -> ProcessHandle:
        self._require_windows()
        assert gw is not None  # noqa: S101
        window = gw.getActiveWindow()
        if window is None:
            raise TargetResolutionError("No frontmost window found")
        handle = self._handle_for(window)
        if handle is None:
            raise TargetResolutionError(f"Cannot identify the process owning window '{window.title}'")
        self._logger.debug("Frontmost process: %s (pid %s)", handle.name, handle.pid)
        return handle

    def get_window_geometry(self, process: ProcessHandle) -> Frame:
        self._require_windows()
        window = process.window
        if window is None:
            raise TargetResolutionError(f"Process '{process.name}' has no window")
        try:
            frame = Frame(float(window.left), float(window.top), float(window.width), float(window.height))
        except Exception as exc:  # pragma: no cover - dependent on GUI state
            raise TargetResolutionError(f"Cannot read geometry of '{process.name}': {exc}") from exc
        self._logger.debug("Window geometry for %s: %s", process.name, frame.to_tuple())
        return frame

    def set_window_geometry(
        self,
        process: ProcessHandle,
        position: Optional[Tuple[float, float]] = None,
        size: Optional[Tuple[float, float]] = None,
    ) -> None:
        """Move and/or resize; coordinates are rounded to whole pixels here."""
        self._require_windows()
        window = process.window
        if window is None:
            raise GeometryApplyError(f"Process '{process.name}' has no window")

        try:
            if position is not None:
                window.moveTo(int(round(position[0])), int(round(position[1])))
            if size is not None:
                window.resizeTo(max(int(round(size[0])), 1), max(int(round(size[1])), 1))
        except Exception as exc:  # pragma: no cover - dependent on GUI state
            raise GeometryApplyError(f"Failed to place window of '{process.name}': {exc}") from exc

    def activate_app(self, name: str) -> None:
        """Focus the app's window, launching the app when it has none."""
        self._require_windows()
        handle = self.find_process(name)
        if handle is None:
            self._launch(name)
            return

        window = handle.window
        try:
            if window.isMinimized:
                self._logger.debug("Window of %s is minimized; restoring", name)
                window.restore()
                time.sleep(0.05)
            window.activate()
        except Exception as exc:  # pragma: no cover - dependent on GUI state
            raise AppActivationError(f"Failed to focus '{name}'") from exc

    def _launch(self, name: str) -> None:
        self._logger.info("No window for %s; launching it", name)
        try:
            os.startfile(name)  # type: ignore[attr-defined]  # Windows only
        except OSError as exc:
            raise AppActivationError(f"Failed to launch '{name}': {exc}") from exc


__all__ = [
    "AppActivationError",
    "Desktop",
    "GeometryApplyError",
    "ProcessHandle",
    "TargetResolutionError",
    "WindowsDesktop",
    "desktop_available",
    "set_dpi_aware",
]
