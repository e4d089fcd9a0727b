"""Shared fixtures: an in-memory desktop standing in for the OS automation layer."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from winstep_cycle.geometry import Frame
from winstep_os.desktop import GeometryApplyError, ProcessHandle, TargetResolutionError


class FakeDesktop:
    """Records every call; windows are kept as plain frames keyed by process name."""

    def __init__(self, frames: Optional[Dict[str, Frame]] = None, frontmost: Optional[str] = None) -> None:
        self.frames: Dict[str, Frame] = dict(frames or {})
        self.frontmost: Optional[str] = frontmost
        self.calls: List[str] = []
        self.set_calls: List[Tuple[str, Optional[Tuple[float, float]], Optional[Tuple[float, float]]]] = []
        self.activated: List[str] = []
        self.fail_set = False
        self.fail_find = False
        # One focused window per process; tests swap ids to model a second window.
        self.window_ids: Dict[str, int] = {name: 1000 + i for i, name in enumerate(sorted(self.frames))}

    def _handle(self, name: str) -> ProcessHandle:
        return ProcessHandle(name=name, pid=abs(hash(name)) % 10_000, window_id=self.window_ids.get(name))

    def list_processes(self) -> List[ProcessHandle]:
        self.calls.append("list_processes")
        return [self._handle(name) for name in sorted(self.frames)]

    def find_process(self, name: str) -> Optional[ProcessHandle]:
        self.calls.append("find_process")
        for handle in self.list_processes():
            if handle.matches(name):
                return handle
        return None

    def find_frontmost(self, name: str) -> Optional[ProcessHandle]:
        self.calls.append("find_frontmost")
        if self.fail_find:
            raise RuntimeError("lookup exploded")
        if self.frontmost is None or self.frontmost.casefold() != name.casefold():
            return None
        return self._handle(self.frontmost)

    def frontmost_process(self) -> ProcessHandle:
        self.calls.append("frontmost_process")
        if self.frontmost is None:
            raise TargetResolutionError("No frontmost window found")
        return self._handle(self.frontmost)

    def get_window_geometry(self, process: ProcessHandle) -> Frame:
        self.calls.append("get_window_geometry")
        return self.frames[process.name]

    def set_window_geometry(self, process, position=None, size=None) -> None:
        self.calls.append("set_window_geometry")
        if self.fail_set:
            raise GeometryApplyError(f"Failed to place window of '{process.name}'")
        self.set_calls.append((process.name, position, size))
        frame = self.frames[process.name]
        x, y = position if position is not None else frame.position
        width, height = size if size is not None else frame.size
        self.frames[process.name] = Frame(x, y, width, height)

    def activate_app(self, name: str) -> None:
        self.calls.append("activate_app")
        self.activated.append(name)
        self.frontmost = name


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def desktop() -> FakeDesktop:
    return FakeDesktop(
        frames={
            "Code.exe": Frame(100, 50, 800, 600),
            "chrome.exe": Frame(2600, 0, 1000, 900),
        },
        frontmost="Code.exe",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
