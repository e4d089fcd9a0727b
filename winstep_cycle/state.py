"""Persistence for cycle state between short-lived invocations.

Each script keeps one small text file holding a single comma-delimited record::

    index,timestamp,alignment[,processName,x,y,width,height[,windowId]]

The trailing cache fields are optional; records written before ``windowId``
existed still load, with the window identity unknown. Reading never raises: a missing or
corrupt file means "no prior state" and the caller starts from defaults.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .catalog import Alignment
from .errors import StatePersistError
from .geometry import Frame

Logger = logging.Logger

DELIMITER = ","
_CORE_FIELDS = 3
_CACHE_FIELDS = 8
_FULL_FIELDS = 9


@dataclass(slots=True)
class CycleState:
    """Cycle position plus the advisory process/geometry cache."""

    index: int = 1
    timestamp: float = 0.0
    alignment: Alignment = Alignment.LEFT
    process_name: Optional[str] = None
    geometry: Optional[Frame] = None
    window_id: Optional[int] = None


def _parse_number(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_index(text: str) -> Optional[int]:
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value >= 1 else None


def _parse_cache(fields: List[str]) -> tuple[Optional[str], Optional[Frame]]:
    name = fields[0] or None
    numbers = [_parse_number(field) for field in fields[1:]]
    if name is None or any(n is None for n in numbers):
        return None, None
    frame = Frame(*numbers)  # type: ignore[arg-type]
    if not frame.is_valid:
        return None, None
    return name, frame


def _parse_window_id(text: str) -> Optional[int]:
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value >= 0 else None


def parse_state(text: str) -> Optional[CycleState]:
    """Decode a state record, returning ``None`` for anything malformed."""
    if not isinstance(text, str):
        return None
    line = text.strip().splitlines()[0] if text.strip() else ""
    fields = [field.strip() for field in line.split(DELIMITER)]
    if len(fields) < _CORE_FIELDS or len(fields) > _FULL_FIELDS:
        return None

    index = _parse_index(fields[0])
    timestamp = _parse_number(fields[1])
    alignment = Alignment.parse(fields[2])
    if index is None or timestamp is None or alignment is None:
        return None

    state = CycleState(index=index, timestamp=timestamp, alignment=alignment)
    if len(fields) >= _CACHE_FIELDS:
        name, frame = _parse_cache(fields[_CORE_FIELDS:_CACHE_FIELDS])
        window_id = None
        if len(fields) == _FULL_FIELDS:
            window_id = _parse_window_id(fields[_CACHE_FIELDS])
            if window_id is None:
                name, frame = None, None
        if name is not None:
            state.process_name, state.geometry, state.window_id = name, frame, window_id
    return state


def format_state(state: CycleState) -> str:
    """Encode a state record; cache fields are written only when usable."""
    fields = [str(int(state.index)), repr(float(state.timestamp)), state.alignment.value]
    name = state.process_name
    frame = state.geometry
    if name and DELIMITER not in name and "\n" not in name and frame is not None and frame.is_valid:
        fields.append(name)
        fields.extend(repr(float(value)) for value in frame.to_tuple())
        if state.window_id is not None:
            fields.append(str(int(state.window_id)))
    return DELIMITER.join(fields) + "\n"


class StateStore:
    """File-backed ``load()``/``save()`` for one script's cycle state."""

    def __init__(self, path: Path, logger: Optional[Logger] = None) -> None:
        self._path = Path(path)
        self._logger = logger or logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[CycleState]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._logger.debug("No state file at %s; starting fresh", self._path)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            self._logger.warning("Failed to read state file %s: %s", self._path, exc)
            return None

        state = parse_state(text)
        if state is None:
            self._logger.warning("Ignoring corrupt state file %s", self._path)
        return state

    def save(self, state: CycleState) -> None:
        """Overwrite the state file; raises ``StatePersistError`` on failure."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(format_state(state), encoding="utf-8")
        except OSError as exc:
            raise StatePersistError(f"Failed to write state file {self._path}: {exc}") from exc
        self._logger.debug("Saved state %s to %s", state, self._path)


__all__ = ["CycleState", "StateStore", "format_state", "parse_state"]
