"""Cycle state machine deciding which preset to apply on each invocation."""
from __future__ import annotations

import math
from typing import NamedTuple, Optional

from .catalog import Alignment
from .state import CycleState

RESET_AFTER_S = 5.0


class CycleStep(NamedTuple):
    """1-based preset to apply now and the index to persist for the next run."""

    effective_index: int
    next_index: int


def is_fresh(state: Optional[CycleState], now: float, reset_after: float = RESET_AFTER_S) -> bool:
    """True when ``state`` was written within the last ``reset_after`` seconds.

    A timestamp in the future (clock moved backwards) is treated as stale.
    """
    if state is None:
        return False
    timestamp = state.timestamp
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)) or not math.isfinite(timestamp):
        return False
    elapsed = now - timestamp
    return 0.0 <= elapsed <= reset_after


def _valid_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def next_index(
    state: Optional[CycleState],
    requested_alignment: Alignment,
    now: float,
    sequence_length: int,
    reset_after: float = RESET_AFTER_S,
) -> CycleStep:
    """Pick the preset for this run.

    Absent or malformed state, an expired timestamp and an alignment change all
    restart the sequence at 1. Otherwise the stored index is wrapped into the
    current sequence, whose length may differ from the one it was written for.
    Never raises.
    """
    length = sequence_length if isinstance(sequence_length, int) and sequence_length >= 1 else 1

    effective = 1
    if (
        state is not None
        and _valid_index(state.index)
        and isinstance(state.alignment, Alignment)
        and state.alignment is requested_alignment
        and is_fresh(state, now, reset_after)
    ):
        effective = ((state.index - 1) % length) + 1

    return CycleStep(effective_index=effective, next_index=(effective % length) + 1)


__all__ = ["CycleStep", "RESET_AFTER_S", "is_fresh", "next_index"]
