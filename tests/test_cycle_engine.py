"""Unit tests for the cycle state machine."""
from __future__ import annotations

import math

import pytest

from winstep_cycle.catalog import Alignment
from winstep_cycle.engine import RESET_AFTER_S, CycleStep, is_fresh, next_index
from winstep_cycle.state import CycleState

T = 1_700_000_000.0


def _state(index: int = 2, timestamp: float = T, alignment=Alignment.LEFT) -> CycleState:
    return CycleState(index=index, timestamp=timestamp, alignment=alignment)


@pytest.mark.parametrize(
    "state",
    [
        None,
        CycleState(index=0, timestamp=T, alignment=Alignment.LEFT),
        CycleState(index=-3, timestamp=T, alignment=Alignment.LEFT),
        CycleState(index="2", timestamp=T, alignment=Alignment.LEFT),  # type: ignore[arg-type]
        CycleState(index=2, timestamp=math.nan, alignment=Alignment.LEFT),
        CycleState(index=2, timestamp="soon", alignment=Alignment.LEFT),  # type: ignore[arg-type]
        CycleState(index=2, timestamp=T, alignment="l"),  # type: ignore[arg-type]
    ],
)
@pytest.mark.parametrize("alignment", list(Alignment))
@pytest.mark.parametrize("now", [T, T + 1.0, T + 100.0, 0.0])
def test_malformed_state_always_starts_at_one(state, alignment, now) -> None:
    assert next_index(state, alignment, now, 4).effective_index == 1


def test_reset_after_timeout() -> None:
    step = next_index(_state(index=3), Alignment.LEFT, T + 5.01, 5)
    assert step == CycleStep(effective_index=1, next_index=2)


def test_no_reset_within_window() -> None:
    step = next_index(_state(index=3), Alignment.LEFT, T + 4.99, 5)
    assert step == CycleStep(effective_index=3, next_index=4)


def test_exact_threshold_is_still_within_window() -> None:
    assert next_index(_state(index=3), Alignment.LEFT, T + RESET_AFTER_S, 5).effective_index == 3


def test_reset_on_alignment_change() -> None:
    step = next_index(_state(index=3, alignment=Alignment.LEFT), Alignment.RIGHT, T + 1.0, 5)
    assert step.effective_index == 1


def test_clock_moving_backwards_resets() -> None:
    assert next_index(_state(index=3), Alignment.LEFT, T - 1.0, 5).effective_index == 1


def test_wraps_through_sequence() -> None:
    n = 4
    state = None
    now = T
    seen = []
    for _ in range(n + 1):
        step = next_index(state, Alignment.TOP, now, n)
        seen.append(step.effective_index)
        state = CycleState(index=step.next_index, timestamp=now, alignment=Alignment.TOP)
        now += 1.0
    assert seen == [1, 2, 3, 4, 1]


def test_index_is_wrapped_into_shorter_sequence() -> None:
    # Written against a 5-entry sequence, read against a 2-entry one.
    step = next_index(_state(index=5), Alignment.LEFT, T + 1.0, 2)
    assert step == CycleStep(effective_index=1, next_index=2)
    step = next_index(_state(index=4), Alignment.LEFT, T + 1.0, 2)
    assert step == CycleStep(effective_index=2, next_index=1)


def test_degenerate_sequence_length_is_treated_as_one() -> None:
    assert next_index(_state(index=3), Alignment.LEFT, T + 1.0, 0) == CycleStep(1, 1)


def test_is_fresh() -> None:
    assert is_fresh(_state(), T + 2.0)
    assert not is_fresh(_state(), T + 6.0)
    assert not is_fresh(None, T)
    assert is_fresh(_state(), T + 8.0, reset_after=10.0)
