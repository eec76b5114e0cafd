"""Transition guard evaluation."""
from __future__ import annotations

from typing import Mapping

from rin_fsm.types import FlagQuery, Flags, State, Transition


def time_elapsed(t: Transition, state: State, now: float) -> bool:
    """True when ``state`` has been current for at least ``t.time`` seconds."""
    if t.time is None:
        return True
    if state.activated_at is None:
        return False
    return now - state.activated_at >= t.time


def event_raised(t: Transition, raised: set[int] | frozenset[int]) -> bool:
    return t.event is None or t.event in raised


def flags_set(query: FlagQuery | None, flags: Flags) -> bool:
    """True when every flag is asserted. No flags required is always true."""
    if not flags:
        return True
    if query is None:
        return False
    return bool(query(*flags))


def bits_set(t: Transition, queries: Mapping[str, FlagQuery | None]) -> bool:
    return all(
        flags_set(queries.get(family), flags)
        for family, flags in t.flag_requirements()
    )


def is_ready(
    t: Transition,
    state: State,
    now: float,
    raised: set[int] | frozenset[int],
    queries: Mapping[str, FlagQuery | None],
) -> bool:
    """Evaluate every guard on ``t``, cheapest first."""
    return (
        time_elapsed(t, state, now)
        and event_raised(t, raised)
        and bits_set(t, queries)
        and (t.cond is None or bool(t.cond()))
    )


def find_transition(
    state: State,
    now: float,
    raised: set[int] | frozenset[int],
    queries: Mapping[str, FlagQuery | None],
) -> Transition | None:
    """Return the first transition out of ``state`` whose guards all hold."""
    for t in state.transitions:
        if is_ready(t, state, now, raised, queries):
            return t
    return None
