# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Handshake tracking for one (beacon, satellite) pair.

A two-state machine (NOT_COVERED / COVERED) driven by the coverage
boolean. Transitions are pure: each call returns the next state and the
event it emitted, if any.

Start-at-zero rule:
    A handshake that began at exactly t = 0 records no duration when it
    is released normally, unless record_zero_start is set. Force-closing
    at the end of a run always records the duration.
"""
from dataclasses import dataclass, replace
from enum import Enum


class LinkState(Enum):
    """Coverage state of a beacon/satellite pair."""
    NOT_COVERED = "not-covered"
    COVERED = "covered"


class HandshakeEventKind(Enum):
    ACQUIRED = "acquired"
    RELEASED = "released"
    FORCE_CLOSED = "force-closed"


@dataclass(frozen=True)
class HandshakeEvent:
    """Emitted on every transition.

    duration_s is None for ACQUIRED and for a release whose duration was
    not recorded.
    """
    kind: HandshakeEventKind
    time_s: float
    duration_s: float | None = None


@dataclass(frozen=True)
class HandshakeEdgeState:
    """Tracker state of one beacon/satellite pair."""
    link: LinkState = LinkState.NOT_COVERED
    last_handshake_start: float | None = None
    handshake_count: int = 0
    handshake_durations: tuple[float, ...] = ()

    @property
    def is_covered(self) -> bool:
        return self.link is LinkState.COVERED

    @property
    def total_duration_s(self) -> float:
        return sum(self.handshake_durations)


def step_handshake(
    state: HandshakeEdgeState,
    is_covered: bool,
    t: float,
    record_zero_start: bool = False,
) -> tuple[HandshakeEdgeState, HandshakeEvent | None]:
    """
    Apply one coverage sample to a pair.

    Args:
        state: Current pair state.
        is_covered: Whether the satellite covers the beacon at t.
        t: Simulated time (s).
        record_zero_start: Record durations of handshakes started at 0.

    Returns:
        (new_state, event); event is None when nothing changed.
    """
    if is_covered and state.link is LinkState.NOT_COVERED:
        new_state = replace(
            state,
            link=LinkState.COVERED,
            last_handshake_start=t,
            handshake_count=state.handshake_count + 1,
        )
        return new_state, HandshakeEvent(HandshakeEventKind.ACQUIRED, t)

    if not is_covered and state.link is LinkState.COVERED:
        start = state.last_handshake_start
        durations = state.handshake_durations
        duration = None
        if start is not None and (start > 0 or record_zero_start):
            duration = t - start
            durations = durations + (duration,)
        new_state = replace(
            state,
            link=LinkState.NOT_COVERED,
            handshake_durations=durations,
        )
        return new_state, HandshakeEvent(HandshakeEventKind.RELEASED, t, duration)

    return state, None


def close_handshake(
    state: HandshakeEdgeState,
    t: float,
    horizon_s: float,
) -> tuple[HandshakeEdgeState, HandshakeEvent | None]:
    """
    Force-close an open handshake at the end of a run.

    Appends min(t, horizon) − start. A pair that is not covered is
    returned unchanged, so closing twice records nothing extra.
    """
    if state.link is not LinkState.COVERED:
        return state, None

    end = min(t, horizon_s)
    start = state.last_handshake_start if state.last_handshake_start is not None else end
    duration = max(end - start, 0.0)
    new_state = replace(
        state,
        link=LinkState.NOT_COVERED,
        handshake_durations=state.handshake_durations + (duration,),
    )
    return new_state, HandshakeEvent(HandshakeEventKind.FORCE_CLOSED, end, duration)
