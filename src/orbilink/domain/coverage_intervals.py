# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Per-beacon coverage intervals.

Two-state machine (IN_COVERAGE / OUT_OF_COVERAGE) over "covered by at
least one satellite". Out-of-coverage intervals are always recorded;
in-coverage intervals are kept alongside for the BEACON_INTERVALS
accounting mode.

A fresh state is OUT_OF_COVERAGE with no open interval; the first
uncovered sample opens the out-interval at its own time, so a beacon
first seen mid-run is only charged from that moment.
"""
from dataclasses import dataclass, replace
from enum import Enum


class BeaconCoverage(Enum):
    IN_COVERAGE = "in-coverage"
    OUT_OF_COVERAGE = "out-of-coverage"


@dataclass(frozen=True)
class BeaconCoverageState:
    """Tracker state of one beacon."""
    coverage: BeaconCoverage = BeaconCoverage.OUT_OF_COVERAGE
    last_out_of_coverage_time: float | None = None
    out_of_coverage_durations: tuple[float, ...] = ()
    last_in_coverage_time: float | None = None
    in_coverage_durations: tuple[float, ...] = ()

    @property
    def is_out_of_coverage(self) -> bool:
        return self.coverage is BeaconCoverage.OUT_OF_COVERAGE


def step_beacon_coverage(
    state: BeaconCoverageState,
    is_covered: bool,
    t: float,
) -> BeaconCoverageState:
    """
    Apply one "any satellite covers this beacon" sample.

    OUT → IN closes the open out-interval and opens an in-interval.
    IN → OUT closes the in-interval and marks the out start.
    """
    if state.coverage is BeaconCoverage.OUT_OF_COVERAGE:
        if is_covered:
            out_durations = state.out_of_coverage_durations
            if state.last_out_of_coverage_time is not None:
                out_durations = out_durations + (t - state.last_out_of_coverage_time,)
            return replace(
                state,
                coverage=BeaconCoverage.IN_COVERAGE,
                last_out_of_coverage_time=None,
                out_of_coverage_durations=out_durations,
                last_in_coverage_time=t,
            )
        if state.last_out_of_coverage_time is None:
            return replace(state, last_out_of_coverage_time=t)
        return state

    if not is_covered:
        in_durations = state.in_coverage_durations
        if state.last_in_coverage_time is not None:
            in_durations = in_durations + (t - state.last_in_coverage_time,)
        return replace(
            state,
            coverage=BeaconCoverage.OUT_OF_COVERAGE,
            last_out_of_coverage_time=t,
            last_in_coverage_time=None,
            in_coverage_durations=in_durations,
        )
    return state


def close_beacon_coverage(
    state: BeaconCoverageState,
    t: float,
    horizon_s: float,
) -> BeaconCoverageState:
    """Force-close whichever interval is open at min(t, horizon)."""
    end = min(t, horizon_s)

    if state.last_out_of_coverage_time is not None:
        return replace(
            state,
            last_out_of_coverage_time=None,
            out_of_coverage_durations=(
                state.out_of_coverage_durations
                + (max(end - state.last_out_of_coverage_time, 0.0),)
            ),
        )
    if state.last_in_coverage_time is not None:
        return replace(
            state,
            last_in_coverage_time=None,
            in_coverage_durations=(
                state.in_coverage_durations
                + (max(end - state.last_in_coverage_time, 0.0),)
            ),
        )
    return state
