# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coverage statistics aggregation.

Reduces tracker state to per-beacon summaries and a flat per-satellite
table. Snapshots are rebuilt on every call, never patched.

Normalization:
    If a beacon's in + out time overruns the horizon (floating-point
    accumulation, or overlapping satellites summed as exclusive), both
    totals are scaled by horizon / (in + out).
"""
import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .config import InCoverageAccounting
from .coverage_intervals import BeaconCoverageState
from .handshake import HandshakeEdgeState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeaconStats:
    """Aggregate coverage statistics for one beacon."""
    beacon_id: str
    handshake_count: int
    total_in_coverage_s: float
    avg_in_coverage_s: float
    total_out_of_coverage_s: float
    avg_out_of_coverage_s: float
    normalization_factor: float = 1.0

    @property
    def normalized(self) -> bool:
        return self.normalization_factor != 1.0


@dataclass(frozen=True)
class SatelliteLinkStats:
    """Handshake totals for one beacon/satellite pair."""
    beacon_id: str
    satellite_id: str
    handshake_count: int
    total_handshake_s: float


@dataclass(frozen=True)
class StatsSnapshot:
    """Statistics at one simulated instant."""
    time_s: float
    per_beacon: tuple[BeaconStats, ...] = ()
    per_satellite: tuple[SatelliteLinkStats, ...] = ()
    covering: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def beacon(self, beacon_id: str) -> BeaconStats | None:
        """Stats row for a beacon, or None if it has none."""
        for row in self.per_beacon:
            if row.beacon_id == beacon_id:
                return row
        return None

    def satellites_for(self, beacon_id: str) -> tuple[SatelliteLinkStats, ...]:
        """Per-satellite rows belonging to one beacon."""
        return tuple(row for row in self.per_satellite if row.beacon_id == beacon_id)


def _average(total: float, count: int) -> float:
    return total / count if count > 0 else 0.0


def aggregate_beacon(
    beacon_id: str,
    edges: Mapping[str, HandshakeEdgeState],
    beacon_state: BeaconCoverageState,
    horizon_s: float,
    accounting: InCoverageAccounting = InCoverageAccounting.BEACON_INTERVALS,
    tolerance_s: float = 0.01,
) -> BeaconStats:
    """
    Summarize one beacon.

    Args:
        beacon_id: Beacon identifier.
        edges: Satellite id → pair state for this beacon.
        beacon_state: Interval tracker state of the beacon.
        horizon_s: Simulation horizon (s).
        accounting: Source of the in-coverage total.
        tolerance_s: Overruns beyond this are logged as warnings.

    Returns:
        BeaconStats with totals scaled to the horizon when they overrun it.
    """
    handshake_count = sum(edge.handshake_count for edge in edges.values())

    if accounting is InCoverageAccounting.HANDSHAKE_SUM:
        in_durations = [d for edge in edges.values() for d in edge.handshake_durations]
    else:
        in_durations = list(beacon_state.in_coverage_durations)
    total_in = sum(in_durations)
    total_out = sum(beacon_state.out_of_coverage_durations)

    factor = 1.0
    combined = total_in + total_out
    if combined > horizon_s:
        factor = horizon_s / combined
        overrun = combined - horizon_s
        if overrun > tolerance_s:
            logger.warning(
                "Beacon %s: in+out coverage %.3f s exceeds horizon %.0f s by %.3f s; "
                "scaling by %.6f",
                beacon_id, combined, horizon_s, overrun, factor,
            )
        total_in *= factor
        total_out *= factor

    return BeaconStats(
        beacon_id=beacon_id,
        handshake_count=handshake_count,
        total_in_coverage_s=total_in,
        avg_in_coverage_s=_average(total_in, len(in_durations)),
        total_out_of_coverage_s=total_out,
        avg_out_of_coverage_s=_average(total_out, len(beacon_state.out_of_coverage_durations)),
        normalization_factor=factor,
    )


def aggregate_stats(
    time_s: float,
    beacon_ids: Sequence[str],
    edges: Mapping[str, Mapping[str, HandshakeEdgeState]],
    beacon_states: Mapping[str, BeaconCoverageState],
    horizon_s: float,
    accounting: InCoverageAccounting = InCoverageAccounting.BEACON_INTERVALS,
    tolerance_s: float = 0.01,
    covering: Mapping[str, frozenset[str]] | None = None,
) -> StatsSnapshot:
    """
    Build a StatsSnapshot from tracker state.

    Beacons without tracker state (e.g. removed mid-run) are dropped
    rather than failing the whole aggregation.
    """
    per_beacon: list[BeaconStats] = []
    per_satellite: list[SatelliteLinkStats] = []

    for beacon_id in beacon_ids:
        beacon_state = beacon_states.get(beacon_id)
        beacon_edges = edges.get(beacon_id)
        if beacon_state is None or beacon_edges is None:
            logger.debug("No tracker state for beacon %s; dropping its rows", beacon_id)
            continue

        per_beacon.append(aggregate_beacon(
            beacon_id, beacon_edges, beacon_state, horizon_s, accounting, tolerance_s,
        ))
        for sat_id, edge in beacon_edges.items():
            per_satellite.append(SatelliteLinkStats(
                beacon_id=beacon_id,
                satellite_id=sat_id,
                handshake_count=edge.handshake_count,
                total_handshake_s=edge.total_duration_s,
            ))

    return StatsSnapshot(
        time_s=time_s,
        per_beacon=tuple(per_beacon),
        per_satellite=tuple(per_satellite),
        covering=dict(covering) if covering is not None else {},
    )
