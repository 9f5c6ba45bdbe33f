# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coverage and handshake tracking engine.

Owns all tracker state in an explicit arena keyed by beacon id:

    beacon id → BeaconCoverageState
    beacon id → {satellite id → HandshakeEdgeState}

Pair entries are created the first time a satellite covers a beacon;
absent pairs are implicitly NOT_COVERED. Beacons are created on first
sight and discarded, with their pairs, when they leave the
configuration list.

Time precondition:
    t must not decrease between calls except for a jump to exactly 0,
    which resets all state. After the run is closed (horizon reached or
    driver stopped) the state is frozen until the next reset.
"""
import logging
import math
from datetime import datetime
from typing import Iterable, Sequence

from .bodies import MAX_BEACONS, BeaconConfig, OrbitalBody
from .config import NonMonotonicTimeError, SimulationConfig
from .coverage import coverage_cone, resolve_coverage
from .coverage_intervals import (
    BeaconCoverageState,
    close_beacon_coverage,
    step_beacon_coverage,
)
from .handshake import (
    HandshakeEdgeState,
    close_handshake,
    step_handshake,
)
from .propagation import Position, compute_position
from .statistics import StatsSnapshot, aggregate_stats

logger = logging.getLogger(__name__)


class CoverageEngine:
    """
    Drives the trackers one simulated-time step at a time.

    Single-writer: the caller serializes calls. No I/O, no blocking.

    Args:
        config: Simulation settings.
        reference_epoch: Wall-clock instant matching simulated t = 0,
            captured once by the caller. None disables epoch phase
            alignment.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        reference_epoch: datetime | None = None,
    ) -> None:
        self.config = config if config is not None else SimulationConfig()
        self.reference_epoch = reference_epoch
        self._cone = coverage_cone(self.config.earth_radius_km, self.config.coverage_radius_km)
        self._beacon_states: dict[str, BeaconCoverageState] = {}
        self._edges: dict[str, dict[str, HandshakeEdgeState]] = {}
        self._beacon_order: list[str] = []
        self._covering: dict[str, frozenset[str]] = {}
        self._last_time: float | None = None
        self._closed = False

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def last_time(self) -> float | None:
        """Time of the last applied step, None before the first one."""
        return self._last_time

    @property
    def is_closed(self) -> bool:
        """True once the run has been force-closed."""
        return self._closed

    def beacon_state(self, beacon_id: str) -> BeaconCoverageState | None:
        return self._beacon_states.get(beacon_id)

    def edge_state(self, beacon_id: str, satellite_id: str) -> HandshakeEdgeState:
        """Pair state; pairs never covered are in the initial state."""
        return self._edges.get(beacon_id, {}).get(satellite_id, HandshakeEdgeState())

    def compute_position(self, body: OrbitalBody, t: float) -> Position:
        return compute_position(
            body, t, self.reference_epoch, self.config.earth_radius_km,
        )

    def resolve_coverage(
        self,
        beacons: Sequence[BeaconConfig],
        catalog: Iterable[OrbitalBody],
        t: float,
    ) -> dict[str, frozenset[str]]:
        """Covering satellites per beacon at t; pure, touches no state."""
        return resolve_coverage(
            beacons, catalog, t,
            reference_epoch=self.reference_epoch,
            cone=self._cone,
            horizon_s=self.config.horizon_s,
            earth_radius_km=self.config.earth_radius_km,
        )

    def snapshot(self) -> StatsSnapshot:
        """Statistics for the current state without advancing."""
        return aggregate_stats(
            time_s=self._last_time if self._last_time is not None else 0.0,
            beacon_ids=self._beacon_order,
            edges=self._edges,
            beacon_states=self._beacon_states,
            horizon_s=self.config.horizon_s,
            accounting=self.config.in_coverage_accounting,
            tolerance_s=self.config.normalization_tolerance_s,
            covering=self._covering,
        )

    # ── Commands ─────────────────────────────────────────────────────

    def reset(self) -> None:
        """Zero all tracker state."""
        self._beacon_states.clear()
        self._edges.clear()
        self._beacon_order.clear()
        self._covering = {}
        self._last_time = None
        self._closed = False

    def advance(
        self,
        beacons: Sequence[BeaconConfig],
        catalog: Sequence[OrbitalBody],
        t: float,
        is_running: bool = True,
    ) -> StatsSnapshot:
        """
        Apply the coverage at time t to all trackers.

        Args:
            beacons: Current beacon configurations (0–3).
            catalog: Immutable satellite catalog.
            t: Simulated time (s), clamped to [0, horizon].
            is_running: False when the driver has stopped the run; open
                intervals are then closed at t and the run stays closed
                until a reset. A paused driver does not call advance, or
                passes is_running=True (see SimulationClock.stopped).

        Returns:
            Freshly aggregated StatsSnapshot.

        Raises:
            NonMonotonicTimeError: If t decreased and strict_time is set.
            ValueError: On too many beacons, duplicate ids, or non-finite t.
        """
        if not math.isfinite(t):
            raise ValueError(f"Simulated time must be finite, got {t}")
        if len(beacons) > MAX_BEACONS:
            raise ValueError(f"At most {MAX_BEACONS} beacons are supported, got {len(beacons)}")
        beacon_ids = [b.identifier for b in beacons]
        if len(set(beacon_ids)) != len(beacon_ids):
            raise ValueError("Duplicate beacon ids")
        satellite_ids = [sat.identifier for sat in catalog]
        if len(set(satellite_ids)) != len(satellite_ids):
            raise ValueError("Duplicate satellite ids in catalog")

        t = self.config.clamp_time(t)

        if t == 0.0:
            if self._last_time is not None:
                logger.debug("Time reset to 0; clearing tracker state")
            self.reset()
            if not is_running:
                return self.snapshot()
        elif self._last_time is not None and t < self._last_time:
            if self.config.strict_time:
                raise NonMonotonicTimeError(
                    f"Time moved backwards from {self._last_time} to {t} without reset"
                )
            logger.warning(
                "Ignoring backward time step %.3f -> %.3f; reset to 0 to rewind",
                self._last_time, t,
            )
            return self.snapshot()

        if self._closed:
            return self.snapshot()

        coverage = self.resolve_coverage(beacons, catalog, t)
        self._sync_beacons(beacons, catalog, t)
        self._step(coverage, t)
        self._covering = coverage
        self._last_time = t

        if t >= self.config.horizon_s or not is_running:
            self._close(t)

        return self.snapshot()

    # ── Internals ────────────────────────────────────────────────────

    def _sync_beacons(
        self,
        beacons: Sequence[BeaconConfig],
        catalog: Iterable[OrbitalBody],
        t: float,
    ) -> None:
        """Create trackers for new beacons, drop removed beacons and satellites."""
        current = [b.identifier for b in beacons]
        current_set = set(current)

        for beacon_id in list(self._beacon_states):
            if beacon_id not in current_set:
                logger.debug("Beacon %s removed; discarding its trackers", beacon_id)
                del self._beacon_states[beacon_id]
                self._edges.pop(beacon_id, None)

        for beacon_id in current:
            if beacon_id not in self._beacon_states:
                logger.debug("Beacon %s first seen at t=%.1f", beacon_id, t)
                self._beacon_states[beacon_id] = BeaconCoverageState()
                self._edges[beacon_id] = {}

        satellite_ids = {sat.identifier for sat in catalog}
        for pairs in self._edges.values():
            for sat_id in [s for s in pairs if s not in satellite_ids]:
                del pairs[sat_id]

        self._beacon_order = current

    def _step(self, coverage: dict[str, frozenset[str]], t: float) -> None:
        record_zero_start = self.config.record_zero_start_handshakes

        for beacon_id, covering in coverage.items():
            pairs = self._edges[beacon_id]

            for sat_id in covering:
                if sat_id not in pairs:
                    pairs[sat_id] = HandshakeEdgeState()

            for sat_id, edge in pairs.items():
                new_edge, event = step_handshake(
                    edge, sat_id in covering, t, record_zero_start,
                )
                if event is not None:
                    pairs[sat_id] = new_edge
                    logger.debug(
                        "%s/%s %s at t=%.1f", beacon_id, sat_id, event.kind.value, t,
                    )

            self._beacon_states[beacon_id] = step_beacon_coverage(
                self._beacon_states[beacon_id], len(covering) > 0, t,
            )

    def _close(self, t: float) -> None:
        horizon = self.config.horizon_s
        for beacon_id, pairs in self._edges.items():
            for sat_id, edge in pairs.items():
                pairs[sat_id], _ = close_handshake(edge, t, horizon)
            self._beacon_states[beacon_id] = close_beacon_coverage(
                self._beacon_states[beacon_id], t, horizon,
            )
        self._closed = True
        logger.info("Run closed at t=%.1f s", min(t, horizon))
