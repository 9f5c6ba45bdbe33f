# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
orbilink

Beacon/satellite coverage simulation over a 24-hour day. Propagates
circular orbits, tests nadir-cone coverage, tracks handshakes and
coverage intervals, and aggregates coverage-continuity statistics.
"""

from orbilink.domain.orbital_mechanics import (
    OrbitalConstants,
    InvalidOrbitParameters,
    circular_period_s,
    sso_raan_deg,
)
from orbilink.domain.bodies import (
    MAX_BEACONS,
    OrbitalBody,
    OrbitType,
    BeaconConfig,
    BeaconRoster,
    beacon_orbital_body,
)
from orbilink.domain.catalog import (
    parse_catalog_record,
    parse_catalog,
)
from orbilink.domain.config import (
    InCoverageAccounting,
    NonMonotonicTimeError,
    SimulationConfig,
)
from orbilink.domain.propagation import (
    Position,
    compute_position,
    beacon_position,
    satellite_positions,
)
from orbilink.domain.coverage import (
    CoverageCone,
    coverage_cone,
    is_in_coverage_cone,
    resolve_coverage,
    invert_coverage,
)
from orbilink.domain.handshake import (
    LinkState,
    HandshakeEvent,
    HandshakeEventKind,
    HandshakeEdgeState,
    step_handshake,
    close_handshake,
)
from orbilink.domain.coverage_intervals import (
    BeaconCoverage,
    BeaconCoverageState,
    step_beacon_coverage,
    close_beacon_coverage,
)
from orbilink.domain.statistics import (
    BeaconStats,
    SatelliteLinkStats,
    StatsSnapshot,
    aggregate_stats,
)
from orbilink.domain.engine import CoverageEngine
from orbilink.domain.clock import (
    SimulationClock,
    drive,
    format_clock,
    format_time_scale,
    format_lst,
)

__version__ = "1.0.0"
