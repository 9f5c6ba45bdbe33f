# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulation configuration.

One immutable record holds the horizon, the coverage geometry inputs
and the bookkeeping choices of the trackers.
"""
import math
from dataclasses import dataclass
from enum import Enum

from .orbital_mechanics import OrbitalConstants


class InCoverageAccounting(Enum):
    """How a beacon's in-coverage time is derived.

    HANDSHAKE_SUM:    sum of per-satellite handshake durations; overlapping
                      coverage by several satellites is counted once per
                      satellite, averages are taken over completed handshakes.
    BEACON_INTERVALS: dedicated per-beacon in-coverage timer, so in and out
                      time partition the observed span.
    """
    HANDSHAKE_SUM = "handshake-sum"
    BEACON_INTERVALS = "beacon-intervals"


class NonMonotonicTimeError(ValueError):
    """Simulated time moved backwards without a reset to zero."""


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable simulation settings.

    record_zero_start_handshakes: when False, a handshake that began at
    t = 0 contributes no duration on a normal release; force-closing at the end of a run always records it.
    strict_time: raise NonMonotonicTimeError on backward time instead of
    ignoring the update.
    """
    horizon_s: float = OrbitalConstants.SECONDS_PER_DAY
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM
    coverage_radius_km: float = OrbitalConstants.COVERAGE_RADIUS_KM
    in_coverage_accounting: InCoverageAccounting = InCoverageAccounting.BEACON_INTERVALS
    record_zero_start_handshakes: bool = False
    strict_time: bool = False
    normalization_tolerance_s: float = 0.01

    def __post_init__(self) -> None:
        if not math.isfinite(self.horizon_s) or self.horizon_s <= 0:
            raise ValueError(f"Horizon must be positive, got {self.horizon_s}")
        if self.earth_radius_km <= 0:
            raise ValueError(f"Earth radius must be positive, got {self.earth_radius_km}")
        if not 0 < self.coverage_radius_km < self.earth_radius_km * math.pi / 2:
            raise ValueError(
                f"Coverage radius must be in (0, {self.earth_radius_km * math.pi / 2:.0f}) km, "
                f"got {self.coverage_radius_km}"
            )
        if self.normalization_tolerance_s < 0:
            raise ValueError(
                f"Tolerance must be non-negative, got {self.normalization_tolerance_s}"
            )

    def clamp_time(self, t: float) -> float:
        """Clamp simulated time into [0, horizon]."""
        return min(max(t, 0.0), self.horizon_s)
