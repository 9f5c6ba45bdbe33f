# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Nadir-cone coverage.

Each satellite covers the inside of a cone with its apex at the
satellite and its axis pointing at the Earth centre. The cone's base
radius and height are fixed by the ground footprint radius, so the
half-angle depends only on altitude.

Coverage for a time snapshot is the cross product beacons × satellites
through the cone test, recomputed from scratch on every call.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Sequence

import numpy as np

from .bodies import BeaconConfig, OrbitalBody, beacon_orbital_body
from .orbital_mechanics import OrbitalConstants
from .propagation import Position, compute_position


@dataclass(frozen=True)
class CoverageCone:
    """Cone geometry shared by all satellites."""
    cone_radius_km: float
    height_factor_km: float

    def height_km(self, altitude_km: float) -> float:
        """Cone height for a satellite at the given altitude."""
        return altitude_km + self.height_factor_km


def coverage_cone(
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
    coverage_radius_km: float = OrbitalConstants.COVERAGE_RADIUS_KM,
) -> CoverageCone:
    """
    Derive the cone geometry from the ground coverage radius.

        angle  = 2 · r_cov / R
        radius = R · sin(angle / 2)
        factor = R − √(R² − radius²)

    The factor is the depth of the spherical cap under the footprint;
    adding it to the altitude puts the cone base on the footprint chord.
    """
    coverage_angle = 2.0 * coverage_radius_km / earth_radius_km
    cone_radius = earth_radius_km * math.sin(coverage_angle / 2.0)
    height_factor = earth_radius_km - math.sqrt(earth_radius_km ** 2 - cone_radius ** 2)
    return CoverageCone(cone_radius_km=cone_radius, height_factor_km=height_factor)


DEFAULT_CONE = coverage_cone()


def is_in_coverage_cone(
    target: Position,
    satellite_position: Position,
    altitude_km: float,
    cone: CoverageCone = DEFAULT_CONE,
) -> bool:
    """
    Whether a target lies inside a satellite's nadir cone.

    Args:
        target: Target position (km).
        satellite_position: Cone apex (km).
        altitude_km: Satellite altitude, sets the cone height.
        cone: Cone geometry.

    Returns:
        True if the target is within [0, h] along the axis and within the
        linearly interpolated radius at that height.
    """
    apex = np.asarray(satellite_position, dtype=float)
    apex_norm = float(np.linalg.norm(apex))
    if apex_norm == 0.0:
        return False
    axis = -apex / apex_norm

    to_target = np.asarray(target, dtype=float) - apex
    height_on_axis = float(np.dot(to_target, axis))
    height = cone.height_km(altitude_km)
    if height_on_axis < 0.0 or height_on_axis > height:
        return False

    radial = float(np.linalg.norm(to_target - height_on_axis * axis))
    allowed = (cone.cone_radius_km / height) * height_on_axis
    return radial <= allowed


def _index_catalog(catalog: Iterable[OrbitalBody]) -> list[OrbitalBody]:
    satellites = list(catalog)
    ids = [sat.identifier for sat in satellites]
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate satellite ids in catalog")
    return satellites


def resolve_coverage(
    beacons: Sequence[BeaconConfig],
    catalog: Iterable[OrbitalBody],
    t: float,
    reference_epoch: datetime | None = None,
    cone: CoverageCone = DEFAULT_CONE,
    horizon_s: float = OrbitalConstants.SECONDS_PER_DAY,
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> dict[str, frozenset[str]]:
    """
    Satellites covering each beacon at time t.

    t is clamped to [0, horizon_s]. Every beacon appears in the result,
    with an empty set when uncovered.

    Raises:
        ValueError: On duplicate beacon or satellite identifiers.
    """
    t = min(max(t, 0.0), horizon_s)
    satellites = _index_catalog(catalog)

    beacon_ids = [b.identifier for b in beacons]
    if len(set(beacon_ids)) != len(beacon_ids):
        raise ValueError("Duplicate beacon ids")

    sat_positions = [
        (sat, compute_position(sat, t, reference_epoch, earth_radius_km))
        for sat in satellites
    ]

    coverage: dict[str, frozenset[str]] = {}
    for beacon in beacons:
        body = beacon_orbital_body(beacon, earth_radius_km)
        beacon_pos = compute_position(body, t, earth_radius_km=earth_radius_km)
        coverage[beacon.identifier] = frozenset(
            sat.identifier
            for sat, sat_pos in sat_positions
            if is_in_coverage_cone(beacon_pos, sat_pos, sat.altitude_km, cone)
        )
    return coverage


def invert_coverage(coverage: Mapping[str, frozenset[str]]) -> dict[str, frozenset[str]]:
    """Satellite id → beacons it covers; satellites covering nothing are omitted."""
    by_satellite: dict[str, set[str]] = {}
    for beacon_id, sat_ids in coverage.items():
        for sat_id in sat_ids:
            by_satellite.setdefault(sat_id, set()).add(beacon_id)
    return {sat_id: frozenset(beacons) for sat_id, beacons in by_satellite.items()}
