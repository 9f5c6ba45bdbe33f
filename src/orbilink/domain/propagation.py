# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Circular-orbit position propagation.

Stateless mapping from (orbital body, simulated time) to a position in
the Earth-centred simulation frame. Satellites are phase-aligned to a
reference epoch captured once at simulation start; beacons carry no
epoch and start at phase zero.
"""
import math
from datetime import datetime, timezone
from typing import Iterable

import numpy as np

from .bodies import BeaconConfig, OrbitalBody, beacon_orbital_body
from .orbital_mechanics import (
    OrbitalConstants,
    angular_rate_rad_s,
    orbit_plane_rotation,
)


Position = tuple[float, float, float]


def epoch_phase_offset_rad(body: OrbitalBody, reference_epoch: datetime | None) -> float:
    """
    Phase accumulated between the body's epoch and the reference epoch.

    Zero when either epoch is missing. Naive datetimes are taken as UTC.
    """
    if body.epoch is None or reference_epoch is None:
        return 0.0
    epoch = body.epoch
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    if reference_epoch.tzinfo is None:
        reference_epoch = reference_epoch.replace(tzinfo=timezone.utc)
    dt = (reference_epoch - epoch).total_seconds()
    return angular_rate_rad_s(body.period_s) * dt


def compute_position(
    body: OrbitalBody,
    t: float,
    reference_epoch: datetime | None = None,
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> Position:
    """
    Position of a body at simulated time t.

    phase = ω·t + M₀ + ω·(reference_epoch − epoch), placed in the orbit
    plane at (cos φ·R, 0, sin φ·R) and rotated by RAAN, inclination and
    argument of pericenter.

    Args:
        body: Orbital body.
        t: Simulated seconds since start.
        reference_epoch: Wall-clock instant matching t = 0.
        earth_radius_km: Earth radius (km).

    Returns:
        (x, y, z) in km; |r| = earth_radius_km + altitude_km.
    """
    r = earth_radius_km + body.altitude_km
    phase = (
        angular_rate_rad_s(body.period_s) * t
        + math.radians(body.mean_anomaly_deg)
        + epoch_phase_offset_rad(body, reference_epoch)
    )
    in_plane = np.array([math.cos(phase) * r, 0.0, math.sin(phase) * r])
    rotation = orbit_plane_rotation(
        math.radians(body.raan_deg),
        math.radians(body.inclination_deg),
        math.radians(body.arg_perigee_deg),
    )
    pos = rotation @ in_plane
    return (float(pos[0]), float(pos[1]), float(pos[2]))


def beacon_position(
    config: BeaconConfig,
    t: float,
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> Position:
    """Position of a configured beacon at simulated time t."""
    body = beacon_orbital_body(config, earth_radius_km)
    return compute_position(body, t, earth_radius_km=earth_radius_km)


def satellite_positions(
    catalog: Iterable[OrbitalBody],
    t: float,
    reference_epoch: datetime | None = None,
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> dict[str, Position]:
    """Positions of every catalog satellite at t, keyed by identifier."""
    return {
        sat.identifier: compute_position(sat, t, reference_epoch, earth_radius_km)
        for sat in catalog
    }
