# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Circular-orbit physics and plane rotations for the simulation frame.
Lengths are kilometres; the frame is Earth-centred with Y as the polar
axis and the equator in the XZ plane.
"""
import math
from dataclasses import dataclass

import numpy as np


class InvalidOrbitParameters(ValueError):
    """Raised for degenerate orbits (non-positive altitude or period)."""


@dataclass(frozen=True)
class _OrbitalConstants:
    """Constants used by the coverage simulation."""
    MU_EARTH_KM3_S2: float = 398_600.4418   # km³/s² — gravitational parameter
    R_EARTH_KM: float = 6378.0              # km — equatorial radius
    COVERAGE_RADIUS_KM: float = 2350.0      # km — half the 4700 km ground footprint
    SSO_INCLINATION_DEG: float = 97.5       # fixed for sun-synchronous beacons
    SECONDS_PER_DAY: float = 86_400.0


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


def orbit_radius_km(altitude_km: float, earth_radius_km: float = OrbitalConstants.R_EARTH_KM) -> float:
    """Orbit radius from altitude; fails fast on a non-positive altitude."""
    if not math.isfinite(altitude_km) or altitude_km <= 0:
        raise InvalidOrbitParameters(f"Altitude must be positive, got {altitude_km}")
    return earth_radius_km + altitude_km


def circular_period_s(altitude_km: float, earth_radius_km: float = OrbitalConstants.R_EARTH_KM) -> float:
    """
    Period of a circular orbit at the given altitude.

        T = 2π · √(R³ / μ)

    Args:
        altitude_km: Altitude above the Earth surface (km).
        earth_radius_km: Earth radius used for the orbit radius (km).

    Returns:
        Orbital period in seconds.

    Raises:
        InvalidOrbitParameters: If altitude is not positive.
    """
    r = orbit_radius_km(altitude_km, earth_radius_km)
    return float(2.0 * np.pi * np.sqrt(r ** 3 / OrbitalConstants.MU_EARTH_KM3_S2))


def angular_rate_rad_s(period_s: float) -> float:
    """Mean angular rate ω = 2π / T."""
    if not math.isfinite(period_s) or period_s <= 0:
        raise InvalidOrbitParameters(f"Period must be positive, got {period_s}")
    return 2.0 * math.pi / period_s


def sso_raan_deg(lst_hours: float) -> float:
    """
    RAAN of a sun-synchronous orbit from its local solar time.

        Ω = LST · π/12 − π/2

    Returned in degrees (LST · 15 − 90).
    """
    return math.degrees(lst_hours * math.pi / 12.0 - math.pi / 2.0)


def orbit_plane_rotation(raan_rad: float, inclination_rad: float, arg_perigee_rad: float) -> np.ndarray:
    """
    Rotation from the orbital plane into the simulation frame.

    Composed as Ry(Ω) · Rx(i) · Ry(ω): RAAN about the polar axis,
    inclination about the line of nodes, then argument of pericenter.

    Returns:
        3×3 rotation matrix.
    """
    cO, sO = math.cos(raan_rad), math.sin(raan_rad)
    ci, si = math.cos(inclination_rad), math.sin(inclination_rad)
    co, so = math.cos(arg_perigee_rad), math.sin(arg_perigee_rad)

    r_raan = np.array([
        [cO, 0.0, sO],
        [0.0, 1.0, 0.0],
        [-sO, 0.0, cO],
    ])
    r_inc = np.array([
        [1.0, 0.0, 0.0],
        [0.0, ci, -si],
        [0.0, si, ci],
    ])
    r_argp = np.array([
        [co, 0.0, so],
        [0.0, 1.0, 0.0],
        [-so, 0.0, co],
    ])
    return r_raan @ r_inc @ r_argp
