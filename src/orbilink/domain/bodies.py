# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital bodies and beacon configuration.

Satellites and beacons share one circular-orbit record. Beacons are
configured by orbit type (sun-synchronous or inclined) and converted to
an OrbitalBody anchored at simulated time zero.
"""
import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from .orbital_mechanics import (
    InvalidOrbitParameters,
    OrbitalConstants,
    circular_period_s,
    sso_raan_deg,
)


MAX_BEACONS = 3

BEACON_COLORS = (
    '#FF0000',
    '#0000FF',
    '#00FF00',
    '#FF00FF',
    '#00FFFF',
    '#FFFF00',
)


@dataclass(frozen=True)
class OrbitalBody:
    """A body on a circular orbit (satellite or beacon)."""
    identifier: str
    altitude_km: float
    inclination_deg: float
    raan_deg: float
    period_s: float
    arg_perigee_deg: float = 0.0
    mean_anomaly_deg: float = 0.0
    epoch: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        if not math.isfinite(self.altitude_km) or self.altitude_km <= 0:
            raise InvalidOrbitParameters(
                f"{self.identifier}: altitude must be positive, got {self.altitude_km}"
            )
        if not math.isfinite(self.period_s) or self.period_s <= 0:
            raise InvalidOrbitParameters(
                f"{self.identifier}: period must be positive, got {self.period_s}"
            )


class OrbitType(Enum):
    """Beacon orbit families."""
    SUN_SYNCHRONOUS = "sun-synchronous"
    INCLINED = "inclined"


@dataclass(frozen=True)
class BeaconConfig:
    """
    Configuration of one beacon.

    Sun-synchronous beacons use lst_hours, inclined beacons use
    inclination_deg; the other field is carried but ignored.
    """
    identifier: str
    orbit_type: OrbitType
    altitude_km: float
    lst_hours: float | None = None
    inclination_deg: float | None = None
    color: str = BEACON_COLORS[0]

    def __post_init__(self) -> None:
        if not math.isfinite(self.altitude_km) or self.altitude_km <= 0:
            raise InvalidOrbitParameters(
                f"{self.identifier}: altitude must be positive, got {self.altitude_km}"
            )
        if self.orbit_type is OrbitType.SUN_SYNCHRONOUS:
            if self.lst_hours is None:
                raise ValueError(f"{self.identifier}: sun-synchronous beacon needs lst_hours")
            if not 0.0 <= self.lst_hours < 24.0:
                raise ValueError(f"{self.identifier}: LST must be in [0, 24), got {self.lst_hours}")
        else:
            if self.inclination_deg is None:
                raise ValueError(f"{self.identifier}: inclined beacon needs inclination_deg")
            if not 0.0 <= self.inclination_deg <= 180.0:
                raise ValueError(
                    f"{self.identifier}: inclination must be in [0, 180], got {self.inclination_deg}"
                )


def beacon_orbital_body(
    config: BeaconConfig,
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> OrbitalBody:
    """
    Convert a beacon configuration into its orbital body.

    Sun-synchronous: RAAN from LST, inclination fixed at 97.5°.
    Inclined: RAAN 0, configured inclination. The period follows from
    circular-orbit physics; no epoch, so phase is ω·t.
    """
    if config.orbit_type is OrbitType.SUN_SYNCHRONOUS:
        raan_deg = sso_raan_deg(config.lst_hours)
        inclination_deg = OrbitalConstants.SSO_INCLINATION_DEG
    else:
        raan_deg = 0.0
        inclination_deg = config.inclination_deg

    return OrbitalBody(
        identifier=config.identifier,
        altitude_km=config.altitude_km,
        inclination_deg=inclination_deg,
        raan_deg=raan_deg,
        period_s=circular_period_s(config.altitude_km, earth_radius_km),
    )


class BeaconRoster:
    """
    Mutable list of beacon configurations, capped at MAX_BEACONS.

    Hands out immutable snapshots via configs(); the engine never sees
    the roster itself.
    """

    DEFAULT_ALTITUDE_KM = 500.0
    DEFAULT_LST_HOURS = 12.0
    DEFAULT_INCLINATION_DEG = 64.0

    def __init__(self) -> None:
        self._beacons: dict[str, BeaconConfig] = {}
        self._counter = 0

    def __len__(self) -> int:
        return len(self._beacons)

    def __contains__(self, beacon_id: str) -> bool:
        return beacon_id in self._beacons

    @property
    def is_full(self) -> bool:
        return len(self._beacons) >= MAX_BEACONS

    def add(
        self,
        orbit_type: OrbitType = OrbitType.SUN_SYNCHRONOUS,
        altitude_km: float = DEFAULT_ALTITUDE_KM,
        lst_hours: float = DEFAULT_LST_HOURS,
        inclination_deg: float = DEFAULT_INCLINATION_DEG,
        color: str | None = None,
    ) -> BeaconConfig:
        """
        Add a beacon with the given (or default) parameters.

        Raises:
            ValueError: If MAX_BEACONS beacons already exist.
        """
        if self.is_full:
            raise ValueError(f"At most {MAX_BEACONS} beacons are supported")

        beacon_id = f"beacon-{self._counter}"
        if color is None:
            color = BEACON_COLORS[self._counter % len(BEACON_COLORS)]
        self._counter += 1

        beacon = BeaconConfig(
            identifier=beacon_id,
            orbit_type=orbit_type,
            altitude_km=altitude_km,
            lst_hours=lst_hours,
            inclination_deg=inclination_deg,
            color=color,
        )
        self._beacons[beacon_id] = beacon
        return beacon

    def remove(self, beacon_id: str) -> None:
        del self._beacons[beacon_id]

    def update(self, beacon_id: str, **changes) -> BeaconConfig:
        """Replace fields of an existing beacon; the result is re-validated."""
        if 'identifier' in changes:
            raise ValueError("Beacon identifier cannot be changed")
        beacon = replace(self._beacons[beacon_id], **changes)
        self._beacons[beacon_id] = beacon
        return beacon

    def configs(self) -> tuple[BeaconConfig, ...]:
        return tuple(self._beacons.values())
