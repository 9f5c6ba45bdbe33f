# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite catalog record parsing.

Converts OMM-style JSON records (CelesTrak field names) into OrbitalBody
objects. Records may carry precomputed `altitude` (km) and `period`
(hours); otherwise both are derived from mean motion via Kepler's
third law.
"""
from datetime import datetime, timezone
from typing import Any, Iterable

import numpy as np

from .bodies import OrbitalBody
from .orbital_mechanics import InvalidOrbitParameters, OrbitalConstants


def _normalize_epoch(epoch_str: str) -> str:
    """Normalize ISO epoch string: replace trailing 'Z' with '+00:00'."""
    if epoch_str.endswith("Z"):
        return epoch_str[:-1] + "+00:00"
    return epoch_str


def parse_epoch(epoch_str: str) -> datetime:
    """Parse an OMM epoch; naive timestamps are treated as UTC."""
    dt = datetime.fromisoformat(_normalize_epoch(epoch_str))
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def parse_catalog_record(
    record: dict[str, Any],
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> OrbitalBody:
    """
    Parse one catalog record into an OrbitalBody.

    Derives altitude and period from mean motion when absent:
        n (rad/s) = mean_motion × 2π / 86400
        a = (μ / n²)^(1/3)
        T = 86400 / mean_motion

    Args:
        record: Dict with OMM fields (OBJECT_NAME, INCLINATION,
            RA_OF_ASC_NODE, ARG_OF_PERICENTER, MEAN_ANOMALY, and either
            MEAN_MOTION or altitude/period).
        earth_radius_km: Earth radius used to turn a into altitude.

    Returns:
        OrbitalBody identified by OBJECT_NAME.

    Raises:
        KeyError: If a required field is missing.
        InvalidOrbitParameters: If mean motion, altitude or period is
            non-positive.
    """
    altitude_km = record.get("altitude")
    period_hours = record.get("period")

    if altitude_km is None or period_hours is None:
        mean_motion_rpd = record["MEAN_MOTION"]
        if mean_motion_rpd <= 0:
            raise InvalidOrbitParameters(
                f"Mean motion must be positive, got {mean_motion_rpd}"
            )
        if altitude_km is None:
            n_rad_s = mean_motion_rpd * 2.0 * np.pi / 86400.0
            a_km = (OrbitalConstants.MU_EARTH_KM3_S2 / (n_rad_s ** 2)) ** (1.0 / 3.0)
            altitude_km = float(a_km) - earth_radius_km
        period_s = 86400.0 / mean_motion_rpd if period_hours is None else period_hours * 3600.0
    else:
        period_s = period_hours * 3600.0

    epoch_str = record.get("EPOCH")

    return OrbitalBody(
        identifier=str(record["OBJECT_NAME"]),
        altitude_km=float(altitude_km),
        inclination_deg=float(record["INCLINATION"]),
        raan_deg=float(record["RA_OF_ASC_NODE"]),
        period_s=float(period_s),
        arg_perigee_deg=float(record.get("ARG_OF_PERICENTER", 0.0)),
        mean_anomaly_deg=float(record.get("MEAN_ANOMALY", 0.0)),
        epoch=parse_epoch(epoch_str) if epoch_str else None,
    )


def parse_catalog(
    records: Iterable[dict[str, Any]],
    earth_radius_km: float = OrbitalConstants.R_EARTH_KM,
) -> tuple[OrbitalBody, ...]:
    """
    Parse a sequence of records, preserving order.

    Raises:
        ValueError: If two records share an OBJECT_NAME.
    """
    bodies: list[OrbitalBody] = []
    seen: set[str] = set()
    for record in records:
        body = parse_catalog_record(record, earth_radius_km)
        if body.identifier in seen:
            raise ValueError(f"Duplicate satellite id in catalog: {body.identifier}")
        seen.add(body.identifier)
        bodies.append(body)
    return tuple(bodies)

