# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON I/O adapters.

Reads satellite catalogs and beacon scenarios, writes statistics
snapshots. Scenario files accept the simulator's camelCase keys
(id, isSunSync, altitude, lst, inclination, color) as well as the
snake_case field names of BeaconConfig.
"""
import json
import logging
from typing import Any

from orbilink.ports import CatalogSource, ScenarioReader, StatsExporter
from orbilink.domain.bodies import (
    BEACON_COLORS,
    BeaconConfig,
    BeaconRoster,
    OrbitalBody,
    OrbitType,
)
from orbilink.domain.catalog import parse_catalog
from orbilink.domain.statistics import StatsSnapshot

logger = logging.getLogger(__name__)


class JsonCatalogReader(CatalogSource):
    """Reads a JSON array of OMM-style satellite records."""

    def load_catalog(self, path: str) -> tuple[OrbitalBody, ...]:
        with open(path, encoding='utf-8') as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"Catalog {path} must contain a JSON array of records")
        catalog = parse_catalog(records)
        logger.debug("Loaded %d satellites from %s", len(catalog), path)
        return catalog


def _first(entry: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in entry and entry[key] is not None:
            return entry[key]
    return default


def _orbit_type(entry: dict[str, Any]) -> OrbitType:
    if 'isSunSync' in entry:
        return OrbitType.SUN_SYNCHRONOUS if entry['isSunSync'] else OrbitType.INCLINED
    return OrbitType(entry.get('orbit_type', OrbitType.SUN_SYNCHRONOUS.value))


def beacon_from_dict(entry: dict[str, Any], index: int = 0) -> BeaconConfig:
    """Build a BeaconConfig from a scenario entry; missing values use roster defaults."""
    return BeaconConfig(
        identifier=str(_first(entry, 'id', 'identifier', default=f"beacon-{index}")),
        orbit_type=_orbit_type(entry),
        altitude_km=float(_first(
            entry, 'altitude', 'altitude_km', default=BeaconRoster.DEFAULT_ALTITUDE_KM,
        )),
        lst_hours=float(_first(
            entry, 'lst', 'lst_hours', default=BeaconRoster.DEFAULT_LST_HOURS,
        )),
        inclination_deg=float(_first(
            entry, 'inclination', 'inclination_deg', default=BeaconRoster.DEFAULT_INCLINATION_DEG,
        )),
        color=str(_first(entry, 'color', default=BEACON_COLORS[index % len(BEACON_COLORS)])),
    )


class JsonScenarioReader(ScenarioReader):
    """Reads beacons from a JSON array or an object with a 'beacons' array."""

    def read_beacons(self, path: str) -> list[BeaconConfig]:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        entries = data.get('beacons', []) if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ValueError(f"Scenario {path} must list beacons in a JSON array")
        return [beacon_from_dict(entry, i) for i, entry in enumerate(entries)]


def snapshot_to_dict(snapshot: StatsSnapshot) -> dict[str, Any]:
    """JSON-ready form of a snapshot, using the simulator's key names."""
    return {
        'time': snapshot.time_s,
        'perBeacon': [
            {
                'beaconId': row.beacon_id,
                'handshakeCount': row.handshake_count,
                'totalInCoverageTime': row.total_in_coverage_s,
                'avgInCoverageTime': row.avg_in_coverage_s,
                'totalOutOfCoverageTime': row.total_out_of_coverage_s,
                'avgOutOfCoverageTime': row.avg_out_of_coverage_s,
                'normalizationFactor': row.normalization_factor,
            }
            for row in snapshot.per_beacon
        ],
        'perSatellite': [
            {
                'beaconId': row.beacon_id,
                'satId': row.satellite_id,
                'count': row.handshake_count,
                'total': row.total_handshake_s,
            }
            for row in snapshot.per_satellite
        ],
        'coveringByBeacon': {
            beacon_id: sorted(sat_ids)
            for beacon_id, sat_ids in snapshot.covering.items()
        },
    }


class JsonStatsWriter(StatsExporter):
    """Writes a snapshot as JSON."""

    def export(self, snapshot: StatsSnapshot, path: str) -> int:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(snapshot_to_dict(snapshot), f, indent=2, ensure_ascii=False)
        return len(snapshot.per_beacon)
