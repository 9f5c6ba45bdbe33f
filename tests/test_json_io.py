# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for JSON catalog/scenario readers and the statistics writer."""
import json
from pathlib import Path

import pytest

from orbilink.adapters.json_io import (
    JsonCatalogReader,
    JsonScenarioReader,
    JsonStatsWriter,
    beacon_from_dict,
    snapshot_to_dict,
)
from orbilink.domain.bodies import BEACON_COLORS, OrbitType
from orbilink.domain.statistics import BeaconStats, SatelliteLinkStats, StatsSnapshot
from orbilink.ports import CatalogSource, ScenarioReader, StatsExporter

EXAMPLES = Path(__file__).parent.parent / "examples"


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _snapshot():
    return StatsSnapshot(
        time_s=86400.0,
        per_beacon=(BeaconStats("beacon-0", 3, 1800.0, 600.0, 84600.0, 21150.0),),
        per_satellite=(SatelliteLinkStats("beacon-0", "IRIDIUM 106", 3, 1800.0),),
        covering={"beacon-0": frozenset({"IRIDIUM 120", "IRIDIUM 106"})},
    )


# ── Catalog ──────────────────────────────────────────────────────────

class TestJsonCatalogReader:

    def test_implements_port(self):
        assert isinstance(JsonCatalogReader(), CatalogSource)

    def test_bundled_catalog(self):
        catalog = JsonCatalogReader().load_catalog(str(EXAMPLES / "iridium_catalog.json"))
        assert len(catalog) == 66
        assert catalog[0].identifier == "IRIDIUM 101"
        assert all(sat.altitude_km == 780.0 for sat in catalog)
        assert all(sat.epoch is not None for sat in catalog)

    def test_minimal_record(self, tmp_path):
        path = _write(tmp_path, "cat.json", [{
            "OBJECT_NAME": "SAT-A",
            "MEAN_MOTION": 14.3355784,
            "INCLINATION": 86.4,
            "RA_OF_ASC_NODE": 0.0,
            "ARG_OF_PERICENTER": 0.0,
            "MEAN_ANOMALY": 0.0,
        }])
        catalog = JsonCatalogReader().load_catalog(path)
        assert [s.identifier for s in catalog] == ["SAT-A"]

    def test_not_an_array(self, tmp_path):
        path = _write(tmp_path, "cat.json", {"OBJECT_NAME": "X"})
        with pytest.raises(ValueError):
            JsonCatalogReader().load_catalog(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonCatalogReader().load_catalog(str(tmp_path / "nope.json"))


# ── Scenario ─────────────────────────────────────────────────────────

class TestBeaconFromDict:

    def test_camel_case(self):
        beacon = beacon_from_dict(
            {"id": "b1", "isSunSync": True, "altitude": 500, "lst": 10.5, "color": "#ffffff"}
        )
        assert beacon.identifier == "b1"
        assert beacon.orbit_type is OrbitType.SUN_SYNCHRONOUS
        assert beacon.altitude_km == 500.0
        assert beacon.lst_hours == 10.5
        assert beacon.color == "#ffffff"

    def test_snake_case(self):
        beacon = beacon_from_dict(
            {"identifier": "b2", "orbit_type": "inclined", "altitude_km": 410.0, "inclination_deg": 51.6}
        )
        assert beacon.orbit_type is OrbitType.INCLINED
        assert beacon.inclination_deg == 51.6

    def test_defaults(self):
        beacon = beacon_from_dict({}, index=1)
        assert beacon.identifier == "beacon-1"
        assert beacon.orbit_type is OrbitType.SUN_SYNCHRONOUS
        assert beacon.altitude_km == 500.0
        assert beacon.lst_hours == 12.0
        assert beacon.color == BEACON_COLORS[1]

    def test_invalid_orbit_type(self):
        with pytest.raises(ValueError):
            beacon_from_dict({"orbit_type": "molniya"})


class TestJsonScenarioReader:

    def test_implements_port(self):
        assert isinstance(JsonScenarioReader(), ScenarioReader)

    def test_bundled_scenario(self):
        beacons = JsonScenarioReader().read_beacons(str(EXAMPLES / "beacons.json"))
        assert len(beacons) == 2
        assert beacons[0].orbit_type is OrbitType.SUN_SYNCHRONOUS
        assert beacons[1].orbit_type is OrbitType.INCLINED

    def test_bare_array(self, tmp_path):
        path = _write(tmp_path, "s.json", [{"isSunSync": False, "inclination": 30}])
        beacons = JsonScenarioReader().read_beacons(path)
        assert beacons[0].inclination_deg == 30.0

    def test_beacons_not_a_list(self, tmp_path):
        path = _write(tmp_path, "s.json", {"beacons": {"id": "x"}})
        with pytest.raises(ValueError):
            JsonScenarioReader().read_beacons(path)


# ── Statistics ───────────────────────────────────────────────────────

class TestSnapshotToDict:

    def test_keys(self):
        data = snapshot_to_dict(_snapshot())
        assert data["time"] == 86400.0
        assert data["perBeacon"][0]["beaconId"] == "beacon-0"
        assert data["perBeacon"][0]["handshakeCount"] == 3
        assert data["perBeacon"][0]["totalOutOfCoverageTime"] == 84600.0
        assert data["perSatellite"] == [
            {"beaconId": "beacon-0", "satId": "IRIDIUM 106", "count": 3, "total": 1800.0}
        ]
        assert data["coveringByBeacon"] == {"beacon-0": ["IRIDIUM 106", "IRIDIUM 120"]}


class TestJsonStatsWriter:

    def test_implements_port(self):
        assert isinstance(JsonStatsWriter(), StatsExporter)

    def test_writes_file(self, tmp_path):
        path = tmp_path / "stats.json"
        n = JsonStatsWriter().export(_snapshot(), str(path))
        assert n == 1
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["perBeacon"][0]["avgInCoverageTime"] == 600.0
