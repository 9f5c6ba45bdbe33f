# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""CLI tests: beacon spec parsing, error handling and export dispatch."""
import csv
import json
import sys
from pathlib import Path

import pytest

CATALOG = str(Path(__file__).parent.parent / "examples" / "iridium_catalog.json")
SCENARIO = str(Path(__file__).parent.parent / "examples" / "beacons.json")
FAST = ['--time-scale', '10800', '--frame', '1', '--reference-epoch', '2025-05-01T12:00:00Z']


class TestParseBeaconSpec:

    def test_sun_synchronous(self):
        from orbilink.cli import parse_beacon_spec
        from orbilink.domain.bodies import OrbitType

        beacon = parse_beacon_spec("sso:500:10.5", 0)
        assert beacon.identifier == "beacon-0"
        assert beacon.orbit_type is OrbitType.SUN_SYNCHRONOUS
        assert beacon.altitude_km == 500.0
        assert beacon.lst_hours == 10.5

    def test_inclined(self):
        from orbilink.cli import parse_beacon_spec
        from orbilink.domain.bodies import BEACON_COLORS, OrbitType

        beacon = parse_beacon_spec("inclined:410:51.6", 2)
        assert beacon.identifier == "beacon-2"
        assert beacon.orbit_type is OrbitType.INCLINED
        assert beacon.inclination_deg == 51.6
        assert beacon.color == BEACON_COLORS[2]

    @pytest.mark.parametrize("spec", ["sso:500", "geo:500:12", "sso:abc:12", "sso:500:25"])
    def test_invalid(self, spec):
        from orbilink.cli import parse_beacon_spec

        with pytest.raises(ValueError):
            parse_beacon_spec(spec, 0)


class TestCliErrors:

    def test_missing_catalog(self, tmp_path, capsys, monkeypatch):
        from orbilink.cli import main

        missing = str(tmp_path / "nonexistent.json")
        monkeypatch.setattr(sys, 'argv', ['orbilink', '-c', missing, '-b', 'sso:500:12'])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err.lower()

    def test_bad_beacon_spec(self, capsys, monkeypatch):
        from orbilink.cli import main

        monkeypatch.setattr(sys, 'argv', ['orbilink', '-c', CATALOG, '-b', 'polar:500:12'])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_too_many_beacons(self, capsys, monkeypatch):
        from orbilink.cli import main

        argv = ['orbilink', '-c', CATALOG] + ['-b', 'sso:500:12'] * 4
        monkeypatch.setattr(sys, 'argv', argv)

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "At most 3" in capsys.readouterr().err

    def test_no_beacons(self, monkeypatch):
        from orbilink.cli import main

        monkeypatch.setattr(sys, 'argv', ['orbilink', '-c', CATALOG])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 2

    def test_time_scale_out_of_range(self, capsys, monkeypatch):
        from orbilink.cli import main

        monkeypatch.setattr(sys, 'argv', [
            'orbilink', '-c', CATALOG, '-b', 'sso:500:12', '--time-scale', '50000',
        ])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "Time scale" in capsys.readouterr().err


class TestCliRun:

    def test_summary_printed(self, capsys, monkeypatch):
        from orbilink.cli import main

        monkeypatch.setattr(sys, 'argv', ['orbilink', '-c', CATALOG, '-b', 'sso:500:12'] + FAST)
        main()

        out = capsys.readouterr().out
        assert "3.0 hours/s" in out
        assert "Time: 24:00:00 / 24:00:00" in out
        assert "Beacon beacon-0 (sun-synchronous, 500 km, LST 12:00)" in out
        assert "Total out-of-coverage time" in out

    def test_scenario_and_exports(self, tmp_path, capsys, monkeypatch):
        from orbilink.cli import main

        links = tmp_path / "links.csv"
        beacons = tmp_path / "beacons.csv"
        stats = tmp_path / "stats.json"
        monkeypatch.setattr(sys, 'argv', [
            'orbilink', '-c', CATALOG, '--scenario', SCENARIO,
            '--export-csv', str(links),
            '--export-beacons-csv', str(beacons),
            '--export-json', str(stats),
        ] + FAST)
        main()

        with open(beacons, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert [row[0] for row in rows[1:]] == ["beacon-0", "beacon-1"]
        assert links.exists()

        data = json.loads(stats.read_text(encoding="utf-8"))
        assert data["time"] == 86400.0
        for row in data["perBeacon"]:
            total = row["totalInCoverageTime"] + row["totalOutOfCoverageTime"]
            assert abs(total - 86400.0) <= 0.01

        out = capsys.readouterr().out
        assert "Exported 2 beacon rows" in out

    def test_handshake_sum_accounting(self, tmp_path, monkeypatch):
        from orbilink.cli import main

        stats = tmp_path / "stats.json"
        monkeypatch.setattr(sys, 'argv', [
            'orbilink', '-c', CATALOG, '-b', 'sso:500:12',
            '--accounting', 'handshake-sum', '--record-zero-start',
            '--export-json', str(stats),
        ] + FAST)
        main()

        data = json.loads(stats.read_text(encoding="utf-8"))
        row = data["perBeacon"][0]
        assert row["totalInCoverageTime"] + row["totalOutOfCoverageTime"] <= 86400.0 + 0.01
