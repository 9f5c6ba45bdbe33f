#!/usr/bin/env python3
"""Coverage day example: two beacons against an Iridium-like catalog.

Loads the bundled catalog, adds beacons through the roster, runs one
simulated day frame by frame and prints the per-beacon summary.

Usage:
    python examples/coverage_day.py
"""
from datetime import datetime, timezone
from pathlib import Path

from orbilink import (
    BeaconRoster,
    CoverageEngine,
    OrbitType,
    SimulationClock,
    SimulationConfig,
    drive,
    format_clock,
)
from orbilink.adapters.json_io import JsonCatalogReader


def main():
    catalog_path = Path(__file__).parent / "iridium_catalog.json"
    catalog = JsonCatalogReader().load_catalog(str(catalog_path))
    print(f"Loaded {len(catalog)} satellites")

    roster = BeaconRoster()
    roster.add(altitude_km=500.0, lst_hours=10.5)
    roster.add(orbit_type=OrbitType.INCLINED, altitude_km=410.0, inclination_deg=51.6)

    # Epoch captured once; satellite phases are aligned to it.
    epoch = datetime(2025, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    engine = CoverageEngine(SimulationConfig(), reference_epoch=epoch)
    clock = SimulationClock(time_scale=3600.0)

    snapshot = drive(engine, clock, roster.configs(), catalog, frame_s=0.05)

    print(f"Finished at {format_clock(snapshot.time_s)}")
    for row in snapshot.per_beacon:
        print(
            f"  {row.beacon_id}: {row.handshake_count} handshakes, "
            f"in {row.total_in_coverage_s:.0f} s, out {row.total_out_of_coverage_s:.0f} s "
            f"(avg gap {row.avg_out_of_coverage_s:.0f} s)"
        )


if __name__ == "__main__":
    main()
