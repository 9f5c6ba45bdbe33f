# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for a headless coverage run.

Usage:
    # One sun-synchronous beacon at 500 km, LST 10:30
    orbilink --catalog iridium.json --beacon sso:500:10.5

    # Up to three beacons, from flags or a scenario file
    orbilink --catalog iridium.json --beacon sso:500:12 --beacon inclined:410:64
    orbilink --catalog iridium.json --scenario beacons.json

    # Export statistics
    orbilink --catalog iridium.json --beacon sso:500:12 --export-csv links.csv
    orbilink --catalog iridium.json --beacon sso:500:12 --export-json stats.json
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from orbilink.domain.bodies import MAX_BEACONS, BEACON_COLORS, BeaconConfig, OrbitType
from orbilink.domain.catalog import parse_epoch
from orbilink.domain.clock import (
    DEFAULT_TIME_SCALE,
    SimulationClock,
    drive,
    format_clock,
    format_lst,
    format_time_scale,
)
from orbilink.domain.config import InCoverageAccounting, SimulationConfig
from orbilink.domain.engine import CoverageEngine
from orbilink.domain.statistics import StatsSnapshot
from orbilink.adapters.json_io import JsonCatalogReader, JsonScenarioReader, JsonStatsWriter
from orbilink.adapters.csv_exporter import CsvBeaconStatsExporter, CsvLinkStatsExporter


def parse_beacon_spec(spec: str, index: int) -> BeaconConfig:
    """
    Parse 'sso:<alt_km>:<lst_h>' or 'inclined:<alt_km>:<inc_deg>'.

    Raises:
        ValueError: On malformed specs or invalid values.
    """
    parts = spec.split(':')
    if len(parts) != 3:
        raise ValueError(
            f"Invalid beacon spec '{spec}': expected sso:<alt_km>:<lst_h> "
            f"or inclined:<alt_km>:<inc_deg>"
        )
    kind, altitude, value = parts
    identifier = f"beacon-{index}"
    color = BEACON_COLORS[index % len(BEACON_COLORS)]
    if kind == 'sso':
        return BeaconConfig(
            identifier=identifier, orbit_type=OrbitType.SUN_SYNCHRONOUS,
            altitude_km=float(altitude), lst_hours=float(value), color=color,
        )
    if kind == 'inclined':
        return BeaconConfig(
            identifier=identifier, orbit_type=OrbitType.INCLINED,
            altitude_km=float(altitude), inclination_deg=float(value), color=color,
        )
    raise ValueError(f"Unknown beacon orbit type '{kind}' (use 'sso' or 'inclined')")


def _describe_beacon(beacon: BeaconConfig) -> str:
    if beacon.orbit_type is OrbitType.SUN_SYNCHRONOUS:
        return f"sun-synchronous, {beacon.altitude_km:.0f} km, LST {format_lst(beacon.lst_hours)}"
    return f"inclined, {beacon.altitude_km:.0f} km, {beacon.inclination_deg:.1f}°"


def print_summary(snapshot: StatsSnapshot, beacons: list[BeaconConfig], horizon_s: float) -> None:
    """Print the per-beacon statistics panel."""
    print(f"Time: {format_clock(snapshot.time_s)} / {format_clock(horizon_s)}")
    for beacon in beacons:
        row = snapshot.beacon(beacon.identifier)
        if row is None:
            continue
        print(f"\nBeacon {beacon.identifier} ({_describe_beacon(beacon)})")
        print(f"  Total handshakes:             {row.handshake_count}")
        print(f"  Total out-of-coverage time:   {row.total_out_of_coverage_s:.2f} s")
        print(f"  Average out-of-coverage time: {row.avg_out_of_coverage_s:.2f} s")
        print(f"  Total in-coverage time:       {row.total_in_coverage_s:.2f} s")
        print(f"  Average in-coverage time:     {row.avg_in_coverage_s:.2f} s")
        links = snapshot.satellites_for(beacon.identifier)
        if links:
            print(f"  {'Satellite':<24}{'Handshakes':>12}{'Total Time (s)':>16}")
            for link in links:
                print(f"  {link.satellite_id:<24}{link.handshake_count:>12}{link.total_handshake_s:>16.2f}")


def run(
    catalog_path: str,
    beacons: list[BeaconConfig],
    config: SimulationConfig,
    reference_epoch: datetime | None,
    time_scale: float = DEFAULT_TIME_SCALE,
    frame_s: float = 1.0 / 60.0,
) -> StatsSnapshot:
    """
    Load the catalog and run one full simulated day.

    Returns:
        Final statistics snapshot.
    """
    if len(beacons) > MAX_BEACONS:
        raise ValueError(f"At most {MAX_BEACONS} beacons are supported, got {len(beacons)}")

    catalog = JsonCatalogReader().load_catalog(catalog_path)
    engine = CoverageEngine(config, reference_epoch=reference_epoch)
    clock = SimulationClock(horizon_s=config.horizon_s, time_scale=time_scale)
    return drive(engine, clock, beacons, catalog, frame_s=frame_s)


def main():
    parser = argparse.ArgumentParser(
        description="Simulate beacon/satellite coverage handshakes over a 24 h day"
    )
    parser.add_argument(
        '--catalog', '-c', required=True,
        help="Path to satellite catalog JSON (array of OMM-style records)"
    )
    parser.add_argument(
        '--beacon', '-b', action='append', default=[],
        help="Beacon spec sso:<alt_km>:<lst_h> or inclined:<alt_km>:<inc_deg> (repeatable, max 3)"
    )
    parser.add_argument(
        '--scenario',
        help="Path to scenario JSON with a beacon list (alternative to --beacon)"
    )
    parser.add_argument(
        '--time-scale', type=float, default=DEFAULT_TIME_SCALE,
        help=f"Simulated seconds per real second, 1–10800 (default: {DEFAULT_TIME_SCALE:.0f})"
    )
    parser.add_argument(
        '--frame', type=float, default=1.0 / 60.0,
        help="Real seconds per frame (default: 1/60)"
    )
    parser.add_argument(
        '--reference-epoch',
        help="ISO timestamp matching simulated t=0 (default: now, UTC)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )

    tracking_group = parser.add_argument_group('tracking')
    tracking_group.add_argument(
        '--accounting',
        choices=[mode.value for mode in InCoverageAccounting],
        default=InCoverageAccounting.BEACON_INTERVALS.value,
        help="In-coverage time source (default: beacon-intervals)"
    )
    tracking_group.add_argument(
        '--record-zero-start', action='store_true', default=False,
        help="Record durations of handshakes that started at t=0"
    )
    tracking_group.add_argument(
        '--strict-time', action='store_true', default=False,
        help="Fail on backward time steps instead of ignoring them"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument('--export-csv', help="Export per-satellite handshake table to CSV")
    export_group.add_argument('--export-beacons-csv', help="Export per-beacon summary to CSV")
    export_group.add_argument('--export-json', help="Export full statistics snapshot to JSON")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.scenario:
            beacons = JsonScenarioReader().read_beacons(args.scenario)
        else:
            beacons = [parse_beacon_spec(spec, i) for i, spec in enumerate(args.beacon)]
        if not beacons:
            parser.error("at least one --beacon or a --scenario is required")

        reference_epoch = (
            parse_epoch(args.reference_epoch) if args.reference_epoch
            else datetime.now(tz=timezone.utc)
        )
        config = SimulationConfig(
            in_coverage_accounting=InCoverageAccounting(args.accounting),
            record_zero_start_handshakes=args.record_zero_start,
            strict_time=args.strict_time,
        )

        print(
            f"Simulating {len(beacons)} beacon(s) at {format_time_scale(args.time_scale)}, "
            f"epoch {reference_epoch.isoformat()}"
        )
        snapshot = run(
            catalog_path=args.catalog,
            beacons=beacons,
            config=config,
            reference_epoch=reference_epoch,
            time_scale=args.time_scale,
            frame_s=args.frame,
        )
        print_summary(snapshot, beacons, config.horizon_s)

        if args.export_csv:
            n = CsvLinkStatsExporter().export(snapshot, args.export_csv)
            print(f"Exported {n} satellite rows to {args.export_csv}")

        if args.export_beacons_csv:
            n = CsvBeaconStatsExporter().export(snapshot, args.export_beacons_csv)
            print(f"Exported {n} beacon rows to {args.export_beacons_csv}")

        if args.export_json:
            n = JsonStatsWriter().export(snapshot, args.export_json)
            print(f"Exported statistics for {n} beacons to {args.export_json}")

    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
