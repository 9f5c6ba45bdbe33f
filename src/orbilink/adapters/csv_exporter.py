# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV statistics exporters.

Per-satellite handshake table and per-beacon summary as CSV.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv
import logging

from orbilink.ports import StatsExporter
from orbilink.domain.statistics import StatsSnapshot

logger = logging.getLogger(__name__)


_LINK_HEADER = ['beacon_id', 'satellite_id', 'handshake_count', 'total_handshake_s']

_BEACON_HEADER = [
    'beacon_id', 'handshake_count',
    'total_in_coverage_s', 'avg_in_coverage_s',
    'total_out_of_coverage_s', 'avg_out_of_coverage_s',
    'normalization_factor',
]


class CsvLinkStatsExporter(StatsExporter):
    """Exports the per-(beacon, satellite) handshake table."""

    def export(self, snapshot: StatsSnapshot, path: str) -> int:
        if not snapshot.per_satellite:
            logger.warning("No handshakes recorded at t=%.1f; writing header only", snapshot.time_s)
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_LINK_HEADER)
            for row in snapshot.per_satellite:
                writer.writerow([
                    row.beacon_id,
                    row.satellite_id,
                    row.handshake_count,
                    f'{row.total_handshake_s:.2f}',
                ])
        return len(snapshot.per_satellite)


class CsvBeaconStatsExporter(StatsExporter):
    """Exports one summary row per beacon."""

    def export(self, snapshot: StatsSnapshot, path: str) -> int:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_BEACON_HEADER)
            for row in snapshot.per_beacon:
                writer.writerow([
                    row.beacon_id,
                    row.handshake_count,
                    f'{row.total_in_coverage_s:.2f}',
                    f'{row.avg_in_coverage_s:.2f}',
                    f'{row.total_out_of_coverage_s:.2f}',
                    f'{row.avg_out_of_coverage_s:.2f}',
                    f'{row.normalization_factor:.6f}',
                ])
        return len(snapshot.per_beacon)
