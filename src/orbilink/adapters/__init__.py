# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for catalog/scenario input and statistics export.

External dependencies (json, csv, file I/O) are confined to this layer.
"""
from orbilink.adapters.json_io import (
    JsonCatalogReader,
    JsonScenarioReader,
    JsonStatsWriter,
)
from orbilink.adapters.csv_exporter import (
    CsvBeaconStatsExporter,
    CsvLinkStatsExporter,
)
