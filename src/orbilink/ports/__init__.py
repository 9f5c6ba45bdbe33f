# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for catalog input, scenario input and statistics output.

Adapters implement these to handle different file formats.
"""
from abc import ABC, abstractmethod

from orbilink.domain.bodies import BeaconConfig, OrbitalBody
from orbilink.domain.statistics import StatsSnapshot


class CatalogSource(ABC):
    """Port for loading the satellite catalog."""

    @abstractmethod
    def load_catalog(self, path: str) -> tuple[OrbitalBody, ...]:
        """Load and parse a satellite catalog."""
        ...


class ScenarioReader(ABC):
    """Port for reading beacon configurations."""

    @abstractmethod
    def read_beacons(self, path: str) -> list[BeaconConfig]:
        """Read the beacon list of a scenario."""
        ...


class StatsExporter(ABC):
    """Port for exporting a statistics snapshot."""

    @abstractmethod
    def export(self, snapshot: StatsSnapshot, path: str) -> int:
        """
        Export a snapshot to a file.

        Returns:
            Number of rows (or records) written.
        """
        ...
