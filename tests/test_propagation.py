# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for circular-orbit position propagation."""
import math
from datetime import datetime, timedelta, timezone

import pytest

from orbilink.domain.bodies import BeaconConfig, OrbitalBody, OrbitType, beacon_orbital_body
from orbilink.domain.orbital_mechanics import OrbitalConstants, circular_period_s
from orbilink.domain.propagation import (
    beacon_position,
    compute_position,
    epoch_phase_offset_rad,
    satellite_positions,
)

R_E = OrbitalConstants.R_EARTH_KM
EPOCH = datetime(2025, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _sat(identifier="SAT", inc=86.4, raan=31.6, ma=0.0, epoch=None, altitude=780.0):
    return OrbitalBody(
        identifier=identifier,
        altitude_km=altitude,
        inclination_deg=inc,
        raan_deg=raan,
        period_s=circular_period_s(altitude),
        mean_anomaly_deg=ma,
        epoch=epoch,
    )


def _norm(p):
    return math.sqrt(p[0] ** 2 + p[1] ** 2 + p[2] ** 2)


def _assert_close(a, b, tol=1e-6):
    for x, y in zip(a, b):
        assert abs(x - y) < tol, f"{a} != {b}"


class TestComputePosition:

    @pytest.mark.parametrize("t", [0.0, 123.4, 3000.0, 86400.0])
    def test_radius_is_constant(self, t):
        pos = compute_position(_sat(raan=200.0, ma=33.0), t)
        assert _norm(pos) == pytest.approx(R_E + 780.0, rel=1e-12)

    def test_deterministic(self):
        sat = _sat()
        assert compute_position(sat, 4321.0) == compute_position(sat, 4321.0)

    def test_returns_plain_floats(self):
        pos = compute_position(_sat(), 10.0)
        assert all(type(c) is float for c in pos)

    def test_equatorial_start(self):
        pos = compute_position(_sat(inc=0.0, raan=0.0), 0.0)
        _assert_close(pos, (R_E + 780.0, 0.0, 0.0))

    def test_equatorial_quarter_period(self):
        sat = _sat(inc=0.0, raan=0.0)
        pos = compute_position(sat, sat.period_s / 4)
        _assert_close(pos, (0.0, 0.0, R_E + 780.0))

    def test_equatorial_stays_in_xz_plane(self):
        sat = _sat(inc=0.0, raan=45.0)
        for t in (0.0, 500.0, 2500.0):
            assert abs(compute_position(sat, t)[1]) < 1e-6

    def test_polar_orbit_reaches_pole(self):
        sat = _sat(inc=90.0, raan=0.0)
        pos = compute_position(sat, sat.period_s / 4)
        assert abs(abs(pos[1]) - (R_E + 780.0)) < 1e-6

    def test_periodic(self):
        sat = _sat(ma=10.0)
        a = compute_position(sat, 500.0)
        b = compute_position(sat, 500.0 + sat.period_s)
        _assert_close(a, b, tol=1e-6 * (R_E + 780.0))

    def test_mean_anomaly_is_phase_offset(self):
        shifted = _sat(ma=90.0)
        base = _sat()
        _assert_close(
            compute_position(shifted, 0.0),
            compute_position(base, base.period_s / 4),
        )


class TestEpochAlignment:

    def test_offset_zero_without_epochs(self):
        assert epoch_phase_offset_rad(_sat(), EPOCH) == 0.0
        assert epoch_phase_offset_rad(_sat(epoch=EPOCH), None) == 0.0

    def test_reference_after_epoch_advances_phase(self):
        """A satellite with an earlier epoch has already moved on at t = 0."""
        sat = _sat(epoch=EPOCH)
        quarter = sat.period_s / 4
        reference = EPOCH + timedelta(seconds=quarter)
        _assert_close(
            compute_position(sat, 0.0, reference_epoch=reference),
            compute_position(_sat(), quarter),
            tol=1e-3,
        )

    def test_same_epoch_no_offset(self):
        sat = _sat(epoch=EPOCH)
        assert compute_position(sat, 100.0, reference_epoch=EPOCH) == compute_position(sat, 100.0)

    def test_naive_reference_epoch_taken_as_utc(self):
        sat = _sat(epoch=EPOCH)
        naive = datetime(2025, 5, 1, 13, 0, 0)
        assert epoch_phase_offset_rad(sat, naive) == pytest.approx(
            epoch_phase_offset_rad(sat, EPOCH + timedelta(hours=1))
        )

    def test_naive_body_epoch_taken_as_utc(self):
        sat = _sat(epoch=datetime(2025, 5, 1, 12, 0, 0))
        reference = EPOCH + timedelta(minutes=10)
        assert epoch_phase_offset_rad(sat, reference) == pytest.approx(
            epoch_phase_offset_rad(_sat(epoch=EPOCH), reference)
        )


class TestBeaconPosition:

    def test_matches_orbital_body(self):
        beacon = BeaconConfig("b", OrbitType.SUN_SYNCHRONOUS, 500.0, lst_hours=10.5)
        assert beacon_position(beacon, 777.0) == compute_position(beacon_orbital_body(beacon), 777.0)

    def test_radius(self):
        beacon = BeaconConfig("b", OrbitType.INCLINED, 410.0, inclination_deg=51.6)
        assert _norm(beacon_position(beacon, 1234.0)) == pytest.approx(R_E + 410.0)


class TestSatellitePositions:

    def test_keyed_by_identifier(self):
        catalog = [_sat("A"), _sat("B", ma=180.0)]
        positions = satellite_positions(catalog, 0.0)
        assert set(positions) == {"A", "B"}
        _assert_close(positions["A"], tuple(-c for c in positions["B"]))

    def test_empty_catalog(self):
        assert satellite_positions([], 0.0) == {}
