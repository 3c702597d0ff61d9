"""Tests for haversine distance."""
import numpy as np
import pytest

from pointgeom import haversine
from pointgeom.haversine import EARTH_RADIUS


def test_identical_points_are_zero():
    assert haversine(25.0330, 121.5654, 25.0330, 121.5654) == 0.0


def test_quarter_meridian():
    assert haversine(0.0, 0.0, 90.0, 0.0) == pytest.approx(np.pi * EARTH_RADIUS / 2.0)


def test_antipodal_points():
    assert haversine(0.0, 0.0, 0.0, 180.0) == pytest.approx(np.pi * EARTH_RADIUS)


def test_symmetric():
    d1 = haversine(25.0330, 121.5654, 35.6762, 139.6503)
    d2 = haversine(35.6762, 139.6503, 25.0330, 121.5654)
    assert d1 == pytest.approx(d2)


def test_known_distance():
    # Taipei to Tokyo is roughly 2100 km
    d = haversine(25.0330, 121.5654, 35.6762, 139.6503)
    assert 2050e3 < d < 2150e3


def test_custom_radius():
    assert haversine(0.0, 0.0, 0.0, 90.0, radius=1.0) == pytest.approx(np.pi / 2.0)


def test_vectorized():
    lats = np.array([0.0, 0.0, 90.0])
    lons = np.array([0.0, 90.0, 0.0])
    d = haversine(0.0, 0.0, lats, lons, radius=1.0)
    assert isinstance(d, np.ndarray)
    np.testing.assert_allclose(d, [0.0, np.pi / 2.0, np.pi / 2.0], atol=1e-12)
