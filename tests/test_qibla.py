"""Tests for Qibla bearing."""

import math

import pytest

from miqat.errors import InvalidCoordinate
from miqat.services.qibla_service import COMPASS_POINTS, bearing_to_kaaba, compass_direction


class TestBearingToKaaba:
    """bearing_to_kaaba tests."""

    @pytest.mark.parametrize(
        ("latitude", "longitude", "expected"),
        [
            (40.7128, -74.0060, 58.48),  # New York
            (51.5074, -0.1278, 118.98),  # London
            (30.0444, 31.2357, 136.1),  # Cairo
            (41.0082, 28.9784, 151.6),  # Istanbul
            (-6.2088, 106.8456, 295.1),  # Jakarta
        ],
    )
    def test_known_cities(self, latitude: float, longitude: float, expected: float) -> None:
        """Test bearings for reference cities."""
        assert bearing_to_kaaba(latitude, longitude) == pytest.approx(expected, abs=1.0)

    @pytest.mark.parametrize(
        ("latitude", "longitude"),
        [(0.0, 0.0), (0.0, -180.0), (0.0, 180.0), (-45.0, 100.0), (89.9, -120.0), (21.0, 39.8262)],
    )
    def test_range(self, latitude: float, longitude: float) -> None:
        """Test result is always in [0, 360)."""
        bearing = bearing_to_kaaba(latitude, longitude)
        assert 0 <= bearing < 360
        assert math.copysign(1.0, bearing) == 1.0

    def test_due_south_is_180(self) -> None:
        """Test an observer due north of the Kaaba faces south."""
        assert bearing_to_kaaba(50.0, 39.8262) == pytest.approx(180.0, abs=1e-9)

    def test_due_north_is_zero(self) -> None:
        """Test an observer due south of the Kaaba faces north."""
        assert bearing_to_kaaba(-10.0, 39.8262) == pytest.approx(0.0, abs=1e-9)

    def test_deterministic(self) -> None:
        """Test same input gives the same output."""
        assert bearing_to_kaaba(41.0, 29.0) == bearing_to_kaaba(41.0, 29.0)

    @pytest.mark.parametrize(
        ("latitude", "longitude"),
        [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0), (math.nan, 0.0), (0.0, math.inf)],
    )
    def test_invalid_input(self, latitude: float, longitude: float) -> None:
        """Test invalid coordinates are rejected."""
        with pytest.raises(InvalidCoordinate):
            bearing_to_kaaba(latitude, longitude)


class TestCompassDirection:
    """compass_direction tests."""

    def test_sixteen_points(self) -> None:
        """Test the rose has 16 points."""
        assert len(COMPASS_POINTS) == 16

    @pytest.mark.parametrize(
        ("degrees", "expected"),
        [
            (0.0, "N"),
            (11.0, "N"),
            (12.0, "NNE"),
            (58.48, "ENE"),
            (90.0, "E"),
            (118.98, "ESE"),
            (137.0, "SE"),
            (180.0, "S"),
            (270.0, "W"),
            (350.0, "N"),
            (359.9, "N"),
        ],
    )
    def test_direction(self, degrees: float, expected: str) -> None:
        """Test mapping bearings to compass points."""
        assert compass_direction(degrees) == expected
