"""
Shared fixtures for the HexGlobe test suite.
"""

import math

import pytest

from hexglobe.models import GeoPoint


def ring(n, lat=10.0, lon=20.0, radius_deg=5.0):
    """Regular n-gon of GeoPoints around (lat, lon), counter-clockwise."""
    return tuple(
        GeoPoint(latitude=lat + radius_deg * math.sin(2 * math.pi * i / n),
                 longitude=lon + radius_deg * math.cos(2 * math.pi * i / n))
        for i in range(n)
    )


@pytest.fixture
def hexagon():
    return ring(6)


@pytest.fixture
def pentagon():
    return ring(5)


class FakeProvider:
    """Grid provider double returning synthetic hexagons."""

    def __init__(self, count):
        self.count = count

    def enumerate_base_cells(self):
        return [f"cell{i:03d}" for i in range(self.count)]

    def cell_boundary(self, cell):
        i = int(cell[4:])
        return ring(6, lat=-60 + i, lon=-170 + 2 * i, radius_deg=0.5)

    def is_pentagon(self, cell):
        return False
