"""Shared pytest fixtures for the Roof Area test suite."""

from __future__ import annotations

import pytest

from roof_area.models.geometry import Coordinate, Polygon
from tests.helpers import QUERY_POINT, REFERENCE_SQUARE


@pytest.fixture()
def query_point() -> Coordinate:
    """The Palo Alto query point (37.4419, -122.1430)."""
    return QUERY_POINT


@pytest.fixture()
def reference_polygon() -> Polygon:
    """The 4-point square from the client's area example."""
    return Polygon(exterior=REFERENCE_SQUARE)
