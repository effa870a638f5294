"""Tests for haversine distance, vertex-mean centroid and candidate selection."""

from __future__ import annotations

import random

import pytest

from roof_area.core.exceptions import InvalidGeometryError, NotFoundError
from roof_area.geometry.distance import centroid_of, haversine_km
from roof_area.geometry.selection import pick_candidate, rank_candidates
from roof_area.models.geometry import Coordinate
from tests.helpers import QUERY_POINT, REFERENCE_SQUARE, osm_candidate, square_ring

# ===========================================================================
# Haversine
# ===========================================================================


class TestHaversine:
    def test_zero_distance(self) -> None:
        assert haversine_km(QUERY_POINT, QUERY_POINT) == 0.0

    def test_one_degree_of_latitude(self) -> None:
        a = Coordinate(latitude=0.0, longitude=0.0)
        b = Coordinate(latitude=1.0, longitude=0.0)
        # 6371 km * pi / 180
        assert haversine_km(a, b) == pytest.approx(111.195, abs=1e-3)

    def test_known_city_pair(self) -> None:
        """San Francisco → Los Angeles is roughly 559 km great-circle."""
        sf = Coordinate(latitude=37.7749, longitude=-122.4194)
        la = Coordinate(latitude=34.0522, longitude=-118.2437)
        assert haversine_km(sf, la) == pytest.approx(559.1, rel=5e-3)

    def test_antipodal_points(self) -> None:
        a = Coordinate(latitude=0.0, longitude=0.0)
        b = Coordinate(latitude=0.0, longitude=180.0)
        assert haversine_km(a, b) == pytest.approx(6371.0 * 3.141592653589793)

    def test_symmetric(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            a = Coordinate(rng.uniform(-90, 90), rng.uniform(-180, 180))
            b = Coordinate(rng.uniform(-90, 90), rng.uniform(-180, 180))
            assert haversine_km(a, b) == pytest.approx(haversine_km(b, a), rel=1e-12)


# ===========================================================================
# Centroid
# ===========================================================================


class TestCentroid:
    def test_mean_of_vertices(self) -> None:
        c = centroid_of(REFERENCE_SQUARE)
        assert c.longitude == pytest.approx(-122.14275)
        assert c.latitude == pytest.approx(37.4417)

    def test_closed_and_open_agree(self) -> None:
        closed = square_ring(QUERY_POINT, 0.0002)
        assert centroid_of(closed) == centroid_of(closed[:-1])

    def test_not_area_weighted(self) -> None:
        """Extra vertices on one edge pull the mean toward that edge."""
        ring = ((0.0, 0.0), (1.0, 0.0), (1.0, 0.5), (1.0, 1.0), (0.0, 1.0))
        assert centroid_of(ring).longitude == pytest.approx(0.6)

    def test_empty_ring_rejected(self) -> None:
        with pytest.raises(InvalidGeometryError):
            centroid_of(())


# ===========================================================================
# Candidate selection
# ===========================================================================


def _offset(point: Coordinate, d_lat: float, d_lon: float) -> Coordinate:
    return Coordinate(point.latitude + d_lat, point.longitude + d_lon)


class TestPickCandidate:
    def test_empty_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            pick_candidate(QUERY_POINT, [])

    def test_single_candidate(self) -> None:
        only = osm_candidate(REFERENCE_SQUARE)
        picked, distance_km = pick_candidate(QUERY_POINT, [only])
        assert picked is only
        assert distance_km == pytest.approx(
            haversine_km(QUERY_POINT, centroid_of(REFERENCE_SQUARE))
        )

    def test_nearest_wins(self) -> None:
        far = osm_candidate(square_ring(_offset(QUERY_POINT, 0.0004, 0.0), 0.0001), osm_id=1)
        near = osm_candidate(square_ring(_offset(QUERY_POINT, 0.0001, 0.0), 0.0001), osm_id=2)
        picked, _ = pick_candidate(QUERY_POINT, [far, near])
        assert picked.source_metadata["osm_id"] == 2

    def test_tie_goes_to_first_seen(self) -> None:
        north = osm_candidate(square_ring(_offset(QUERY_POINT, 0.0002, 0.0), 0.0001), osm_id=1)
        twin = osm_candidate(north.ring, osm_id=2)
        picked, _ = pick_candidate(QUERY_POINT, [north, twin])
        assert picked.source_metadata["osm_id"] == 1

    def test_picked_is_never_farther_than_any_other(self) -> None:
        rng = random.Random(42)
        for _ in range(20):
            pool = [
                osm_candidate(
                    square_ring(
                        _offset(QUERY_POINT, rng.uniform(-5e-4, 5e-4), rng.uniform(-5e-4, 5e-4)),
                        rng.uniform(5e-5, 2e-4),
                    ),
                    osm_id=i,
                )
                for i in range(rng.randint(1, 8))
            ]
            picked, best_km = pick_candidate(QUERY_POINT, pool)
            for other in pool:
                assert best_km <= haversine_km(QUERY_POINT, centroid_of(other.ring))
            assert best_km == haversine_km(QUERY_POINT, centroid_of(picked.ring))


class TestRankCandidates:
    def test_sorted_nearest_first(self) -> None:
        pool = [
            osm_candidate(square_ring(_offset(QUERY_POINT, d, 0.0), 0.0001), osm_id=i)
            for i, d in enumerate([0.0003, 0.0001, 0.0002])
        ]
        ranked = rank_candidates(QUERY_POINT, pool)
        assert [c.source_metadata["osm_id"] for c, _ in ranked] == [1, 2, 0]
        distances = [d for _, d in ranked]
        assert distances == sorted(distances)
