"""Nearest-candidate selection by centroid distance."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from roof_area.core.exceptions import NotFoundError
from roof_area.geometry.distance import centroid_of, haversine_km
from roof_area.models.footprint import Candidate
from roof_area.models.geometry import Coordinate

logger = logging.getLogger("roof_area.geometry.selection")


def rank_candidates(
    query: Coordinate,
    candidates: Sequence[Candidate],
) -> list[tuple[Candidate, float]]:
    """Return ``(candidate, distance_km)`` pairs, nearest first.

    The sort is stable, so equidistant candidates keep their input order.
    """
    scored = [(c, haversine_km(query, centroid_of(c.ring))) for c in candidates]
    return sorted(scored, key=lambda pair: pair[1])


def pick_candidate(
    query: Coordinate,
    candidates: Sequence[Candidate],
) -> tuple[Candidate, float]:
    """Return the candidate whose centroid is nearest to *query*.

    Ties go to the first-seen candidate.

    Returns:
        ``(candidate, distance_km)``.

    Raises:
        NotFoundError: If *candidates* is empty.
    """
    if not candidates:
        msg = "No building candidates to choose from"
        raise NotFoundError(msg, context={"coordinates": query.to_dict()})

    best, best_km = rank_candidates(query, candidates)[0]
    logger.debug(
        "Candidate picked | source=%s | distance=%.1f m | pool=%d",
        best.source_tag,
        best_km * 1000,
        len(candidates),
    )
    return best, best_km
