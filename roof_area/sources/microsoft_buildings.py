"""Microsoft Building Footprints source.

Placeholder for the tile-indexed global building-footprint dataset
(published through the Planetary Computer). No tile lookup is wired
up yet: ``query`` logs the request and returns an empty list so the
resolver falls through to the next source. It never raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roof_area.sources.base import FootprintSource

if TYPE_CHECKING:
    from roof_area.models.footprint import Candidate
    from roof_area.models.geometry import Coordinate

logger = logging.getLogger(__name__)


class MicrosoftBuildingsSource(FootprintSource):
    """Primary source slot. Always returns no candidates."""

    def query(self, point: Coordinate, buffer_deg: float) -> list[Candidate]:
        logger.info(
            "Querying Microsoft Building Footprints | lat=%.6f | lon=%.6f | buffer=%.4f deg",
            point.latitude,
            point.longitude,
            buffer_deg,
        )
        return []
