"""Shared constants — single source of truth.

Centralises source names, geodesy constants, and the fixed labels that
appear in the area response payload.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Footprint sources
# ---------------------------------------------------------------------------

MICROSOFT_BUILDINGS: str = "microsoft_buildings"
"""Primary source: tile-indexed global building-footprint dataset."""

OPENSTREETMAP: str = "openstreetmap"
"""Secondary source: Overpass API over OpenStreetMap ``building=*`` features."""

DEFAULT_SOURCE_ORDER: tuple[str, ...] = (MICROSOFT_BUILDINGS, OPENSTREETMAP)
"""Priority order in which sources are consulted."""

SOURCE_DISPLAY_NAMES: dict[str, str] = {
    MICROSOFT_BUILDINGS: "Microsoft Building Footprints",
    OPENSTREETMAP: "OpenStreetMap",
}

DEFAULT_OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
DEFAULT_MAPBOX_GEOCODING_URL: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

DEFAULT_BUFFER_DEG: float = 0.0005
"""Half-width of the search box around a query point (roughly 50 m)."""

EARTH_RADIUS_KM: float = 6371.0
"""Mean Earth radius used by the haversine distance."""

METRES_PER_KM: float = 1000.0

MIN_DISTINCT_POINTS: int = 3

MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0
MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0

# ---------------------------------------------------------------------------
# Area payload labels (client compatibility contract)
# ---------------------------------------------------------------------------

AREA_UNITS: str = "square_meters"
AREA_PRECISION_LABEL: str = "±1 square meter"
AREA_METHOD_LABEL: str = "Geodesic area on the WGS 84 ellipsoid (pyproj.Geod)"
AREA_DECIMALS: int = 2

SERVICE_NAME: str = "roof-area-calculator-api"
