"""Address → coordinate geocoding collaborator."""

from roof_area.geocoding.mapbox import GeocodeResult, MapboxGeocoder

__all__ = ["GeocodeResult", "MapboxGeocoder"]
