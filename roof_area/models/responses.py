"""Pydantic response models for the HTTP surface.

Field names and nesting here are a compatibility contract with the
existing map client; change them only together with the client.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from roof_area.core.constants import AREA_UNITS
from roof_area.models.area import AreaResult
from roof_area.models.footprint import Footprint
from roof_area.models.geometry import Coordinate


class CoordinatesBody(BaseModel):
    latitude: float
    longitude: float


class BoundsBody(BaseModel):
    """Bounding box as ``[lon, lat]`` corner pairs."""

    southwest: list[float]
    northeast: list[float]


class PolygonInfo(BaseModel):
    coordinate_count: int
    centroid: CoordinatesBody
    bounds: BoundsBody


class AreaResponse(BaseModel):
    """Body of a successful ``/api/area`` response."""

    success: bool = True
    area: float
    units: str = AREA_UNITS
    precision: str
    calculation_method: str
    polygon_info: PolygonInfo

    @classmethod
    def from_result(cls, result: AreaResult) -> AreaResponse:
        return cls(
            area=result.area_square_meters,
            precision=result.precision_label,
            calculation_method=result.method,
            polygon_info=PolygonInfo(
                coordinate_count=result.coordinate_count,
                centroid=CoordinatesBody(**result.centroid.to_dict()),
                bounds=BoundsBody(**result.bounds.to_dict()),
            ),
        )


class FootprintResponse(BaseModel):
    """Body of a successful ``/api/footprint`` response."""

    success: bool = True
    coordinates: CoordinatesBody
    footprint: dict[str, Any]
    source: str

    @classmethod
    def from_footprint(cls, query: Coordinate, footprint: Footprint) -> FootprintResponse:
        return cls(
            coordinates=CoordinatesBody(**query.to_dict()),
            footprint=footprint.to_feature(),
            source=footprint.source,
        )


class AddressBody(BaseModel):
    input: str
    formatted: str
    confidence: float


class GeocodeResponse(BaseModel):
    """Body of a successful ``/api/geocode`` response."""

    success: bool = True
    address: AddressBody
    coordinates: CoordinatesBody
    bounds: list[float] | None = None


class ClientConfigBody(BaseModel):
    mapboxToken: str  # noqa: N815
    environment: str


class ConfigResponse(BaseModel):
    success: bool = True
    config: ClientConfigBody


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
    service: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: bool = False
    error: str
    message: str
    code: str
    coordinates: dict[str, Any] | None = None
    sources_checked: list[str] | None = None
    details: dict[str, Any] = Field(default_factory=dict)
