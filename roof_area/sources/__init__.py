"""Footprint source adapters.

Implements the source-agnostic adapter pattern (Strategy pattern):
- FootprintSource: Abstract base class defining ``query``
- MicrosoftBuildingsSource: Global footprint dataset slot (primary, stub)
- OpenStreetMapSource: Overpass API ``building=*`` query (secondary)

The ordered source chain is selected via configuration, so adding a
source never touches the resolver.
"""

from roof_area.sources.base import FootprintSource
from roof_area.sources.factory import (
    build_source_chain,
    get_source,
    list_sources,
    register_source,
)

__all__ = [
    "FootprintSource",
    "build_source_chain",
    "get_source",
    "list_sources",
    "register_source",
]
