"""FootprintSource abstract base class.

Defines the contract every footprint source adapter must implement.
The resolver interacts exclusively with this interface; it never
branches on which concrete source is behind it, so adding a source is
a registry entry plus one subclass.

Contract:
    ``query(point, buffer_deg)`` returns zero or more ``Candidate``
    objects for buildings inside the box around *point*. An empty list
    means "no buildings here". Network, timeout and parse failures raise
    ``SourceUnavailableError``; ``NotFoundError`` is never raised.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from roof_area.core.constants import SOURCE_DISPLAY_NAMES

if TYPE_CHECKING:
    from roof_area.models.footprint import Candidate
    from roof_area.models.geometry import Coordinate
    from roof_area.models.source import SourceConfig


class FootprintSource(abc.ABC):
    """Abstract base class for footprint source adapters.

    The constructor receives a ``SourceConfig`` carrying the endpoint,
    timeout and adapter-specific parameters.

    Example usage::

        source = get_source("openstreetmap")
        candidates = source.query(Coordinate(37.4419, -122.1430), 0.0005)
    """

    def __init__(self, config: SourceConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the source name from configuration."""
        return self._config.name

    @property
    def display_name(self) -> str:
        """Human-readable source name used in responses and error context."""
        return SOURCE_DISPLAY_NAMES.get(self.name, self.name)

    @property
    def config(self) -> SourceConfig:
        """Return the source configuration (read-only)."""
        return self._config

    @abc.abstractmethod
    def query(self, point: Coordinate, buffer_deg: float) -> list[Candidate]:
        """Return building candidates near *point*.

        Args:
            point: The query coordinate.
            buffer_deg: Half-width in degrees of the search box.

        Returns:
            Candidates in upstream order. Empty list when none exist.

        Raises:
            SourceUnavailableError: On network, timeout or parse errors.
        """
