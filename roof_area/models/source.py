"""Configuration model for a single footprint source.

A ``SourceConfig`` is built once at startup from ``RoofAreaConfig`` and
handed to the source constructor; sources never read the environment
themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Configuration for a specific footprint source.

    Attributes:
        name: Source identifier (e.g. ``"openstreetmap"``).
        api_base_url: Endpoint URL; empty means the adapter's default.
        timeout_s: Upper bound in seconds for each outbound call.
        extra_params: Adapter-specific string parameters.
    """

    name: str
    api_base_url: str = ""
    timeout_s: float = 25.0
    extra_params: dict[str, str] = field(default_factory=dict)
