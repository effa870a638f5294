"""Unified exception taxonomy for footprint resolution and area computation.

Every domain exception inherits from ``RoofAreaError`` and carries
structured context fields so that the HTTP layer can render a useful
message and callers can make consistent retry decisions.

Taxonomy categories
-------------------
- ``ValidationError``  — input or geometry violations, never retryable.
- ``TransientError``   — upstream failures (network, timeout), retryable.
- ``PermanentError``   — definitive answers or unexpected failures, not retryable.

Concrete errors
---------------
- ``InvalidInputError``      — malformed coordinates or GeoJSON.
- ``InvalidGeometryError``   — unclosed, degenerate or self-intersecting ring.
- ``NotFoundError``          — no building at the location.
- ``SourceUnavailableError`` — a footprint source or geocoder could not answer.
- ``InternalError``          — anything unexpected.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for responses and logging.
"""

from __future__ import annotations

from typing import Any


class RoofAreaError(Exception):
    """Base exception for all roof-area domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"resolve_footprint"``, ``"compute_area"``).
        code: Machine-readable error code (e.g. ``"NO_BUILDING_FOUND"``).
        retryable: Whether the caller may retry the operation.
        context: Extra diagnostic fields (coordinates, sources consulted).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.context: dict[str, Any] = dict(context or {})
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "context": dict(self.context),
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(RoofAreaError):
    """Input or geometry validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)


class TransientError(RoofAreaError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class PermanentError(RoofAreaError):
    """Definitive failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class InvalidInputError(ValidationError):
    """Malformed coordinates, malformed GeoJSON, or wrong geometry type."""

    default_stage = "ingress"
    default_code = "INVALID_INPUT"


class InvalidGeometryError(ValidationError):
    """Ring is degenerate, self-intersecting, or cannot be closed."""

    default_stage = "geometry"
    default_code = "INVALID_GEOMETRY"


class NotFoundError(PermanentError):
    """No building (or address) exists for the query."""

    default_stage = "resolve_footprint"
    default_code = "NOT_FOUND"


class SourceUnavailableError(TransientError):
    """An upstream source failed with a network, timeout or parse error.

    Attributes:
        source: Name of the source that failed.
    """

    default_stage = "source"
    default_code = "SOURCE_UNAVAILABLE"

    def __init__(self, source: str, message: str, **kwargs: Any) -> None:
        self.source = source
        super().__init__(message, **kwargs)

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"


class InternalError(PermanentError):
    """Unexpected failure, never expected in normal operation."""

    default_stage = "internal"
    default_code = "INTERNAL_ERROR"
