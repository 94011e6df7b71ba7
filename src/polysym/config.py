"""Size limits for rotation-system maps.

All scratch buffers of a :class:`~polysym.context.SymmetryContext` are
allocated from a :class:`MapLimits`, so the limits also fix the memory
footprint of a run.

Usage
-----
>>> from polysym.config import MapLimits, SMALL_LIMITS
>>> MapLimits(max_vertices=60).max_darts
348
"""

from __future__ import annotations

from dataclasses import dataclass


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MapLimits:
    """Bounds on the maps a context can hold.

    Attributes
    ----------
    max_vertices : int
        Largest vertex count accepted by the map builder.
    min_vertices : int
        Smallest vertex count accepted; smaller maps are degenerate.

    The dart, face and degree bounds follow from *max_vertices* for a
    simple planar graph: at most ``3n - 6`` edges (``6n - 12`` darts),
    ``2n - 4`` faces and degree ``n - 1``.
    """

    max_vertices: int = 1000
    min_vertices: int = 4

    def __post_init__(self) -> None:
        if self.min_vertices < 1:
            raise ValueError("min_vertices must be >= 1")
        if self.max_vertices < max(self.min_vertices, 3):
            raise ValueError("max_vertices must be >= max(min_vertices, 3)")

    @property
    def max_darts(self) -> int:
        return 6 * self.max_vertices - 12

    @property
    def max_faces(self) -> int:
        return 2 * self.max_vertices - 4

    @property
    def max_degree(self) -> int:
        return self.max_vertices - 1


# ═══════════════════════════════════════════════════════════════════
# Presets
# ═══════════════════════════════════════════════════════════════════

DEFAULT_LIMITS = MapLimits()
"""Up to 1000 vertices."""

SMALL_LIMITS = MapLimits(max_vertices=255)
"""Maps that fit the single-byte ``planar_code`` encoding."""

LARGE_LIMITS = MapLimits(max_vertices=65535)
"""Maps that fit the two-byte ``planar_code`` encoding."""
