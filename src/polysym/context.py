"""Per-run scratch state shared by the map builder and the symmetry stages.

A :class:`SymmetryContext` owns every buffer that the pipeline mutates:
the dart arena, the vertex and face tables, the certificate buffers and
the automorphism table.  Buffers are allocated once and reused for each
map the context loads; marks are invalidated by bumping an epoch rather
than by clearing the mark array.

Maps and automorphism groups built in a context are views into these
buffers and are only valid until the context loads the next map.  Give
each worker its own context when processing maps in parallel.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .config import DEFAULT_LIMITS, MapLimits

NO_DART = -1

_EPOCH_LIMIT = 2**62


class DartArena:
    """Dense dart storage; every link is an integer index into the arena."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self.start = np.full(capacity, -1, dtype=np.int64)
        self.end = np.full(capacity, -1, dtype=np.int64)
        self.rightface = np.full(capacity, -1, dtype=np.int64)
        self.next = np.full(capacity, NO_DART, dtype=np.int64)
        self.prev = np.full(capacity, NO_DART, dtype=np.int64)
        self.inverse = np.full(capacity, NO_DART, dtype=np.int64)
        self.mark = np.zeros(capacity, dtype=np.int64)
        self.epoch = 0

    def new_epoch(self) -> int:
        """Invalidate all marks in O(1)."""
        self.epoch += 1
        if self.epoch >= _EPOCH_LIMIT:
            self.mark.fill(0)
            self.epoch = 1
        return self.epoch

    def set_mark(self, dart: int) -> None:
        self.mark[dart] = self.epoch

    def is_marked(self, dart: int) -> bool:
        return bool(self.mark[dart] == self.epoch)


class SymmetryContext:
    """Reusable buffers for one sequential stream of maps."""

    def __init__(self, limits: MapLimits = DEFAULT_LIMITS) -> None:
        self.limits = limits
        n = limits.max_vertices

        self.arena = DartArena(limits.max_darts)
        self.first_dart = np.full(n, NO_DART, dtype=np.int64)
        self.degree = np.zeros(n, dtype=np.int64)
        self.face_start = np.full(limits.max_faces, NO_DART, dtype=np.int64)
        self.face_size = np.zeros(limits.max_faces, dtype=np.int64)

        # Certificate engine scratch
        certificate_length = limits.max_darts + n
        self.certificate = np.empty(certificate_length, dtype=np.int64)
        self.labelling = np.empty(n, dtype=np.int64)
        self.alternate_certificate = np.empty(certificate_length, dtype=np.int64)
        self.alternate_labelling = np.empty(n, dtype=np.int64)
        self.canonical_sequence: List[int] = []

        # Automorphism table; rows grow on demand, columns cover the map
        self._automorphisms = np.empty((0, 0), dtype=np.int64)
        self._reversing = np.empty(0, dtype=bool)
        self._automorphism_count = 0

        self.maps_loaded = 0

    # ── Automorphism table ──────────────────────────────────────────

    def clear_automorphisms(self, nv: int) -> None:
        rows, cols = self._automorphisms.shape
        if cols < nv:
            rows = max(rows, 8)
            self._automorphisms = np.empty((rows, nv), dtype=np.int64)
            self._reversing = np.zeros(rows, dtype=bool)
        self._automorphism_count = 0

    def record_automorphism(self, mapping: Sequence[int], reversing: bool) -> None:
        rows, cols = self._automorphisms.shape
        if self._automorphism_count == rows:
            grown = np.empty((max(2 * rows, 8), cols), dtype=np.int64)
            grown[:rows] = self._automorphisms
            flags = np.zeros(grown.shape[0], dtype=bool)
            flags[:rows] = self._reversing
            self._automorphisms = grown
            self._reversing = flags
        row = self._automorphism_count
        self._automorphisms[row, : len(mapping)] = mapping
        self._reversing[row] = reversing
        self._automorphism_count += 1

    def automorphism_table(self, nv: int) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(permutations, reversing)`` views of the recorded rows."""
        count = self._automorphism_count
        return self._automorphisms[:count, :nv], self._reversing[:count]
