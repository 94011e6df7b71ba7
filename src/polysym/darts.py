"""Rotation-system maps stored as a dart (half-edge) arena.

A rotation-system code lists, for every vertex in order, the cyclic
sequence of its 1-based neighbour ids followed by a ``0``.  The first
entry of the code is the vertex count::

    [4, 2, 3, 4, 0, 1, 4, 3, 0, 1, 2, 4, 0, 1, 3, 2, 0]   # tetrahedron

:func:`build_map` turns such a code into a :class:`RotationMap`: one dart
per listed neighbour, ``next``/``prev`` following the listed cyclic order,
``inverse`` pairing the two directions of each edge, and ``rightface``
filled in by tracing faces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from .context import NO_DART, DartArena, SymmetryContext
from .errors import MalformedMapError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DartColumns:
    """Plain-list copies of the arena columns of one map.

    Tight loops index these instead of the numpy arrays, which are slow
    to read one element at a time.
    """

    start: List[int]
    end: List[int]
    next: List[int]
    prev: List[int]
    inverse: List[int]


class RotationMap:
    """A spherical map held in the buffers of a :class:`SymmetryContext`.

    Vertices are ``0 … nv-1``, darts ``0 … ne-1`` (``ne`` counts both
    directions of every edge) and faces ``0 … nf-1``.  The darts of a
    vertex are contiguous in the arena, in ``next`` order starting at the
    vertex's first dart.
    """

    def __init__(self, context: SymmetryContext, nv: int, ne: int, nf: int = 0) -> None:
        self.context = context
        self.nv = nv
        self.ne = ne
        self.nf = nf
        self._columns: Optional[DartColumns] = None

    @property
    def arena(self) -> DartArena:
        return self.context.arena

    @property
    def edge_count(self) -> int:
        return self.ne // 2

    def euler_characteristic(self) -> int:
        return self.nv - self.ne // 2 + self.nf

    def dart_columns(self) -> DartColumns:
        """List copies of the ``start/end/next/prev/inverse`` columns.

        Built on first use and cached for the lifetime of this map.
        """
        if self._columns is None:
            arena = self.arena
            ne = self.ne
            self._columns = DartColumns(
                start=arena.start[:ne].tolist(),
                end=arena.end[:ne].tolist(),
                next=arena.next[:ne].tolist(),
                prev=arena.prev[:ne].tolist(),
                inverse=arena.inverse[:ne].tolist(),
            )
        return self._columns

    # ── Dart accessors ──────────────────────────────────────────────

    def start(self, dart: int) -> int:
        return int(self.arena.start[dart])

    def end(self, dart: int) -> int:
        return int(self.arena.end[dart])

    def next(self, dart: int) -> int:
        return int(self.arena.next[dart])

    def prev(self, dart: int) -> int:
        return int(self.arena.prev[dart])

    def inverse(self, dart: int) -> int:
        return int(self.arena.inverse[dart])

    def rightface(self, dart: int) -> int:
        return int(self.arena.rightface[dart])

    # ── Vertices, faces, edges ──────────────────────────────────────

    def degree(self, vertex: int) -> int:
        return int(self.context.degree[vertex])

    def first_dart(self, vertex: int) -> int:
        return int(self.context.first_dart[vertex])

    def face_start(self, face: int) -> int:
        return int(self.context.face_start[face])

    def face_size(self, face: int) -> int:
        return int(self.context.face_size[face])

    def vertex_darts(self, vertex: int) -> Iterator[int]:
        """Darts leaving *vertex*, in rotation order."""
        first = dart = self.first_dart(vertex)
        while True:
            yield dart
            dart = self.next(dart)
            if dart == first:
                return

    def face_darts(self, face: int) -> Iterator[int]:
        """Boundary darts of *face*, in tracing order."""
        first = dart = self.face_start(face)
        while True:
            yield dart
            dart = self.prev(self.inverse(dart))
            if dart == first:
                return

    def face_vertices(self, face: int) -> List[int]:
        """Corners of *face* in tracing order.

        The orientation matches the face cycles taken by
        :func:`polysym.builders.code_from_faces`.
        """
        return [self.start(d) for d in self.face_darts(face)]

    def edges(self) -> Iterator[int]:
        """One dart per undirected edge (the one with the smaller index)."""
        for dart in range(self.ne):
            if dart < self.inverse(dart):
                yield dart

    def find_dart(self, start: int, end: int) -> int:
        for dart in self.vertex_darts(start):
            if self.end(dart) == end:
                return dart
        raise KeyError(f"No dart from vertex {start} to vertex {end}")

    # ── Export ──────────────────────────────────────────────────────

    def rotation_system(self) -> List[List[int]]:
        """Return the 0-based neighbour cycle of every vertex."""
        return [[self.end(d) for d in self.vertex_darts(v)] for v in range(self.nv)]

    def to_code(self) -> List[int]:
        code = [self.nv]
        for v in range(self.nv):
            code.extend(self.end(d) + 1 for d in self.vertex_darts(v))
            code.append(0)
        return code

    def dual_code(self) -> List[int]:
        """Rotation-system code of the dual map (faces become vertices)."""
        code = [self.nf]
        for f in range(self.nf):
            code.extend(self.rightface(self.inverse(d)) + 1 for d in self.face_darts(f))
            code.append(0)
        return code

    def validate(self) -> List[str]:
        errors: list[str] = []
        for d in range(self.ne):
            if self.next(self.prev(d)) != d or self.prev(self.next(d)) != d:
                errors.append(f"Dart {d} has broken next/prev links")
            inv = self.inverse(d)
            if inv == NO_DART:
                errors.append(f"Dart {d} has no inverse")
                continue
            if self.inverse(inv) != d:
                errors.append(f"Dart {d} inverse is not an involution")
            if self.start(inv) != self.end(d):
                errors.append(f"Dart {d} inverse starts at {self.start(inv)}, expected {self.end(d)}")
            if not 0 <= self.rightface(d) < self.nf:
                errors.append(f"Dart {d} has no face")
        if sum(self.degree(v) for v in range(self.nv)) != self.ne:
            errors.append("Vertex degrees do not sum to the dart count")
        if sum(self.face_size(f) for f in range(self.nf)) != self.ne:
            errors.append("Face sizes do not sum to the dart count")
        if self.euler_characteristic() != 2:
            errors.append(f"Euler characteristic is {self.euler_characteristic()}, expected 2")
        return errors


# ═══════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════


def build_map(code: Sequence[int], context: Optional[SymmetryContext] = None) -> RotationMap:
    """Decode a rotation-system *code* into a :class:`RotationMap`.

    The map is written into *context* (a fresh one when omitted), which
    invalidates any map previously built in the same context.

    Raises :class:`MalformedMapError` for codes that do not describe a
    simple-enough spherical map within the context's limits.
    """
    ctx = context if context is not None else SymmetryContext()
    limits = ctx.limits
    arena = ctx.arena

    if len(code) == 0:
        raise MalformedMapError("Empty rotation-system code")
    nv = int(code[0])
    if nv > limits.max_vertices:
        raise MalformedMapError(
            f"Map has {nv} vertices but at most {limits.max_vertices} are supported"
        )
    if nv < limits.min_vertices:
        raise MalformedMapError(
            f"Map has {nv} vertices but at least {limits.min_vertices} are required"
        )

    ctx.maps_loaded += 1
    position = 1
    dart = 0
    for v in range(nv):
        first = dart
        ctx.first_dart[v] = first
        while True:
            if position >= len(code):
                raise MalformedMapError(f"Code ends before the list of vertex {v + 1} is closed")
            neighbour = int(code[position])
            position += 1
            if neighbour == 0:
                break
            if not 1 <= neighbour <= nv:
                raise MalformedMapError(
                    f"Vertex {v + 1} lists neighbour {neighbour} outside 1..{nv}"
                )
            if dart - first >= limits.max_degree:
                raise MalformedMapError(
                    f"Vertex {v + 1} exceeds the maximum degree {limits.max_degree}"
                )
            if dart >= arena.capacity:
                raise MalformedMapError(
                    f"Map has more than {arena.capacity} darts"
                )
            end = neighbour - 1
            arena.start[dart] = v
            arena.end[dart] = end
            arena.rightface[dart] = -1
            arena.prev[dart] = dart - 1
            arena.next[dart] = dart + 1
            arena.inverse[dart] = NO_DART
            if end < v:
                partner = _find_unpaired_dart(ctx, end, v)
                arena.inverse[dart] = partner
                arena.inverse[partner] = dart
            dart += 1

        if dart == first:
            raise MalformedMapError(f"Vertex {v + 1} has no neighbours")
        arena.prev[first] = dart - 1
        arena.next[dart - 1] = first
        ctx.degree[v] = dart - first

    ne = dart
    for d in range(ne):
        if arena.inverse[d] == NO_DART:
            raise MalformedMapError(
                f"No inverse for the edge from vertex {arena.start[d] + 1} "
                f"to vertex {arena.end[d] + 1}"
            )

    rmap = RotationMap(ctx, nv, ne)
    rmap.nf = _trace_faces(rmap)
    if rmap.euler_characteristic() != 2:
        raise MalformedMapError(
            f"Not a spherical embedding: {nv} vertices, {ne // 2} edges and "
            f"{rmap.nf} faces give Euler characteristic {rmap.euler_characteristic()}"
        )
    # components whose characteristics sum to 2 pass the Euler check
    if not _is_connected(rmap):
        raise MalformedMapError("Map is not connected")

    logger.debug("Built map with %d vertices, %d edges, %d faces", nv, ne // 2, rmap.nf)
    return rmap


def _find_unpaired_dart(ctx: SymmetryContext, start: int, end: int) -> int:
    arena = ctx.arena
    first = dart = int(ctx.first_dart[start])
    while True:
        if arena.end[dart] == end and arena.inverse[dart] == NO_DART:
            return dart
        dart = int(arena.next[dart])
        if dart == first:
            break
    raise MalformedMapError(
        f"Vertex {end + 1} lists vertex {start + 1}, but no matching edge "
        f"from vertex {start + 1} is left"
    )


def _is_connected(rmap: RotationMap) -> bool:
    ends = rmap.dart_columns().end
    seen = [False] * rmap.nv
    seen[0] = True
    stack = [0]
    reached = 1
    while stack:
        vertex = stack.pop()
        for dart in rmap.vertex_darts(vertex):
            neighbour = ends[dart]
            if not seen[neighbour]:
                seen[neighbour] = True
                reached += 1
                stack.append(neighbour)
    return reached == rmap.nv


def _trace_faces(rmap: RotationMap) -> int:
    """Assign ``rightface`` by walking ``prev(inverse(d))`` cycles."""
    ctx = rmap.context
    arena = ctx.arena
    arena.new_epoch()

    nf = 0
    for dart in range(rmap.ne):
        if arena.is_marked(dart):
            continue
        if nf >= ctx.limits.max_faces:
            raise MalformedMapError(f"Map has more than {ctx.limits.max_faces} faces")
        ctx.face_start[nf] = dart
        size = 0
        d = dart
        while True:
            arena.rightface[d] = nf
            arena.set_mark(d)
            d = int(arena.prev[arena.inverse[d]])
            size += 1
            if d == dart:
                break
        ctx.face_size[nf] = size
        nf += 1
    return nf
