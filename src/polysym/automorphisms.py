"""Enumeration of the combinatorial automorphisms of a rotation map.

The certificate from the first dart of vertex 0 fixes a canonical vertex
labelling.  Every dart whose start vertex has the same degree is then
tried as an image of that base dart, once per orientation; a matching
certificate yields an automorphism.  Each BFS visits every vertex, so the
recorded mappings are bijections by construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from .certificate import matches_canonical, set_canonical
from .darts import RotationMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Automorphism:
    """Vertex permutation ``v -> mapping[v]`` with its orientation type."""

    mapping: tuple[int, ...]
    reversing: bool = False

    def __call__(self, vertex: int) -> int:
        return self.mapping[vertex]

    def compose(self, other: "Automorphism") -> "Automorphism":
        """Return ``self ∘ other`` (apply *other* first)."""
        return Automorphism(
            tuple(self.mapping[v] for v in other.mapping),
            self.reversing != other.reversing,
        )

    def inverse(self) -> "Automorphism":
        inverse = [0] * len(self.mapping)
        for v, image in enumerate(self.mapping):
            inverse[image] = v
        return Automorphism(tuple(inverse), self.reversing)

    def is_identity(self) -> bool:
        return all(v == image for v, image in enumerate(self.mapping))

    def fixed_vertices(self) -> List[int]:
        return [v for v, image in enumerate(self.mapping) if v == image]


class AutomorphismGroup:
    """The automorphisms found for one map.

    *permutations* has one row per automorphism (row 0 is the identity)
    and *reversing* flags the orientation-reversing rows.  Both may be
    views into the map's context.
    """

    def __init__(self, rmap: RotationMap, permutations: np.ndarray, reversing: np.ndarray) -> None:
        self.rmap = rmap
        self.permutations = permutations
        self.reversing = reversing

    @property
    def order(self) -> int:
        return int(self.permutations.shape[0])

    @property
    def reversing_count(self) -> int:
        return int(np.count_nonzero(self.reversing))

    @property
    def is_chiral(self) -> bool:
        return self.reversing_count == 0

    def __len__(self) -> int:
        return self.order

    def __getitem__(self, index: int) -> Automorphism:
        return Automorphism(
            tuple(int(v) for v in self.permutations[index]),
            bool(self.reversing[index]),
        )

    def __iter__(self) -> Iterator[Automorphism]:
        for index in range(self.order):
            yield self[index]

    # ── Fixed points ────────────────────────────────────────────────

    def _edge_endpoints(self) -> Tuple[np.ndarray, np.ndarray]:
        darts = np.fromiter(self.rmap.edges(), dtype=np.int64)
        arena = self.rmap.arena
        return arena.start[darts], arena.end[darts]

    def is_reversing_with_fixed_point(self, index: int) -> bool:
        """True if row *index* is reversing and fixes a vertex or an edge.

        An edge counts as fixed when its endpoints are swapped; a fixed
        directed edge already fixes its vertices, and a fixed face
        centre implies a fixed vertex or edge.
        """
        if not self.reversing[index]:
            return False
        perm = self.permutations[index]
        if np.any(perm == np.arange(perm.shape[0])):
            return True
        starts, ends = self._edge_endpoints()
        return bool(np.any((perm[starts] == ends) & (perm[ends] == starts)))

    def count_reversing_with_fixed_point(self) -> int:
        return sum(1 for i in range(self.order) if self.is_reversing_with_fixed_point(i))

    def has_reversing_with_fixed_point(self) -> bool:
        return any(self.is_reversing_with_fixed_point(i) for i in range(self.order))

    # ── Stabilisers ─────────────────────────────────────────────────

    def reversing_stabilises_vertex(self, vertex: int) -> bool:
        return bool(np.any(self.reversing & (self.permutations[:, vertex] == vertex)))

    def reversing_stabilises_edge(self, dart: int) -> bool:
        """True if a reversing automorphism maps the edge of *dart* onto itself."""
        a, b = self.rmap.start(dart), self.rmap.end(dart)
        images_a = self.permutations[:, a]
        images_b = self.permutations[:, b]
        same = (images_a == a) & (images_b == b)
        swapped = (images_a == b) & (images_b == a)
        return bool(np.any(self.reversing & (same | swapped)))

    def reversing_stabilises_face(self, face: int) -> bool:
        """True if a reversing automorphism maps *face* onto itself.

        A reversing map sends the face on the right of a dart to the face
        on the left of its image, hence the check on the image's inverse.
        """
        rmap = self.rmap
        dart = rmap.face_start(face)
        a, b = rmap.start(dart), rmap.end(dart)
        for index in np.flatnonzero(self.reversing):
            perm = self.permutations[index]
            image = rmap.find_dart(int(perm[a]), int(perm[b]))
            if rmap.rightface(rmap.inverse(image)) == face:
                return True
        return False


def determine_automorphisms(rmap: RotationMap) -> AutomorphismGroup:
    """Enumerate every automorphism of *rmap*, identity first."""
    ctx = rmap.context
    nv = rmap.nv
    degree = ctx.degree
    starts = rmap.arena.start

    ctx.clear_automorphisms(nv)
    ctx.record_automorphism(np.arange(nv), False)

    base = rmap.first_dart(0)
    length = set_canonical(rmap, base)
    inverse_canonical = np.empty(nv, dtype=np.int64)
    inverse_canonical[ctx.labelling[:nv]] = np.arange(nv)

    base_degree = degree[0]
    for dart in range(rmap.ne):
        if degree[starts[dart]] != base_degree:
            continue
        if dart != base and matches_canonical(rmap, length, dart):
            ctx.record_automorphism(inverse_canonical[ctx.alternate_labelling[:nv]], False)
        if matches_canonical(rmap, length, dart, reverse=True):
            ctx.record_automorphism(inverse_canonical[ctx.alternate_labelling[:nv]], True)

    permutations, reversing = ctx.automorphism_table(nv)
    group = AutomorphismGroup(rmap, permutations, reversing)
    logger.debug(
        "Found %d automorphisms (%d orientation-reversing)",
        group.order,
        group.reversing_count,
    )
    return group
