"""Point-group classification of a rotation map.

The automorphism group of a spherical map is realised by a finite point
group.  :func:`classify` identifies it from the group order, the number of
orientation-reversing automorphisms and the rotation axes found through
vertices, face centres and edge midpoints.

Rules, first match wins:

1. Chiral with order < 4 or odd order: cyclic, ``Cn``.
2. Order 2 with one reversing automorphism: ``C1h``.
3. Scan vertices for rotation folds.  A fold above 5 settles an axial
   group at once; more than two 3-fold centres, or two different folds
   among 3, 4 and 5, settle a polyhedral group.
4. Same scan over faces.
5. Add 2-fold edge-midpoint axes and resolve the axial group around the
   largest fold.
6. Polyhedral groups are told apart by order (and, at order 24, by
   chirality and fixed points).

Every count that fits none of the patterns raises
:class:`~polysym.errors.SymmetryInconsistencyError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .automorphisms import AutomorphismGroup, determine_automorphisms
from .certificate import matches_canonical, set_canonical
from .darts import RotationMap
from .errors import SymmetryInconsistencyError
from .groups import PointGroup

logger = logging.getLogger(__name__)

MAX_POLYHEDRAL_FOLD = 5


@dataclass(frozen=True)
class AxisCenter:
    """Where a rotation axis pierces the map: a vertex, face or edge."""

    kind: str
    index: int


# ═══════════════════════════════════════════════════════════════════
# Rotation folds
# ═══════════════════════════════════════════════════════════════════


def rotation_fold_at_vertex(rmap: RotationMap, vertex: int) -> int:
    """Largest fold of a rotation about *vertex* (1 if there is none)."""
    degree = rmap.degree(vertex)
    base = image = rmap.first_dart(vertex)
    length = set_canonical(rmap, base)
    for step in range(1, degree // 2 + 1):
        image = rmap.next(image)
        if matches_canonical(rmap, length, image):
            return degree // step
    return 1


def rotation_fold_at_face(rmap: RotationMap, face: int) -> int:
    """Largest fold of a rotation about the centre of *face*."""
    size = rmap.face_size(face)
    base = image = rmap.face_start(face)
    length = set_canonical(rmap, base)
    for step in range(1, size // 2 + 1):
        image = rmap.inverse(rmap.next(image))
        if matches_canonical(rmap, length, image):
            return size // step
    return 1


def has_rotation_at_edge(rmap: RotationMap, dart: int) -> bool:
    """True if a half-turn about the midpoint of *dart*'s edge exists."""
    length = set_canonical(rmap, dart)
    return matches_canonical(rmap, length, rmap.inverse(dart))


class _AxisScan:
    """Fold tallies gathered while scanning vertices and faces."""

    def __init__(self) -> None:
        self.fold_counts = [0] * (MAX_POLYHEDRAL_FOLD + 1)
        self.best_fold = -1
        self.best_center: Optional[AxisCenter] = None

    def record(self, fold: int, center: AxisCenter) -> None:
        self.fold_counts[fold] += 1
        if fold > self.best_fold:
            self.best_fold = fold
            self.best_center = center

    def rules_out_axial(self) -> bool:
        if self.fold_counts[3] > 2:
            return True
        kinds = sum(1 for fold in range(3, MAX_POLYHEDRAL_FOLD + 1) if self.fold_counts[fold])
        return kinds > 1


# ═══════════════════════════════════════════════════════════════════
# Classification
# ═══════════════════════════════════════════════════════════════════


def classify(rmap: RotationMap, group: Optional[AutomorphismGroup] = None) -> PointGroup:
    """Return the point group of *rmap*.

    *group* may be passed when the automorphisms are already known.
    """
    if group is None:
        group = determine_automorphisms(rmap)
    result = _classify(rmap, group)
    logger.debug("Classified map as %s (order %d)", result.name, group.order)
    return result


def _classify(rmap: RotationMap, group: AutomorphismGroup) -> PointGroup:
    order = group.order
    mirrors = group.reversing_count

    # D1 coincides with C2, so small chiral groups are cyclic
    if mirrors == 0 and (order < 4 or order % 2 == 1):
        return PointGroup("Cn", order)
    if mirrors == 1 and order == 2:
        return PointGroup("Cnh", 1)

    scan = _AxisScan()

    for vertex in range(rmap.nv):
        fold = rotation_fold_at_vertex(rmap, vertex)
        center = AxisCenter("vertex", vertex)
        if fold > MAX_POLYHEDRAL_FOLD:
            logger.debug("%d-fold axis through vertex %d", fold, vertex)
            return classify_axial(group, fold, center)
        scan.record(fold, center)
        if scan.rules_out_axial():
            logger.debug("Vertex scan rules out axial groups at vertex %d", vertex)
            return classify_polyhedral(group)

    for face in range(rmap.nf):
        fold = rotation_fold_at_face(rmap, face)
        center = AxisCenter("face", face)
        if fold > MAX_POLYHEDRAL_FOLD:
            logger.debug("%d-fold axis through face %d", fold, face)
            return classify_axial(group, fold, center)
        scan.record(fold, center)
        if scan.rules_out_axial():
            logger.debug("Face scan rules out axial groups at face %d", face)
            return classify_polyhedral(group)

    if scan.fold_counts[3] > 2:
        return classify_polyhedral(group)

    for dart in rmap.edges():
        if has_rotation_at_edge(rmap, dart):
            scan.record(2, AxisCenter("edge", dart))
    return classify_axial(group, scan.best_fold, scan.best_center)


def classify_axial(group: AutomorphismGroup, fold: int, center: AxisCenter) -> PointGroup:
    """Resolve one of ``Cn … Dnd`` around a *fold*-fold axis at *center*."""
    order = group.order

    if group.reversing_count == 0:
        if order == fold:
            return PointGroup("Cn", fold)
        if order == 2 * fold:
            return PointGroup("Dn", fold)
        raise SymmetryInconsistencyError(
            f"Illegal order for chiral axial symmetry group containing a "
            f"{fold}-fold rotation: {order}"
        )

    if order == 4 * fold:
        fixed = group.count_reversing_with_fixed_point()
        if fixed == fold:
            return PointGroup("Dnd", fold)
        if fixed == fold + 1:
            return PointGroup("Dnh", fold)
        raise SymmetryInconsistencyError(
            f"Illegal number of orientation-reversing automorphisms with fixed "
            f"points for an achiral axial group of order {order} containing a "
            f"{fold}-fold rotation: {fixed}"
        )

    if order == 2 * fold:
        if _center_stabilised(group, center):
            return PointGroup("Cnv", fold)
        if group.has_reversing_with_fixed_point():
            return PointGroup("Cnh", fold)
        return PointGroup("S2n", fold)

    raise SymmetryInconsistencyError(
        f"Illegal order for achiral axial symmetry group containing a "
        f"{fold}-fold rotation: {order}"
    )


def classify_polyhedral(group: AutomorphismGroup) -> PointGroup:
    """Resolve one of ``T … Ih`` from the group order."""
    order = group.order
    if order == 120:
        return PointGroup("Ih")
    if order == 60:
        return PointGroup("I")
    if order == 48:
        return PointGroup("Oh")
    if order == 24:
        if group.reversing_count == 0:
            return PointGroup("O")
        # Td and Th share order and chirality; only the mirrors differ
        fixed = group.count_reversing_with_fixed_point()
        if fixed == 6:
            return PointGroup("Td")
        if fixed == 3:
            return PointGroup("Th")
        raise SymmetryInconsistencyError(
            f"Illegal number of orientation-reversing automorphisms with fixed "
            f"points for an achiral polyhedral group of order 24: {fixed}"
        )
    if order == 12:
        return PointGroup("T")
    raise SymmetryInconsistencyError(
        f"Illegal order for a polyhedral symmetry group: {order}"
    )


def _center_stabilised(group: AutomorphismGroup, center: AxisCenter) -> bool:
    if center.kind == "vertex":
        return group.reversing_stabilises_vertex(center.index)
    if center.kind == "edge":
        return group.reversing_stabilises_edge(center.index)
    return group.reversing_stabilises_face(center.index)
