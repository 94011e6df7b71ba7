"""Rotation systems of standard solids.

Every builder describes its solid by oriented face cycles (each edge
traversed once in each direction) and derives the rotation system with
:func:`code_from_faces`.  Vertex ids are 0-based in the face lists; the
returned codes use the usual 1-based neighbour ids.

Layouts
-------
Prisms and antiprisms number the top ring ``0 … n-1`` and the bottom
ring ``n … 2n-1``; pyramids number the base ``0 … n-1`` and put the apex
at ``n``.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from .codes import code_from_rotation
from .darts import build_map


def code_from_faces(faces: Sequence[Sequence[int]]) -> List[int]:
    """Derive a rotation-system code from consistently oriented faces.

    In a face ``(…, u, v, w, …)`` the neighbours *w* and *u* of *v* are
    consecutive around *v*; chaining these steps gives the rotation at
    every vertex.  Raises ``ValueError`` if the faces do not close up
    into a single cycle around each vertex.
    """
    successor: Dict[int, Dict[int, int]] = {}
    for face in faces:
        size = len(face)
        if size < 2:
            raise ValueError(f"Face {list(face)} has fewer than 2 vertices")
        for i, v in enumerate(face):
            u = face[i - 1]
            w = face[(i + 1) % size]
            around = successor.setdefault(v, {})
            if w in around:
                raise ValueError(f"Directed edge {v} -> {w} appears in two faces")
            around[w] = u

    nv = len(successor)
    if sorted(successor) != list(range(nv)):
        raise ValueError("Face vertices must be numbered 0 … n-1")

    rotation: List[List[int]] = []
    for v in range(nv):
        around = successor[v]
        first = min(around)
        cycle = [first]
        w = around[first]
        while w != first:
            if w not in around or len(cycle) > len(around):
                raise ValueError(f"Faces do not close up around vertex {v}")
            cycle.append(w)
            w = around[w]
        if len(cycle) != len(around):
            raise ValueError(f"Vertex {v} is pinched: faces form several cycles around it")
        rotation.append(cycle)
    return code_from_rotation(rotation)


def _check_sides(n: int, minimum: int = 3) -> None:
    if n < minimum:
        raise ValueError(f"n must be >= {minimum}")


def _ring(start: int, n: int, i: int) -> int:
    return start + i % n


# ═══════════════════════════════════════════════════════════════════
# Axial families
# ═══════════════════════════════════════════════════════════════════


def pyramid_code(n: int) -> List[int]:
    """n-gonal pyramid (``Cnv``; ``Td`` for n = 3)."""
    _check_sides(n)
    apex = n
    faces = [[n - 1 - i for i in range(n)]]
    faces += [[apex, i, (i + 1) % n] for i in range(n)]
    return code_from_faces(faces)


def _prism_caps(n: int) -> List[List[int]]:
    top = [i for i in range(n)]
    bottom = [n + (n - 1 - i) for i in range(n)]
    return [top, bottom]


def _prism_faces(n: int) -> List[List[int]]:
    faces = _prism_caps(n)
    for i in range(n):
        faces.append([_ring(0, n, i + 1), i, n + i, _ring(n, n, i + 1)])
    return faces


def prism_code(n: int) -> List[int]:
    """n-gonal prism (``Dnh``; ``Oh`` for n = 4)."""
    _check_sides(n)
    return code_from_faces(_prism_faces(n))


def twisted_prism_code(n: int) -> List[int]:
    """n-gonal prism whose sides carry a subdivided diagonal, all leaning
    the same way.

    The diagonals keep the rotations of the prism but break every mirror,
    giving the chiral group ``Dn``.  The subdividing vertices are
    ``2n … 3n-1``.
    """
    _check_sides(n)
    return code_from_faces(_twisted_prism_faces(n))


def _twisted_prism_faces(n: int) -> List[List[int]]:
    faces = _prism_caps(n)
    for i in range(n):
        top, top_next = i, _ring(0, n, i + 1)
        bottom, bottom_next = n + i, _ring(n, n, i + 1)
        middle = 2 * n + i
        faces.append([top_next, top, middle, bottom_next])
        faces.append([top, bottom, bottom_next, middle])
    return faces


def _antiprism_faces(n: int, capped: bool) -> List[List[int]]:
    faces: List[List[int]] = []
    for i in range(n):
        top, top_next = i, _ring(0, n, i + 1)
        bottom, bottom_next = n + i, _ring(n, n, i + 1)
        faces.append([top_next, top, bottom])
        faces.append([top_next, bottom, bottom_next])
    if not capped:
        return _prism_caps(n) + faces
    apex_top, apex_bottom = 2 * n, 2 * n + 1
    for i in range(n):
        faces.append([apex_top, i, _ring(0, n, i + 1)])
        faces.append([apex_bottom, _ring(n, n, i + 1), n + i])
    return faces


def antiprism_code(n: int) -> List[int]:
    """n-gonal antiprism (``Dnd``; ``Oh`` for n = 3)."""
    _check_sides(n)
    return code_from_faces(_antiprism_faces(n, capped=False))


# ═══════════════════════════════════════════════════════════════════
# Platonic solids
# ═══════════════════════════════════════════════════════════════════


def tetrahedron_code() -> List[int]:
    return pyramid_code(3)


def cube_code() -> List[int]:
    return prism_code(4)


def octahedron_code() -> List[int]:
    return antiprism_code(3)


def icosahedron_code() -> List[int]:
    """Pentagonal antiprism with a pyramid on each pentagon."""
    return code_from_faces(_antiprism_faces(5, capped=True))


def dodecahedron_code() -> List[int]:
    """Dual of the icosahedron."""
    return build_map(icosahedron_code()).dual_code()


# ═══════════════════════════════════════════════════════════════════
# Decorated solids
# ═══════════════════════════════════════════════════════════════════
#
# A decoration adds vertices inside faces or along edges so that only
# part of a solid's symmetry survives.  New vertex ids follow the solid's
# own ids, so every code stays numbered 0 … n-1.


def _split_face(cycle: Sequence[int], targets: Iterable[int], centre: int) -> List[List[int]]:
    """Join a new *centre* vertex to *targets* on the face *cycle*.

    Returns the wedges that replace the face, oriented like *cycle*.
    """
    positions = sorted(list(cycle).index(t) for t in targets)
    if len(positions) < 2:
        raise ValueError("A face split needs at least two targets")
    size = len(cycle)
    wedges: List[List[int]] = []
    for j, first in enumerate(positions):
        last = positions[(j + 1) % len(positions)]
        i = first
        wedge = [cycle[i]]
        while i != last:
            i = (i + 1) % size
            wedge.append(cycle[i])
        wedge.append(centre)
        wedges.append(wedge)
    return wedges


def _subdivide_edges(
    faces: Sequence[Sequence[int]], count: int, first_id: int
) -> Tuple[List[List[int]], Dict[Tuple[int, int], List[int]]]:
    """Put *count* new vertices on every edge of *faces*.

    Returns the expanded face cycles and, per directed edge ``(a, b)``,
    the new vertices in order from *a* to *b*.
    """
    points: Dict[Tuple[int, int], List[int]] = {}
    next_id = first_id
    cycles: List[List[int]] = []
    for face in faces:
        cycle: List[int] = []
        for i, a in enumerate(face):
            b = face[(i + 1) % len(face)]
            if (a, b) not in points:
                run = list(range(next_id, next_id + count))
                next_id += count
                points[(a, b)] = run
                points[(b, a)] = run[::-1]
            cycle.append(a)
            cycle.extend(points[(a, b)])
        cycles.append(cycle)
    return cycles, points


def coned_twisted_prism_code(n: int) -> List[int]:
    """Twisted prism with a pyramid on its top cap (``Cn``).

    The apex tells the caps apart, which removes the half-turns of the
    twisted prism.  The apex is vertex ``3n``.
    """
    _check_sides(n)
    top, *rest = _twisted_prism_faces(n)
    return code_from_faces(_split_face(top, top, 3 * n) + rest)


def flagged_prism_code(n: int) -> List[int]:
    """Prism whose side faces each carry a degree-2 flag (``Cnh``).

    The flag of side ``i`` is vertex ``2n + i``, joined to both ends of
    the side's trailing vertical edge.  The flags all point the same way
    round the axis, so the horizontal mirror survives but the vertical
    mirrors and half-turns do not.
    """
    _check_sides(n)
    faces = _prism_faces(n)
    decorated = faces[:2]
    for i, side in enumerate(faces[2:]):
        top_next, bottom_next = side[0], side[3]
        decorated += _split_face(side, [top_next, bottom_next], 2 * n + i)
    return code_from_faces(decorated)


def flagged_antiprism_code(n: int) -> List[int]:
    """Antiprism with a degree-2 flag on one slanted edge of every
    side triangle (``S2n``).

    An upper triangle flags its edge ``i -- n+i``, a lower triangle its
    edge ``n+i -- i+1``.  The rotoreflection of the antiprism swaps the
    two kinds of triangle and keeps the pattern; the mirrors and
    half-turns reverse it.
    """
    _check_sides(n)
    faces = _antiprism_faces(n, capped=False)
    decorated = faces[:2]
    sides = faces[2:]
    for i in range(n):
        upper, lower = sides[2 * i], sides[2 * i + 1]
        decorated += _split_face(upper, [upper[1], upper[2]], 2 * n + i)
        decorated += _split_face(lower, [lower[0], lower[1]], 3 * n + i)
    return code_from_faces(decorated)


# Per cube face (in ``_prism_faces(4)`` order), the index k of the face
# edge whose midpoint starts the ridge; the ridge ends on edge k + 2.
# Opposite faces carry parallel ridges, adjacent faces perpendicular ones.
_CUBE_RIDGES = (1, 1, 0, 1, 0, 1)

# Alternate corners of the cube, one regular tetrahedron.
_CUBE_TETRAHEDRON = frozenset((0, 2, 5, 7))


def _ridged_cube_faces(spoke_corners: frozenset = frozenset()) -> List[List[int]]:
    faces = _prism_faces(4)
    cycles, points = _subdivide_edges(faces, 1, 8)
    centre = 8 + 12
    decorated: List[List[int]] = []
    for offset, (face, cycle, k) in enumerate(zip(faces, cycles, _CUBE_RIDGES)):
        targets = [
            points[(face[k], face[k + 1])][0],
            points[(face[k + 2], face[(k + 3) % 4])][0],
        ]
        targets += [v for v in face if v in spoke_corners]
        decorated += _split_face(cycle, targets, centre + offset)
    return decorated


def pyritohedral_cube_code() -> List[int]:
    """Cube with a ridge across every face, pyritohedron style (``Th``).

    Every edge gets a midpoint and every face a centre; the ridge runs
    midpoint, centre, midpoint.
    """
    return code_from_faces(_ridged_cube_faces())


def tetrahedral_cube_code() -> List[int]:
    """Ridged cube whose face centres are also joined to the corners of
    an inscribed tetrahedron (``T``).

    The ridges keep ``Th``, the tetrahedron keeps ``Td``; only the
    rotations they share survive.
    """
    return code_from_faces(_ridged_cube_faces(_CUBE_TETRAHEDRON))


def pinwheel_code(code: Sequence[int]) -> List[int]:
    """Pinwheel decoration of any map: keeps its rotations only.

    Every edge gets two new vertices and every face a centre joined to
    the new vertex that follows each corner in the face's orientation.
    A reflection reverses face orientations and so maps each spoke onto
    the other new vertex of its edge.  The cube gives ``O`` and the
    dodecahedron ``I``.
    """
    rmap = build_map(code)
    faces = [rmap.face_vertices(f) for f in range(rmap.nf)]
    cycles, points = _subdivide_edges(faces, 2, rmap.nv)
    centre = rmap.nv + 2 * rmap.edge_count
    decorated: List[List[int]] = []
    for offset, (face, cycle) in enumerate(zip(faces, cycles)):
        targets = [points[(a, face[(i + 1) % len(face)])][0] for i, a in enumerate(face)]
        decorated += _split_face(cycle, targets, centre + offset)
    return code_from_faces(decorated)


SOLIDS: Dict[str, Callable[[int], List[int]]] = {
    "tetrahedron": lambda n: tetrahedron_code(),
    "cube": lambda n: cube_code(),
    "octahedron": lambda n: octahedron_code(),
    "dodecahedron": lambda n: dodecahedron_code(),
    "icosahedron": lambda n: icosahedron_code(),
    "pyramid": pyramid_code,
    "prism": prism_code,
    "antiprism": antiprism_code,
    "twisted-prism": twisted_prism_code,
    "coned-twisted-prism": coned_twisted_prism_code,
    "flagged-prism": flagged_prism_code,
    "flagged-antiprism": flagged_antiprism_code,
    "pyritohedral-cube": lambda n: pyritohedral_cube_code(),
    "tetrahedral-cube": lambda n: tetrahedral_cube_code(),
    "pinwheel-cube": lambda n: pinwheel_code(cube_code()),
    "pinwheel-dodecahedron": lambda n: pinwheel_code(dodecahedron_code()),
}
