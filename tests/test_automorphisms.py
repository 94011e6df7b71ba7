"""Tests for automorphism enumeration."""

import numpy as np
import pytest

from polysym.automorphisms import Automorphism, determine_automorphisms
from polysym.builders import (
    antiprism_code,
    cube_code,
    dodecahedron_code,
    flagged_antiprism_code,
    flagged_prism_code,
    icosahedron_code,
    octahedron_code,
    pinwheel_code,
    prism_code,
    pyramid_code,
    pyritohedral_cube_code,
    tetrahedral_cube_code,
    tetrahedron_code,
    twisted_prism_code,
)
from polysym.certificate import build_certificate
from polysym.darts import build_map


ORDERS = [
    (tetrahedron_code, (), 24, 12),
    (cube_code, (), 48, 24),
    (octahedron_code, (), 48, 24),
    (icosahedron_code, (), 120, 60),
    (dodecahedron_code, (), 120, 60),
    (prism_code, (5,), 20, 10),
    (antiprism_code, (5,), 20, 10),
    (pyramid_code, (6,), 12, 6),
    (twisted_prism_code, (5,), 10, 0),
    (flagged_prism_code, (3,), 6, 3),
    (flagged_antiprism_code, (3,), 6, 3),
    (pyritohedral_cube_code, (), 24, 12),
    (tetrahedral_cube_code, (), 12, 0),
    (lambda: pinwheel_code(cube_code()), (), 24, 0),
]


def _group(code_fn, args):
    rmap = build_map(code_fn(*args))
    return rmap, determine_automorphisms(rmap)


class TestOrders:
    @pytest.mark.parametrize("code_fn,args,order,reversing", ORDERS)
    def test_counts(self, code_fn, args, order, reversing):
        _, group = _group(code_fn, args)
        assert group.order == order
        assert group.reversing_count == reversing

    def test_asymmetric_map(self, asymmetric_code):
        group = determine_automorphisms(build_map(asymmetric_code))
        assert group.order == 1
        assert group[0].is_identity()

    def test_mirror_only_map(self, mirror_only_code):
        group = determine_automorphisms(build_map(mirror_only_code))
        assert group.order == 2
        assert group.reversing_count == 1


class TestGroupStructure:
    @pytest.mark.parametrize("code_fn,args", [
        (cube_code, ()),
        (prism_code, (6,)),
        (twisted_prism_code, (5,)),
        (pyramid_code, (4,)),
    ])
    def test_closed_under_composition_and_inverse(self, code_fn, args):
        _, group = _group(code_fn, args)
        elements = set(group)
        for a in elements:
            assert a.inverse() in elements
            for b in elements:
                assert a.compose(b) in elements

    def test_identity_first_and_unique(self):
        _, group = _group(icosahedron_code, ())
        elements = list(group)
        assert elements[0].is_identity()
        assert not elements[0].reversing
        assert sum(1 for a in elements if a.is_identity() and not a.reversing) == 1
        assert len(set(elements)) == len(elements)

    def test_rows_are_bijections(self):
        rmap, group = _group(dodecahedron_code, ())
        for row in group.permutations:
            assert sorted(row.tolist()) == list(range(rmap.nv))

    def test_rows_preserve_adjacency(self):
        rmap, group = _group(prism_code, (5,))
        edges = {frozenset((rmap.start(d), rmap.end(d))) for d in rmap.edges()}
        for aut in group:
            assert {frozenset((aut(a), aut(b))) for a, b in map(tuple, edges)} == edges

    @pytest.mark.parametrize("code_fn,args", [
        (tetrahedron_code, ()),
        (antiprism_code, (4,)),
        (twisted_prism_code, (6,)),
    ])
    def test_image_dart_has_canonical_certificate(self, code_fn, args):
        rmap, group = _group(code_fn, args)
        base = rmap.first_dart(0)
        canonical = build_certificate(rmap, base)
        a, b = rmap.start(base), rmap.end(base)
        for aut in group:
            image = rmap.find_dart(aut(a), aut(b))
            np.testing.assert_array_equal(
                build_certificate(rmap, image, reverse=aut.reversing), canonical
            )


class TestFixedPoints:
    def test_tetrahedron_mirrors(self):
        _, group = _group(tetrahedron_code, ())
        # six reflections; the six rotoreflections fix nothing
        assert group.count_reversing_with_fixed_point() == 6

    def test_rotations_never_count(self):
        _, group = _group(cube_code, ())
        rotations = [i for i in range(group.order) if not group.reversing[i]]
        assert not any(group.is_reversing_with_fixed_point(i) for i in rotations)

    def test_prism_swapped_edges_count(self):
        # the horizontal mirror fixes no vertex but swaps every vertical edge
        _, group = _group(prism_code, (5,))
        assert group.count_reversing_with_fixed_point() == 6

    @pytest.mark.parametrize("code_fn,args,fixed", [
        (pyritohedral_cube_code, (), 3),
        (flagged_prism_code, (3,), 1),
        (flagged_antiprism_code, (3,), 0),
    ])
    def test_reflections_among_rotoreflections(self, code_fn, args, fixed):
        _, group = _group(code_fn, args)
        assert group.count_reversing_with_fixed_point() == fixed

    def test_pyramid_apex_stabilised(self):
        rmap, group = _group(pyramid_code, (5,))
        assert group.reversing_stabilises_vertex(5)
        base_face = next(f for f in range(rmap.nf) if rmap.face_size(f) == 5)
        assert group.reversing_stabilises_face(base_face)

    def test_chiral_group_stabilises_nothing(self):
        rmap, group = _group(twisted_prism_code, (5,))
        assert not group.has_reversing_with_fixed_point()
        assert not group.reversing_stabilises_vertex(0)
        assert not group.reversing_stabilises_edge(0)


class TestAutomorphismValue:
    def test_compose_and_inverse(self):
        a = Automorphism((1, 2, 0), reversing=True)
        b = Automorphism((0, 2, 1), reversing=True)
        assert a.compose(b) == Automorphism((1, 0, 2), reversing=False)
        assert a.compose(a.inverse()).is_identity()
        assert a.inverse().mapping == (2, 0, 1)

    def test_fixed_vertices(self):
        assert Automorphism((0, 2, 1, 3)).fixed_vertices() == [0, 3]


def test_context_table_reused_between_maps():
    from polysym.context import SymmetryContext

    ctx = SymmetryContext()
    first = determine_automorphisms(build_map(cube_code(), ctx))
    assert first.order == 48
    second = determine_automorphisms(build_map(tetrahedron_code(), ctx))
    assert second.order == 24
    assert second.permutations.shape == (24, 4)
