"""Tests for the standard-solid builders."""

import pytest

from polysym.builders import (
    SOLIDS,
    antiprism_code,
    _split_face,
    code_from_faces,
    flagged_prism_code,
    pyritohedral_cube_code,
    prism_code,
    pyramid_code,
    twisted_prism_code,
)
from polysym.darts import build_map


class TestSolidCounts:
    @pytest.mark.parametrize("name,n,counts", [
        ("tetrahedron", 0, (4, 6, 4)),
        ("cube", 0, (8, 12, 6)),
        ("octahedron", 0, (6, 12, 8)),
        ("dodecahedron", 0, (20, 30, 12)),
        ("icosahedron", 0, (12, 30, 20)),
        ("pyramid", 7, (8, 14, 8)),
        ("prism", 6, (12, 18, 8)),
        ("antiprism", 5, (10, 20, 12)),
        ("twisted-prism", 5, (15, 25, 12)),
        ("coned-twisted-prism", 5, (16, 30, 16)),
        ("flagged-prism", 5, (15, 25, 12)),
        ("flagged-antiprism", 5, (20, 40, 22)),
        ("pyritohedral-cube", 0, (26, 36, 12)),
        ("tetrahedral-cube", 0, (26, 48, 24)),
        ("pinwheel-cube", 0, (38, 60, 24)),
        ("pinwheel-dodecahedron", 0, (92, 150, 60)),
    ])
    def test_counts(self, name, n, counts):
        rmap = build_map(SOLIDS[name](n))
        assert (rmap.nv, rmap.edge_count, rmap.nf) == counts
        assert rmap.validate() == []

    def test_pyramid_apex_degree(self):
        rmap = build_map(pyramid_code(6))
        assert rmap.degree(6) == 6

    def test_antiprism_is_four_regular(self):
        rmap = build_map(antiprism_code(7))
        assert all(rmap.degree(v) == 4 for v in range(rmap.nv))

    def test_twisted_prism_face_sizes(self):
        rmap = build_map(twisted_prism_code(5))
        sizes = sorted(rmap.face_size(f) for f in range(rmap.nf))
        assert sizes == [4] * 10 + [5, 5]

    def test_flags_have_degree_two(self):
        rmap = build_map(flagged_prism_code(4))
        assert [rmap.degree(v) for v in range(8, 12)] == [2, 2, 2, 2]

    def test_pyritohedral_faces_are_hexagons(self):
        rmap = build_map(pyritohedral_cube_code())
        assert all(rmap.face_size(f) == 6 for f in range(rmap.nf))

    def test_split_face_keeps_orientation(self):
        assert _split_face([0, 1, 2, 3], [0, 2], 4) == [[0, 1, 2, 4], [2, 3, 0, 4]]


class TestErrors:
    @pytest.mark.parametrize("fn", [pyramid_code, prism_code, antiprism_code, twisted_prism_code])
    def test_too_few_sides(self, fn):
        with pytest.raises(ValueError, match=">= 3"):
            fn(2)

    def test_duplicate_directed_edge(self):
        with pytest.raises(ValueError, match="two faces"):
            code_from_faces([[0, 1, 2], [0, 1, 3]])

    def test_gap_in_vertex_ids(self):
        with pytest.raises(ValueError, match="numbered"):
            code_from_faces([[0, 1, 3], [3, 1, 0]])

    def test_face_split_needs_two_targets(self):
        with pytest.raises(ValueError, match="two targets"):
            _split_face([0, 1, 2, 3], [2], 4)

    def test_open_surface(self):
        with pytest.raises(ValueError, match="close up"):
            code_from_faces([[0, 1, 2, 3]])


def test_faces_give_expected_rotation():
    # same rotation as the tetrahedron fixture
    code = code_from_faces([[1, 2, 0], [3, 1, 0], [3, 2, 1], [2, 3, 0]])
    assert code == [4, 2, 3, 4, 0, 1, 4, 3, 0, 1, 2, 4, 0, 1, 3, 2, 0]
