"""Shared maps for the symmetry tests."""

import pytest

from polysym.builders import code_from_faces, pyramid_code


# Pentagonal prism (top 0-4, bottom 5-9) with the side diagonal 0-6
# subdivided by vertex 10 and the top edge 1-2 subdivided by vertex 11.
# The diagonal leaves a single half-turn; the extra subdivision kills it.
ASYMMETRIC_FACES = [
    [0, 1, 11, 2, 3, 4],
    [9, 8, 7, 6, 5],
    [1, 0, 10, 6],
    [0, 5, 6, 10],
    [2, 11, 1, 6, 7],
    [3, 2, 7, 8],
    [4, 3, 8, 9],
    [0, 4, 9, 5],
]

# Pentagonal pyramid (base 0-4, apex 5) with the base edge 0-1
# subdivided by vertex 6: only the mirror through that edge survives.
MIRROR_ONLY_FACES = [
    [4, 3, 2, 1, 6, 0],
    [5, 0, 6, 1],
    [5, 1, 2],
    [5, 2, 3],
    [5, 3, 4],
    [5, 4, 0],
]

TETRAHEDRON = [4, 2, 3, 4, 0, 1, 4, 3, 0, 1, 2, 4, 0, 1, 3, 2, 0]


@pytest.fixture()
def asymmetric_code():
    return code_from_faces(ASYMMETRIC_FACES)


@pytest.fixture()
def mirror_only_code():
    return code_from_faces(MIRROR_ONLY_FACES)


@pytest.fixture()
def tetrahedron():
    return list(TETRAHEDRON)


@pytest.fixture()
def pentagonal_pyramid():
    return pyramid_code(5)
