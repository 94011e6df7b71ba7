"""Tests for map size limits."""

import pytest

from polysym.config import DEFAULT_LIMITS, LARGE_LIMITS, SMALL_LIMITS, MapLimits
from polysym.context import SymmetryContext


def test_derived_bounds():
    limits = MapLimits(max_vertices=12)
    assert limits.max_darts == 60
    assert limits.max_faces == 20
    assert limits.max_degree == 11


def test_presets():
    assert DEFAULT_LIMITS.max_vertices == 1000
    assert SMALL_LIMITS.max_vertices == 255
    assert LARGE_LIMITS.max_vertices == 65535
    assert DEFAULT_LIMITS.min_vertices == 4


@pytest.mark.parametrize("kwargs", [
    {"min_vertices": 0},
    {"max_vertices": 2},
    {"max_vertices": 5, "min_vertices": 6},
])
def test_invalid_limits(kwargs):
    with pytest.raises(ValueError):
        MapLimits(**kwargs)


def test_context_buffers_follow_limits():
    ctx = SymmetryContext(MapLimits(max_vertices=20))
    assert ctx.limits.max_vertices == 20
    assert len(ctx.first_dart) >= 20
    assert ctx.arena.capacity >= MapLimits(max_vertices=20).max_darts
