"""Tests for per-map reports and summaries."""

import pytest

from polysym.builders import cube_code, prism_code, pyramid_code
from polysym.context import SymmetryContext
from polysym.errors import MalformedMapError
from polysym.reporting import analyse_code, analyse_codes, summarize, summary_lines


def test_report_fields():
    report = analyse_code(cube_code(), index=3)
    assert report.index == 3
    assert report.group.name == "Oh"
    assert (report.order, report.reversing) == (48, 24)
    assert (report.vertices, report.edges, report.faces) == (8, 12, 6)


def test_report_lines(tetrahedron):
    report = analyse_code(tetrahedron)
    assert report.line() == "Graph 1 has group Td"
    assert report.details() == (
        "Graph 1 has group Td (order 24, 12 orientation-reversing; "
        "4 vertices, 6 edges, 4 faces)"
    )


def test_analyse_codes_numbers_from_one(tetrahedron):
    reports = list(analyse_codes([tetrahedron, prism_code(5), pyramid_code(4)]))
    assert [r.index for r in reports] == [1, 2, 3]
    assert [r.group.name for r in reports] == ["Td", "D5h", "C4v"]


def test_error_stops_after_good_maps(tetrahedron):
    ctx = SymmetryContext()
    seen = []
    with pytest.raises(MalformedMapError):
        for report in analyse_codes([tetrahedron, [4, 2, 3, 0]], ctx):
            seen.append(report)
    assert [r.group.name for r in seen] == ["Td"]


def test_summary(tetrahedron):
    reports = analyse_codes([tetrahedron, cube_code(), prism_code(4), pyramid_code(3)])
    counts = summarize(reports)
    assert counts == {"Td": 2, "Oh": 2}
    assert summary_lines(counts) == ["4 maps", "  Oh: 2", "  Td: 2"]


def test_summary_orders_by_count():
    assert summary_lines({"C1": 1, "D3h": 5}) == ["6 maps", "  D3h: 5", "  C1: 1"]
