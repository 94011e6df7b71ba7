"""Per-map symmetry reports.

:func:`analyse_codes` drives the whole pipeline (build map, enumerate
automorphisms, classify) over a stream of codes, reusing one
:class:`~polysym.context.SymmetryContext` for all of them.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .automorphisms import determine_automorphisms
from .classify import classify
from .context import SymmetryContext
from .darts import build_map
from .groups import PointGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapReport:
    index: int
    group: PointGroup
    order: int
    reversing: int
    vertices: int
    edges: int
    faces: int

    def line(self) -> str:
        return f"Graph {self.index} has group {self.group.name}"

    def details(self) -> str:
        return (
            f"{self.line()} (order {self.order}, {self.reversing} orientation-reversing; "
            f"{self.vertices} vertices, {self.edges} edges, {self.faces} faces)"
        )


def analyse_code(code: Sequence[int], index: int = 1, context: Optional[SymmetryContext] = None) -> MapReport:
    rmap = build_map(code, context)
    group = determine_automorphisms(rmap)
    point_group = classify(rmap, group)
    return MapReport(
        index=index,
        group=point_group,
        order=group.order,
        reversing=group.reversing_count,
        vertices=rmap.nv,
        edges=rmap.edge_count,
        faces=rmap.nf,
    )


def analyse_codes(
    codes: Iterable[Sequence[int]],
    context: Optional[SymmetryContext] = None,
) -> Iterator[MapReport]:
    """Yield one report per code, numbering maps from 1.

    Errors propagate for the failing map; reports already yielded stay
    valid.
    """
    ctx = context if context is not None else SymmetryContext()
    for index, code in enumerate(codes, start=1):
        report = analyse_code(code, index, ctx)
        logger.debug("%s", report.details())
        yield report


def summarize(reports: Iterable[MapReport]) -> Dict[str, int]:
    """Count maps per group name."""
    return dict(Counter(report.group.name for report in reports))


def summary_lines(counts: Dict[str, int]) -> List[str]:
    lines = [f"{sum(counts.values())} maps"]
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        lines.append(f"  {name}: {count}")
    return lines
