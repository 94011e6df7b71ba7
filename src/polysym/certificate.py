"""Breadth-first certificates of a rotation map.

A certificate is the integer sequence produced by a BFS that starts at a
given dart and labels vertices in discovery order.  For every visited
vertex it lists the labels of the neighbours in rotation order, starting
at the dart through which the vertex was entered, followed by
:data:`END_OF_VERTEX`.

Two darts yield the same certificate (in the same orientation) exactly
when an automorphism of the map carries one onto the other; comparing a
``reverse=True`` certificate against a forward one detects
orientation-reversing automorphisms.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .context import NO_DART
from .darts import RotationMap

END_OF_VERTEX = -1
UNLABELLED = -1


def _walk(
    rmap: RotationMap,
    start: int,
    reverse: bool,
    reference: Optional[Sequence[int]] = None,
) -> Optional[Tuple[List[int], List[int]]]:
    """Run the BFS from dart *start*; return ``(certificate, labelling)``.

    With a *reference* sequence the walk stops at the first entry that
    differs from it and returns ``None``.
    """
    columns = rmap.dart_columns()
    step = columns.prev if reverse else columns.next
    ends = columns.end
    inverse = columns.inverse

    labelling = [UNLABELLED] * rmap.nv
    entry = [NO_DART] * rmap.nv
    root = columns.start[start]
    labelling[root] = 0
    entry[root] = start
    queue = [root]

    checked = reference is not None
    limit = len(reference) if checked else 0
    certificate: List[int] = []
    position = 0
    tail = 0
    while tail < len(queue):
        vertex = queue[tail]
        tail += 1
        first = dart = entry[vertex]
        while True:
            neighbour = ends[dart]
            label = labelling[neighbour]
            if label == UNLABELLED:
                label = labelling[neighbour] = len(queue)
                entry[neighbour] = inverse[dart]
                queue.append(neighbour)
            if checked and (position >= limit or reference[position] != label):
                return None
            certificate.append(label)
            position += 1
            dart = step[dart]
            if dart == first:
                break
        if checked and (position >= limit or reference[position] != END_OF_VERTEX):
            return None
        certificate.append(END_OF_VERTEX)
        position += 1

    if checked and position != limit:
        return None
    return certificate, labelling


def trace_certificate(
    rmap: RotationMap,
    start: int,
    reverse: bool,
    certificate: np.ndarray,
    labelling: np.ndarray,
) -> int:
    """Write the certificate from dart *start* into *certificate*.

    *labelling* receives the BFS label of every vertex.  Both buffers
    must hold at least ``ne + nv`` and ``nv`` entries respectively.
    Returns the certificate length.
    """
    sequence, labels = _walk(rmap, start, reverse)
    length = len(sequence)
    certificate[:length] = sequence
    labelling[: rmap.nv] = labels
    return length


def build_certificate(rmap: RotationMap, start: int, reverse: bool = False) -> np.ndarray:
    """Return the certificate from dart *start* as a fresh array."""
    ctx = rmap.context
    length = trace_certificate(
        rmap, start, reverse, ctx.alternate_certificate, ctx.alternate_labelling
    )
    return ctx.alternate_certificate[:length].copy()


def bfs_labelling(rmap: RotationMap, start: int, reverse: bool = False) -> np.ndarray:
    """Return the vertex labels assigned by the BFS from dart *start*."""
    ctx = rmap.context
    trace_certificate(rmap, start, reverse, ctx.alternate_certificate, ctx.alternate_labelling)
    return ctx.alternate_labelling[: rmap.nv].copy()


def set_canonical(rmap: RotationMap, start: int) -> int:
    """Trace the forward certificate of *start* into the primary buffers.

    Returns its length.  The primary buffers are the reference that
    :func:`matches_canonical` compares against.
    """
    ctx = rmap.context
    sequence, labels = _walk(rmap, start, False)
    ctx.canonical_sequence = sequence
    length = len(sequence)
    ctx.certificate[:length] = sequence
    ctx.labelling[: rmap.nv] = labels
    return length


def matches_canonical(rmap: RotationMap, length: int, dart: int, reverse: bool = False) -> bool:
    """True if the certificate from *dart* equals the primary certificate.

    The comparison stops at the first differing entry.  On a match the
    alternate labelling of the context holds the BFS labels of *dart*.
    """
    ctx = rmap.context
    reference = ctx.canonical_sequence
    if len(reference) != length:
        reference = ctx.certificate[:length].tolist()
    result = _walk(rmap, dart, reverse, reference)
    if result is None:
        return False
    sequence, labels = result
    ctx.alternate_certificate[:length] = sequence
    ctx.alternate_labelling[: rmap.nv] = labels
    return True
