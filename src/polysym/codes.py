"""Conversion between flat rotation-system codes and neighbour lists.

A code is ``[nv, n11, n12, ..., 0, n21, ..., 0, ...]`` with 1-based
neighbour ids; the list form holds one neighbour cycle per vertex.
"""

from __future__ import annotations

from typing import List, Sequence


def code_from_rotation(rotation: Sequence[Sequence[int]], one_based: bool = False) -> List[int]:
    """Flatten per-vertex neighbour cycles into a rotation-system code.

    *rotation* uses 0-based vertex ids unless *one_based* is set.
    """
    offset = 0 if one_based else 1
    code = [len(rotation)]
    for neighbours in rotation:
        code.extend(int(w) + offset for w in neighbours)
        code.append(0)
    return code


def rotation_from_code(code: Sequence[int]) -> List[List[int]]:
    """Split a rotation-system code into 0-based neighbour cycles."""
    if not code:
        raise ValueError("Empty rotation-system code")
    nv = int(code[0])
    rotation: List[List[int]] = []
    current: List[int] = []
    for entry in code[1:]:
        if entry == 0:
            rotation.append(current)
            current = []
            if len(rotation) == nv:
                break
        else:
            current.append(int(entry) - 1)
    if len(rotation) != nv:
        raise ValueError(f"Code closes {len(rotation)} vertex lists, expected {nv}")
    return rotation
