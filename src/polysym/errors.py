"""Errors raised while reading maps and classifying their symmetry.

Both are fatal for the map being processed; callers report the failing
map and stop.
"""

from __future__ import annotations


class MalformedMapError(ValueError):
    """The input does not describe a valid spherical rotation system."""


class SymmetryInconsistencyError(RuntimeError):
    """The automorphism set fits none of the point-group patterns.

    Raised instead of guessing a group; it means the embedding is invalid
    or the enumeration is wrong.
    """
