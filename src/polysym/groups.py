"""Point-group identifiers, their names and name patterns.

A :class:`PointGroup` is a family plus a fold.  The fold only matters
for the axial families; the polyhedral families carry fold 0.

Names follow Schoenflies notation with the fold written out::

    PointGroup("Cnv", 3).name   -> "C3v"
    PointGroup("S2n", 2).name   -> "S4"
    PointGroup("Td").name       -> "Td"

:func:`parse_group_pattern` reads such names back, with ``*`` standing
for any fold (``"D*h"`` matches every prismatic group).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

AXIAL_FAMILIES = ("Cn", "Cnh", "Cnv", "S2n", "Dn", "Dnh", "Dnd")
POLYHEDRAL_FAMILIES = ("T", "Td", "Th", "O", "Oh", "I", "Ih")
FAMILIES = AXIAL_FAMILIES + POLYHEDRAL_FAMILIES

_SUFFIX = {"Cn": "", "Cnh": "h", "Cnv": "v", "Dn": "", "Dnh": "h", "Dnd": "d"}


@dataclass(frozen=True)
class PointGroup:
    family: str
    fold: int = 0

    def __post_init__(self) -> None:
        if self.family not in FAMILIES:
            raise ValueError(f"Unknown point-group family: {self.family!r}")
        if self.is_axial and self.fold < 1:
            raise ValueError(f"{self.family} needs a fold >= 1, got {self.fold}")

    @property
    def is_axial(self) -> bool:
        return self.family in AXIAL_FAMILIES

    @property
    def name(self) -> str:
        if not self.is_axial:
            return self.family
        if self.family == "S2n":
            return f"S{2 * self.fold}"
        return f"{self.family[0]}{self.fold}{_SUFFIX[self.family]}"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class GroupPattern:
    """A group name with an optional wildcard fold (``None`` = any)."""

    family: str
    fold: Optional[int] = None

    def matches(self, group: PointGroup) -> bool:
        if group.family != self.family:
            return False
        return self.fold is None or not group.is_axial or group.fold == self.fold


_AXIAL_NAME = re.compile(r"^([CSD])(\*|\d+)([hvd]?)$")


def parse_group_pattern(text: str) -> GroupPattern:
    """Parse a group name such as ``Td``, ``C2v``, ``S4`` or ``D*d``."""
    if text in POLYHEDRAL_FAMILIES:
        return GroupPattern(text)

    match = _AXIAL_NAME.match(text)
    if match is None:
        raise ValueError(f"Illegal group name: {text}")
    letter, parameter, suffix = match.groups()
    fold = None if parameter == "*" else int(parameter)

    if letter == "S":
        if suffix:
            raise ValueError(f"Illegal group name: {text}")
        if fold is not None and (fold <= 0 or fold % 2 == 1):
            raise ValueError(f"Illegal group parameter: {fold}")
        return GroupPattern("S2n", None if fold is None else fold // 2)

    if fold is not None and fold <= 0:
        raise ValueError(f"Illegal group parameter: {fold}")
    if (letter, suffix) in (("C", "d"), ("D", "v")):
        raise ValueError(f"Illegal group name: {text}")
    family = letter + "n" + suffix
    return GroupPattern(family, fold)
