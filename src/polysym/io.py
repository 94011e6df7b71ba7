"""Reading and writing streams of rotation-system codes.

Two formats are supported:

``planar_code``
    Binary.  An optional ``>>planar_code<<`` header (possibly naming the
    byte order, ``>>planar_code le<<`` / ``>>planar_code be<<``) may also
    reappear between maps.  Each map is its vertex count followed by the
    0-terminated 1-based neighbour lists.  Entries are single bytes,
    unless the map starts with a ``0`` byte, in which case every entry of
    that map (vertex count included) is a two-byte word.

``json``
    ``{"maps": [[[2, 3, 4], [1, 4, 3], …], …]}``: per map, the
    1-based neighbour list of every vertex.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Sequence, Union

from .codes import code_from_rotation, rotation_from_code
from .errors import MalformedMapError

PathLike = Union[str, Path]

HEADER = b">>planar_code"
FORMATS = ("auto", "planar_code", "json")


class _ByteStream:
    """Binary reader with push-back for header detection."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pending = b""

    def read(self, size: int) -> bytes:
        data = self._pending[:size]
        self._pending = self._pending[size:]
        if len(data) < size:
            data += self._stream.read(size - len(data))
        return data

    def unread(self, data: bytes) -> None:
        self._pending = data + self._pending

    def read_exact(self, size: int) -> bytes:
        data = self.read(size)
        if len(data) != size:
            raise MalformedMapError("Unexpected end of planar_code stream")
        return data


def _skip_header(reader: _ByteStream) -> str:
    """Consume a header whose first three bytes were already read."""
    text = bytearray(b">>p")
    while not text.endswith(b"<<"):
        text += reader.read_exact(1)
    body = text[len(HEADER) : -2].decode("ascii", errors="replace").strip()
    if not bytes(text).startswith(HEADER):
        raise MalformedMapError(f"Unrecognised header: {bytes(text)!r}")
    return "big" if body == "be" else "little"


def read_planar_code(stream: BinaryIO) -> Iterator[List[int]]:
    """Yield the flat rotation-system code of every map in *stream*."""
    reader = _ByteStream(stream)
    byteorder = "little"
    while True:
        first = reader.read(1)
        if not first:
            return
        if first == b">":
            lookahead = reader.read(2)
            if lookahead == b">p":
                byteorder = _skip_header(reader)
                continue
            # a map with 62 vertices, not a header
            reader.unread(lookahead)

        if first[0] != 0:
            nv = first[0]
            code = [nv]
            closed = 0
            while closed < nv:
                entry = reader.read_exact(1)[0]
                code.append(entry)
                if entry == 0:
                    closed += 1
        else:
            nv = int.from_bytes(reader.read_exact(2), byteorder)
            code = [nv]
            closed = 0
            while closed < nv:
                entry = int.from_bytes(reader.read_exact(2), byteorder)
                code.append(entry)
                if entry == 0:
                    closed += 1
        yield code


def write_planar_code(codes: Iterable[Sequence[int]], stream: BinaryIO, header: bool = True) -> int:
    """Write *codes* to *stream*; returns the number of maps written."""
    if header:
        stream.write(HEADER + b"<<")
    count = 0
    for code in codes:
        if code[0] < 256:
            stream.write(bytes(int(entry) for entry in code))
        else:
            stream.write(b"\x00")
            for entry in code:
                stream.write(int(entry).to_bytes(2, "little"))
        count += 1
    return count


# ═══════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════


def load_json(path: PathLike) -> List[List[int]]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MalformedMapError(f"{path}: invalid JSON: {exc}") from exc
    try:
        maps = data["maps"]
    except (KeyError, TypeError) as exc:
        raise MalformedMapError(f"{path}: expected an object with a 'maps' list") from exc

    codes = []
    for index, rotation in enumerate(maps, start=1):
        try:
            codes.append(code_from_rotation(rotation, one_based=True))
        except (TypeError, ValueError) as exc:
            raise MalformedMapError(
                f"{path}: map {index} is not a list of neighbour lists"
            ) from exc
    return codes


def save_json(codes: Iterable[Sequence[int]], path: PathLike) -> None:
    maps = [
        [[w + 1 for w in neighbours] for neighbours in rotation_from_code(code)]
        for code in codes
    ]
    Path(path).write_text(json.dumps({"maps": maps}), encoding="utf-8")


# ═══════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════


def resolve_format(path: PathLike, fmt: str = "auto") -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt!r}")
    if fmt != "auto":
        return fmt
    return "json" if Path(path).suffix.lower() == ".json" else "planar_code"


def load_codes(path: PathLike, fmt: str = "auto") -> List[List[int]]:
    if resolve_format(path, fmt) == "json":
        return load_json(path)
    with open(path, "rb") as handle:
        return list(read_planar_code(handle))


def save_codes(codes: Iterable[Sequence[int]], path: PathLike, fmt: str = "auto") -> None:
    if resolve_format(path, fmt) == "json":
        save_json(codes, path)
        return
    with open(path, "wb") as handle:
        write_planar_code(codes, handle)
