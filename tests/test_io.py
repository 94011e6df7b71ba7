"""Tests for planar_code and JSON streams."""

import io
import json

import pytest

from polysym.builders import cube_code, prism_code
from polysym.codes import code_from_rotation, rotation_from_code
from polysym.errors import MalformedMapError
from polysym.io import (
    HEADER,
    load_codes,
    load_json,
    read_planar_code,
    resolve_format,
    save_codes,
    write_planar_code,
)


def _round_trip(codes, header=True):
    buffer = io.BytesIO()
    write_planar_code(codes, buffer, header=header)
    buffer.seek(0)
    return list(read_planar_code(buffer))


class TestPlanarCode:
    def test_single_byte_maps(self, tetrahedron):
        codes = [tetrahedron, cube_code()]
        assert _round_trip(codes) == codes

    def test_without_header(self, tetrahedron):
        assert _round_trip([tetrahedron], header=False) == [tetrahedron]

    def test_header_bytes(self, tetrahedron):
        buffer = io.BytesIO()
        count = write_planar_code([tetrahedron], buffer)
        assert count == 1
        data = buffer.getvalue()
        assert data.startswith(HEADER + b"<<")
        assert data[len(HEADER) + 2 :] == bytes(tetrahedron)

    def test_two_byte_map(self):
        large = prism_code(130)
        buffer = io.BytesIO()
        write_planar_code([large], buffer, header=False)
        data = buffer.getvalue()
        assert data[0] == 0
        assert int.from_bytes(data[1:3], "little") == 260
        buffer.seek(0)
        assert list(read_planar_code(buffer)) == [large]

    def test_mixed_widths(self, tetrahedron):
        codes = [tetrahedron, prism_code(130), cube_code()]
        assert _round_trip(codes) == codes

    def test_sixty_two_vertices_is_not_a_header(self):
        # 62 is the byte value of ">"
        code = prism_code(31)
        assert code[0] == ord(">")
        assert _round_trip([code], header=False) == [code]

    def test_header_between_maps(self, tetrahedron):
        data = HEADER + b"<<" + bytes(tetrahedron) + HEADER + b"<<" + bytes(cube_code())
        assert list(read_planar_code(io.BytesIO(data))) == [tetrahedron, cube_code()]

    def test_big_endian_header(self, tetrahedron):
        data = bytearray(HEADER + b" be<<")
        data += b"\x00"
        for entry in tetrahedron:
            data += entry.to_bytes(2, "big")
        assert list(read_planar_code(io.BytesIO(bytes(data)))) == [tetrahedron]

    def test_truncated_stream(self, tetrahedron):
        data = bytes(tetrahedron)[:-3]
        with pytest.raises(MalformedMapError, match="Unexpected end"):
            list(read_planar_code(io.BytesIO(data)))

    def test_bad_header(self):
        with pytest.raises(MalformedMapError, match="Unrecognised header"):
            list(read_planar_code(io.BytesIO(b">>pentagon<<")))

    def test_empty_stream(self):
        assert list(read_planar_code(io.BytesIO(b""))) == []


class TestJson:
    def test_round_trip(self, tmp_path, tetrahedron):
        path = tmp_path / "maps.json"
        save_codes([tetrahedron, cube_code()], path)
        assert load_codes(path) == [tetrahedron, cube_code()]

    def test_one_based_neighbour_lists(self, tmp_path, tetrahedron):
        path = tmp_path / "maps.json"
        save_codes([tetrahedron], path)
        data = json.loads(path.read_text())
        assert data["maps"][0][0] == [2, 3, 4]

    def test_missing_maps_key(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([[2, 3]]))
        with pytest.raises(MalformedMapError, match="'maps'"):
            load_json(path)

    def test_truncated_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"maps": [[[2,3')
        with pytest.raises(MalformedMapError, match="invalid JSON"):
            load_json(path)

    @pytest.mark.parametrize("maps", [[5], [[[2, "x"]]], [[None]]])
    def test_map_that_is_not_neighbour_lists(self, tmp_path, maps):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"maps": maps}))
        with pytest.raises(MalformedMapError, match="map 1"):
            load_codes(path)


class TestDispatch:
    def test_resolve_format(self):
        assert resolve_format("maps.json") == "json"
        assert resolve_format("maps.pl") == "planar_code"
        assert resolve_format("maps.json", "planar_code") == "planar_code"
        with pytest.raises(ValueError):
            resolve_format("maps.pl", "yaml")

    def test_binary_file_round_trip(self, tmp_path):
        path = tmp_path / "maps.pl"
        codes = [prism_code(5), prism_code(6)]
        save_codes(codes, path)
        assert load_codes(path) == codes


class TestCodes:
    def test_rotation_round_trip(self, tetrahedron):
        rotation = rotation_from_code(tetrahedron)
        assert rotation[0] == [1, 2, 3]
        assert code_from_rotation(rotation) == tetrahedron
        one_based = [[w + 1 for w in ns] for ns in rotation]
        assert code_from_rotation(one_based, one_based=True) == tetrahedron

    def test_short_code(self):
        with pytest.raises(ValueError, match="expected 4"):
            rotation_from_code([4, 2, 3, 0, 1, 0])
        with pytest.raises(ValueError, match="Empty"):
            rotation_from_code([])
