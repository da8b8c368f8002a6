import struct
import zlib

import pytest

from hpcwork.pngwriter import read_rgb_png, write_rgb_png


def _gradient(width, height):
    return [bytes((x * 7 + y * 13 + c) % 256 for x in range(width) for c in range(3)) for y in range(height)]


def test_round_trip(tmp_path):
    path = tmp_path / "img.png"
    rows = _gradient(5, 4)
    write_rgb_png(path, 5, 4, rows)
    assert read_rgb_png(path) == (5, 4, rows)


def test_accepts_rows_given_as_int_lists(tmp_path):
    path = tmp_path / "img.png"
    rows = [[255, 0, 0, 0, 255, 0], [0, 0, 255, 16, 32, 48]]
    write_rgb_png(path, 2, 2, rows)
    _, _, got = read_rgb_png(path)
    assert [list(r) for r in got] == rows


def test_header_fields(tmp_path):
    path = tmp_path / "img.png"
    write_rgb_png(path, 3, 2, _gradient(3, 2))
    data = path.read_bytes()
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    assert data[12:16] == b"IHDR"
    width, height, depth, color_type, _, _, interlace = struct.unpack(">IIBBBBB", data[16:29])
    assert (width, height, depth, color_type, interlace) == (3, 2, 8, 2, 0)
    assert data.endswith(b"IEND" + struct.pack(">I", zlib.crc32(b"IEND")))


def test_wrong_row_length_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_rgb_png(tmp_path / "x.png", 2, 1, [b"\x00" * 5])


def test_wrong_row_count_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_rgb_png(tmp_path / "x.png", 1, 2, [b"\x00\x00\x00"])


def test_non_positive_size_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_rgb_png(tmp_path / "x.png", 0, 1, [])


def test_bad_signature_rejected(tmp_path):
    path = tmp_path / "x.png"
    path.write_bytes(b"GIF89a" + b"\x00" * 20)
    with pytest.raises(ValueError):
        read_rgb_png(path)


def test_corrupt_crc_rejected(tmp_path):
    path = tmp_path / "x.png"
    write_rgb_png(path, 2, 2, _gradient(2, 2))
    data = bytearray(path.read_bytes())
    data[20] ^= 0xFF  # inside the IHDR body
    path.write_bytes(bytes(data))
    with pytest.raises(ValueError):
        read_rgb_png(path)