"""Writing and reading of 8-bit RGB PNG images without interlacing."""

from __future__ import annotations

import struct
import zlib
from collections.abc import Iterable
from pathlib import Path
from typing import Union

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
BIT_DEPTH = 8
COLOR_TYPE_RGB = 2
COMPRESSION_LEVEL = 1
_BYTES_PER_PIXEL = 3

PathLike = Union[str, Path]
Row = Union[bytes, bytearray, Iterable[int]]


def _chunk(kind: bytes, body: bytes) -> bytes:
    crc = zlib.crc32(kind + body) & 0xFFFFFFFF
    return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", crc)


def write_rgb_png(path: PathLike, width: int, height: int, rows: Iterable[Row]) -> None:
    """Write ``height`` rows of ``3 * width`` RGB bytes, top row first."""
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    stride = _BYTES_PER_PIXEL * width
    raw = bytearray()
    count = 0
    for row in rows:
        data = bytes(row)
        if len(data) != stride:
            raise ValueError(f"row {count} has {len(data)} bytes, expected {stride}")
        raw.append(0)  # filter type "None" on every row
        raw += data
        count += 1
    if count != height:
        raise ValueError(f"got {count} rows, expected {height}")

    header = struct.pack(">IIBBBBB", width, height, BIT_DEPTH, COLOR_TYPE_RGB, 0, 0, 0)
    with open(path, "wb") as fh:
        fh.write(PNG_SIGNATURE)
        fh.write(_chunk(b"IHDR", header))
        fh.write(_chunk(b"IDAT", zlib.compress(bytes(raw), COMPRESSION_LEVEL)))
        fh.write(_chunk(b"IEND", b""))


def _iter_chunks(data: bytes):
    pos = len(PNG_SIGNATURE)
    while pos < len(data):
        if pos + 8 > len(data):
            raise ValueError("truncated chunk header")
        length, kind = struct.unpack_from(">I4s", data, pos)
        start = pos + 8
        end = start + length
        if end + 4 > len(data):
            raise ValueError(f"truncated {kind!r} chunk")
        body = data[start:end]
        (crc,) = struct.unpack_from(">I", data, end)
        if zlib.crc32(kind + body) & 0xFFFFFFFF != crc:
            raise ValueError(f"CRC mismatch in {kind!r} chunk")
        yield kind, body
        pos = end + 4


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _unfilter(raw: bytes, width: int, height: int) -> list[bytes]:
    stride = _BYTES_PER_PIXEL * width
    if len(raw) != height * (stride + 1):
        raise ValueError("image data has the wrong length")
    bpp = _BYTES_PER_PIXEL
    prev = bytes(stride)
    rows: list[bytes] = []
    for y in range(height):
        base = y * (stride + 1)
        ftype = raw[base]
        line = bytearray(raw[base + 1 : base + 1 + stride])
        if ftype == 0:
            pass
        elif ftype == 1:
            for i in range(bpp, stride):
                line[i] = (line[i] + line[i - bpp]) & 0xFF
        elif ftype == 2:
            line = bytearray((a + b) & 0xFF for a, b in zip(line, prev))
        elif ftype == 3:
            for i in range(stride):
                left = line[i - bpp] if i >= bpp else 0
                line[i] = (line[i] + ((left + prev[i]) >> 1)) & 0xFF
        elif ftype == 4:
            for i in range(stride):
                left = line[i - bpp] if i >= bpp else 0
                upper_left = prev[i - bpp] if i >= bpp else 0
                line[i] = (line[i] + _paeth(left, prev[i], upper_left)) & 0xFF
        else:
            raise ValueError(f"unknown filter type {ftype} on row {y}")
        row = bytes(line)
        rows.append(row)
        prev = row
    return rows


def read_rgb_png(path: PathLike) -> tuple[int, int, list[bytes]]:
    """Read an 8-bit RGB PNG and return ``(width, height, rows)``."""
    data = Path(path).read_bytes()
    if not data.startswith(PNG_SIGNATURE):
        raise ValueError("not a PNG file")

    header = None
    compressed = bytearray()
    for kind, body in _iter_chunks(data):
        if kind == b"IHDR":
            header = struct.unpack(">IIBBBBB", body)
        elif kind == b"IDAT":
            compressed += body
        elif kind == b"IEND":
            break
    if header is None:
        raise ValueError("missing IHDR chunk")

    width, height, depth, color_type, _, _, interlace = header
    if depth != BIT_DEPTH or color_type != COLOR_TYPE_RGB or interlace != 0:
        raise ValueError("only 8-bit, non-interlaced RGB images are supported")
    try:
        raw = zlib.decompress(bytes(compressed))
    except zlib.error as exc:
        raise ValueError(f"corrupt image data: {exc}") from exc
    return width, height, _unfilter(raw, width, height)