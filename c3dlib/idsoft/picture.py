"""
EGA pictures stored in `EGAGRAPH`.

A picture chunk is four bit planes one after the other, in the order blue,
green, red, intensity. Each plane holds one bit per pixel, most significant
bit first. Every color channel takes one of four EGA levels depending on its
own plane bit and the intensity bit.

Sizes come from the picture table in chunk 0: pairs of int16 `(width, height)`,
where the width is counted in bytes (8 pixels) per row.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import Protocol

from c3dlib.codecutils import read_any_le_s
from c3dlib.idsoft._common import FIRST_PICTURE_CHUNK, PICTURE_TABLE_CHUNK
from c3dlib.idsoft.errors import ChunkDecodeError
from c3dlib.idsoft.store import AssetStore

RGBA = tuple[int, int, int, int]

BLUE, GREEN, RED, INTENSITY = range(4)

# (color bit, intensity bit) -> channel level
LEVELS = (
    (0x00, 0x55),
    (0xAA, 0xFF),
)

TRANSPARENT_KEY = (0xAA, 0x00, 0xAA)
FLAT_COLOR: RGBA = (0x00, 0x00, 0x00, 0xFF)


class PixelSource(Protocol):
    def bounds(self) -> tuple[int, int]: ...

    def pixel_at(self, x: int, y: int) -> RGBA: ...


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Picture:
    def __init__(self, data: bytes, dims: Dimensions) -> None:
        self.data = data
        self.dims = dims
        self._plane_size = dims.width * dims.height // 8
        self.complete = self._plane_size > 0 and len(data) >= 4 * self._plane_size

    def bounds(self) -> tuple[int, int]:
        return self.dims.width, self.dims.height

    def _bit(self, plane: int, pos: int) -> int:
        byte = self.data[plane * self._plane_size + pos // 8]
        return (byte >> (7 - pos % 8)) & 0x01

    def pixel_at(self, x: int, y: int) -> RGBA:
        if not (0 <= x < self.dims.width and 0 <= y < self.dims.height):
            raise IndexError(f"pixel ({x}, {y}) outside of {self.dims}")
        if not self.complete:
            return FLAT_COLOR

        pos = y * self.dims.width + x
        intense = self._bit(INTENSITY, pos)
        color = (
            LEVELS[self._bit(RED, pos)][intense],
            LEVELS[self._bit(GREEN, pos)][intense],
            LEVELS[self._bit(BLUE, pos)][intense],
        )
        return (*color, 0x00 if color == TRANSPARENT_KEY else 0xFF)

    def rgba_bytes(self) -> bytes:
        width, height = self.bounds()
        buffer = bytearray()
        for y in range(height):
            for x in range(width):
                buffer += bytes(self.pixel_at(x, y))
        return bytes(buffer)


def picture_table(store: AssetStore) -> tuple[Dimensions, ...]:
    chunk = store.chunk(PICTURE_TABLE_CHUNK)
    if chunk is None:
        raise ChunkDecodeError(PICTURE_TABLE_CHUNK, None, 0, "picture table is missing")

    fp = BytesIO(chunk)
    table: list[Dimensions] = []
    for _ in range(len(chunk) // 4):
        width = read_any_le_s(fp, 2)
        height = read_any_le_s(fp, 2)
        table.append(Dimensions(width=width * 8, height=height))
    return tuple(table)


def load_picture(store: AssetStore, index: int) -> Picture | None:
    table = picture_table(store)
    row = index - FIRST_PICTURE_CHUNK
    if not 0 <= row < len(table):
        raise IndexError(f"chunk {index} has no picture table row (table has {len(table)} rows)")
    chunk = store.chunk(index)
    if chunk is None:
        return None
    return Picture(chunk, table[row])
