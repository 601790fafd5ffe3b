from dataclasses import dataclass
from io import BytesIO

from c3dlib.codecutils import le_u, read_any_bytes, read_any_le_s, read_any_le_u
from c3dlib.idsoft import carmack, rlew
from c3dlib.idsoft._common import MAP_DELIMITER, MAP_PLANE_COUNT
from c3dlib.idsoft.errors import CarmackError, MapPlaneError, RLEWError

MAP_HEADER_SIZE = 4 * MAP_PLANE_COUNT + 2 * MAP_PLANE_COUNT + 2 + 2 + 16


@dataclass(frozen=True)
class MapHeader:
    plane_start: tuple[int, ...]
    plane_length: tuple[int, ...]
    width: int
    height: int
    name: str

    @staticmethod
    def from_bytes(data: bytes) -> "MapHeader":
        fp = BytesIO(data)
        plane_start = tuple(read_any_le_s(fp, 4) for _ in range(MAP_PLANE_COUNT))
        plane_length = tuple(read_any_le_u(fp, 2) for _ in range(MAP_PLANE_COUNT))
        width = read_any_le_u(fp, 2)
        height = read_any_le_u(fp, 2)
        name = read_any_bytes(fp, 16).split(b"\x00", 1)[0]
        return MapHeader(
            plane_start=plane_start,
            plane_length=plane_length,
            width=width,
            height=height,
            name=name.decode("ascii", errors="replace"),
        )

    @property
    def plane_size(self) -> int:
        return self.width * self.height * 2

    def has_plane(self, plane: int) -> bool:
        return self.plane_start[plane] > 0 and self.plane_length[plane] > 0


def map_headers(container: bytes, delimiter: bytes = MAP_DELIMITER) -> list[MapHeader]:
    headers: list[MapHeader] = []
    for record in container.split(delimiter)[:-1]:
        if len(record) < MAP_HEADER_SIZE:
            break
        headers.append(MapHeader.from_bytes(record[-MAP_HEADER_SIZE:]))
    return headers


def expand_plane(container: bytes, header: MapHeader, plane: int) -> bytes:
    """
    Returns the plane as little-endian words, `width * height * 2` bytes.
    The stored plane is RLEW compressed, and the RLEW stream is itself Carmack
    compressed behind a uint16 holding its expanded size.
    """
    if not header.has_plane(plane):
        raise MapPlaneError(f"map {header.name!r} has no plane {plane}")

    start = header.plane_start[plane]
    end = start + header.plane_length[plane]
    if end > len(container) or end - start < 2:
        raise MapPlaneError(f"plane {plane} of {header.name!r} spans {start}..{end}, container has {len(container)} bytes")

    data = container[start:end]
    try:
        expanded = carmack.expand(data[2:], le_u(data, 0, 2))
        return rlew.expand(expanded, header.plane_size)
    except (CarmackError, RLEWError) as err:
        raise MapPlaneError(f"plane {plane} of {header.name!r}: {err}") from err


def condense_plane(words: bytes) -> bytes:
    # high bytes are never used by the game
    buffer = bytearray()
    for i in range(0, len(words), 2):
        if words[i + 1] != 0:
            raise MapPlaneError(f"word {i // 2} has a non-zero high byte {words[i + 1]:#04x}")
        buffer.append(words[i])
    return bytes(buffer)


def c3dmap(header: MapHeader, planes: list[bytes]) -> bytes:
    if header.width > 0xFF or header.height > 0xFF:
        raise MapPlaneError(f"map {header.name!r} is too large for .c3dmap ({header.width}x{header.height})")
    return bytes((header.width, header.height)) + b"".join(planes)
