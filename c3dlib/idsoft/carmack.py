from c3dlib.idsoft._common import CARMACK_FAR, CARMACK_NEAR
from c3dlib.idsoft.errors import CarmackError


def expand(src: bytes, size: int) -> bytes:
    buffer = bytearray()
    si = 0
    while si < len(src):
        if si + 2 > len(src):
            raise CarmackError(f"truncated word at source byte {si}")
        low, high = src[si], src[si + 1]
        si += 2

        if high not in (CARMACK_NEAR, CARMACK_FAR):
            buffer += bytes((low, high))
        elif low == 0:
            # escape byte occurring as plain data
            if si >= len(src):
                raise CarmackError(f"truncated escaped literal at source byte {si}")
            buffer += bytes((src[si], high))
            si += 1
        else:
            count = low * 2
            if high == CARMACK_NEAR:
                if si >= len(src):
                    raise CarmackError(f"truncated near pointer at source byte {si}")
                start = len(buffer) - src[si] * 2
                si += 1
            else:
                if si + 2 > len(src):
                    raise CarmackError(f"truncated far pointer at source byte {si}")
                start = int.from_bytes(src[si : si + 2], "little") * 2
                si += 2
            if not 0 <= start < len(buffer):
                raise CarmackError(f"copy source {start} outside of {len(buffer)} expanded bytes")
            _copy(buffer, start, count)

        if len(buffer) > size:
            raise CarmackError(f"dst buffer has length of {size} but was filled past it to {len(buffer)}")

    if len(buffer) != size:
        raise CarmackError(f"dst buffer has length of {size} but was filled to {len(buffer)}")
    return bytes(buffer)


def _copy(buffer: bytearray, start: int, length: int) -> None:
    for i in range(start, start + length):
        buffer.append(buffer[i])
