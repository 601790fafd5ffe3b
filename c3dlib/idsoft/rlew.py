from c3dlib.idsoft._common import RLEW_TAG
from c3dlib.idsoft.errors import RLEWError


def expand(src: bytes, size: int, tag: int = RLEW_TAG) -> bytes:
    words = [int.from_bytes(src[i : i + 2], "little") for i in range(0, len(src) - 1, 2)]
    if not words:
        raise RLEWError("missing length prefix")
    if words[0] != size:
        raise RLEWError(f"dst buffer length {size} does not match prefixed length {words[0]} in compressed data")

    buffer = bytearray()
    si = 1
    while si < len(words):
        word = words[si]
        si += 1
        if word == tag:
            if si + 2 > len(words):
                raise RLEWError(f"truncated run at word {si - 1}")
            count, value = words[si], words[si + 1]
            si += 2
            buffer += value.to_bytes(2, "little") * count
        else:
            buffer += word.to_bytes(2, "little")
        if len(buffer) > size:
            raise RLEWError(f"dst buffer has length of {size} but was filled past it to {len(buffer)}")

    if len(buffer) != size:
        raise RLEWError(f"dst buffer has length of {size} but was filled to {len(buffer)}")
    return bytes(buffer)
