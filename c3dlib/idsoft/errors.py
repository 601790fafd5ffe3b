"""
Exceptions raised while loading and decoding Catacomb 3-D asset files.

They come in three flavours:
- `AssetLoadError`: a directory, dictionary or data file is malformed or too short.
Nothing is usable, the store is never built.
- chunk-local errors (`ChunkDecodeError`, `CarmackError`, `RLEWError`, `MapPlaneError`):
one asset is broken, the rest of the container can still be read.
- bit-level and lookup errors (`EndOfStream`, `NoSuccessor`, `AbsentEntry`), which the
higher levels either wrap or let through.
"""


class AssetLoadError(ValueError):
    pass


class EndOfStream(EOFError):
    pass


class HuffmanUnderrun(EndOfStream):
    def __init__(self, produced: int, expected: int, available: int) -> None:
        super().__init__(
            f"EOF on decompressed byte {produced} of {expected} from {available} compressed bytes"
        )
        self.produced = produced
        self.expected = expected
        self.available = available


class NoSuccessor(LookupError):
    def __init__(self, index: int) -> None:
        super().__init__(f"no present directory entry after index {index}")
        self.index = index


class AbsentEntry(LookupError):
    def __init__(self, index: int) -> None:
        super().__init__(f"directory entry {index} is sparse")
        self.index = index


class ChunkDecodeError(ValueError):
    def __init__(self, index: int, declared_size: int | None, compressed_size: int, reason: str) -> None:
        super().__init__(
            f"chunk {index} (declared {declared_size} bytes, {compressed_size} compressed bytes): {reason}"
        )
        self.index = index
        self.declared_size = declared_size
        self.compressed_size = compressed_size


class CarmackError(ValueError):
    pass


class RLEWError(ValueError):
    pass


class MapPlaneError(ValueError):
    pass
