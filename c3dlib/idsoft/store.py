from pathlib import Path
from threading import Lock

from c3dlib.idsoft._common import CHUNK_SIZE_PREFIX
from c3dlib.idsoft.directory import ChunkDirectory
from c3dlib.idsoft.errors import (
    AssetLoadError,
    ChunkDecodeError,
    HuffmanUnderrun,
)
from c3dlib.idsoft.huffman import HuffmanDictionary
from c3dlib.types import BitOrder, DomainSpec


class AssetStore:
    """
    Read access to the chunks of one data file.

    Chunks are Huffman expanded on first access and kept for the lifetime of
    the store. Population of the cache is serialized, so a store may be
    shared between threads.
    """

    def __init__(
        self,
        data: bytes,
        header: bytes,
        dictionary: bytes,
        *,
        entry_width: int,
        entry_count: int,
        sparse: bool,
        bit_order: BitOrder = BitOrder.LSB,
    ):
        self.directory = ChunkDirectory.from_bytes(header, entry_width, entry_count, sparse)
        self.dictionary = HuffmanDictionary.from_bytes(dictionary, bit_order)

        size = self.directory.total_size
        if len(data) < size:
            raise AssetLoadError(f"data file needs {size} bytes, got {len(data)}")
        self._data = bytes(data[:size])

        self._cache: dict[int, bytes] = {}
        self._lock = Lock()

    @staticmethod
    def open(spec: DomainSpec, root: Path) -> "AssetStore":
        return AssetStore(
            (root / spec.data).read_bytes(),
            (root / spec.header).read_bytes(),
            (root / spec.dictionary).read_bytes(),
            entry_width=spec.entry_width,
            entry_count=spec.entry_count,
            sparse=spec.sparse,
            bit_order=spec.bit_order,
        )

    def __len__(self) -> int:
        return len(self.directory)

    def chunk(self, index: int) -> bytes | None:
        cached = self._cache.get(index)
        if cached is not None:
            return cached
        if not self.directory.is_present(index):
            return None

        data = self._decode(index)
        with self._lock:
            return self._cache.setdefault(index, data)

    def _decode(self, index: int) -> bytes:
        start, end = self.directory.byte_range(index)
        compressed_size = max(end - start - CHUNK_SIZE_PREFIX, 0)
        if end - start < CHUNK_SIZE_PREFIX:
            raise ChunkDecodeError(index, None, compressed_size, "too short for the size prefix")

        size = int.from_bytes(self._data[start : start + CHUNK_SIZE_PREFIX], "little")
        try:
            return self.dictionary.expand(self._data[start + CHUNK_SIZE_PREFIX : end], size)
        except HuffmanUnderrun as err:
            raise ChunkDecodeError(index, size, compressed_size, str(err)) from err
