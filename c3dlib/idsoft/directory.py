from typing import Iterator

from c3dlib.idsoft._common import sparse_marker
from c3dlib.idsoft.errors import AbsentEntry, AssetLoadError, NoSuccessor


class ChunkDirectory:
    """
    Offsets of every chunk of a data file, as stored in the `*HEAD` files.

    Sparse slots are `None`. The last slot holds the size of the data file
    and is never a chunk of its own.
    """

    def __init__(self, entries: tuple[int | None, ...]) -> None:
        if not entries:
            raise AssetLoadError("empty chunk directory")
        if entries[-1] is None:
            raise AssetLoadError("last directory entry must hold the data size")
        previous = 0
        for index, offset in enumerate(entries):
            if offset is None:
                continue
            if offset < previous:
                raise AssetLoadError(f"directory entry {index} goes backwards ({offset} < {previous})")
            previous = offset
        self.entries = entries

    @staticmethod
    def from_bytes(data: bytes, entry_width: int, entry_count: int, sparse: bool) -> "ChunkDirectory":
        size = entry_width * entry_count
        if len(data) < size:
            raise AssetLoadError(
                f"directory needs {entry_count} entries of {entry_width} bytes, got {len(data)} bytes"
            )
        marker = sparse_marker(entry_width) if sparse else None
        entries: list[int | None] = []
        for offset in range(0, size, entry_width):
            value = int.from_bytes(data[offset : offset + entry_width], "little")
            entries.append(None if value == marker else value)
        return ChunkDirectory(tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def total_size(self) -> int:
        size = self.entries[-1]
        assert size is not None
        return size

    def _entry(self, index: int) -> int | None:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"directory index {index} out of range (0..{len(self.entries) - 1})")
        return self.entries[index]

    def is_present(self, index: int) -> bool:
        return self._entry(index) is not None

    def byte_range(self, index: int) -> tuple[int, int]:
        start = self._entry(index)
        if start is None:
            raise AbsentEntry(index)
        for end in self.entries[index + 1 :]:
            if end is not None:
                return start, end
        raise NoSuccessor(index)

    def chunk_indices(self) -> Iterator[int]:
        for index in range(len(self.entries) - 1):
            if self.entries[index] is not None:
                yield index
