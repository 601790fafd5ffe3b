from typing import BinaryIO


def read_any_bytes(fp: BinaryIO, size: int) -> bytes:
    data = fp.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def read_any_le_u(fp: BinaryIO, size: int) -> int:
    return int.from_bytes(read_any_bytes(fp, size), "little")


def read_any_le_s(fp: BinaryIO, size: int) -> int:
    return int.from_bytes(read_any_bytes(fp, size), "little", signed=True)


def le_u(data: bytes, offset: int, size: int) -> int:
    end = offset + size
    if offset < 0 or end > len(data):
        raise EOFError(f"expected {size} bytes at {offset}, buffer has {len(data)}")
    return int.from_bytes(data[offset:end], "little")
