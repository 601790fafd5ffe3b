from dataclasses import dataclass

from c3dlib.idsoft._common import (
    HUFFMAN_DICTIONARY_SIZE,
    HUFFMAN_NODE_COUNT,
    HUFFMAN_ROOT,
)
from c3dlib.idsoft.errors import AssetLoadError, EndOfStream, HuffmanUnderrun
from c3dlib.types import BitOrder


class BitStream:
    def __init__(self, data: bytes, order: BitOrder = BitOrder.LSB) -> None:
        self._data = data
        self._order = order
        self._position = 0
        self._byte = 0
        self._mask = 0

    @property
    def exhausted(self) -> bool:
        return self._mask == 0 and self._position >= len(self._data)

    def read_bit(self) -> int:
        if self._mask == 0:
            if self._position >= len(self._data):
                raise EndOfStream(f"no bits left in {len(self._data)} bytes")
            self._byte = self._data[self._position]
            self._position += 1
            self._mask = 0x01 if self._order == BitOrder.LSB else 0x80
        bit = 1 if self._byte & self._mask else 0
        if self._order == BitOrder.LSB:
            self._mask = (self._mask << 1) & 0xFF
        else:
            self._mask >>= 1
        return bit


@dataclass(frozen=True)
class HuffmanNode:
    zero: int
    one: int

    def child(self, bit: int) -> int:
        return self.one if bit else self.zero


class HuffmanDictionary:
    """
    The 256-node tree stored in the `*DICT` files.

    A child value below 256 is a leaf holding that byte, a value in `[256, 512)`
    points at node `value - 256`. Decoding always starts at node 254.
    """

    def __init__(self, nodes: tuple[HuffmanNode, ...], order: BitOrder = BitOrder.LSB) -> None:
        if len(nodes) != HUFFMAN_NODE_COUNT:
            raise AssetLoadError(f"expected {HUFFMAN_NODE_COUNT} huffman nodes, got {len(nodes)}")
        for index, node in enumerate(nodes):
            for value in (node.zero, node.one):
                if not 0 <= value < 2 * HUFFMAN_NODE_COUNT:
                    raise AssetLoadError(f"huffman node {index} references {value:#x}")
        self.nodes = nodes
        self.order = order

    @staticmethod
    def from_bytes(data: bytes, order: BitOrder = BitOrder.LSB) -> "HuffmanDictionary":
        if len(data) < HUFFMAN_DICTIONARY_SIZE:
            raise AssetLoadError(
                f"huffman dictionary needs {HUFFMAN_DICTIONARY_SIZE} bytes, got {len(data)}"
            )
        nodes = tuple(
            HuffmanNode(
                zero=int.from_bytes(data[offset : offset + 2], "little"),
                one=int.from_bytes(data[offset + 2 : offset + 4], "little"),
            )
            for offset in range(0, HUFFMAN_DICTIONARY_SIZE, 4)
        )
        return HuffmanDictionary(nodes, order)

    def decode_symbol(self, stream: BitStream) -> int:
        node = self.nodes[HUFFMAN_ROOT]
        while True:
            value = node.child(stream.read_bit())
            if value < HUFFMAN_NODE_COUNT:
                return value
            node = self.nodes[value - HUFFMAN_NODE_COUNT]

    def expand(self, src: bytes, size: int) -> bytes:
        stream = BitStream(src, self.order)
        buffer = bytearray()
        try:
            while len(buffer) < size:
                buffer.append(self.decode_symbol(stream))
        except EndOfStream as err:
            raise HuffmanUnderrun(len(buffer), size, len(src)) from err
        return bytes(buffer)
