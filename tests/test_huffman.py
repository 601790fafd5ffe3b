"""
Tests for the bit reader and the Huffman dictionary.
"""

import pytest

from c3dlib.idsoft._common import HUFFMAN_NODE_COUNT, HUFFMAN_ROOT
from c3dlib.idsoft.errors import AssetLoadError, EndOfStream, HuffmanUnderrun
from c3dlib.idsoft.huffman import BitStream, HuffmanDictionary, HuffmanNode
from c3dlib.types import BitOrder

from tests._encoders import ABC_NODES, dictionary_bytes, huffman_bits, pack_bits

# a deeper tree: every byte value 0..15 reachable, built as a chain
CHAIN_NODES = {
    HUFFMAN_ROOT - depth: (depth, HUFFMAN_NODE_COUNT + HUFFMAN_ROOT - depth - 1)
    for depth in range(15)
} | {HUFFMAN_ROOT - 15: (15, 0xFF)}


@pytest.fixture
def abc() -> HuffmanDictionary:
    return HuffmanDictionary.from_bytes(dictionary_bytes(ABC_NODES))


def test_bitstream_lsb_first():
    stream = BitStream(b"\x01\x80")
    bits = [stream.read_bit() for _ in range(16)]
    assert bits == [1] + [0] * 14 + [1]
    assert stream.exhausted
    with pytest.raises(EndOfStream):
        stream.read_bit()


def test_bitstream_msb_first():
    stream = BitStream(b"\x01\x80", BitOrder.MSB)
    bits = [stream.read_bit() for _ in range(16)]
    assert bits == [0] * 7 + [1, 1] + [0] * 7


def test_bitstream_empty():
    stream = BitStream(b"")
    assert stream.exhausted
    with pytest.raises(EndOfStream):
        stream.read_bit()


def test_bitstream_not_exhausted_mid_byte():
    stream = BitStream(b"\xff")
    stream.read_bit()
    assert not stream.exhausted


def test_decode_symbol(abc: HuffmanDictionary):
    # 0, 10, 11 -> A, B, C
    stream = BitStream(pack_bits([0, 1, 0, 1, 1]))
    assert [abc.decode_symbol(stream) for _ in range(3)] == [0x41, 0x42, 0x43]


def test_expand_round_trip(abc: HuffmanDictionary):
    message = b"ABCCBAACAB"
    src = pack_bits(huffman_bits(ABC_NODES, message))
    assert abc.expand(src, len(message)) == message


def test_expand_round_trip_deep_tree():
    dictionary = HuffmanDictionary.from_bytes(dictionary_bytes(CHAIN_NODES))
    message = bytes(range(16)) * 3 + b"\x0f\x00\xff"
    src = pack_bits(huffman_bits(CHAIN_NODES, message))
    assert dictionary.expand(src, len(message)) == message


def test_expand_round_trip_msb():
    dictionary = HuffmanDictionary.from_bytes(dictionary_bytes(ABC_NODES), BitOrder.MSB)
    message = b"CABBAC"
    src = pack_bits(huffman_bits(ABC_NODES, message), BitOrder.MSB)
    assert dictionary.expand(src, len(message)) == message


def test_expand_ignores_trailing_bits(abc: HuffmanDictionary):
    src = pack_bits(huffman_bits(ABC_NODES, b"CC")) + b"\xff\xff"
    assert abc.expand(src, 2) == b"CC"


def test_expand_zero_length(abc: HuffmanDictionary):
    assert abc.expand(b"", 0) == b""


def test_expand_underrun_after_one_bit_truncation(abc: HuffmanDictionary):
    # 4 x B + A is exactly 9 bits, dropping the last one leaves a single byte
    message = b"BBBBA"
    bits = huffman_bits(ABC_NODES, message)
    assert len(bits) == 9
    assert abc.expand(pack_bits(bits), len(message)) == message

    with pytest.raises(HuffmanUnderrun) as excinfo:
        abc.expand(pack_bits(bits[:-1]), len(message))
    assert excinfo.value.produced == 4
    assert excinfo.value.expected == 5
    assert excinfo.value.available == 1
    assert isinstance(excinfo.value, EndOfStream)


def test_dictionary_too_short():
    with pytest.raises(AssetLoadError):
        HuffmanDictionary.from_bytes(b"\x00" * 1020)


def test_dictionary_rejects_out_of_range_reference():
    with pytest.raises(AssetLoadError):
        HuffmanDictionary.from_bytes(dictionary_bytes({12: (0x41, 0x200)}))


def test_dictionary_accepts_largest_reference():
    dictionary = HuffmanDictionary.from_bytes(dictionary_bytes({12: (0x41, 0x1FF)}))
    assert dictionary.nodes[12] == HuffmanNode(zero=0x41, one=0x1FF)


def test_dictionary_node_count():
    with pytest.raises(AssetLoadError):
        HuffmanDictionary((HuffmanNode(0, 0),) * 255)
