HUFFMAN_NODE_COUNT = 256
HUFFMAN_ROOT = 254
HUFFMAN_DICTIONARY_SIZE = HUFFMAN_NODE_COUNT * 4

CHUNK_SIZE_PREFIX = 4

PICTURE_TABLE_CHUNK = 0
FIRST_PICTURE_CHUNK = 5

CARMACK_NEAR = 0xA7
CARMACK_FAR = 0xA8

RLEW_TAG = 0xABCD

MAP_DELIMITER = b"!ID!"
MAP_PLANE_COUNT = 3


def sparse_marker(entry_width: int) -> int:
    return (1 << (8 * entry_width)) - 1
