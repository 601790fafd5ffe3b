import pytest

from c3dlib.idsoft import carmack
from c3dlib.idsoft.errors import CarmackError


def test_literal_words():
    assert carmack.expand(bytes([0x41, 0x00, 0x42, 0x00]), 4) == bytes([0x41, 0x00, 0x42, 0x00])


def test_literal_words_are_copied_verbatim():
    assert carmack.expand(bytes([0x00, 0x41, 0x00, 0x42]), 4) == bytes([0x00, 0x41, 0x00, 0x42])


def test_near_escape_with_zero_count_is_a_literal():
    # (0x00, 0xA7) followed by 0x12 is the word 0xA712, not an empty copy
    src = bytes([0x00, 0xA7, 0x12, 0x34, 0x00])
    assert carmack.expand(src, 4) == bytes([0x12, 0xA7, 0x34, 0x00])


def test_far_escape_with_zero_count_is_a_literal():
    src = bytes([0x00, 0xA8, 0xFF, 0x01, 0x02])
    assert carmack.expand(src, 4) == bytes([0xFF, 0xA8, 0x01, 0x02])


def test_near_copy():
    # two literal words, then copy 2 words from 2 words back
    src = bytes([0x01, 0x00, 0x02, 0x00, 0x02, 0xA7, 0x02])
    assert carmack.expand(src, 8) == bytes([0x01, 0x00, 0x02, 0x00, 0x01, 0x00, 0x02, 0x00])


def test_far_copy():
    # three literal words, then copy 2 words from word offset 1
    src = bytes([0x01, 0x00, 0x02, 0x00, 0x03, 0x00, 0x02, 0xA8, 0x01, 0x00])
    assert carmack.expand(src, 10) == bytes([0x01, 0x00, 0x02, 0x00, 0x03, 0x00, 0x02, 0x00, 0x03, 0x00])


def test_overlapping_copy_repeats():
    src = bytes([0x07, 0x00, 0x03, 0xA7, 0x01])
    assert carmack.expand(src, 8) == bytes([0x07, 0x00] * 4)


def test_empty():
    assert carmack.expand(b"", 0) == b""


def test_underrun():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x41, 0x00]), 4)


def test_overrun():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x41, 0x00, 0x42, 0x00]), 2)


def test_overrun_by_copy():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x01, 0x00, 0x04, 0xA7, 0x01]), 6)


def test_odd_length_source():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x41, 0x00, 0x42]), 4)


def test_truncated_escaped_literal():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x00, 0xA7]), 2)


def test_truncated_far_pointer():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x01, 0x00, 0x01, 0xA8, 0x00]), 4)


def test_near_pointer_before_start():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x01, 0x00, 0x01, 0xA7, 0x05]), 4)


def test_far_pointer_past_output():
    with pytest.raises(CarmackError):
        carmack.expand(bytes([0x01, 0x00, 0x01, 0xA8, 0x01, 0x00]), 4)
