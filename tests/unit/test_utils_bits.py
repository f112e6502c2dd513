import pytest
from src.grumpy_asm.utils import is_u32, is_i32, u32_be, i32_be, hex_bytes

def test_hex_bytes():
    assert hex_bytes(b"\x01\x00\x0f") == "01 00 0f"

def test_range_checks():
    assert is_i32(2**31 - 1) and is_i32(-2**31)
    assert not is_i32(2**31) and not is_i32(-2**31 - 1)
    assert is_u32(0) and is_u32(2**32 - 1)
    assert not is_u32(-1) and not is_u32(2**32)

def test_big_endian():
    assert u32_be(4) == b"\x00\x00\x00\x04"
    assert i32_be(700) == b"\x00\x00\x02\xbc"
    assert i32_be(-1) == b"\xff\xff\xff\xff"
    with pytest.raises(ValueError):
        u32_be(-1)
    with pytest.raises(ValueError):
        i32_be(2**31)
