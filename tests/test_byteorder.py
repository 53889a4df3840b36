import pytest

from slipqr.byteorder import swap_int16, swap_uint16, swap_uint32


def test_swap_uint16_value():
    assert swap_uint16(0x1234) == 0x3412


def test_swap_uint32_value():
    assert swap_uint32(0x12345678) == 0x78563412


def test_swap_int16_negative():
    assert swap_int16(-2) == -257


def test_zero_is_fixed_point():
    assert swap_int16(0) == 0
    assert swap_uint16(0) == 0
    assert swap_uint32(0) == 0


def test_swaps_are_involutions():
    assert all(swap_int16(swap_int16(v)) == v for v in range(-32768, 32768, 97))
    assert all(swap_uint16(swap_uint16(v)) == v for v in range(0, 65536, 89))
    assert all(swap_uint32(swap_uint32(v)) == v for v in range(0, 2**32, 2**32 // 101))


def test_signed_and_unsigned_agree_on_bit_pattern():
    for value in range(-32768, 32768, 311):
        unsigned = value & 0xFFFF
        assert swap_int16(value) & 0xFFFF == swap_uint16(unsigned)


@pytest.mark.parametrize(
    "func, value",
    [
        (swap_int16, 32768),
        (swap_int16, -32769),
        (swap_uint16, -1),
        (swap_uint16, 65536),
        (swap_uint32, -1),
        (swap_uint32, 2**32),
    ],
)
def test_out_of_range_raises(func, value):
    with pytest.raises(ValueError):
        func(value)