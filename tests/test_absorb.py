import pytest

from poseidon_sponge.absorb import (
    Maybe,
    ShortWeierstrassAffine,
    SInt,
    TwistedEdwardsAffine,
    UInt,
    WithLength,
    collect_sponge_bytes,
    collect_sponge_field_elements,
    field_cast,
    to_sponge_bytes,
    to_sponge_bytes_with_length,
    to_sponge_field_elements,
    to_sponge_field_elements_with_length,
)
from poseidon_sponge.fields import FR, PrimeField

SMALL = PrimeField(101)


def test_field_cast_same_field_is_identity():
    expected = [FR.element(i * 7919 + 3) for i in range(10)]
    assert field_cast(expected, FR) == expected


def test_field_cast_other_field_is_none():
    assert field_cast([SMALL.element(3)], FR) is None


def test_bool_encoding():
    assert to_sponge_bytes(True) == b"\x01"
    assert to_sponge_field_elements(False, FR) == [FR.zero]


def test_unsigned_integer_round_trip():
    value = UInt(0x0102, 16)
    data = to_sponge_bytes(value)
    assert len(data) == 16 // 8
    assert int.from_bytes(data, "little") == 0x0102
    assert to_sponge_field_elements(value, FR) == [FR.element(0x0102)]


def test_signed_integer_encoding():
    assert to_sponge_bytes(SInt(-1, 8)) == b"\xff"
    assert int.from_bytes(to_sponge_bytes(SInt(-5, 32)), "little", signed=True) == -5
    assert to_sponge_field_elements(SInt(-5, 32), FR) == [-FR.element(5)]


def test_integer_range_checks():
    with pytest.raises(ValueError):
        UInt(256, 8)
    with pytest.raises(ValueError):
        UInt(-1, 8)
    with pytest.raises(ValueError):
        SInt(128, 8)
    with pytest.raises(ValueError):
        UInt(1, 24)


def test_plain_int_is_rejected():
    with pytest.raises(TypeError):
        to_sponge_bytes(5)
    with pytest.raises(TypeError):
        to_sponge_field_elements(5, FR)


def test_bytes_pack_length_first():
    elems = to_sponge_field_elements(b"\x01\x02", FR)
    assert len(elems) == 1
    assert elems[0].to_bytes_le()[:10] == (2).to_bytes(8, "little") + b"\x01\x02"


def test_u8_list_packs_like_bytes():
    data = bytes(range(100))
    as_list = [UInt(b, 8) for b in data]
    assert to_sponge_field_elements(as_list, FR) == to_sponge_field_elements(data, FR)
    assert to_sponge_bytes(as_list) == data
    chunk = (FR.modulus_bit_size - 1) // 8
    assert len(to_sponge_field_elements(data, FR)) == -(-(len(data) + 8) // chunk)


def test_field_element_encoding():
    e = FR.element(FR.modulus - 2)
    data = to_sponge_bytes(e)
    assert len(data) == FR.serialized_size
    assert FR.from_le_bytes_mod_order(data) == e
    assert to_sponge_field_elements(e, FR) == [e]


def test_foreign_field_element_single_is_dropped():
    assert to_sponge_field_elements(SMALL.element(3), FR) == []


def test_foreign_field_element_list_raises():
    with pytest.raises(ValueError):
        to_sponge_field_elements([SMALL.element(3), SMALL.element(4)], FR)


def test_maybe_encoding():
    assert to_sponge_bytes(Maybe(None)) == b"\x00"
    assert to_sponge_bytes(None) == b"\x00"
    assert to_sponge_bytes(Maybe(UInt(3, 8))) == b"\x01\x03"
    assert to_sponge_field_elements(Maybe(UInt(3, 8)), FR) == [FR.one, FR.element(3)]


def test_twisted_edwards_point():
    x, y = FR.element(11), FR.element(22)
    point = TwistedEdwardsAffine(x, y)
    assert to_sponge_bytes(point) == x.to_bytes_le() + y.to_bytes_le()
    assert to_sponge_field_elements(point, FR) == [x, y]
    with pytest.raises(ValueError):
        to_sponge_field_elements(point, SMALL)


def test_short_weierstrass_point():
    zero = ShortWeierstrassAffine(FR.zero, FR.zero, infinity=True)
    data = to_sponge_bytes(zero)
    assert data[-1:] == b"\x01"
    assert len(data) == 2 * FR.bigint_byte_size + 1
    assert to_sponge_field_elements(zero, FR) == [FR.zero, FR.zero, FR.one]


def test_point_coordinates_must_share_field():
    with pytest.raises(ValueError):
        TwistedEdwardsAffine(FR.one, SMALL.one)


def test_length_prefix_separates_lists():
    first = [b"\x01\x02\x03\x04", b"\x05\x06"]
    second = [b"\x01\x02", b"\x03\x04\x05\x06"]
    assert to_sponge_bytes(first) == to_sponge_bytes(second)
    with_len_1 = [WithLength(v) for v in first]
    with_len_2 = [WithLength(v) for v in second]
    assert to_sponge_bytes(with_len_1) != to_sponge_bytes(with_len_2)
    assert to_sponge_field_elements(with_len_1, FR) != to_sponge_field_elements(with_len_2, FR)


def test_with_length_functions():
    data = b"\x07\x08\x09"
    assert to_sponge_bytes_with_length(data) == (3).to_bytes(8, "little") + data
    elems = to_sponge_field_elements_with_length(data, FR)
    assert elems[0] == FR.element(len(data))
    assert elems[1:] == to_sponge_field_elements(data, FR)


def test_collect_sponge_bytes():
    values = [SInt(v, 32) for v in (6, 5, 4, 3, 2, 1)]
    extra = FR.element(42)
    assert collect_sponge_bytes(values, extra) == to_sponge_bytes(values) + to_sponge_bytes(extra)


def test_collect_sponge_field_elements():
    values = [SInt(v, 32) for v in (6, 5, 4, 3, 2, 1)]
    extra = FR.element(42)
    collected = collect_sponge_field_elements(FR, values, extra)
    assert collected == to_sponge_field_elements(values, FR) + [extra]
    assert collected[:2] == [FR.element(6), FR.element(5)]


def test_unknown_type_raises():
    with pytest.raises(TypeError):
        to_sponge_bytes(1.5)