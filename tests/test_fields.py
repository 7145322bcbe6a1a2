import pytest

from poseidon_sponge.fields import FR, FieldElement, PrimeField

SMALL = PrimeField(101)


def test_scalar_field_bit_size():
    top = FR.element(2**254)
    assert top.value.bit_length() == FR.modulus_bit_size
    assert FR.modulus_bit_size == 255


def test_element_reduces_modulo():
    assert FR.element(FR.modulus + 5) == FR.element(5)
    assert FR.element(-1).value == FR.modulus - 1
    assert FR.element(-1) == -FR.element(1)


def test_arithmetic_laws():
    a = FR.element(123456789)
    b = FR.element(987654321)
    assert a + b - b == a
    assert (a * b) / b == a
    assert a * a.inverse() == FR.one
    assert a + 1 - 1 == a
    assert 1 - a == -(a - 1)


def test_fermat_little_theorem():
    a = FR.element(31337)
    assert a ** (FR.modulus - 1) == FR.one


def test_generator_is_non_residue():
    g = FR.element(FR.generator)
    assert g ** ((FR.modulus - 1) // 2) == FR.element(-1)


def test_inverse_of_zero_raises():
    with pytest.raises(ZeroDivisionError):
        FR.zero.inverse()


def test_is_zero():
    assert FR.zero.is_zero()
    assert not FR.one.is_zero()


def test_from_bigint_bounds():
    assert FR.from_bigint(FR.modulus) is None
    assert FR.from_bigint(FR.modulus - 1).value == FR.modulus - 1
    assert FR.from_bigint(-1) is None


def test_from_le_bytes_mod_order_reduces():
    data = FR.modulus.to_bytes(32, "little")
    assert FR.from_le_bytes_mod_order(data).is_zero()
    assert FR.from_le_bytes_mod_order(b"") == FR.zero


def test_byte_and_bit_round_trip():
    e = FR.element(FR.modulus - 12345)
    assert len(e.to_bytes_le()) == FR.num_limbs * 8
    assert len(e.to_bits_le()) == len(e.to_bytes_le()) * 8
    assert FR.from_le_bytes_mod_order(e.to_bytes_le()) == e
    assert FR.from_bits_le(e.to_bits_le()) == e


def test_from_bits_le_rejects_large_values():
    bits = [True] * FR.modulus_bit_size
    assert FR.from_bits_le(bits) is None


def test_mixed_fields_raise():
    with pytest.raises(ValueError):
        FR.one + SMALL.one
    with pytest.raises(ValueError):
        FR.element(SMALL.one)


def test_non_canonical_construction_raises():
    with pytest.raises(ValueError):
        FieldElement(FR, FR.modulus)


def test_ordering_by_value():
    assert FR.element(1) < FR.element(2)
    assert FR.element(-1) > FR.element(2)


def test_field_equality_ignores_name():
    assert PrimeField(101, name="a") == SMALL
    assert PrimeField(103) != SMALL


def test_non_integer_value_raises():
    with pytest.raises(TypeError):
        FR.element(1.5)