"""Prime fields with arbitrary-precision elements."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from functools import total_ordering
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class PrimeField:
    """The field of integers modulo a prime ``modulus``."""

    modulus: int
    generator: Optional[int] = dc_field(default=None, compare=False)
    name: str = dc_field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError("modulus must be at least 2")

    @property
    def characteristic(self) -> int:
        return self.modulus

    @property
    def modulus_bit_size(self) -> int:
        return self.modulus.bit_length()

    @property
    def num_limbs(self) -> int:
        """Number of 64-bit words in the integer representation."""
        return (self.modulus_bit_size + 63) // 64

    @property
    def bigint_byte_size(self) -> int:
        return self.num_limbs * 8

    @property
    def serialized_size(self) -> int:
        """Length of the compressed serialization of an element, in bytes."""
        return (self.modulus_bit_size + 7) // 8

    @property
    def zero(self) -> FieldElement:
        return FieldElement(self, 0)

    @property
    def one(self) -> FieldElement:
        return FieldElement(self, 1)

    def element(self, value: Union[int, bool, FieldElement]) -> FieldElement:
        """Return ``value`` reduced into this field."""
        if isinstance(value, FieldElement):
            if value.field != self:
                raise ValueError("element belongs to a different field")
            return value
        if not isinstance(value, int):
            raise TypeError(f"cannot convert {type(value).__name__} to a field element")
        return FieldElement(self, int(value) % self.modulus)

    def from_le_bytes_mod_order(self, data: bytes) -> FieldElement:
        """Interpret little-endian bytes as an integer and reduce it."""
        return self.element(int.from_bytes(bytes(data), "little"))

    def from_bigint(self, value: int) -> Optional[FieldElement]:
        """Return the element for ``value`` or None if it is not below the modulus."""
        if 0 <= value < self.modulus:
            return FieldElement(self, value)
        return None

    def from_bits_le(self, bits: Iterable[bool]) -> Optional[FieldElement]:
        """Build an integer from little-endian bits; None if it is not below the modulus."""
        value = sum(1 << i for i, bit in enumerate(bits) if bit)
        return self.from_bigint(value)

    def __str__(self) -> str:
        return self.name or f"GF({self.modulus})"


@total_ordering
@dataclass(frozen=True)
class FieldElement:
    """An element of a prime field, stored as its canonical integer."""

    field: PrimeField
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value < self.field.modulus:
            raise ValueError("value is not a canonical field element")

    def _other_value(self, other: object) -> Optional[int]:
        if isinstance(other, FieldElement):
            if other.field != self.field:
                raise ValueError("elements belong to different fields")
            return other.value
        if isinstance(other, int):
            return other % self.field.modulus
        return None

    def _make(self, value: int) -> FieldElement:
        return FieldElement(self.field, value % self.field.modulus)

    def __add__(self, other: object) -> FieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(self.value + value)

    __radd__ = __add__

    def __sub__(self, other: object) -> FieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(self.value - value)

    def __rsub__(self, other: object) -> FieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(value - self.value)

    def __mul__(self, other: object) -> FieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(self.value * value)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> FieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self * self._make(value).inverse()

    def __rtruediv__(self, other: object) -> FieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(value) * self.inverse()

    def __neg__(self) -> FieldElement:
        return self._make(-self.value)

    def __pow__(self, exponent: int) -> FieldElement:
        if exponent < 0:
            return self.inverse() ** (-exponent)
        return FieldElement(self.field, pow(self.value, exponent, self.field.modulus))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        if other.field != self.field:
            raise ValueError("elements belong to different fields")
        return self.value < other.value

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"FieldElement({self.value})"

    def __str__(self) -> str:
        return str(self.value)

    def is_zero(self) -> bool:
        return self.value == 0

    def inverse(self) -> FieldElement:
        """Return the multiplicative inverse; zero has none."""
        if self.value == 0:
            raise ZeroDivisionError("zero has no multiplicative inverse")
        return FieldElement(self.field, pow(self.value, -1, self.field.modulus))

    def to_bytes_le(self) -> bytes:
        """Little-endian bytes of the integer, padded to whole 64-bit words."""
        return self.value.to_bytes(self.field.bigint_byte_size, "little")

    def to_bits_le(self) -> list[bool]:
        """Little-endian bits of the integer, padded to whole 64-bit words."""
        return [bool((self.value >> i) & 1) for i in range(self.field.num_limbs * 64)]


FR = PrimeField(
    52435875175126190479447740508185965837690552500527637822603658699938581184513,
    generator=7,
    name="bls12_381_fr",
)