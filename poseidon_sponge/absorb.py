"""Conversion of values into the bytes and field elements a sponge absorbs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import singledispatch
from typing import Any, Iterable, Optional

from .fields import FieldElement, PrimeField

_INT_WIDTHS = (8, 16, 32, 64, 128)


class Absorbable(ABC):
    """An object that knows how to present itself to a sponge."""

    @abstractmethod
    def to_sponge_bytes(self) -> bytes:
        """Bytes that represent this object."""

    @abstractmethod
    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        """Elements of ``field`` that represent this object."""


def field_cast(
    elements: Iterable[FieldElement], field: PrimeField
) -> Optional[list[FieldElement]]:
    """Re-express ``elements`` in ``field``; None if their characteristic differs."""
    items = list(elements)
    if any(e.field.characteristic != field.characteristic for e in items):
        return None
    return [field.from_le_bytes_mod_order(e.to_bytes_le()) for e in items]


def _pack_bytes(data: bytes, field: PrimeField) -> list[FieldElement]:
    payload = len(data).to_bytes(8, "little") + data
    chunk = (field.modulus_bit_size - 1) // 8
    if chunk == 0:
        raise ValueError("field is too small to hold a byte")
    return [
        field.element(int.from_bytes(payload[start:start + chunk], "little"))
        for start in range(0, len(payload), chunk)
    ]


def _check_width(bits: int) -> None:
    if bits not in _INT_WIDTHS:
        raise ValueError(f"unsupported integer width {bits}")


@dataclass(frozen=True)
class UInt(Absorbable):
    """An unsigned integer of a fixed width in bits."""

    value: int
    bits: int = 64

    def __post_init__(self) -> None:
        _check_width(self.bits)
        if not 0 <= self.value < 1 << self.bits:
            raise ValueError(f"{self.value} does not fit in u{self.bits}")

    def to_sponge_bytes(self) -> bytes:
        return self.value.to_bytes(self.bits // 8, "little")

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        return [field.element(self.value)]


@dataclass(frozen=True)
class SInt(Absorbable):
    """A two's-complement signed integer of a fixed width in bits."""

    value: int
    bits: int = 64

    def __post_init__(self) -> None:
        _check_width(self.bits)
        bound = 1 << (self.bits - 1)
        if not -bound <= self.value < bound:
            raise ValueError(f"{self.value} does not fit in i{self.bits}")

    def to_sponge_bytes(self) -> bytes:
        return self.value.to_bytes(self.bits // 8, "little", signed=True)

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        element = field.element(abs(self.value))
        return [-element if self.value < 0 else element]


@dataclass(frozen=True)
class Maybe(Absorbable):
    """An optional value; absorbs a presence flag followed by the value."""

    value: Any = None

    def to_sponge_bytes(self) -> bytes:
        present = self.value is not None
        tail = to_sponge_bytes(self.value) if present else b""
        return bytes([present]) + tail

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        present = self.value is not None
        tail = to_sponge_field_elements(self.value, field) if present else []
        return [field.element(present)] + tail


def _cast_or_raise(elements: list[FieldElement], field: PrimeField) -> list[FieldElement]:
    cast = field_cast(elements, field)
    if cast is None:
        raise ValueError("cannot absorb non-native field elements")
    return cast


@dataclass(frozen=True)
class TwistedEdwardsAffine(Absorbable):
    """An affine twisted Edwards point over a prime field."""

    x: FieldElement
    y: FieldElement

    def __post_init__(self) -> None:
        if self.x.field != self.y.field:
            raise ValueError("coordinates belong to different fields")

    def to_sponge_bytes(self) -> bytes:
        return self.x.to_bytes_le() + self.y.to_bytes_le()

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        return _cast_or_raise([self.x, self.y], field)


@dataclass(frozen=True)
class ShortWeierstrassAffine(Absorbable):
    """An affine short Weierstrass point over a prime field, with an infinity flag."""

    x: FieldElement
    y: FieldElement
    infinity: bool = False

    def __post_init__(self) -> None:
        if self.x.field != self.y.field:
            raise ValueError("coordinates belong to different fields")

    def to_sponge_bytes(self) -> bytes:
        return self.x.to_bytes_le() + self.y.to_bytes_le() + bytes([self.infinity])

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        flag = self.x.field.element(self.infinity)
        return _cast_or_raise([self.x, self.y, flag], field)


@dataclass(frozen=True)
class WithLength(Absorbable):
    """A variable-length value that absorbs its length before its contents."""

    value: Any

    def to_sponge_bytes(self) -> bytes:
        return to_sponge_bytes_with_length(self.value)

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        return to_sponge_field_elements_with_length(self.value, field)


@singledispatch
def to_sponge_bytes(value: Any) -> bytes:
    """Bytes that a sponge absorbs for ``value``."""
    raise TypeError(f"cannot absorb a value of type {type(value).__name__}")


@singledispatch
def to_sponge_field_elements(value: Any, field: PrimeField) -> list[FieldElement]:
    """Elements of ``field`` that a sponge absorbs for ``value``."""
    raise TypeError(f"cannot absorb a value of type {type(value).__name__}")


@to_sponge_bytes.register(Absorbable)
def _absorbable_bytes(value: Absorbable) -> bytes:
    return value.to_sponge_bytes()


@to_sponge_field_elements.register(Absorbable)
def _absorbable_elements(value: Absorbable, field: PrimeField) -> list[FieldElement]:
    return value.to_sponge_field_elements(field)


@to_sponge_bytes.register(int)
def _int_bytes(value: int) -> bytes:
    raise TypeError("integers have no fixed width; wrap them in UInt or SInt")


@to_sponge_field_elements.register(int)
def _int_elements(value: int, field: PrimeField) -> list[FieldElement]:
    raise TypeError("integers have no fixed width; wrap them in UInt or SInt")


@to_sponge_bytes.register(bool)
def _bool_bytes(value: bool) -> bytes:
    return bytes([value])


@to_sponge_field_elements.register(bool)
def _bool_elements(value: bool, field: PrimeField) -> list[FieldElement]:
    return [field.element(value)]


@to_sponge_bytes.register(type(None))
def _none_bytes(value: None) -> bytes:
    return Maybe(None).to_sponge_bytes()


@to_sponge_field_elements.register(type(None))
def _none_elements(value: None, field: PrimeField) -> list[FieldElement]:
    return Maybe(None).to_sponge_field_elements(field)


@to_sponge_bytes.register(FieldElement)
def _element_bytes(value: FieldElement) -> bytes:
    return value.value.to_bytes(value.field.serialized_size, "little")


@to_sponge_field_elements.register(FieldElement)
def _element_elements(value: FieldElement, field: PrimeField) -> list[FieldElement]:
    return field_cast([value], field) or []


@to_sponge_bytes.register(bytes)
@to_sponge_bytes.register(bytearray)
@to_sponge_bytes.register(memoryview)
def _raw_bytes(value) -> bytes:
    return bytes(value)


@to_sponge_field_elements.register(bytes)
@to_sponge_field_elements.register(bytearray)
@to_sponge_field_elements.register(memoryview)
def _raw_elements(value, field: PrimeField) -> list[FieldElement]:
    return _pack_bytes(bytes(value), field)


@to_sponge_bytes.register(list)
@to_sponge_bytes.register(tuple)
def _sequence_bytes(value) -> bytes:
    return b"".join(to_sponge_bytes(item) for item in value)


@to_sponge_field_elements.register(list)
@to_sponge_field_elements.register(tuple)
def _sequence_elements(value, field: PrimeField) -> list[FieldElement]:
    items = list(value)
    if items and all(isinstance(item, UInt) and item.bits == 8 for item in items):
        return _pack_bytes(bytes(item.value for item in items), field)
    if items and all(isinstance(item, FieldElement) for item in items):
        return _cast_or_raise(items, field)
    return [e for item in items for e in to_sponge_field_elements(item, field)]


def to_sponge_bytes_with_length(value: Any) -> bytes:
    """Bytes of ``value`` preceded by its length as a 64-bit integer."""
    return UInt(len(value), 64).to_sponge_bytes() + to_sponge_bytes(value)


def to_sponge_field_elements_with_length(value: Any, field: PrimeField) -> list[FieldElement]:
    """Field elements of ``value`` preceded by its length."""
    return UInt(len(value), 64).to_sponge_field_elements(field) + to_sponge_field_elements(
        value, field
    )


def collect_sponge_bytes(*args: Any) -> bytes:
    """Concatenate the sponge bytes of every argument."""
    return b"".join(to_sponge_bytes(arg) for arg in args)


def collect_sponge_field_elements(field: PrimeField, *args: Any) -> list[FieldElement]:
    """Concatenate the sponge field elements of every argument."""
    return [e for arg in args for e in to_sponge_field_elements(arg, field)]