"""The sponge interface and the helpers shared by its implementations."""

from __future__ import annotations

import copy as _copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from .fields import FieldElement, PrimeField


@dataclass(frozen=True)
class FieldElementSize:
    """Size of a squeezed field element: the full field or a number of bits."""

    max_bits: Optional[int] = None

    @staticmethod
    def full() -> FieldElementSize:
        return FieldElementSize(None)

    @staticmethod
    def truncated(num_bits: int) -> FieldElementSize:
        if num_bits < 0:
            raise ValueError("num_bits must not be negative")
        return FieldElementSize(num_bits)

    @property
    def is_full(self) -> bool:
        return self.max_bits is None

    def num_bits(self, field: PrimeField) -> int:
        if self.max_bits is None:
            return field.modulus_bit_size - 1
        if self.max_bits > field.modulus_bit_size:
            raise ValueError("num_bits is greater than the capacity of the field.")
        return self.max_bits

    @staticmethod
    def total(sizes: Iterable[FieldElementSize], field: PrimeField) -> int:
        """Sum of the bit sizes of ``sizes`` in ``field``."""
        return sum(size.num_bits(field) for size in sizes)


class Phase(Enum):
    ABSORBING = "absorbing"
    SQUEEZING = "squeezing"


@dataclass(frozen=True)
class DuplexSpongeMode:
    """Whether a duplex sponge is absorbing or squeezing, and its next rate position."""

    phase: Phase
    index: int

    @staticmethod
    def absorbing(next_absorb_index: int) -> DuplexSpongeMode:
        return DuplexSpongeMode(Phase.ABSORBING, next_absorb_index)

    @staticmethod
    def squeezing(next_squeeze_index: int) -> DuplexSpongeMode:
        return DuplexSpongeMode(Phase.SQUEEZING, next_squeeze_index)

    @property
    def is_absorbing(self) -> bool:
        return self.phase is Phase.ABSORBING

    @property
    def is_squeezing(self) -> bool:
        return self.phase is Phase.SQUEEZING


def squeeze_field_elements_with_sizes_default(
    sponge: CryptographicSponge,
    field: PrimeField,
    sizes: Sequence[FieldElementSize],
) -> list[FieldElement]:
    """Squeeze bits from ``sponge`` and cut them into elements of the given sizes."""
    widths = [size.num_bits(field) for size in sizes]
    if not widths:
        return []

    bits = sponge.squeeze_bits(sum(widths))
    output = []
    position = 0
    for width in widths:
        chunk = bits[position:position + width]
        position += width
        value = sum(1 << i for i, bit in enumerate(chunk) if bit)
        output.append(field.element(value))
    return output


class CryptographicSponge(ABC):
    """A sponge absorbs inputs and later squeezes out bytes, bits or field elements."""

    @abstractmethod
    def absorb(self, *args) -> None:
        """Absorb each argument in turn."""

    @abstractmethod
    def squeeze_bytes(self, num_bytes: int) -> bytes:
        """Squeeze ``num_bytes`` bytes."""

    @abstractmethod
    def squeeze_bits(self, num_bits: int) -> list[bool]:
        """Squeeze ``num_bits`` bits."""

    def squeeze_field_elements_with_sizes(
        self, field: PrimeField, sizes: Sequence[FieldElementSize]
    ) -> list[FieldElement]:
        """Squeeze one element of ``field`` per entry of ``sizes``."""
        return squeeze_field_elements_with_sizes_default(self, field, sizes)

    def squeeze_field_elements(self, field: PrimeField, num_elements: int) -> list[FieldElement]:
        """Squeeze ``num_elements`` full-size elements of ``field``."""
        return self.squeeze_field_elements_with_sizes(
            field, [FieldElementSize.full()] * num_elements
        )

    def copy(self) -> CryptographicSponge:
        return _copy.deepcopy(self)

    def fork(self, domain: bytes) -> CryptographicSponge:
        """Return a copy of this sponge separated by ``domain``."""
        forked = self.copy()
        data = bytes(domain)
        forked.absorb(len(data).to_bytes(8, "little") + data)
        return forked