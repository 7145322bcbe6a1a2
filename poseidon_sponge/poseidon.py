"""A duplex sponge built on the Poseidon permutation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .absorb import field_cast, to_sponge_field_elements
from .fields import FieldElement, PrimeField
from .sponge import (
    CryptographicSponge,
    DuplexSpongeMode,
    FieldElementSize,
    squeeze_field_elements_with_sizes_default,
)


@dataclass(frozen=True)
class PoseidonConfig:
    """Round counts, S-box exponent, round keys and MDS matrix of a Poseidon instance."""

    full_rounds: int
    partial_rounds: int
    alpha: int
    mds: tuple
    ark: tuple
    rate: int
    capacity: int

    def __post_init__(self) -> None:
        mds = tuple(tuple(row) for row in self.mds)
        ark = tuple(tuple(row) for row in self.ark)
        if self.rate < 1:
            raise ValueError("rate must be at least 1")
        if self.capacity < 0:
            raise ValueError("capacity must not be negative")
        width = self.rate + self.capacity
        if len(ark) != self.full_rounds + self.partial_rounds:
            raise ValueError("ark needs one row per round")
        if any(len(row) != width for row in ark):
            raise ValueError("each ark row must have rate + capacity entries")
        if len(mds) != width or any(len(row) != width for row in mds):
            raise ValueError("mds must be a (rate + capacity) square matrix")
        fields = {e.field for row in mds + ark for e in row}
        if len(fields) != 1:
            raise ValueError("all constants must belong to the same field")
        object.__setattr__(self, "mds", mds)
        object.__setattr__(self, "ark", ark)

    @property
    def field(self) -> PrimeField:
        return self.mds[0][0].field

    @property
    def width(self) -> int:
        return self.rate + self.capacity


@dataclass(frozen=True)
class PoseidonSpongeState:
    """The state of a Poseidon sponge, without its parameters."""

    state: tuple
    mode: DuplexSpongeMode


class PoseidonSponge(CryptographicSponge):
    """A duplex sponge using the Poseidon permutation over its native field."""

    def __init__(self, config: PoseidonConfig) -> None:
        self.config = config
        self.state: list[FieldElement] = [config.field.zero] * config.width
        self.mode = DuplexSpongeMode.absorbing(0)
        self._ark = [[e.value for e in row] for row in config.ark]
        self._mds = [[e.value for e in row] for row in config.mds]

    @property
    def field(self) -> PrimeField:
        return self.config.field

    def permute(self) -> None:
        """Apply the Poseidon permutation to the state."""
        cfg = self.config
        p = cfg.field.modulus
        half = cfg.full_rounds // 2
        alpha = cfg.alpha
        values = [e.value for e in self.state]
        for round_number, constants in enumerate(self._ark):
            values = [(v + c) % p for v, c in zip(values, constants)]
            if round_number < half or round_number >= half + cfg.partial_rounds:
                values = [pow(v, alpha, p) for v in values]
            else:
                values[0] = pow(values[0], alpha, p)
            values = [sum(m * v for m, v in zip(row, values)) % p for row in self._mds]
        self.state = [FieldElement(cfg.field, v) for v in values]

    def _absorb_internal(self, rate_start: int, elements: list[FieldElement]) -> None:
        rate, capacity = self.config.rate, self.config.capacity
        position = 0
        while True:
            remaining = len(elements) - position
            if rate_start + remaining <= rate:
                for i, element in enumerate(elements[position:]):
                    self.state[capacity + rate_start + i] += element
                self.mode = DuplexSpongeMode.absorbing(rate_start + remaining)
                return
            taken = rate - rate_start
            for i, element in enumerate(elements[position:position + taken]):
                self.state[capacity + rate_start + i] += element
            self.permute()
            position += taken
            rate_start = 0

    def _squeeze_internal(self, rate_start: int, count: int) -> list[FieldElement]:
        rate, capacity = self.config.rate, self.config.capacity
        output: list[FieldElement] = []
        while True:
            remaining = count - len(output)
            start = capacity + rate_start
            if rate_start + remaining <= rate:
                output.extend(self.state[start:start + remaining])
                self.mode = DuplexSpongeMode.squeezing(rate_start + remaining)
                return output
            taken = rate - rate_start
            output.extend(self.state[start:start + taken])
            if remaining != rate:
                self.permute()
            rate_start = 0

    def absorb(self, *args) -> None:
        """Absorb each argument in turn."""
        for item in args:
            elements = to_sponge_field_elements(item, self.field)
            if not elements:
                continue
            if self.mode.is_absorbing:
                index = self.mode.index
                if index == self.config.rate:
                    self.permute()
                    index = 0
            else:
                self.permute()
                index = 0
            self._absorb_internal(index, elements)

    def squeeze_native_field_elements(self, num_elements: int) -> list[FieldElement]:
        """Squeeze ``num_elements`` elements of the sponge's own field."""
        if self.mode.is_absorbing:
            self.permute()
            return self._squeeze_internal(0, num_elements)
        index = self.mode.index
        if index == self.config.rate:
            self.permute()
            index = 0
        return self._squeeze_internal(index, num_elements)

    def squeeze_native_field_elements_with_sizes(
        self, sizes: Sequence[FieldElementSize]
    ) -> list[FieldElement]:
        """Squeeze native elements, one per entry of ``sizes``."""
        sizes = list(sizes)
        if all(size.is_full for size in sizes):
            return self.squeeze_native_field_elements(len(sizes))
        return squeeze_field_elements_with_sizes_default(self, self.field, sizes)

    def squeeze_bytes(self, num_bytes: int) -> bytes:
        usable_bytes = (self.field.modulus_bit_size - 1) // 8
        num_elements = -(-num_bytes // usable_bytes)
        elements = self.squeeze_native_field_elements(num_elements)
        data = b"".join(e.to_bytes_le()[:usable_bytes] for e in elements)
        return data[:num_bytes]

    def squeeze_bits(self, num_bits: int) -> list[bool]:
        usable_bits = self.field.modulus_bit_size - 1
        num_elements = -(-num_bits // usable_bits)
        elements = self.squeeze_native_field_elements(num_elements)
        bits = [bit for e in elements for bit in e.to_bits_le()[:usable_bits]]
        return bits[:num_bits]

    def squeeze_field_elements_with_sizes(
        self, field: PrimeField, sizes: Sequence[FieldElementSize]
    ) -> list[FieldElement]:
        if field.characteristic == self.field.characteristic:
            cast = field_cast(self.squeeze_native_field_elements_with_sizes(sizes), field)
            if cast is None:
                raise ValueError("cannot cast squeezed elements")
            return cast
        return squeeze_field_elements_with_sizes_default(self, field, sizes)

    def squeeze_field_elements(self, field: PrimeField, num_elements: int) -> list[FieldElement]:
        if field == self.field:
            cast = field_cast(self.squeeze_native_field_elements(num_elements), field)
            if cast is None:
                raise ValueError("cannot cast squeezed elements")
            return cast
        return self.squeeze_field_elements_with_sizes(
            field, [FieldElementSize.full()] * num_elements
        )

    def copy(self) -> PoseidonSponge:
        return PoseidonSponge.from_state(self.into_state(), self.config)

    @classmethod
    def from_state(cls, state: PoseidonSpongeState, config: PoseidonConfig) -> PoseidonSponge:
        """Build a sponge with ``config`` that continues from ``state``."""
        if len(state.state) != config.width:
            raise ValueError("state length does not match rate + capacity")
        sponge = cls(config)
        sponge.state = list(state.state)
        sponge.mode = state.mode
        return sponge

    def into_state(self) -> PoseidonSpongeState:
        """Return a snapshot of the state and mode."""
        return PoseidonSpongeState(tuple(self.state), self.mode)