"""The Grain LFSR that generates Poseidon round constants and MDS matrices."""

from __future__ import annotations

from typing import Sequence

from .fields import FieldElement, PrimeField

_STATE_SIZE = 80
_TAPS = (62, 51, 38, 23, 13, 0)
_WARMUP_ROUNDS = 160


def _write_bits(state: list[bool], start: int, width: int, value: int) -> None:
    """Write the low ``width`` bits of ``value`` most-significant first from ``start``."""
    if value < 0:
        raise ValueError("LFSR parameters must not be negative")
    for offset in range(width):
        state[start + offset] = bool((value >> (width - 1 - offset)) & 1)


def _msb_first_to_int(bits: Sequence[bool]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | int(bit)
    return value


class PoseidonGrainLFSR:
    """An 80-bit Grain LFSR seeded with the Poseidon instance parameters."""

    def __init__(
        self,
        is_sbox_an_inverse: bool,
        prime_num_bits: int,
        state_len: int,
        num_full_rounds: int,
        num_partial_rounds: int,
    ) -> None:
        self.prime_num_bits = prime_num_bits
        state = [False] * _STATE_SIZE
        # b0, b1 describe the field; b2..b5 describe the S-box.
        state[1] = True
        state[5] = bool(is_sbox_an_inverse)
        _write_bits(state, 6, 12, prime_num_bits)
        _write_bits(state, 18, 12, state_len)
        _write_bits(state, 30, 10, num_full_rounds)
        _write_bits(state, 40, 10, num_partial_rounds)
        state[50:] = [True] * (_STATE_SIZE - 50)
        self.state = state
        self.head = 0
        for _ in range(_WARMUP_ROUNDS):
            self._update()

    def _update(self) -> bool:
        head = self.head
        state = self.state
        new_bit = False
        for tap in _TAPS:
            new_bit ^= state[(head + tap) % _STATE_SIZE]
        state[head] = new_bit
        self.head = (head + 1) % _STATE_SIZE
        return new_bit

    def get_bits(self, num_bits: int) -> list[bool]:
        """Return ``num_bits`` self-shrunk output bits."""
        result = []
        for _ in range(num_bits):
            first = self._update()
            while not first:
                self._update()
                first = self._update()
            result.append(self._update())
        return result

    def _check_field(self, field: PrimeField) -> None:
        if field.modulus_bit_size != self.prime_num_bits:
            raise ValueError(
                f"field has {field.modulus_bit_size} bits, LFSR was seeded for "
                f"{self.prime_num_bits}"
            )

    def get_field_elements_rejection_sampling(
        self, field: PrimeField, num_elems: int
    ) -> list[FieldElement]:
        """Sample elements, discarding candidates that are not below the modulus."""
        self._check_field(field)
        result = []
        while len(result) < num_elems:
            candidate = _msb_first_to_int(self.get_bits(self.prime_num_bits))
            element = field.from_bigint(candidate)
            if element is not None:
                result.append(element)
        return result

    def get_field_elements_mod_p(self, field: PrimeField, num_elems: int) -> list[FieldElement]:
        """Sample elements by reducing each candidate modulo the field prime."""
        self._check_field(field)
        return [
            field.element(_msb_first_to_int(self.get_bits(self.prime_num_bits)))
            for _ in range(num_elems)
        ]