"""Default Poseidon parameters per prime field, generated with the Grain LFSR."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .fields import FR, FieldElement, PrimeField
from .grain_lfsr import PoseidonGrainLFSR
from .poseidon import PoseidonConfig


@dataclass(frozen=True)
class PoseidonDefaultConfigEntry:
    """One row of default parameters: rate, S-box exponent, round counts, skipped matrices.

    ``skip_matrices`` is how many candidate MDS matrices the LFSR discards before the
    one that satisfies all the requirements.
    """

    rate: int
    alpha: int
    full_rounds: int
    partial_rounds: int
    skip_matrices: int = 0


_REGISTRY: dict[
    PrimeField,
    tuple[tuple[PoseidonDefaultConfigEntry, ...], tuple[PoseidonDefaultConfigEntry, ...]],
] = {}
_CACHE: dict[tuple[PrimeField, int, bool], PoseidonConfig] = {}


def register_default_config(
    field: PrimeField,
    constraints_entries: Iterable[PoseidonDefaultConfigEntry],
    weights_entries: Iterable[PoseidonDefaultConfigEntry],
) -> None:
    """Associate default parameter tables with ``field``, replacing any earlier ones."""
    constraints = tuple(constraints_entries)
    weights = tuple(weights_entries)
    for entry in constraints + weights:
        if not isinstance(entry, PoseidonDefaultConfigEntry):
            raise TypeError("entries must be PoseidonDefaultConfigEntry instances")
    _REGISTRY[field] = (constraints, weights)
    for key in [key for key in _CACHE if key[0] == field]:
        del _CACHE[key]


def find_poseidon_ark_and_mds(
    field: PrimeField,
    prime_bits: int,
    rate: int,
    full_rounds: int,
    partial_rounds: int,
    skip_matrices: int,
) -> tuple[list[list[FieldElement]], list[list[FieldElement]]]:
    """Compute round keys and a Cauchy MDS matrix from the Grain LFSR."""
    width = rate + 1
    lfsr = PoseidonGrainLFSR(False, prime_bits, width, full_rounds, partial_rounds)

    ark = [
        lfsr.get_field_elements_rejection_sampling(field, width)
        for _ in range(full_rounds + partial_rounds)
    ]

    for _ in range(skip_matrices):
        lfsr.get_field_elements_mod_p(field, 2 * width)

    xs = lfsr.get_field_elements_mod_p(field, width)
    ys = lfsr.get_field_elements_mod_p(field, width)
    mds = [[(x + y).inverse() for y in ys] for x in xs]
    return ark, mds


def get_default_poseidon_parameters(
    field: PrimeField, rate: int, optimized_for_weights: bool
) -> Optional[PoseidonConfig]:
    """Default parameters of ``field`` for ``rate``, or None if no entry has that rate."""
    try:
        constraints, weights = _REGISTRY[field]
    except KeyError:
        raise LookupError(f"no default Poseidon parameters registered for {field}") from None

    key = (field, rate, bool(optimized_for_weights))
    cached = _CACHE.get(key)
    if cached is not None:
        return cached

    entries = weights if optimized_for_weights else constraints
    entry = next((e for e in entries if e.rate == rate), None)
    if entry is None:
        return None

    ark, mds = find_poseidon_ark_and_mds(
        field,
        field.modulus_bit_size,
        rate,
        entry.full_rounds,
        entry.partial_rounds,
        entry.skip_matrices,
    )
    config = PoseidonConfig(
        full_rounds=entry.full_rounds,
        partial_rounds=entry.partial_rounds,
        alpha=entry.alpha,
        mds=mds,
        ark=ark,
        rate=entry.rate,
        capacity=1,
    )
    _CACHE[key] = config
    return config


register_default_config(
    FR,
    [
        PoseidonDefaultConfigEntry(2, 17, 8, 31, 0),
        PoseidonDefaultConfigEntry(3, 5, 8, 56, 0),
        PoseidonDefaultConfigEntry(4, 5, 8, 56, 0),
        PoseidonDefaultConfigEntry(5, 5, 8, 57, 0),
        PoseidonDefaultConfigEntry(6, 5, 8, 57, 0),
        PoseidonDefaultConfigEntry(7, 5, 8, 57, 0),
        PoseidonDefaultConfigEntry(8, 5, 8, 57, 0),
    ],
    [
        PoseidonDefaultConfigEntry(rate, 257, 8, 13, 0)
        for rate in range(2, 9)
    ],
)