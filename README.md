# poseidon_sponge

This package is a Poseidon duplex sponge over prime fields. It is written in pure Python and needs nothing outside the standard library.

The modules are:

- `poseidon_sponge.fields`: `PrimeField` and `FieldElement`, which provide modular arithmetic. It also defines `FR`, the BLS12-381 scalar field.
- `poseidon_sponge.absorb`: converts values into the bytes or field elements that a sponge absorbs. It provides `to_sponge_bytes`, `to_sponge_field_elements`, `collect_sponge_bytes`, `collect_sponge_field_elements` and `field_cast`.
- `poseidon_sponge.sponge`: the `CryptographicSponge` base class, `FieldElementSize` and `DuplexSpongeMode`.
- `poseidon_sponge.poseidon`: `PoseidonConfig`, `PoseidonSponge` and `PoseidonSpongeState`.
- `poseidon_sponge.grain_lfsr`: `PoseidonGrainLFSR`, which generates round constants and MDS matrices.
- `poseidon_sponge.defaults`: `PoseidonDefaultConfigEntry`, `register_default_config`, `find_poseidon_ark_and_mds` and `get_default_poseidon_parameters`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

Default parameters for `FR` are registered when the package is imported. The registered rates are 2 to 8, each in two versions: one optimised for constraints and one optimised for weights.

```python
from poseidon_sponge.fields import FR
from poseidon_sponge.defaults import get_default_poseidon_parameters
from poseidon_sponge.poseidon import PoseidonSponge

config = get_default_poseidon_parameters(FR, 2, False)
sponge = PoseidonSponge(config)
sponge.absorb([FR.element(0), FR.element(1), FR.element(2)])
print(sponge.squeeze_native_field_elements(3))
print(sponge.squeeze_bytes(16))
print(sponge.squeeze_bits(10))
```

`absorb` accepts any number of arguments and absorbs them one after another. Each squeeze call continues from where the previous call stopped.

`get_default_poseidon_parameters` returns `None` when the table has no entry for the requested rate. It raises `LookupError` when no defaults are registered for the field. The parameters are cached after they are first generated.

### Other fields

Any prime field can be given default tables. Calling `register_default_config` again for the same field replaces its earlier tables.

```python
from poseidon_sponge.fields import PrimeField
from poseidon_sponge.defaults import PoseidonDefaultConfigEntry, register_default_config

bn254_fr = PrimeField(
    21888242871839275222246405745257275088548364400416034343698204186575808495617,
    name="bn254_fr",
)
register_default_config(
    bn254_fr,
    [PoseidonDefaultConfigEntry(2, 5, 8, 56, 0)],
    [PoseidonDefaultConfigEntry(2, 257, 8, 13, 0)],
)
```

If you want the round keys and the MDS matrix on their own, call `find_poseidon_ark_and_mds` directly.

### Domain separation

```python
child = sponge.fork(b"my-domain")
```

`fork` returns a new sponge and leaves the original unchanged. The new sponge absorbs the length of the domain as a little-endian 64-bit integer, followed by the domain bytes.

### Sized outputs

```python
from poseidon_sponge.sponge import FieldElementSize

values = sponge.squeeze_field_elements_with_sizes(
    FR, [FieldElementSize.truncated(128), FieldElementSize.full()]
)
```

A truncated size must not be larger than the bit size of the field. A larger size raises `ValueError`. A full size means one bit less than the modulus's bit length.

### Saving and restoring state

```python
state = sponge.into_state()
restored = PoseidonSponge.from_state(state, config)
twin = sponge.copy()
```

### Encoding values

The absorb encodings cover:

- `bool`
- `None`
- `FieldElement`
- `bytes`, `bytearray` and `memoryview`
- lists and tuples of supported values
- `UInt(value, bits)` and `SInt(value, bits)`, with widths of 8, 16, 32, 64 or 128
- `Maybe(value)`, which writes a presence flag followed by the value
- `WithLength(value)`, which writes a 64-bit length prefix
- `TwistedEdwardsAffine(x, y)`
- `ShortWeierstrassAffine(x, y, infinity)`
- subclasses of `Absorbable`

```python
from poseidon_sponge.absorb import UInt, SInt, collect_sponge_bytes, collect_sponge_field_elements

data = collect_sponge_bytes([UInt(1, 8), UInt(2, 8)], SInt(-3, 32), FR.element(42))
elems = collect_sponge_field_elements(FR, b"\x01\x02", FR.element(42))
```

Plain `int` values have no fixed width, so they are rejected with `TypeError`. Wrap them in `UInt` or `SInt` to choose the width.

When raw bytes, or a list made only of `UInt(..., 8)`, are converted to field elements, they are packed into elements together with a 64-bit length prefix.

## Limits

The package runs the sponge natively only. It does not provide circuit or constraint-system gadgets for the sponge.