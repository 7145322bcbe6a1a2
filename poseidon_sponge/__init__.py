"""Poseidon duplex sponge over prime fields, with absorb encodings and Grain LFSR parameters."""

__version__ = "0.1.0"
__all__ = ["absorb", "defaults", "fields", "grain_lfsr", "poseidon", "sponge"]