"""Seedable pseudo-random bit generators.

Four engines behind one interface: ``seed``, ``next_u32``, ``next_u64``.
The engine is chosen once by name and owns its state exclusively.

Reference engines:
    PCG32 → pcg32 (pcg-cpp, setseq XSH-RR 64/32)
    PCG64 → pcg64 (pcg-cpp, setseq XSL-RR 128/64)
    MT32  → std::mt19937
    MT64  → std::mt19937_64
"""

from randomext.bitgen.engines import (
    BIT_GENERATORS,
    MT32,
    MT64,
    PCG32,
    PCG64,
    BitGenerator,
    MTState,
    PCGState,
    create_bit_generator,
)

__all__ = [
    "BitGenerator",
    "PCG32",
    "PCG64",
    "MT32",
    "MT64",
    "PCGState",
    "MTState",
    "BIT_GENERATORS",
    "create_bit_generator",
]
