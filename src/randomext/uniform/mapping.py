"""Mapping raw words to uniform floats and bounded integers.

All mappers are pure functions of one or more raw draws. Float mappers
keep the top bits of the raw word, since the high bits of every engine
are its best ones.

References:
    - Vigna, "xoshiro / xoroshiro generators and the PRNG shootout",
      section "Generating uniform doubles in the unit interval".
    - D. Lemire, "Fast Random Integer Generation in an Interval",
      ACM TOMACS 29(1), 2019.

"""

from __future__ import annotations

from randomext.bitgen import BitGenerator
from randomext.errors import ParameterError

_TWO_POW_53 = float(1 << 53)
_INV_TWO_POW_53 = 1.0 / _TWO_POW_53
_INV_TWO_POW_24 = 1.0 / float(1 << 24)
_TWO_POW_64 = 1 << 64


def uniform_f64(bitgen: BitGenerator) -> float:
    """Uniform double in [0, 1) from the top 53 bits of a 64-bit draw.

    Args:
        bitgen: Source of raw words.

    Returns:
        Float in the half-open interval [0, 1).

    Examples:
        >>> from randomext.bitgen import PCG64
        >>> 0.0 <= uniform_f64(PCG64(seed=1)) < 1.0
        True

    """
    return (bitgen.next_u64() >> 11) * _INV_TWO_POW_53


def uniform_f32(bitgen: BitGenerator) -> float:
    """Uniform single-precision value in [0, 1) from the top 24 bits of a 32-bit draw.

    The result is exactly representable as a float32.

    """
    return (bitgen.next_u32() >> 8) * _INV_TWO_POW_24


def uniform_f64_closed(bitgen: BitGenerator) -> float:
    """Uniform double in the closed interval [0, 1]."""
    return (bitgen.next_u64() >> 11) / (_TWO_POW_53 - 1.0)


def uniform_f64_open(bitgen: BitGenerator) -> float:
    """Uniform double in the open interval (0, 1).

    Safe to pass straight to ``math.log``.

    """
    return ((bitgen.next_u64() >> 11) + 0.5) * _INV_TWO_POW_53


def uniform_f32_open(bitgen: BitGenerator) -> float:
    """Uniform single-precision value in the open interval (0, 1)."""
    return ((bitgen.next_u32() >> 8) + 0.5) * _INV_TWO_POW_24


def bounded_uint(bitgen: BitGenerator, n: int) -> int:
    """Uniform integer in [0, n) with no modulo bias.

    Raw draws below ``2**64 mod n`` are rejected so that every residue
    class has exactly the same number of preimages. The rejection
    probability is below 1/2 for every ``n``.

    Args:
        bitgen: Source of raw words.
        n: Exclusive upper bound, 1 <= n <= 2**64.

    Returns:
        Integer in [0, n).

    Raises:
        ParameterError: If ``n`` is out of range.

    Examples:
        >>> from randomext.bitgen import MT32
        >>> 0 <= bounded_uint(MT32(seed=3), 6) < 6
        True

    """
    if n <= 0 or n > _TWO_POW_64:
        msg = "n must be > 0 and <= 2**64"
        raise ParameterError(msg)
    threshold = (_TWO_POW_64 - n) % n
    while True:
        r = bitgen.next_u64()
        if r >= threshold:
            return r % n


class DrawContext:
    """A bit generator paired with a float precision.

    Samplers pull every uniform through a context, so the same transform
    code serves float64 targets (53-bit uniforms) and float32 targets
    (24-bit uniforms).

    Args:
        bitgen: Source of raw words.
        precision: 64 or 32.

    """

    def __init__(self, bitgen: BitGenerator, precision: int = 64) -> None:
        if precision not in (32, 64):
            msg = "precision must be 32 or 64"
            raise ParameterError(msg)
        self.bitgen = bitgen
        self.precision = precision
        if precision == 64:
            self.uniform = self._uniform64
            self.uniform_open = self._uniform64_open
        else:
            self.uniform = self._uniform32
            self.uniform_open = self._uniform32_open

    def _uniform64(self) -> float:
        return uniform_f64(self.bitgen)

    def _uniform64_open(self) -> float:
        return uniform_f64_open(self.bitgen)

    def _uniform32(self) -> float:
        return uniform_f32(self.bitgen)

    def _uniform32_open(self) -> float:
        return uniform_f32_open(self.bitgen)

    def __repr__(self) -> str:
        return f"DrawContext({self.bitgen!r}, precision={self.precision})"
