"""Pseudo-random bit generators.

Four interchangeable engines produce uniformly distributed raw words from
a seeded state. Every engine answers both 32-bit and 64-bit requests:
the narrow engines (PCG32, MT32) concatenate two draws for a 64-bit
word, the wide engines (PCG64, MT64) keep the low half of one draw for a
32-bit word.

The algorithm is picked once, when the engine is created. Draw calls
never dispatch on the algorithm name.

An engine is plain mutable state with no locking. Sharing one instance
between threads without external serialization is undefined.

References:
    - M. E. O'Neill, "PCG: A Family of Simple Fast Space-Efficient
      Statistically Good Algorithms for Random Number Generation", 2014.
    - M. Matsumoto and T. Nishimura, "Mersenne Twister: a
      623-dimensionally equidistributed uniform pseudorandom number
      generator", ACM TOMACS 8(1), 1998.
    - pcg-cpp: https://github.com/imneme/pcg-cpp

"""

from __future__ import annotations

import logging
import secrets
from typing import NamedTuple

from randomext.config import ALGORITHMS
from randomext.errors import ConfigurationError, ParameterError

logger = logging.getLogger(__name__)

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1
MASK128 = (1 << 128) - 1


class PCGState(NamedTuple):
    """Snapshot of a PCG engine: LCG state and odd stream increment."""

    state: int
    increment: int


class MTState(NamedTuple):
    """Snapshot of a Mersenne Twister engine: word array and read index."""

    words: tuple[int, ...]
    index: int


def entropy_seed() -> int:
    """Draw a 32-bit seed from the operating system entropy source."""
    return secrets.randbits(32)


def check_seed(value: object, name: str = "seed") -> int:
    """Validate a user-supplied seed and return it as an ``int``.

    Args:
        value: Candidate seed.
        name: Parameter name used in the error message.

    Returns:
        The seed as a non-negative Python ``int``.

    Raises:
        ParameterError: If the seed is not a non-negative integer.

    """
    msg = f"{name} must be a non-negative integer"
    if isinstance(value, bool):
        raise ParameterError(msg)
    if not isinstance(value, int):
        try:
            value = int(value.__index__())  # type: ignore[attr-defined]
        except AttributeError:
            raise ParameterError(msg) from None
    if value < 0:
        raise ParameterError(msg)
    return value


class BitGenerator:
    """Common interface of the four engines.

    Subclasses implement ``_reset(seed)`` and whichever of ``next_u32`` /
    ``next_u64`` is native to the algorithm, and inherit the other one.

    """

    name: str = ""

    def __init__(self, seed: int | None = None) -> None:
        self._seed = 0
        self.seed(seed)

    @property
    def seed_value(self) -> int:
        """The seed currently in effect (an entropy seed if none was given)."""
        return self._seed

    def seed(self, value: int | None = None) -> None:
        """Reinitialize the state deterministically from ``value``.

        Args:
            value: Non-negative integer seed, or None to draw one from the
                OS entropy source.

        """
        value = entropy_seed() if value is None else check_seed(value)
        self._seed = value
        self._reset(value)
        logger.debug("seeded %s with %d", self.name, value)

    def _reset(self, seed: int) -> None:
        raise NotImplementedError

    def next_u32(self) -> int:
        """Return one raw 32-bit word."""
        return self.next_u64() & MASK32

    def next_u64(self) -> int:
        """Return one raw 64-bit word."""
        high = self.next_u32()
        return (high << 32) | self.next_u32()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed})"


class _PCGBase(BitGenerator):
    """Linear congruential state update with a permuted output."""

    multiplier: int = 0
    default_increment: int = 0
    state_mask: int = 0

    def __init__(self, seed: int | None = None, stream: int | None = None) -> None:
        if stream is None:
            self._increment = self.default_increment
        else:
            self._increment = ((check_seed(stream, "stream") << 1) | 1) & self.state_mask
        self._state = 0
        super().__init__(seed)

    @property
    def state(self) -> PCGState:
        return PCGState(self._state, self._increment)

    def _reset(self, seed: int) -> None:
        # pcg-cpp: state = bump(seed + increment)
        start = (seed + self._increment) & self.state_mask
        self._state = (start * self.multiplier + self._increment) & self.state_mask

    def _step(self) -> int:
        old = self._state
        self._state = (old * self.multiplier + self._increment) & self.state_mask
        return old


class PCG32(_PCGBase):
    """PCG XSH-RR 64/32: 64-bit state, 32-bit output.

    Examples:
        >>> rng = PCG32(seed=42, stream=54)
        >>> hex(rng.next_u32())
        '0xa15c02b7'

    """

    name = "pcg32"
    multiplier = 6364136223846793005
    default_increment = 1442695040888963407
    state_mask = MASK64

    def next_u32(self) -> int:
        old = self._step()
        xorshifted = (((old >> 18) ^ old) >> 27) & MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK32


class PCG64(_PCGBase):
    """PCG XSL-RR 128/64: 128-bit state, 64-bit output."""

    name = "pcg64"
    multiplier = 0x2360ED051FC65DA44385DF649FCCF645
    default_increment = 0x5851F42D4C957F2D14057B7EF767814F
    state_mask = MASK128

    def next_u64(self) -> int:
        old = self._step()
        rot = old >> 122
        xored = ((old >> 64) ^ old) & MASK64
        return ((xored >> rot) | (xored << ((-rot) & 63))) & MASK64


class MT32(BitGenerator):
    """MT19937, the 32-bit Mersenne Twister (``std::mt19937``).

    Examples:
        >>> MT32(seed=5489).next_u32()
        3499211612

    """

    name = "mt32"
    _n = 624
    _m = 397

    @property
    def state(self) -> MTState:
        return MTState(tuple(self._mt), self._index)

    def _reset(self, seed: int) -> None:
        mt = [0] * self._n
        mt[0] = seed & MASK32
        for i in range(1, self._n):
            prev = mt[i - 1]
            mt[i] = (1812433253 * (prev ^ (prev >> 30)) + i) & MASK32
        self._mt = mt
        self._index = self._n

    def _twist(self) -> None:
        mt = self._mt
        n, m = self._n, self._m
        for i in range(n):
            y = (mt[i] & 0x80000000) | (mt[(i + 1) % n] & 0x7FFFFFFF)
            value = mt[(i + m) % n] ^ (y >> 1)
            if y & 1:
                value ^= 0x9908B0DF
            mt[i] = value
        self._index = 0

    def next_u32(self) -> int:
        if self._index >= self._n:
            self._twist()
        y = self._mt[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & MASK32


class MT64(BitGenerator):
    """MT19937-64, the 64-bit Mersenne Twister (``std::mt19937_64``).

    Examples:
        >>> MT64(seed=5489).next_u64()
        14514284786278117030

    """

    name = "mt64"
    _n = 312
    _m = 156
    _upper = 0xFFFFFFFF80000000
    _lower = 0x7FFFFFFF

    @property
    def state(self) -> MTState:
        return MTState(tuple(self._mt), self._index)

    def _reset(self, seed: int) -> None:
        mt = [0] * self._n
        mt[0] = seed & MASK64
        for i in range(1, self._n):
            prev = mt[i - 1]
            mt[i] = (6364136223846793005 * (prev ^ (prev >> 62)) + i) & MASK64
        self._mt = mt
        self._index = self._n

    def _twist(self) -> None:
        mt = self._mt
        n, m = self._n, self._m
        for i in range(n):
            x = (mt[i] & self._upper) | (mt[(i + 1) % n] & self._lower)
            value = mt[(i + m) % n] ^ (x >> 1)
            if x & 1:
                value ^= 0xB5026F5AA96619E9
            mt[i] = value
        self._index = 0

    def next_u64(self) -> int:
        if self._index >= self._n:
            self._twist()
        x = self._mt[self._index]
        self._index += 1
        x ^= (x >> 29) & 0x5555555555555555
        x ^= (x << 17) & 0x71D67FFFEDA60000
        x ^= (x << 37) & 0xFFF7EEE000000000
        x ^= x >> 43
        return x & MASK64


BIT_GENERATORS: dict[str, type[BitGenerator]] = {
    "pcg32": PCG32,
    "pcg64": PCG64,
    "mt32": MT32,
    "mt64": MT64,
}


def create_bit_generator(algorithm: str, seed: int | None = None) -> BitGenerator:
    """Instantiate and seed the engine named by ``algorithm``.

    Args:
        algorithm: One of ``pcg32``, ``pcg64``, ``mt32``, ``mt64``.
        seed: Non-negative integer seed, or None for an entropy seed.

    Returns:
        A freshly seeded bit generator.

    Raises:
        ConfigurationError: If the algorithm name is not supported.

    Examples:
        >>> bitgen = create_bit_generator("mt64", seed=1)
        >>> type(bitgen).__name__
        'MT64'

    """
    cls = BIT_GENERATORS.get(algorithm) if isinstance(algorithm, str) else None
    if cls is None:
        msg = f"invalid algorithm {algorithm!r}, it must be one of {', '.join(ALGORITHMS)}"
        raise ConfigurationError(msg)
    return cls(seed)
