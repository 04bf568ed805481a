"""The Generator handle.

A ``Generator`` binds one bit generator algorithm to one seeded state
and exposes a method per distribution. Each method works in two modes:

* **fill**: pass a target array as the first argument; it is filled in
  place and returned (JAX targets return a new array).
* **allocate**: pass ``shape=`` and optionally ``dtype=``; a new NumPy
  array is created, filled and returned. The default dtype is float64
  for continuous distributions and int32 for count distributions.

There is no module-level default generator: every random value comes
from an explicit ``Generator`` instance.

Examples:
    >>> rng = Generator(seed=496)
    >>> x = rng.uniform(shape=[2, 5], low=-1, high=2)
    >>> x.shape, x.dtype.name
    ((2, 5), 'float64')

"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from randomext.arrays import allocate, fill
from randomext.bitgen import BitGenerator, create_bit_generator
from randomext.config import DEFAULT_ALGORITHM, DEFAULT_FLOAT_DTYPE, DEFAULT_INT_DTYPE
from randomext.distributions import FLOAT_KIND, get_distribution
from randomext.errors import ParameterError
from randomext.uniform import uniform_f64

logger = logging.getLogger(__name__)

Shape = int | Sequence[int]


class Generator:
    """Random number generator with a fixed catalogue of distributions.

    Not thread-safe: one instance is mutable state without locking, and
    calls sharing it from several threads must be serialized by the
    caller. Distinct instances are independent.

    Args:
        seed: Non-negative integer seed. None seeds from OS entropy.
        algorithm: ``pcg32``, ``pcg64`` (default), ``mt32`` or ``mt64``.
            Fixed for the lifetime of the generator.

    Raises:
        ConfigurationError: If ``algorithm`` is not supported.

    """

    def __init__(self, seed: int | None = None, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self._bitgen = create_bit_generator(algorithm, seed)
        self._algorithm = algorithm
        logger.debug("created generator %s seed=%d", algorithm, self._bitgen.seed_value)

    @property
    def algorithm(self) -> str:
        """Name of the bit generator algorithm (read-only)."""
        return self._algorithm

    @property
    def bit_generator(self) -> BitGenerator:
        return self._bitgen

    @property
    def seed(self) -> int:
        """Seed in effect. Assigning reseeds the generator."""
        return self._bitgen.seed_value

    @seed.setter
    def seed(self, value: int) -> None:
        self.set_seed(value)

    def get_seed(self) -> int:
        return self._bitgen.seed_value

    def set_seed(self, value: int) -> None:
        """Reseed: the generator restarts the sequence of a fresh one built with ``value``."""
        self._bitgen.seed(value)
        logger.debug("reseeded generator %s seed=%d", self._algorithm, self._bitgen.seed_value)

    def random(self) -> float:
        """Uniform random float in the half-open interval [0, 1)."""
        return uniform_f64(self._bitgen)

    def __repr__(self) -> str:
        return f"Generator(seed={self.seed}, algorithm={self._algorithm!r})"

    def _run(self, name: str, x: Any, shape: Shape | None, dtype: Any, **params: Any) -> Any:
        if (x is None) == (shape is None):
            msg = "either an array or shape must be given"
            raise ParameterError(msg)
        if x is None:
            if dtype is None:
                kind = get_distribution(name).kind
                dtype = DEFAULT_FLOAT_DTYPE if kind == FLOAT_KIND else DEFAULT_INT_DTYPE
            x = allocate(shape, dtype)
        elif dtype is not None:
            msg = "dtype cannot be given together with an array"
            raise ParameterError(msg)
        return fill(x, name, self._bitgen, **params)

    # -- continuous distributions --

    def uniform(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        low: float = 0.0,
        high: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        """Uniform values in the interval [low, high).

        Args:
            x: Target float array to fill, or None with ``shape``.
            shape: Shape of a new array.
            low: Lower boundary.
            high: Upper boundary.
            dtype: Element type of a new array (float64 or float32).

        Returns:
            The filled array.

        Raises:
            ParameterError: If ``high - low`` is negative.
            TypeMismatchError: If the target is not a float array.

        """
        return self._run("uniform", x, shape, dtype, low=low, high=high)

    def cauchy(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        loc: float = 0.0,
        scale: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        """Values from the Cauchy (Lorentz) distribution."""
        return self._run("cauchy", x, shape, dtype, loc=loc, scale=scale)

    def chisquare(self, x: Any = None, *, df: float, shape: Shape | None = None, dtype: Any = None) -> Any:
        """Values from the chi-squared distribution with ``df`` degrees of freedom."""
        return self._run("chisquare", x, shape, dtype, df=df)

    def f(
        self,
        x: Any = None,
        *,
        dfnum: float,
        dfden: float,
        shape: Shape | None = None,
        dtype: Any = None,
    ) -> Any:
        """Values from the F-distribution.

        Args:
            x: Target float array, or None with ``shape``.
            dfnum: Degrees of freedom in the numerator, > 0.
            dfden: Degrees of freedom in the denominator, > 0.
            shape: Shape of a new array.
            dtype: Element type of a new array.

        """
        return self._run("f", x, shape, dtype, dfnum=dfnum, dfden=dfden)

    def normal(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        loc: float = 0.0,
        scale: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        """Values from a normal (Gaussian) distribution.

        Examples:
            >>> rng = Generator(seed=42)
            >>> y = rng.normal(shape=[500, 200], loc=10, scale=2)
            >>> abs(float(y.mean()) - 10) < 1e-2
            True

        """
        return self._run("normal", x, shape, dtype, loc=loc, scale=scale)

    def lognormal(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        mean: float = 0.0,
        sigma: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        """Values whose logarithm is normal with ``mean`` and ``sigma``."""
        return self._run("lognormal", x, shape, dtype, mean=mean, sigma=sigma)

    def standard_t(self, x: Any = None, *, df: float, shape: Shape | None = None, dtype: Any = None) -> Any:
        """Values from Student's t-distribution."""
        return self._run("standard_t", x, shape, dtype, df=df)

    def exponential(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        scale: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        """Values from an exponential distribution; ``scale`` is 1 / lambda."""
        return self._run("exponential", x, shape, dtype, scale=scale)

    def gamma(
        self,
        x: Any = None,
        *,
        k: float,
        scale: float = 1.0,
        shape: Shape | None = None,
        dtype: Any = None,
    ) -> Any:
        """Values from a gamma distribution with shape ``k`` and ``scale``."""
        return self._run("gamma", x, shape, dtype, k=k, scale=scale)

    def gumbel(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        loc: float = 0.0,
        scale: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        return self._run("gumbel", x, shape, dtype, loc=loc, scale=scale)

    def weibull(
        self,
        x: Any = None,
        *,
        k: float,
        scale: float = 1.0,
        shape: Shape | None = None,
        dtype: Any = None,
    ) -> Any:
        return self._run("weibull", x, shape, dtype, k=k, scale=scale)

    # -- count distributions --

    def bernoulli(self, x: Any = None, *, p: float, shape: Shape | None = None, dtype: Any = None) -> Any:
        """1 with probability ``p``, else 0."""
        return self._run("bernoulli", x, shape, dtype, p=p)

    def binomial(
        self,
        x: Any = None,
        *,
        n: int,
        p: float,
        shape: Shape | None = None,
        dtype: Any = None,
    ) -> Any:
        """Number of successes in ``n`` trials with success probability ``p``.

        Args:
            x: Target integer array, or None with ``shape``.
            n: Number of trials, >= 0.
            p: Probability of success, in [0, 1].
            shape: Shape of a new array.
            dtype: Integer element type of a new array (default int32).

        """
        return self._run("binomial", x, shape, dtype, n=n, p=p)

    def negative_binomial(
        self,
        x: Any = None,
        *,
        n: int,
        p: float,
        shape: Shape | None = None,
        dtype: Any = None,
    ) -> Any:
        """Number of failures before the ``n``-th success."""
        return self._run("negative_binomial", x, shape, dtype, n=n, p=p)

    def geometric(self, x: Any = None, *, p: float, shape: Shape | None = None, dtype: Any = None) -> Any:
        """Number of failures before the first success, so P(0) = p."""
        return self._run("geometric", x, shape, dtype, p=p)

    def poisson(
        self,
        x: Any = None,
        *,
        shape: Shape | None = None,
        mean: float = 1.0,
        dtype: Any = None,
    ) -> Any:
        return self._run("poisson", x, shape, dtype, mean=mean)

    def discrete(self, x: Any = None, *, weight: Any, shape: Shape | None = None, dtype: Any = None) -> Any:
        """Integers in [0, len(weight)) drawn with probability proportional to ``weight``.

        Args:
            x: Target integer array, or None with ``shape``.
            weight: 1-D float32/float64 array of non-negative weights.
            shape: Shape of a new array.
            dtype: Integer element type of a new array (default int32).

        Raises:
            TypeMismatchError: If ``weight`` is not a float array.
            ShapeError: If ``weight`` is not 1-D or is empty.

        Examples:
            >>> import numpy as np
            >>> rng = Generator(seed=42)
            >>> x = rng.discrete(shape=[3, 10], weight=np.array([0.1, 0.6, 0.3]))
            >>> x.dtype.name, int(x.max()) <= 2
            ('int32', True)

        """
        return self._run("discrete", x, shape, dtype, weight=weight)
