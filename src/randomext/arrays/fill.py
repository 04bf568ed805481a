"""Bulk fill of numeric arrays from a distribution sampler.

The array container is external. The fill layer only reads the target's
dtype, shape and memory order and writes one value per logical element.

NumPy arrays are filled in place, through their own strides, so views
and non-contiguous slices behave exactly like contiguous arrays. JAX
arrays are immutable: filling one returns a new ``jax.Array`` of the same
shape and dtype, the way ``x.at[...].set(...)`` returns a new array.

A fill either writes every element or nothing. Dtype gating and
parameter validation both run before the first draw, and all draws are
collected before the single write into the target.

References:
    - NumPy indexing and strides:
      https://numpy.org/doc/stable/reference/arrays.ndarray.html
    - JAX sharp bits, in-place updates:
      https://jax.readthedocs.io/en/latest/notebooks/Common_Gotchas_in_JAX.html

"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

import jax
import jax.numpy as jnp
import numpy as np

from randomext.bitgen import BitGenerator
from randomext.config import FLOAT_DTYPES, INT_DTYPES, resolve_dtype
from randomext.distributions import FLOAT_KIND, Distribution, get_distribution
from randomext.errors import ShapeError, TypeMismatchError
from randomext.uniform import DrawContext

logger = logging.getLogger(__name__)

ArrayLike = Any  # np.ndarray | jax.Array


def is_jax_array(x: Any) -> bool:
    """True for ``jax.Array`` instances (immutable, functional fill)."""
    return isinstance(x, jax.Array)


def array_dtype(array: ArrayLike) -> np.dtype:
    """Element type of a fill target.

    Raises:
        TypeMismatchError: If ``array`` is neither a NumPy nor a JAX array.

    """
    if isinstance(array, np.ndarray) or is_jax_array(array):
        return np.dtype(array.dtype)
    msg = f"invalid array class {type(array).__name__}, it must be numpy.ndarray or jax.Array"
    raise TypeMismatchError(msg)


def check_kind(dtype: np.dtype, kind: str) -> None:
    """Gate the target element type against a distribution's output kind.

    Args:
        dtype: Target element type.
        kind: ``"float"`` for continuous distributions, ``"int"`` for counts.

    Raises:
        TypeMismatchError: If the element type cannot hold the distribution.

    Examples:
        >>> check_kind(np.dtype("float32"), "float")
        >>> check_kind(np.dtype("int32"), "float")
        Traceback (most recent call last):
        ...
        randomext.errors.TypeMismatchError: invalid array dtype, it must be float32 or float64

    """
    if kind == FLOAT_KIND:
        if dtype not in FLOAT_DTYPES:
            msg = "invalid array dtype, it must be float32 or float64"
            raise TypeMismatchError(msg)
    elif dtype not in INT_DTYPES:
        msg = "invalid array dtype, it must be integer typed array"
        raise TypeMismatchError(msg)


def iteration_order(array: ArrayLike) -> str:
    """Logical iteration order: ``"F"`` for Fortran-ordered arrays, else ``"C"``."""
    if isinstance(array, np.ndarray) and array.ndim > 1:
        if array.flags.f_contiguous and not array.flags.c_contiguous:
            return "F"
    return "C"


def narrow(values: Sequence[float] | Sequence[int], dtype: np.dtype) -> np.ndarray:
    """Convert sampled Python numbers to a 1-D array of ``dtype``.

    Floats are rounded to the target precision (overflowing to inf for
    float32). Integers saturate at the bounds of the target type.

    Examples:
        >>> narrow([300, -5, 7], np.dtype("uint8")).tolist()
        [255, 0, 7]

    """
    if dtype in FLOAT_DTYPES:
        with np.errstate(over="ignore"):
            return np.asarray(values, dtype=np.float64).astype(dtype)
    info = np.iinfo(dtype)
    lo, hi = int(info.min), int(info.max)
    return np.asarray([min(max(v, lo), hi) for v in values], dtype=dtype)


def normalize_shape(shape: int | Sequence[int]) -> tuple[int, ...]:
    """Turn an int or a sequence of ints into a shape tuple.

    Raises:
        ShapeError: If any dimension is negative or not an integer.

    """
    dims = (shape,) if isinstance(shape, (int, np.integer)) else tuple(shape)
    out = []
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, (int, np.integer)) or d < 0:
            msg = f"invalid shape {shape!r}, dimensions must be non-negative integers"
            raise ShapeError(msg)
        out.append(int(d))
    return tuple(out)


def allocate(shape: int | Sequence[int], dtype: Any) -> np.ndarray:
    """Allocate a zeroed NumPy array for a fill.

    Args:
        shape: Int or sequence of ints.
        dtype: Dtype tag, resolved by ``randomext.config.resolve_dtype``.

    Returns:
        New ``np.ndarray`` of the requested shape and type.

    Examples:
        >>> allocate([2, 3], "sfloat").dtype
        dtype('float32')

    """
    return np.zeros(normalize_shape(shape), dtype=resolve_dtype(dtype))


def fill(
    array: ArrayLike,
    distribution: str | Distribution,
    bitgen: BitGenerator,
    **params: Any,
) -> ArrayLike:
    """Fill every element of ``array`` with draws from ``distribution``.

    Args:
        array: Target ``np.ndarray`` (filled in place) or ``jax.Array``.
        distribution: Catalogue name or entry.
        bitgen: Source of raw words; advanced only if the call succeeds
            validation.
        **params: Distribution parameters.

    Returns:
        ``array`` itself for NumPy targets; a new ``jax.Array`` for JAX targets.

    Raises:
        TypeMismatchError: Target type incompatible with the distribution.
        ParameterError: A parameter is outside its domain.
        ShapeError: Malformed ``discrete`` weight.

    Examples:
        >>> from randomext.bitgen import PCG64
        >>> x = np.zeros((2, 3))
        >>> fill(x, "uniform", PCG64(seed=1), low=-1.0, high=1.0) is x
        True

    """
    dist = get_distribution(distribution) if isinstance(distribution, str) else distribution
    dtype = array_dtype(array)
    check_kind(dtype, dist.kind)
    if isinstance(array, np.ndarray) and not array.flags.writeable:
        msg = "array is read-only"
        raise TypeMismatchError(msg)
    values = dist.validate(**params)

    shape = tuple(array.shape)
    size = math.prod(shape)
    precision = 32 if dtype == np.float32 else 64
    sampler = dist.make_sampler(DrawContext(bitgen, precision), **values)
    logger.debug("fill %s: shape=%s dtype=%s", dist.name, shape, dtype.name)

    drawn = [sampler() for _ in range(size)]
    buf = narrow(drawn, dtype).reshape(shape, order=iteration_order(array))
    if is_jax_array(array):
        return jnp.asarray(buf, dtype=array.dtype)
    array[...] = buf
    return array
