"""Parameter validation for every distribution in the catalogue.

Each ``validate_<name>`` function takes the caller's keyword arguments,
applies defaults, coerces values to Python numbers and checks their
domain. It returns the normalized parameters as a dict, ready to be
passed to the matching sampler factory. Checks run in a fixed order and
raise on the first violation, so a bad call always yields the same
error.

"""

from __future__ import annotations

import math
import operator
from typing import Any

import numpy as np

from randomext.config import FLOAT_DTYPES
from randomext.errors import ParameterError, ShapeError, TypeMismatchError

# Trial counts are 64-bit signed integers.
COUNT_LIMIT = (1 << 63) - 1


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        msg = f"{name} must be a real number"
        raise ParameterError(msg) from None


def _as_count(value: Any, name: str) -> int:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return operator.index(value)
    except TypeError:
        msg = f"{name} must be an integer"
        raise ParameterError(msg) from None


def _require_count_limit(value: int, name: str) -> None:
    if value > COUNT_LIMIT:
        msg = f"{name} must be <= {COUNT_LIMIT}"
        raise ParameterError(msg)


def _require_positive(value: float, name: str) -> None:
    if not value > 0:
        msg = f"{name} must be > 0"
        raise ParameterError(msg)


def _require_non_negative(value: float, name: str) -> None:
    if not value >= 0:
        msg = f"{name} must be a non-negative value"
        raise ParameterError(msg)


def validate_uniform(low: Any = 0.0, high: Any = 1.0) -> dict[str, float]:
    low = _as_float(low, "low")
    high = _as_float(high, "high")
    if not high - low >= 0:
        msg = "high - low must be > 0"
        raise ParameterError(msg)
    return {"low": low, "high": high}


def validate_cauchy(loc: Any = 0.0, scale: Any = 1.0) -> dict[str, float]:
    loc = _as_float(loc, "loc")
    scale = _as_float(scale, "scale")
    _require_non_negative(scale, "scale")
    return {"loc": loc, "scale": scale}


def validate_chisquare(df: Any) -> dict[str, float]:
    df = _as_float(df, "df")
    _require_positive(df, "df")
    return {"df": df}


def validate_f(dfnum: Any, dfden: Any) -> dict[str, float]:
    dfnum = _as_float(dfnum, "dfnum")
    dfden = _as_float(dfden, "dfden")
    _require_positive(dfnum, "dfnum")
    _require_positive(dfden, "dfden")
    return {"dfnum": dfnum, "dfden": dfden}


def validate_normal(loc: Any = 0.0, scale: Any = 1.0) -> dict[str, float]:
    loc = _as_float(loc, "loc")
    scale = _as_float(scale, "scale")
    _require_non_negative(scale, "scale")
    return {"loc": loc, "scale": scale}


def validate_lognormal(mean: Any = 0.0, sigma: Any = 1.0) -> dict[str, float]:
    mean = _as_float(mean, "mean")
    sigma = _as_float(sigma, "sigma")
    _require_non_negative(sigma, "sigma")
    return {"mean": mean, "sigma": sigma}


def validate_standard_t(df: Any) -> dict[str, float]:
    df = _as_float(df, "df")
    _require_positive(df, "df")
    return {"df": df}


def validate_exponential(scale: Any = 1.0) -> dict[str, float]:
    scale = _as_float(scale, "scale")
    _require_positive(scale, "scale")
    return {"scale": scale}


def validate_gamma(k: Any, scale: Any = 1.0) -> dict[str, float]:
    k = _as_float(k, "k")
    _require_positive(k, "k")
    scale = _as_float(scale, "scale")
    _require_positive(scale, "scale")
    return {"k": k, "scale": scale}


def validate_gumbel(loc: Any = 0.0, scale: Any = 1.0) -> dict[str, float]:
    loc = _as_float(loc, "loc")
    scale = _as_float(scale, "scale")
    _require_positive(scale, "scale")
    return {"loc": loc, "scale": scale}


def validate_weibull(k: Any, scale: Any = 1.0) -> dict[str, float]:
    k = _as_float(k, "k")
    _require_positive(k, "k")
    scale = _as_float(scale, "scale")
    _require_positive(scale, "scale")
    return {"k": k, "scale": scale}


def validate_bernoulli(p: Any) -> dict[str, float]:
    p = _as_float(p, "p")
    if not 0.0 <= p <= 1.0:
        msg = "p must be >= 0 and <= 1"
        raise ParameterError(msg)
    return {"p": p}


def validate_binomial(n: Any, p: Any) -> dict[str, Any]:
    n = _as_count(n, "n")
    p = _as_float(p, "p")
    _require_non_negative(n, "n")
    _require_count_limit(n, "n")
    if not 0.0 <= p <= 1.0:
        msg = "p must be >= 0 and <= 1"
        raise ParameterError(msg)
    return {"n": n, "p": p}


def validate_negative_binomial(n: Any, p: Any) -> dict[str, Any]:
    n = _as_count(n, "n")
    p = _as_float(p, "p")
    _require_non_negative(n, "n")
    _require_count_limit(n, "n")
    if not 0.0 < p <= 1.0:
        msg = "p must be > 0 and <= 1"
        raise ParameterError(msg)
    return {"n": n, "p": p}


def validate_geometric(p: Any) -> dict[str, float]:
    p = _as_float(p, "p")
    if not 0.0 < p < 1.0:
        msg = "p must be > 0 and < 1"
        raise ParameterError(msg)
    return {"p": p}


def validate_poisson(mean: Any = 1.0) -> dict[str, float]:
    mean = _as_float(mean, "mean")
    _require_positive(mean, "mean")
    return {"mean": mean}


def validate_discrete(weight: Any) -> dict[str, list[float]]:
    """Check the weight vector of the discrete distribution.

    The weight must be a one-dimensional, non-empty float32 or float64
    array (NumPy, JAX, or a list of floats) with finite non-negative
    entries and a positive, finite sum. Weights need not be normalized.

    """
    w = np.asarray(weight)
    if w.dtype not in FLOAT_DTYPES:
        msg = "weight must be float32 or float64 array"
        raise TypeMismatchError(msg)
    if w.ndim != 1:
        msg = "weight must be 1-dimensional array"
        raise ShapeError(msg)
    if w.shape[0] < 1:
        msg = "length of weight must be > 0"
        raise ShapeError(msg)
    values = [float(v) for v in w.tolist()]
    if not all(math.isfinite(v) and v >= 0 for v in values):
        msg = "weight must be finite non-negative values"
        raise ParameterError(msg)
    total = sum(values)
    if not total > 0:
        msg = "sum of weight must be > 0"
        raise ParameterError(msg)
    if not math.isfinite(total):
        msg = "sum of weight must be finite"
        raise ParameterError(msg)
    return {"weight": values}
