"""Sampler factories, one per distribution.

A factory takes a ``DrawContext`` and already-validated parameters and
returns a zero-argument closure that produces one variate per call.
Per-call caches live inside the closure (the spare value of the polar
method, the cumulative weight table, rejection-sampler setup constants),
so they are discarded together with the sampler when a fill completes.

Transforms are written once against Python floats and ints. Narrowing to
a concrete element width happens in the fill layer, never here.

References:
    - G. Marsaglia and T. A. Bray, "A convenient method for generating
      normal variables", SIAM Review 6(3), 1964.
    - G. Marsaglia and W. W. Tsang, "A simple method for generating gamma
      variables", ACM TOMS 26(3), 2000.
    - V. Kachitvichyanukul and B. W. Schmeiser, "Binomial random variate
      generation", CACM 31(2), 1988.
    - W. Hörmann, "The transformed rejection method for generating
      Poisson random variables", Insurance: Mathematics and Economics
      12(1), 1993.
    - NumPy source: numpy/random/src/distributions/distributions.c

"""

from __future__ import annotations

import bisect
import itertools
import math
from collections.abc import Callable, Sequence

from randomext.uniform import DrawContext

Sampler = Callable[[], float]
CountSampler = Callable[[], int]

_LOG_MAX = math.log(1.7976931348623157e308)
# Saturates every integer dtype on narrowing.
_COUNT_MAX = 1 << 64


def _exp(x: float) -> float:
    """``math.exp`` that overflows to inf instead of raising."""
    return math.exp(x) if x < _LOG_MAX else math.inf


def _pow(base: float, exponent: float) -> float:
    """``base ** exponent`` for base >= 0 that overflows to inf instead of raising."""
    if base == 0.0:
        return 0.0
    return _exp(math.log(base) * exponent)


def _ratio(num: float, den: float) -> float:
    if den == 0.0:
        return math.copysign(math.inf, num) if num != 0.0 else math.nan
    return num / den


def _floor(x: float) -> int:
    return math.floor(x) if math.isfinite(x) else _COUNT_MAX


# -- building blocks --


def standard_normal(ctx: DrawContext) -> Sampler:
    """Marsaglia polar method; each accepted pair yields two variates."""
    uniform = ctx.uniform
    spare: list[float] = []

    def draw() -> float:
        if spare:
            return spare.pop()
        while True:
            x = 2.0 * uniform() - 1.0
            y = 2.0 * uniform() - 1.0
            r2 = x * x + y * y
            if 0.0 < r2 < 1.0:
                break
        f = math.sqrt(-2.0 * math.log(r2) / r2)
        spare.append(x * f)
        return y * f

    return draw


def _marsaglia_tsang(k: float, normal: Sampler, uniform_open: Sampler) -> Sampler:
    d = k - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)

    def draw() -> float:
        while True:
            x = normal()
            v = 1.0 + c * x
            if v <= 0.0:
                continue
            v = v * v * v
            u = uniform_open()
            x2 = x * x
            if u < 1.0 - 0.0331 * x2 * x2:
                return d * v
            if math.log(u) < 0.5 * x2 + d * (1.0 - v + math.log(v)):
                return d * v

    return draw


def standard_gamma(ctx: DrawContext, k: float) -> Sampler:
    """Gamma(k, 1) by Marsaglia–Tsang squeeze.

    For k < 1 a Gamma(k + 1) variate is boosted down by ``U ** (1/k)``.

    """
    normal = standard_normal(ctx)
    uniform_open = ctx.uniform_open
    if k >= 1.0:
        return _marsaglia_tsang(k, normal, uniform_open)

    boosted = _marsaglia_tsang(k + 1.0, normal, uniform_open)
    inv_k = 1.0 / k

    def draw() -> float:
        return boosted() * uniform_open() ** inv_k

    return draw


def _poisson_mult(uniform: Sampler, lam: float) -> int:
    enlam = math.exp(-lam)
    x = 0
    prod = uniform()
    while prod > enlam:
        x += 1
        prod *= uniform()
    return x


def _poisson_ptrs(uniform_open: Sampler, lam: float) -> int:
    slam = math.sqrt(lam)
    loglam = math.log(lam)
    b = 0.931 + 2.53 * slam
    a = -0.059 + 0.02483 * b
    invalpha = 1.1239 + 1.1328 / (b - 3.4)
    vr = 0.9277 - 3.6224 / (b - 2.0)

    while True:
        u = uniform_open() - 0.5
        v = uniform_open()
        us = 0.5 - abs(u)
        k = _floor((2.0 * a / us + b) * u + lam + 0.43)
        if us >= 0.07 and v <= vr:
            return k
        if k < 0 or (us < 0.013 and v > us):
            continue
        if math.log(v) + math.log(invalpha) - math.log(a / (us * us) + b) <= (
            -lam + k * loglam - math.lgamma(k + 1)
        ):
            return k


def poisson_variate(ctx: DrawContext, lam: float) -> int:
    """One Poisson(lam) variate: multiplication below 10, PTRS above."""
    if lam >= 10.0:
        return _poisson_ptrs(ctx.uniform_open, lam)
    if lam <= 0.0:
        return 0
    return _poisson_mult(ctx.uniform, lam)


def _binomial_inversion(uniform: Sampler, n: int, p: float) -> int:
    q = 1.0 - p
    qn = math.exp(n * math.log(q))
    np_ = n * p
    bound = min(n, np_ + 10.0 * math.sqrt(np_ * q + 1.0))

    x = 0
    px = qn
    u = uniform()
    while u > px:
        x += 1
        if x > bound:
            x = 0
            px = qn
            u = uniform()
        else:
            u -= px
            px = ((n - x + 1) * p * px) / (x * q)
    return x


def _stirling_tail(x: float) -> float:
    x2 = x * x
    return (13680.0 - (462.0 - (132.0 - (99.0 - 140.0 / x2) / x2) / x2) / x2) / x / 166320.0


def _binomial_btpe(ctx: DrawContext, n: int, p: float) -> CountSampler:
    """BTPE for p <= 0.5 and n * p > 30."""
    uniform = ctx.uniform
    uniform_open = ctx.uniform_open
    r = p
    q = 1.0 - r
    fm = n * r + r
    m = math.floor(fm)
    p1 = math.floor(2.195 * math.sqrt(n * r * q) - 4.6 * q) + 0.5
    xm = m + 0.5
    xl = xm - p1
    xr = xm + p1
    c = 0.134 + 20.5 / (15.3 + m)
    a = (fm - xl) / (fm - xl * r)
    laml = a * (1.0 + a / 2.0)
    a = (xr - fm) / (xr * q)
    lamr = a * (1.0 + a / 2.0)
    p2 = p1 * (1.0 + 2.0 * c)
    p3 = p2 + c / laml
    p4 = p3 + c / lamr
    nrq = n * r * q

    def accept(y: int, v: float) -> bool:
        k = abs(y - m)
        if k <= 20 or k >= nrq / 2.0 - 1.0:
            # explicit evaluation of f(y) / f(m)
            s = r / q
            a = s * (n + 1)
            f = 1.0
            if m < y:
                for i in range(m + 1, y + 1):
                    f *= a / i - s
            elif m > y:
                for i in range(y + 1, m + 1):
                    f /= a / i - s
            return v <= f

        # squeeze on log(f(y) / f(m))
        rho = (k / nrq) * ((k * (k / 3.0 + 0.625) + 0.16666666666666666) / nrq + 0.5)
        t = -k * k / (2.0 * nrq)
        big_a = math.log(v) if v > 0.0 else -math.inf
        if big_a < t - rho:
            return True
        if big_a > t + rho:
            return False

        x1 = y + 1.0
        f1 = m + 1.0
        z = n + 1.0 - m
        w = n - y + 1.0
        bound = (
            xm * math.log(f1 / x1)
            + (n - m + 0.5) * math.log(z / w)
            + (y - m) * math.log(w * r / (x1 * q))
            + _stirling_tail(f1)
            + _stirling_tail(z)
            + _stirling_tail(x1)
            + _stirling_tail(w)
        )
        return big_a <= bound

    def draw() -> int:
        while True:
            u = uniform() * p4
            v = uniform_open()
            if u <= p1:
                # triangular region, always accepted
                return math.floor(xm - p1 * v + u)
            if u <= p2:
                x = xl + (u - p1) / c
                v = v * c + 1.0 - abs(m - x + 0.5) / p1
                if v > 1.0:
                    continue
                y = math.floor(x)
            elif u <= p3:
                y = math.floor(xl + math.log(v) / laml)
                if y < 0:
                    continue
                v = v * (u - p2) * laml
            else:
                y = math.floor(xr - math.log(v) / lamr)
                if y > n:
                    continue
                v = v * (u - p3) * lamr
            if accept(y, v):
                return y

    return draw


# -- continuous distributions --


def make_uniform_sampler(ctx: DrawContext, low: float, high: float) -> Sampler:
    uniform = ctx.uniform
    width = high - low

    def sample() -> float:
        return low + width * uniform()

    return sample


def make_cauchy_sampler(ctx: DrawContext, loc: float, scale: float) -> Sampler:
    uniform = ctx.uniform

    def sample() -> float:
        return loc + scale * math.tan(math.pi * (uniform() - 0.5))

    return sample


def make_chisquare_sampler(ctx: DrawContext, df: float) -> Sampler:
    gamma = standard_gamma(ctx, df / 2.0)

    def sample() -> float:
        return 2.0 * gamma()

    return sample


def make_f_sampler(ctx: DrawContext, dfnum: float, dfden: float) -> Sampler:
    num = make_chisquare_sampler(ctx, dfnum)
    den = make_chisquare_sampler(ctx, dfden)

    def sample() -> float:
        return _ratio(num() / dfnum, den() / dfden)

    return sample


def make_normal_sampler(ctx: DrawContext, loc: float, scale: float) -> Sampler:
    normal = standard_normal(ctx)

    def sample() -> float:
        return loc + scale * normal()

    return sample


def make_lognormal_sampler(ctx: DrawContext, mean: float, sigma: float) -> Sampler:
    normal = standard_normal(ctx)

    def sample() -> float:
        return _exp(mean + sigma * normal())

    return sample


def make_standard_t_sampler(ctx: DrawContext, df: float) -> Sampler:
    normal = standard_normal(ctx)
    chisquare = make_chisquare_sampler(ctx, df)

    def sample() -> float:
        z = normal()
        return _ratio(z, math.sqrt(chisquare() / df))

    return sample


def make_exponential_sampler(ctx: DrawContext, scale: float) -> Sampler:
    uniform = ctx.uniform

    def sample() -> float:
        return -scale * math.log(1.0 - uniform())

    return sample


def make_gamma_sampler(ctx: DrawContext, k: float, scale: float) -> Sampler:
    gamma = standard_gamma(ctx, k)

    def sample() -> float:
        return scale * gamma()

    return sample


def make_gumbel_sampler(ctx: DrawContext, loc: float, scale: float) -> Sampler:
    uniform_open = ctx.uniform_open

    def sample() -> float:
        return loc - scale * math.log(-math.log(uniform_open()))

    return sample


def make_weibull_sampler(ctx: DrawContext, k: float, scale: float) -> Sampler:
    uniform = ctx.uniform
    inv_k = 1.0 / k

    def sample() -> float:
        return scale * _pow(-math.log(1.0 - uniform()), inv_k)

    return sample


# -- count distributions --


def make_bernoulli_sampler(ctx: DrawContext, p: float) -> CountSampler:
    uniform = ctx.uniform

    def sample() -> int:
        return 1 if uniform() < p else 0

    return sample


def make_binomial_sampler(ctx: DrawContext, n: int, p: float) -> CountSampler:
    """Binomial(n, p) by inversion when min(p, 1-p) * n <= 30, BTPE otherwise."""
    if n == 0 or p == 0.0:
        return lambda: 0
    if p == 1.0:
        return lambda: n

    flipped = p > 0.5
    r = 1.0 - p if flipped else p
    if r * n <= 30.0:
        uniform = ctx.uniform

        def base() -> int:
            return _binomial_inversion(uniform, n, r)

    else:
        base = _binomial_btpe(ctx, n, r)

    if not flipped:
        return base

    def sample() -> int:
        return n - base()

    return sample


def make_negative_binomial_sampler(ctx: DrawContext, n: int, p: float) -> CountSampler:
    """Number of failures before the n-th success, as a gamma–Poisson mixture."""
    if n == 0 or p == 1.0:
        return lambda: 0
    gamma = standard_gamma(ctx, float(n))
    scale = (1.0 - p) / p

    def sample() -> int:
        return poisson_variate(ctx, scale * gamma())

    return sample


def make_geometric_sampler(ctx: DrawContext, p: float) -> CountSampler:
    """Number of failures before the first success, so P(X = 0) = p."""
    uniform = ctx.uniform
    log_q = math.log1p(-p)

    def sample() -> int:
        return _floor(math.log(1.0 - uniform()) / log_q)

    return sample


def make_poisson_sampler(ctx: DrawContext, mean: float) -> CountSampler:
    def sample() -> int:
        return poisson_variate(ctx, mean)

    return sample


def make_discrete_sampler(ctx: DrawContext, weight: Sequence[float]) -> CountSampler:
    """Index i drawn with probability weight[i] / sum(weight)."""
    uniform = ctx.uniform
    cumulative = list(itertools.accumulate(weight))
    total = cumulative[-1]
    last = len(cumulative) - 1

    def sample() -> int:
        return min(bisect.bisect_right(cumulative, uniform() * total), last)

    return sample
