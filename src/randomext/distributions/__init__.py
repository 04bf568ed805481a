"""Distribution catalogue: validation and per-element sampling.

Seventeen distributions, each a validator plus a sampler factory:
uniform, cauchy, chisquare, f, normal, lognormal, standard_t,
exponential, gamma, gumbel, weibull (continuous) and bernoulli,
binomial, negative_binomial, geometric, poisson, discrete (counts).

Algorithms:
    normal            → Marsaglia polar method
    gamma             → Marsaglia–Tsang squeeze (boosted for k < 1)
    binomial          → inversion / BTPE
    poisson           → multiplication / PTRS transformed rejection
    negative_binomial → gamma–Poisson mixture
    discrete          → cumulative table + binary search
"""

from randomext.distributions.catalogue import (
    CATALOGUE,
    FLOAT_KIND,
    INT_KIND,
    Distribution,
    get_distribution,
)
from randomext.distributions.samplers import (
    poisson_variate,
    standard_gamma,
    standard_normal,
)

__all__ = [
    "CATALOGUE",
    "Distribution",
    "FLOAT_KIND",
    "INT_KIND",
    "get_distribution",
    "standard_normal",
    "standard_gamma",
    "poisson_variate",
]
