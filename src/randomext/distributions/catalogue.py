"""The fixed catalogue of supported distributions.

Every entry binds a distribution name to its output kind (``"float"``
for continuous distributions, ``"int"`` for count distributions), its
parameter validator and its sampler factory. The fill layer uses the
kind to gate the target array's element type.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NamedTuple

from randomext.distributions import samplers, validation


class Distribution(NamedTuple):
    """One catalogue entry."""

    name: str
    kind: str  # "float" or "int"
    validate: Callable[..., dict[str, Any]]
    make_sampler: Callable[..., Callable[[], Any]]


FLOAT_KIND = "float"
INT_KIND = "int"

_ENTRIES = (
    ("uniform", FLOAT_KIND),
    ("cauchy", FLOAT_KIND),
    ("chisquare", FLOAT_KIND),
    ("f", FLOAT_KIND),
    ("normal", FLOAT_KIND),
    ("lognormal", FLOAT_KIND),
    ("standard_t", FLOAT_KIND),
    ("exponential", FLOAT_KIND),
    ("gamma", FLOAT_KIND),
    ("gumbel", FLOAT_KIND),
    ("weibull", FLOAT_KIND),
    ("bernoulli", INT_KIND),
    ("binomial", INT_KIND),
    ("negative_binomial", INT_KIND),
    ("geometric", INT_KIND),
    ("poisson", INT_KIND),
    ("discrete", INT_KIND),
)

CATALOGUE: dict[str, Distribution] = {
    name: Distribution(
        name=name,
        kind=kind,
        validate=getattr(validation, f"validate_{name}"),
        make_sampler=getattr(samplers, f"make_{name}_sampler"),
    )
    for name, kind in _ENTRIES
}


def get_distribution(name: str) -> Distribution:
    """Look up a catalogue entry by name.

    Raises:
        KeyError: If ``name`` is not in the catalogue.

    Examples:
        >>> get_distribution("poisson").kind
        'int'

    """
    return CATALOGUE[name]
