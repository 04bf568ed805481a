"""Tests for randomext.distributions module."""

from __future__ import annotations

import math

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from randomext.bitgen import MT64, PCG32, PCG64
from randomext.distributions import CATALOGUE, FLOAT_KIND, INT_KIND, get_distribution
from randomext.errors import ParameterError, ShapeError, TypeMismatchError
from randomext.uniform import DrawContext


def draw(name, n, /, seed=42, precision=64, bitgen_cls=PCG64, **params):
    dist = get_distribution(name)
    ctx = DrawContext(bitgen_cls(seed=seed), precision)
    sampler = dist.make_sampler(ctx, **dist.validate(**params))
    return np.array([sampler() for _ in range(n)], dtype=np.float64)


class TestCatalogue:
    """Tests for the catalogue registry."""

    def test_seventeen_distributions(self):
        assert len(CATALOGUE) == 17

    def test_kinds(self):
        floats = {n for n, d in CATALOGUE.items() if d.kind == FLOAT_KIND}
        ints = {n for n, d in CATALOGUE.items() if d.kind == INT_KIND}
        assert floats == {
            "uniform", "cauchy", "chisquare", "f", "normal", "lognormal",
            "standard_t", "exponential", "gamma", "gumbel", "weibull",
        }
        assert ints == {"bernoulli", "binomial", "negative_binomial", "geometric", "poisson", "discrete"}

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_distribution("zipf")


class TestValidation:
    """Tests for parameter validation messages."""

    @pytest.mark.parametrize(
        ("name", "params", "message"),
        [
            ("uniform", {"low": 10, "high": 5}, "high - low must be > 0"),
            ("cauchy", {"scale": -100}, "scale must be a non-negative value"),
            ("chisquare", {"df": -1}, "df must be > 0"),
            ("chisquare", {"df": 0}, "df must be > 0"),
            ("f", {"dfnum": -5, "dfden": 10}, "dfnum must be > 0"),
            ("f", {"dfnum": 0, "dfden": 10}, "dfnum must be > 0"),
            ("f", {"dfnum": 5, "dfden": 0}, "dfden must be > 0"),
            ("normal", {"scale": -100}, "scale must be a non-negative value"),
            ("lognormal", {"sigma": -100}, "sigma must be a non-negative value"),
            ("standard_t", {"df": 0}, "df must be > 0"),
            ("exponential", {"scale": 0}, "scale must be > 0"),
            ("exponential", {"scale": -1}, "scale must be > 0"),
            ("gamma", {"k": 0}, "k must be > 0"),
            ("gamma", {"k": 1, "scale": -10}, "scale must be > 0"),
            ("gumbel", {"scale": 0}, "scale must be > 0"),
            ("weibull", {"k": -5}, "k must be > 0"),
            ("weibull", {"k": 1, "scale": 0}, "scale must be > 0"),
            ("bernoulli", {"p": 1.5}, "p must be >= 0 and <= 1"),
            ("binomial", {"n": -1, "p": 0.5}, "n must be a non-negative value"),
            ("binomial", {"n": 5, "p": -0.1}, "p must be >= 0 and <= 1"),
            ("binomial", {"n": 5, "p": 1.1}, "p must be >= 0 and <= 1"),
            ("negative_binomial", {"n": -1, "p": 0.5}, "n must be a non-negative value"),
            ("negative_binomial", {"n": 5, "p": 0}, "p must be > 0 and <= 1"),
            ("negative_binomial", {"n": 5, "p": 1.1}, "p must be > 0 and <= 1"),
            ("geometric", {"p": 0}, "p must be > 0 and < 1"),
            ("geometric", {"p": 1}, "p must be > 0 and < 1"),
            ("geometric", {"p": -0.1}, "p must be > 0 and < 1"),
            ("poisson", {"mean": 0}, "mean must be > 0"),
            ("poisson", {"mean": -1}, "mean must be > 0"),
            ("poisson", {"mean": math.nan}, "mean must be > 0"),
            ("weibull", {"k": math.nan}, "k must be > 0"),
            ("normal", {"scale": math.nan}, "scale must be a non-negative value"),
            ("chisquare", {"df": math.nan}, "df must be > 0"),
            ("gamma", {"k": 2, "scale": math.nan}, "scale must be > 0"),
            ("uniform", {"low": math.nan}, "high - low must be > 0"),
            ("bernoulli", {"p": math.nan}, "p must be >= 0 and <= 1"),
            ("binomial", {"n": 2**63, "p": 0.5}, "n must be <= 9223372036854775807"),
            ("negative_binomial", {"n": 10**400, "p": 0.5}, "n must be <= 9223372036854775807"),
            ("normal", {"loc": 10**400}, "loc must be a real number"),
        ],
    )
    def test_domain_errors(self, name, params, message):
        with pytest.raises(ParameterError) as excinfo:
            get_distribution(name).validate(**params)
        assert str(excinfo.value) == message

    def test_defaults_applied(self):
        assert get_distribution("normal").validate() == {"loc": 0.0, "scale": 1.0}
        assert get_distribution("poisson").validate() == {"mean": 1.0}

    def test_uniform_allows_equal_bounds(self):
        assert get_distribution("uniform").validate(low=2, high=2) == {"low": 2.0, "high": 2.0}

    def test_non_numeric_parameter(self):
        with pytest.raises(ParameterError, match="loc must be a real number"):
            get_distribution("normal").validate(loc="ten")

    def test_fractional_trial_count(self):
        with pytest.raises(ParameterError, match="n must be an integer"):
            get_distribution("binomial").validate(n=2.5, p=0.5)

    def test_integral_float_trial_count(self):
        assert get_distribution("binomial").validate(n=10.0, p=0.5)["n"] == 10

    def test_gamma_checks_k_before_scale(self):
        with pytest.raises(ParameterError, match="k must be > 0"):
            get_distribution("gamma").validate(k=0, scale=0)


class TestDiscreteWeight:
    """Tests for discrete weight validation."""

    def test_integer_weight(self):
        with pytest.raises(TypeMismatchError, match="weight must be float32 or float64 array"):
            get_distribution("discrete").validate(weight=np.array([1, 6, 3], dtype=np.int32))

    def test_multi_dimensional_weight(self):
        w = np.array([[0.1, 0.6, 0.3], [0.1, 0.1, 0.8]])
        with pytest.raises(ShapeError, match="weight must be 1-dimensional array"):
            get_distribution("discrete").validate(weight=w)

    def test_empty_weight(self):
        with pytest.raises(ShapeError, match="length of weight must be > 0"):
            get_distribution("discrete").validate(weight=np.array([], dtype=np.float64))

    def test_negative_weight(self):
        with pytest.raises(ParameterError, match="non-negative"):
            get_distribution("discrete").validate(weight=np.array([0.5, -0.1]))

    @pytest.mark.parametrize("bad", [math.inf, math.nan])
    def test_non_finite_weight(self, bad):
        with pytest.raises(ParameterError, match="weight must be finite non-negative values"):
            get_distribution("discrete").validate(weight=np.array([bad, 1.0]))

    def test_overflowing_sum(self):
        w = np.array([1e308, 1e308])
        with pytest.raises(ParameterError, match="sum of weight must be finite"):
            get_distribution("discrete").validate(weight=w)

    def test_zero_sum(self):
        with pytest.raises(ParameterError, match="sum of weight must be > 0"):
            get_distribution("discrete").validate(weight=np.zeros(3))

    def test_float32_weight(self):
        params = get_distribution("discrete").validate(weight=np.array([1.0, 3.0], dtype=np.float32))
        assert params == {"weight": [1.0, 3.0]}

    def test_shape_error_is_value_error(self):
        with pytest.raises(ValueError):
            get_distribution("discrete").validate(weight=np.zeros((2, 2)))


class TestContinuousSamplers:
    """Moment checks for continuous samplers."""

    def test_uniform(self):
        x = draw("uniform", 50000, low=1, high=4)
        assert x.min() >= 1.0
        assert x.max() < 4.0
        assert abs(x.mean() - 2.5) < 1e-2
        assert abs(x.var() - 0.75) < 1e-2

    def test_normal(self):
        x = draw("normal", 50000)
        assert abs(x.mean()) < 0.025
        assert abs(x.std() - 1.0) < 0.02

    def test_normal_float32_precision(self):
        x = draw("normal", 50000, precision=32, loc=3, scale=0.5)
        assert abs(x.mean() - 3.0) < 0.015
        assert abs(x.std() - 0.5) < 0.01

    def test_normal_zero_scale(self):
        x = draw("normal", 10, loc=7, scale=0)
        assert np.all(x == 7.0)

    def test_lognormal(self):
        x = draw("lognormal", 50000)
        assert x.min() > 0.0
        assert abs(x.mean() - math.exp(0.5)) < 0.06

    def test_cauchy_median(self):
        x = draw("cauchy", 50000, loc=4, scale=2)
        assert abs(np.median(x) - 4.0) < 0.05
        assert abs(np.median(np.abs(x - 4.0)) - 2.0) < 0.06

    def test_chisquare(self):
        x = draw("chisquare", 50000, df=2)
        assert abs(x.mean() - 2.0) < 0.05
        assert abs(x.var() - 4.0) < 0.3

    def test_chisquare_small_df(self):
        x = draw("chisquare", 50000, df=1)
        assert x.min() >= 0.0
        assert abs(x.mean() - 1.0) < 0.04

    def test_f(self):
        x = draw("f", 50000, dfnum=5, dfden=10)
        assert abs(x.mean() - 1.25) < 0.04

    def test_standard_t(self):
        x = draw("standard_t", 50000, df=10)
        assert abs(x.mean()) < 0.03
        assert abs(x.var() - 1.25) < 0.08

    def test_exponential(self):
        x = draw("exponential", 50000, scale=0.5)
        assert x.min() >= 0.0
        assert abs(x.mean() - 0.5) < 0.015
        assert abs(x.var() - 0.25) < 0.02

    def test_gamma(self):
        x = draw("gamma", 50000, k=9, scale=0.5)
        assert abs(x.mean() - 4.5) < 0.05
        assert abs(x.var() - 2.25) < 0.1

    def test_gamma_shape_below_one(self):
        x = draw("gamma", 50000, k=0.5)
        assert x.min() >= 0.0
        assert abs(x.mean() - 0.5) < 0.02

    def test_gumbel(self):
        x = draw("gumbel", 50000, loc=4, scale=3)
        assert abs(x.mean() - (4 + 3 * 0.5772156649)) < 0.1
        assert abs(x.var() - 9 * math.pi**2 / 6) < 0.8

    def test_weibull(self):
        x = draw("weibull", 50000, k=5)
        assert abs(x.mean() - math.gamma(1.2)) < 1e-2
        assert abs(x.var() - (math.gamma(1.4) - math.gamma(1.2) ** 2)) < 5e-3

    def test_weibull_tiny_shape_does_not_raise(self):
        x = draw("weibull", 100, k=1e-3)
        assert np.all(x >= 0.0)


class TestCountSamplers:
    """Moment checks for count samplers."""

    def test_bernoulli(self):
        x = draw("bernoulli", 20000, p=0.3)
        assert set(np.unique(x)) <= {0.0, 1.0}
        assert abs(x.mean() - 0.3) < 0.02

    def test_binomial_inversion(self):
        x = draw("binomial", 20000, n=50, p=0.4)
        assert x.min() >= 0
        assert x.max() <= 50
        assert abs(x.mean() - 20.0) < 0.15
        assert np.median(x) == 20.0

    def test_binomial_btpe(self):
        x = draw("binomial", 20000, n=1000, p=0.3)
        assert x.max() <= 1000
        assert abs(x.mean() - 300.0) < 0.8
        assert abs(x.var() - 210.0) < 15.0

    def test_binomial_flipped(self):
        x = draw("binomial", 20000, n=100, p=0.9)
        assert abs(x.mean() - 90.0) < 0.15

    def test_binomial_btpe_flipped(self):
        x = draw("binomial", 20000, n=1000, p=0.8)
        assert abs(x.mean() - 800.0) < 0.8

    def test_binomial_degenerate(self):
        assert np.all(draw("binomial", 10, n=0, p=0.5) == 0)
        assert np.all(draw("binomial", 10, n=7, p=0.0) == 0)
        assert np.all(draw("binomial", 10, n=7, p=1.0) == 7)

    def test_negative_binomial(self):
        x = draw("negative_binomial", 20000, n=14, p=0.4)
        assert x.min() >= 0
        assert abs(x.mean() - 21.0) < 0.4
        assert abs(np.median(x) - 20.0) <= 1.0

    def test_negative_binomial_certain_success(self):
        assert np.all(draw("negative_binomial", 10, n=5, p=1.0) == 0)

    def test_geometric_counts_failures(self):
        x = draw("geometric", 20000, p=0.4)
        assert x.min() == 0
        assert abs(np.mean(x == 0) - 0.4) < 0.02
        assert abs(x.mean() - 1.5) < 0.06

    def test_poisson_small_mean(self):
        x = draw("poisson", 20000, mean=3)
        assert abs(x.mean() - 3.0) < 0.07
        assert abs(x.var() - 3.0) < 0.2

    def test_poisson_large_mean(self):
        x = draw("poisson", 20000, mean=50)
        assert x.min() >= 0
        assert abs(x.mean() - 50.0) < 0.3
        assert abs(x.var() - 50.0) < 3.0

    def test_discrete(self):
        w = np.array([0.1, 0.6, 0.3])
        x = draw("discrete", 40000, weight=w)
        for i, p in enumerate(w):
            assert abs(np.mean(x == i) - p) < 1e-2

    def test_discrete_skips_zero_weight(self):
        x = draw("discrete", 5000, weight=np.array([0.0, 1.0, 0.0, 2.0]))
        assert set(np.unique(x)) <= {1.0, 3.0}

    def test_discrete_unnormalized(self):
        x = draw("discrete", 20000, weight=np.array([2.0, 2.0]))
        assert abs(x.mean() - 0.5) < 0.02


class TestSamplerDeterminism:
    """Same seed, same variates, for every engine."""

    @pytest.mark.parametrize("bitgen_cls", [PCG32, PCG64, MT64])
    @pytest.mark.parametrize("name", ["normal", "gamma", "poisson", "binomial"])
    def test_repeatable(self, name, bitgen_cls):
        params = {"normal": {}, "gamma": {"k": 2.5}, "poisson": {"mean": 20}, "binomial": {"n": 200, "p": 0.5}}
        a = draw(name, 200, seed=9, bitgen_cls=bitgen_cls, **params[name])
        b = draw(name, 200, seed=9, bitgen_cls=bitgen_cls, **params[name])
        assert np.array_equal(a, b)

    @given(st.floats(min_value=0.05, max_value=40.0, allow_nan=False))
    @settings(max_examples=15, deadline=None)
    def test_gamma_positive_property(self, k):
        """Property: gamma variates are non-negative and finite."""
        x = draw("gamma", 50, seed=1, k=k)
        assert np.all(x >= 0.0)
        assert np.all(np.isfinite(x))

    @given(st.floats(min_value=0.01, max_value=1e4, allow_nan=False))
    @settings(max_examples=15, deadline=None)
    def test_poisson_non_negative_property(self, mean):
        """Property: Poisson variates are non-negative integers."""
        x = draw("poisson", 50, seed=2, mean=mean)
        assert np.all(x >= 0)
        assert np.all(x == np.floor(x))
