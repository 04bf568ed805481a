"""Uniform mapping of raw bit generator output.

Turns raw words into uniform floats at 53-bit or 24-bit precision and
into bias-free bounded integers.
"""

from randomext.uniform.mapping import (
    DrawContext,
    bounded_uint,
    uniform_f32,
    uniform_f32_open,
    uniform_f64,
    uniform_f64_closed,
    uniform_f64_open,
)

__all__ = [
    "uniform_f64",
    "uniform_f32",
    "uniform_f64_closed",
    "uniform_f64_open",
    "uniform_f32_open",
    "bounded_uint",
    "DrawContext",
]
