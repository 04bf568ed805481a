"""randomext: random number generation for NumPy and JAX arrays.

Modules:
    bitgen: Seedable bit generators (PCG32, PCG64, MT32, MT64)
    uniform: Raw words to uniform floats and bounded integers
    distributions: Distribution catalogue (validation and samplers)
    arrays: Fill dispatch over NumPy and JAX arrays
    generator: The Generator handle
    config: Defaults and dtype tags
    errors: Error taxonomy
"""

from randomext.bitgen import MT32, MT64, PCG32, PCG64, BitGenerator
from randomext.errors import (
    ConfigurationError,
    ParameterError,
    RandomExtError,
    ShapeError,
    TypeMismatchError,
)
from randomext.generator import Generator

__version__ = "0.1.0"

__all__ = [
    "Generator",
    "BitGenerator",
    "PCG32",
    "PCG64",
    "MT32",
    "MT64",
    "RandomExtError",
    "ConfigurationError",
    "ParameterError",
    "TypeMismatchError",
    "ShapeError",
]
