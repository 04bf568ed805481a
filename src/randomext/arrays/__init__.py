"""Fill dispatch over external numeric arrays.

NumPy arrays are filled in place through their strides. JAX arrays are
immutable, so filling one returns a new array.

Supported element types:
    int8 int16 int32 int64 uint8 uint16 uint32 uint64 → count distributions
    float32 float64                                   → continuous distributions
"""

from randomext.arrays.fill import (
    allocate,
    array_dtype,
    check_kind,
    fill,
    is_jax_array,
    iteration_order,
    narrow,
    normalize_shape,
)

__all__ = [
    "fill",
    "allocate",
    "array_dtype",
    "check_kind",
    "iteration_order",
    "narrow",
    "normalize_shape",
    "is_jax_array",
]
