"""Library defaults and the dtype tag table.

Output arrays are described by a dtype tag. Tags are the names of the
ten supported element types plus the ``sfloat``/``dfloat`` aliases; NumPy
dtypes, NumPy scalar types and JAX dtypes (``jnp.float32`` and friends)
resolve to the same table.

"""

from __future__ import annotations

from typing import Any

import numpy as np

from randomext.errors import TypeMismatchError

ALGORITHMS: tuple[str, ...] = ("pcg32", "pcg64", "mt32", "mt64")
DEFAULT_ALGORITHM = "pcg64"

DEFAULT_FLOAT_DTYPE = "float64"
DEFAULT_INT_DTYPE = "int32"

INT_DTYPES: tuple[np.dtype, ...] = tuple(
    np.dtype(name)
    for name in ("int8", "int16", "int32", "int64", "uint8", "uint16", "uint32", "uint64")
)
FLOAT_DTYPES: tuple[np.dtype, ...] = (np.dtype("float32"), np.dtype("float64"))

DTYPE_TAGS: dict[str, np.dtype] = {dt.name: dt for dt in INT_DTYPES + FLOAT_DTYPES}
DTYPE_TAGS["sfloat"] = np.dtype("float32")
DTYPE_TAGS["dfloat"] = np.dtype("float64")


def resolve_dtype(tag: Any) -> np.dtype:
    """Resolve a dtype tag to one of the supported NumPy dtypes.

    Args:
        tag: Tag name (``"int32"``, ``"sfloat"``, ...), NumPy dtype,
            NumPy scalar type or JAX dtype.

    Returns:
        The matching ``np.dtype``.

    Raises:
        TypeMismatchError: If the tag names an unsupported element type.

    Examples:
        >>> resolve_dtype("sfloat")
        dtype('float32')
        >>> resolve_dtype(np.uint16)
        dtype('uint16')

    """
    if isinstance(tag, str):
        key = tag.lower()
        if key in DTYPE_TAGS:
            return DTYPE_TAGS[key]
    elif tag is not None:
        try:
            dt = np.dtype(tag)
        except TypeError:
            dt = None
        if dt is not None and dt in DTYPE_TAGS.values():
            return dt
    msg = f"wrong dtype is given: {tag}"
    raise TypeMismatchError(msg)
