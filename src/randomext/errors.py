"""Error taxonomy for randomext.

Every failure is a caller input error raised before any draw or array
write, so each one is recoverable by fixing the call. Each class also
derives from the matching builtin, so ``except ValueError`` and
``except TypeError`` keep working for callers that do not know about
randomext.

"""

from __future__ import annotations


class RandomExtError(Exception):
    """Base class for all randomext errors."""


class ConfigurationError(RandomExtError, ValueError):
    """Unsupported bit generator algorithm at construction."""


class ParameterError(RandomExtError, ValueError):
    """A distribution parameter lies outside its documented domain."""


class TypeMismatchError(RandomExtError, TypeError):
    """Array element type is incompatible with the requested operation."""


class ShapeError(RandomExtError, ValueError):
    """An input array has the wrong dimensionality or length."""
