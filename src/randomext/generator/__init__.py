"""Public generator handle.

One ``Generator`` owns one bit generator, chosen by name at construction,
and draws every distribution from it.
"""

from randomext.generator.core import Generator

__all__ = ["Generator"]
