#!/usr/bin/env python
"""Some useful utility functions for projecting values onto bin keys."""

import types
from collections.abc import Iterable

iterator_types = (types.GeneratorType, Iterable)

__all__ = ["project", "parse_key", "location_order", "iterator_types"]

_NAN_KEY = "nan"


def project(resolution, x):
    """Return the canonical bin key for `x` at the given resolution.

    The key is `x` in scientific notation with `resolution` digits after the
    decimal point, i.e. ``resolution + 1`` significant digits. Values that
    round to the same digits share a key.

    Parameters
    ----------
    resolution : int
        Number of fractional digits kept in the mantissa.
    x : float
        The value to project.

    Examples
    --------
    >>> project(2, 123.3)
    '1.23e+02'
    >>> project(5, 345.234212312)
    '3.45234e+02'
    """
    x = float(x)
    if x != x:
        # Every NaN (whatever its sign bit) shares one bin
        return _NAN_KEY
    # Folds -0.0 into 0.0
    x += 0.0
    return "%.*e" % (resolution, x)


def parse_key(key):
    """Decode a bin key back into a float.

    Raises ValueError if `key` is not a valid number.
    """
    return float(key)


def location_order(x):
    """Sort key placing NaN after every other location."""
    return (x != x, x)
