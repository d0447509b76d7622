"""Exception hierarchy for blooming.

Each error also derives from the matching builtin so callers can catch either.
"""

from __future__ import annotations


class BloomingError(Exception):
    """Base exception for all blooming errors."""
    pass


class InvalidArgumentError(BloomingError, ValueError):
    """Raised for malformed sizes, filter parameters or buffer lengths."""
    pass


class IndexOutOfBoundsError(BloomingError, IndexError):
    """Raised when a bit position falls outside the array."""
    pass


class TypeMismatchError(BloomingError, TypeError):
    """Raised when a byte buffer was required and something else was given."""
    pass


class NotSupportedError(BloomingError, NotImplementedError):
    """Raised when parameters cannot be resolved from the given combination."""
    pass
