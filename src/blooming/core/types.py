"""Common type definitions for blooming.

Defines fundamental types used across all components.
"""

from __future__ import annotations

from typing import Any, TypedDict

# Anything with a str() form; bytes are hashed as-is
Key = Any
Buffer = bytes | bytearray | memoryview

BUFFER_TYPES = (bytes, bytearray, memoryview)


class FilterParams(TypedDict):
    """Resolved Bloom filter dimensions."""
    m: int
    n: int
    k: int
    p: float
