"""blooming - Bloom filters over packed bit arrays."""

from .components.bit_array import BitArray
from .components.bloom import BloomFilter
from .components.params import BloomFilterParams, resolve
from .core.config import BloomConfig, load_config
from .core.errors import (
    BloomingError,
    InvalidArgumentError,
    IndexOutOfBoundsError,
    TypeMismatchError,
    NotSupportedError,
)
from .core.types import Key, FilterParams

__all__ = [
    "BitArray",
    "BloomFilter",
    "BloomFilterParams",
    "resolve",
    "BloomConfig",
    "load_config",
    "BloomingError",
    "InvalidArgumentError",
    "IndexOutOfBoundsError",
    "TypeMismatchError",
    "NotSupportedError",
    "Key",
    "FilterParams",
]
