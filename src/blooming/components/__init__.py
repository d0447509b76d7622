"""Concrete bit array, Bloom filter and parameter calculator."""

from .bit_array import BitArray
from .bloom import BloomFilter
from .params import BloomFilterParams, resolve

__all__ = ["BitArray", "BloomFilter", "BloomFilterParams", "resolve"]
