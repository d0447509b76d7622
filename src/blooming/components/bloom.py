"""Bloom filter implementation.

Bit positions come from a hash chain: the key is digested, then each further
digest is taken over the previous one, and the concatenated output is read as
big-endian unsigned lanes (16-bit for filters under 2**16 bits, 32-bit up to
2**32).
"""

from __future__ import annotations

import hashlib
import logging
import math
import struct
from typing import TYPE_CHECKING

from ..core.config import BloomConfig
from ..core.errors import InvalidArgumentError, TypeMismatchError
from ..core.types import BUFFER_TYPES
from .bit_array import BitArray

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..core.types import Buffer, Key
    from ..interfaces.bit_array import BitStore

logger = logging.getLogger(__name__)

MAX_BITS = 2 ** 32


def key_to_bytes(key: Key) -> bytes:
    """Canonical byte form of a key; bytes pass through, anything else via str()."""
    if isinstance(key, BUFFER_TYPES):
        return bytes(key)
    return str(key).encode("utf-8")


class BloomFilter:
    """Probabilistic set membership test over a fixed-size bit array.

    Args:
        m: Number of bits, a positive multiple of 8 below 2**32
        k: Number of hash positions per key
        config: Hash algorithm and saturation threshold

    ``BloomFilterParams`` can derive m and k from capacity, space or a
    target false-positive rate.

    Invariants:
        - False positives are possible
        - False negatives are not possible
        - m and k are fixed at creation time

    Thread safety:
        Membership tests, estimates and serialize() may run concurrently.
        add(), add_if_absent(), clear() and load() must be serialized by
        the caller.
    """

    def __init__(self, m: int, k: int, config: BloomConfig | None = None):
        m = int(m)
        k = int(k)
        self.config = config or BloomConfig()

        if m <= 0 or m % 8:
            raise InvalidArgumentError(f"m must be >0 and a multiple of 8, got {m}")
        if m >= MAX_BITS:
            raise InvalidArgumentError("Huge filters are silly. Use multiple smaller ones.")
        if k <= 0:
            raise InvalidArgumentError(f"k must be positive, got {k}")

        self._m = m
        self._k = k
        self.lane_bits = 16 if m < 2 ** 16 else 32
        self.hashes_needed = (k * self.lane_bits) // self.config.digest_bits + 1
        self._unpack = struct.Struct(f">{k}{'H' if self.lane_bits == 16 else 'I'}")
        self._bits: BitStore = BitArray(m)

        logger.debug(
            f"Created bloom filter m={m} k={k} lanes={self.lane_bits} "
            f"digests={self.hashes_needed}"
        )

    @property
    def m(self) -> int:
        """Number of bits in the filter."""
        return self._m

    @property
    def k(self) -> int:
        """Number of hash positions per key."""
        return self._k

    def key_to_hashes(self, key: Key) -> list[int]:
        """Return the k bit positions for key."""
        last = key_to_bytes(key)
        blocks = []
        for _ in range(self.hashes_needed):
            last = hashlib.new(self.config.hash_name, last).digest()
            blocks.append(last)
        hashed = b"".join(blocks)

        m = self._m
        return [lane % m for lane in self._unpack.unpack_from(hashed)]

    def add(self, key: Key) -> BloomFilter:
        """Add key to the filter."""
        bits = self._bits
        for pos in self.key_to_hashes(key):
            bits.set(pos)
        return self

    def update(self, keys: Iterable[Key]) -> BloomFilter:
        """Add every key from an iterable."""
        for key in keys:
            self.add(key)
        return self

    def add_if_absent(self, key: Key) -> bool:
        """Add key, returning True if it was not already present.

        Reads each position once and writes only the unset ones, so it does
        less work than ``contains`` followed by ``add``. A True result only
        means at least one bit was newly set.
        """
        bits = self._bits
        missing = [pos for pos in self.key_to_hashes(key) if not bits.get(pos)]
        for pos in missing:
            bits.set(pos)
        return bool(missing)

    def contains(self, key: Key) -> bool:
        """Return True if key may be present; False if definitely absent."""
        bits = self._bits
        return all(bits.get(pos) for pos in self.key_to_hashes(key))

    __contains__ = contains

    def saturation(self) -> float:
        """Fraction of set bits, between 0 and 1.

        Counts every set bit, so it scales with the size of the filter.
        """
        return self._bits.cardinality() / self._m

    def is_saturated(self) -> bool:
        """Return True once adding more keys sharply raises the false-positive rate."""
        return self.saturation() > self.config.saturation_threshold

    def estimate_count(self) -> float:
        """Estimate the number of distinct keys added."""
        set_bits = self._bits.cardinality()
        if set_bits == 0:
            return 0.0
        if set_bits == self._m:
            return math.inf
        return -(self._m / self._k) * math.log(1 - set_bits / self._m)

    def is_empty(self) -> bool:
        """Return True if no key has been added."""
        return self._bits.is_empty()

    def clear(self) -> BloomFilter:
        """Empty the filter."""
        self._bits.clear()
        return self

    def serialize(self) -> bytes:
        """Return the raw bit plane.

        The result does not carry m or k; callers must keep those alongside.
        """
        return self._bits.to_bytes()

    def load(self, data: Buffer) -> None:
        """Replace the bit plane with data produced by serialize()."""
        if not isinstance(data, BUFFER_TYPES):
            raise TypeMismatchError(
                f"expected a bytes-like buffer, got {type(data).__name__}"
            )
        data = bytes(data)
        if len(data) != self._m // 8:
            raise InvalidArgumentError(
                f"expected a {self._m // 8} byte filter, provided {len(data)}"
            )
        self._bits = BitArray(data)
        logger.debug(f"Loaded {len(data)} byte bit plane into bloom filter")

    @classmethod
    def deserialize(cls, data: Buffer, k: int, config: BloomConfig | None = None) -> BloomFilter:
        """Build a filter from a serialized bit plane; m is taken from its length."""
        if not isinstance(data, BUFFER_TYPES):
            raise TypeMismatchError(
                f"expected a bytes-like buffer, got {type(data).__name__}"
            )
        data = bytes(data)
        bf = cls(len(data) * 8, k, config)
        bf.load(data)
        return bf

    def __repr__(self) -> str:
        return f"<{type(self).__name__} m={self._m} k={self._k} filter={self._bits!r}>"
