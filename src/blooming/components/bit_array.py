"""Packed bit array backed by a bytearray.

Bit ``i`` lives in byte ``i // 8`` under mask ``1 << (i % 8)``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.errors import IndexOutOfBoundsError, InvalidArgumentError, TypeMismatchError
from ..core.types import BUFFER_TYPES

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Buffer

logger = logging.getLogger(__name__)


def _popcount(byte: int) -> int:
    count = 0
    while byte:
        count += byte & 1
        byte >>= 1
    return count


# Set bits per byte value
POPCNT_TABLE: tuple[int, ...] = tuple(_popcount(b) for b in range(256))


def _check_size(size: int) -> None:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgumentError(f"size must be an int, got {type(size).__name__}")
    if size <= 0 or size % 8:
        raise InvalidArgumentError(f"size must be >0 and a multiple of 8, got {size}")


class BitArray:
    """Fixed-size array of bits.

    Args:
        init: Number of bits (a positive multiple of 8), or an existing
            bytes-like buffer whose length determines the size

    Invariants:
        - size is always a positive multiple of 8
        - the buffer, once materialized, holds exactly size / 8 bytes
        - the buffer is allocated lazily, as all zeros, on first access

    Thread safety:
        Safe for concurrent readers. Mutations (set, unset, flip, clear,
        flood, resize, raw assignment) are not locked internally and must
        be serialized by the caller.
    """

    def __init__(self, init: int | Buffer):
        self._raw: bytearray | None = None
        self._size = 0
        if isinstance(init, BUFFER_TYPES):
            self.raw = init
        elif isinstance(init, int) and not isinstance(init, bool):
            _check_size(init)
            self._size = init
        else:
            raise TypeMismatchError(
                f"initialize with bytes or int, got {type(init).__name__}"
            )

    @property
    def size(self) -> int:
        """Number of bits in the array."""
        return self._size

    @property
    def raw(self) -> bytes:
        """The raw bytes backing the array."""
        return bytes(self._buffer)

    @raw.setter
    def raw(self, new_bits: Buffer) -> None:
        if not isinstance(new_bits, BUFFER_TYPES):
            raise TypeMismatchError(
                f"expected a bytes-like buffer, got {type(new_bits).__name__}"
            )
        buf = bytearray(new_bits)
        if not buf:
            raise InvalidArgumentError("buffer must not be empty")
        self._raw = buf
        self._size = len(buf) * 8

    @property
    def _buffer(self) -> bytearray:
        if self._raw is None:
            self._raw = bytearray(self._size // 8)
        return self._raw

    def to_bytes(self) -> bytes:
        """Return the raw bit plane."""
        return self.raw

    __bytes__ = to_bytes

    def _locate(self, pos: int) -> tuple[int, int]:
        """Map a bit position to (byte index, mask)."""
        byte = pos // 8
        if pos < 0 or byte >= self._size // 8:
            raise IndexOutOfBoundsError(f"bit {pos} out of bounds for size {self._size}")
        return byte, 1 << (pos % 8)

    def get(self, pos: int) -> bool:
        """Return whether the bit at pos is set."""
        byte, mask = self._locate(pos)
        return bool(self._buffer[byte] & mask)

    __getitem__ = get

    def set(self, pos: int) -> BitArray:
        """Set the bit at pos."""
        byte, mask = self._locate(pos)
        self._buffer[byte] |= mask
        return self

    def unset(self, pos: int) -> BitArray:
        """Unset the bit at pos."""
        byte, mask = self._locate(pos)
        self._buffer[byte] &= 0xFF ^ mask
        return self

    def flip(self, pos: int) -> BitArray:
        """Flip the bit at pos."""
        byte, mask = self._locate(pos)
        self._buffer[byte] ^= mask
        return self

    def __setitem__(self, pos: int, value: object) -> None:
        if value:
            self.set(pos)
        else:
            self.unset(pos)

    def clear(self) -> BitArray:
        """Drop the buffer; every bit reads as zero again."""
        self._raw = None
        return self

    def flood(self) -> BitArray:
        """Set every bit."""
        self._raw = bytearray(b"\xff" * (self._size // 8))
        return self

    def cardinality(self) -> int:
        """Count the set bits using a per-byte lookup table."""
        if self._raw is None:
            return 0
        table = POPCNT_TABLE
        return sum(table[byte] for byte in self._raw)

    def is_empty(self) -> bool:
        """Return True if no bit is set."""
        return self._raw is None or not any(self._raw)

    def resize(self, new_size: int) -> BitArray:
        """Resize, zero-padding or truncating at the tail."""
        _check_size(new_size)
        if self._raw is not None:
            new_len = new_size // 8
            if new_len > len(self._raw):
                self._raw.extend(bytes(new_len - len(self._raw)))
            else:
                del self._raw[new_len:]
        logger.debug(f"Resized bit array {self._size} -> {new_size} bits")
        self._size = new_size
        return self

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[bool]:
        # Walking bytes is much faster than calling get() per bit
        if self._raw is None:
            for _ in range(self._size):
                yield False
            return
        for byte in self._raw:
            for i in range(8):
                yield bool(byte & (1 << i))

    def __repr__(self) -> str:
        total = self.cardinality()
        pct = total / self._size * 100
        return f"<{type(self).__name__} {total}/{self._size} bits ({pct:.2f}% set)>"
