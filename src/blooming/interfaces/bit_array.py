"""Protocol definition for a packed bit store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class BitStore(Protocol):
    """Fixed-size, byte-aligned vector of bits."""

    @property
    def size(self) -> int:
        """Number of bits in the store."""
        ...

    def get(self, pos: int) -> bool:
        """Return whether the bit at pos is set."""
        ...

    def set(self, pos: int) -> BitStore:
        """Set the bit at pos."""
        ...

    def unset(self, pos: int) -> BitStore:
        """Unset the bit at pos."""
        ...

    def clear(self) -> BitStore:
        """Reset every bit to zero."""
        ...

    def cardinality(self) -> int:
        """Return the number of set bits."""
        ...

    def is_empty(self) -> bool:
        """Return True if no bit is set."""
        ...

    def to_bytes(self) -> bytes:
        """Return the raw bit plane."""
        ...

    def __iter__(self) -> Iterator[bool]:
        """Iterate bit values in ascending position order."""
        ...
