"""Protocol definition for Bloom Filter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import Buffer, Key


@runtime_checkable
class MembershipFilter(Protocol):
    """Probabilistic set membership test."""

    def add(self, key: Key) -> MembershipFilter:
        """Add key to the filter."""
        ...

    def add_if_absent(self, key: Key) -> bool:
        """Add key, returning True if any of its bits was previously unset."""
        ...

    def __contains__(self, key: Key) -> bool:
        """Return True if key may be present; False if definitely absent."""
        ...

    def estimate_count(self) -> float:
        """Estimate the number of distinct keys added."""
        ...

    def serialize(self) -> bytes:
        """Serialize filter to bytes."""
        ...

    def load(self, data: Buffer) -> None:
        """Replace the filter contents with previously serialized bytes."""
        ...
