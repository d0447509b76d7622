"""Configuration for blooming.

Defines the tunable parameters shared by Bloom filters.
"""

from __future__ import annotations

import hashlib
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from .errors import InvalidArgumentError


@dataclass
class BloomConfig:
    """Configuration parameters for Bloom filters.

    Attributes:
        hash_name: hashlib algorithm used for the hash chain
        saturation_threshold: Fraction of set bits above which a filter is full
    """

    hash_name: str = "sha512"
    saturation_threshold: float = 0.5  # half full

    def __post_init__(self) -> None:
        if self.hash_name not in hashlib.algorithms_available:
            raise InvalidArgumentError(f"Unknown hash algorithm: {self.hash_name}")
        if self.digest_bits == 0:
            raise InvalidArgumentError(
                f"Hash algorithm {self.hash_name} has no fixed digest size"
            )
        if not 0.0 < self.saturation_threshold < 1.0:
            raise InvalidArgumentError("saturation_threshold must be in (0, 1)")

    @property
    def digest_bits(self) -> int:
        """Bit width of one digest invocation."""
        return hashlib.new(self.hash_name).digest_size * 8


def load_config(path: Path) -> BloomConfig:
    """Load a BloomConfig from the ``[bloom]`` table of a TOML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    table = data.get("bloom", {})

    known = {f.name for f in fields(BloomConfig)}
    unknown = set(table) - known
    if unknown:
        raise InvalidArgumentError(f"Unknown config keys: {sorted(unknown)}")
    return BloomConfig(**table)
