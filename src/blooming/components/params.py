"""Bloom filter parameter calculator.

Solves for the missing values among:

* m = number of bits
* n = capacity of the filter
* k = number of hash functions
* p = false-positive rate at capacity
"""

from __future__ import annotations

import logging
import math

from ..core.config import BloomConfig
from ..core.errors import InvalidArgumentError, NotSupportedError
from ..core.types import FilterParams
from .bloom import BloomFilter

logger = logging.getLogger(__name__)

# ln(1 / 2**ln2) == -(ln2)**2
LN_HALF_POW_LN2 = math.log(1.0 / (2.0 ** math.log(2.0)))


def _false_positive(m: int, n: int, k: int) -> float:
    r = m / n
    q = math.exp(-k / r)
    return (1 - q) ** k


def _optimal_k(m: int, n: int) -> int:
    return int(round(math.log(2) * (m / n)))


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")


def _check_hashes(k: int) -> None:
    if k < 0:
        raise InvalidArgumentError(f"k must not be negative, got {k}")


def _check_probability(p: float) -> None:
    if not 0 < p < 1:
        raise InvalidArgumentError(f"p must be in (0, 1), got {p}")


def resolve(
    m: int | None = None,
    n: int | None = None,
    k: int | None = None,
    p: float | None = None,
) -> FilterParams:
    """Derive the missing parameters from the known ones.

    Supported combinations:
        - m, k, n: false-positive rate of an existing filter at n items
        - n, p: bits and hashes needed for n items at rate p
        - m, n: hashes and resulting rate for n items in m bits
        - m, p: hashes and capacity for m bits at rate p

    When k is derived it is rounded, so the returned p can differ slightly
    from a requested one.
    """
    known = (m is not None, k is not None, n is not None, p is not None)

    if known == (True, True, True, False):
        _check_positive("m", m)
        _check_positive("n", n)
        _check_hashes(k)
        p = _false_positive(m, n, k)
    elif known == (False, False, True, True):
        _check_positive("n", n)
        _check_probability(p)
        m = math.ceil(n * math.log(p) / LN_HALF_POW_LN2)
        k = _optimal_k(m, n)
        p = _false_positive(m, n, k)
    elif known == (True, False, True, False):
        _check_positive("m", m)
        _check_positive("n", n)
        k = _optimal_k(m, n)
        p = _false_positive(m, n, k)
    elif known == (True, False, False, True):
        _check_positive("m", m)
        _check_probability(p)
        n = math.ceil(m * LN_HALF_POW_LN2 / math.log(p))
        k = _optimal_k(m, n)
        p = _false_positive(m, n, k)
    else:
        given = [name for name, present in zip("mknp", known) if present]
        raise NotSupportedError(f"parameter combination not supported: {given}")

    logger.info(f"Resolved bloom parameters m={m} n={n} k={k} p={p:.6g}")
    return FilterParams(m=m, n=n, k=k, p=p)


class BloomFilterParams:
    """Calculator for Bloom filter dimensions.

    Set any supported combination of m, n, k and p, then call
    ``to_params()`` or ``build_filter()``. A p greater than 1 is read as
    "1 in p" and stored as 1/p.
    """

    def __init__(
        self,
        m: int | None = None,
        n: int | None = None,
        k: int | None = None,
        p: float | None = None,
    ):
        self.m = m
        self.n = n
        self.k = k
        self.p = p

    @property
    def p(self) -> float | None:
        return self._p

    @p.setter
    def p(self, false_positives: float | None) -> None:
        if false_positives is not None and false_positives > 1:
            false_positives = 1 / float(false_positives)
        self._p = false_positives

    def to_params(self) -> FilterParams:
        return resolve(m=self.m, n=self.n, k=self.k, p=self.p)

    def build_filter(self, config: BloomConfig | None = None) -> BloomFilter:
        """Resolve parameters and build a filter, rounding m up to whole bytes."""
        params = self.to_params()
        m = -(-params["m"] // 8) * 8
        if m != params["m"]:
            logger.debug(f"Rounded m from {params['m']} up to {m} bits")
        return BloomFilter(m, params["k"], config)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(m={self.m!r}, n={self.n!r}, "
            f"k={self.k!r}, p={self.p!r})"
        )
