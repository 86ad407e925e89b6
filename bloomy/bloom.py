"""Bloom filter using enhanced double hashing.

Two independent hash families, MurmurHash3 (x64, 128-bit, first half) via mmh3
and xxHash64, each keyed with a fixed seed, give the base digests ``h1`` and
``h2``. The ``k`` bit positions for an item follow the enhanced double hashing
scheme of Kirsch and Mitzenmacher::

    g_i(x) = (h1(x) + i * h2(x) + i**3) mod m

computed with wrapping 64-bit arithmetic. This costs two hash calls per item
regardless of ``k`` without changing the asymptotic false positive rate.

Sizing follows the usual optimum:
* bits ``m = ceil(-(n * ln p) / ln(2)**2)``
* hashes ``k = ceil((m // n) * ln 2)``
* capacity ``n = round(-(m * ln(2)**2) / ln p)``

The serialized form of a filter is its raw packed bit vector. Reading bytes
back assumes the default false positive rate and a whole number of bytes, so
only filters built at that rate with a bit length divisible by eight (every
``with_size`` filter) are guaranteed to come back equal.
"""
from __future__ import annotations

import math
import struct
import sys
from typing import Any, Iterable, Iterator, Tuple

import mmh3
import structlog
import xxhash

from .bitvec import BitVec, BytesLike
from .errors import IncompatibleFilterError

logger = structlog.get_logger(__name__)

DEFAULT_FALSE_POSITIVE_RATE = 0.01

# Seed for mmh3 (32-bit) and seed for xxh64 (64-bit).
HASHER_SEEDS: Tuple[int, int] = (0x7B1CA888, 0x05420B36D4B1EC67)

LN_SQR = math.log(2) * math.log(2)

_MASK64 = (1 << 64) - 1


def optimal_bits(capacity: int, fp_rate: float) -> int:
    """Return the bit vector length for ``capacity`` items at ``fp_rate``."""
    return math.ceil(-(math.log(fp_rate) * capacity) / LN_SQR)


def optimal_capacity(nbits: int, fp_rate: float) -> int:
    """Return the item capacity implied by ``nbits`` bits at ``fp_rate``."""
    return round((-nbits * LN_SQR) / math.log(fp_rate))


def optimal_hashes(nbits: int, capacity: int) -> int:
    """Return the number of hash positions (``k``) for ``nbits`` and ``capacity``."""
    return math.ceil((nbits // capacity) * math.log(2))


def _item_bytes(item: Any) -> bytes:
    """Return the stable byte form of ``item`` that gets hashed."""
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, int):
        return item.to_bytes((item.bit_length() + 8) // 8, "little", signed=True)
    if isinstance(item, float):
        return struct.pack("<d", item)
    if hasattr(item, "__bytes__"):
        return bytes(item)
    raise TypeError(f"cannot hash item of type {type(item).__name__!r}")


class BloomFilter:
    """Insert-only probabilistic set with no false negatives."""

    __slots__ = ("_bits", "_nhashes")

    __hash__ = None  # type: ignore[assignment]

    seeds: Tuple[int, int] = HASHER_SEEDS

    def __init__(self, capacity: int, fp_rate: float = DEFAULT_FALSE_POSITIVE_RATE) -> None:
        """Initialize a filter sized for ``capacity`` items at ``fp_rate``.

        Args:
            capacity: Approximate number of distinct items to be inserted.
            fp_rate: Target false positive rate, between 0 and 1 exclusive.

        Raises:
            ValueError: If capacity is not positive or fp_rate is out of range.
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if not 0.0 < fp_rate < 1.0:
            raise ValueError("fp_rate must be between 0 and 1 exclusive")

        nbits = optimal_bits(capacity, fp_rate)
        self._bits = BitVec(nbits)
        self._nhashes = max(1, optimal_hashes(nbits, capacity))

        logger.debug(
            "bloom_filter_created",
            source="rate",
            capacity=capacity,
            fp_rate=fp_rate,
            bits=nbits,
            hashes=self._nhashes,
        )

    @classmethod
    def with_rate(cls, capacity: int, fp_rate: float) -> BloomFilter:
        """Return a filter for ``capacity`` items at the given false positive rate."""
        return cls(capacity, fp_rate)

    @classmethod
    def with_size(cls, nbytes: int) -> BloomFilter:
        """Return a filter occupying exactly ``nbytes`` bytes.

        The hash count is derived from the capacity those bits imply at the
        default false positive rate.
        """
        if nbytes <= 0:
            raise ValueError("nbytes must be positive")
        return cls._from_bits(BitVec(nbytes * 8), source="size")

    @classmethod
    def from_bytes(cls, data: BytesLike) -> BloomFilter:
        """Rebuild a filter from its raw packed bits, assuming the default rate."""
        if len(data) == 0:
            raise ValueError("cannot build a filter from an empty buffer")
        return cls._from_bits(BitVec.from_bytes(data), source="bytes")

    @classmethod
    def _from_bits(cls, bits: BitVec, source: str) -> BloomFilter:
        capacity = optimal_capacity(len(bits), DEFAULT_FALSE_POSITIVE_RATE)
        nhashes = max(1, optimal_hashes(len(bits), capacity))
        logger.debug(
            "bloom_filter_created",
            source=source,
            capacity=capacity,
            fp_rate=DEFAULT_FALSE_POSITIVE_RATE,
            bits=len(bits),
            hashes=nhashes,
        )
        return cls._assemble(bits, nhashes)

    @classmethod
    def _assemble(cls, bits: BitVec, nhashes: int) -> BloomFilter:
        bf = cls.__new__(cls)
        bf._bits = bits
        bf._nhashes = nhashes
        return bf

    def insert(self, item: Any) -> None:
        """Insert ``item``. Inserting the same item again changes nothing."""
        for bit_index in self._hashes(item):
            self._bits.set(bit_index)

    def update(self, items: Iterable[Any]) -> None:
        """Insert all ``items`` into the filter."""
        for item in items:
            self.insert(item)

    def contains(self, item: Any) -> bool:
        """Return True if ``item`` may be present, False if it definitely is not."""
        return all(self._bits.is_set(bit_index) for bit_index in self._hashes(item))

    __contains__ = contains

    def clear(self) -> None:
        """Set all bits to zero."""
        self._bits.clear()
        logger.debug("bloom_filter_cleared", bits=len(self._bits))

    def bits(self) -> int:
        """Number of bits in the filter (``m``)."""
        return len(self._bits)

    def hashes(self) -> int:
        """Number of bit positions per item (``k``)."""
        return self._nhashes

    def count(self) -> int:
        """Estimate the number of distinct items inserted.

        The estimate grows without bound as the vector saturates; a vector
        with every bit set reports ``sys.maxsize``.
        """
        nbits = len(self._bits)
        nbits_set = self._bits.count_ones()
        if nbits_set >= nbits:
            logger.warning("bloom_filter_saturated", bits=nbits, hashes=self._nhashes)
            return sys.maxsize
        estimate = -(nbits / self._nhashes) * math.log(1.0 - nbits_set / nbits)
        return round(estimate)

    def is_comparable(self, other: BloomFilter) -> bool:
        """Return True if ``other`` can be unioned, intersected or compared with this filter."""
        if not isinstance(other, BloomFilter):
            return False
        return (
            self._nhashes == other._nhashes
            and len(self._bits) == len(other._bits)
            and self.seeds == other.seeds
        )

    def union(self, other: BloomFilter) -> BloomFilter:
        """Return a filter holding the members of both filters."""
        self._require_comparable("union", other)
        return self._assemble(self._bits.union(other._bits), self._nhashes)

    def intersection(self, other: BloomFilter) -> BloomFilter:
        """Return a filter holding the bits common to both filters.

        The result may report members that were in neither input's
        intersection; bitwise ``AND`` can combine unrelated bits.
        """
        self._require_comparable("intersect", other)
        return self._assemble(self._bits.intersection(other._bits), self._nhashes)

    __or__ = union
    __and__ = intersection

    def similarity(self, other: BloomFilter) -> float:
        """Approximate Jaccard index of the two underlying sets."""
        self._require_comparable("compare", other)
        intersection = self.intersection(other).count()
        union = self.union(other).count()
        return _ratio(intersection, union)

    def overlap(self, other: BloomFilter) -> float:
        """Approximate overlap coefficient of the two underlying sets."""
        self._require_comparable("compare", other)
        intersection = self.intersection(other).count()
        smallest = min(self.count(), other.count())
        return _ratio(intersection, smallest)

    def as_bytes(self) -> bytes:
        """Return the raw packed bit vector."""
        return self._bits.as_bytes()

    to_bytes = as_bytes
    __bytes__ = as_bytes

    def copy(self) -> BloomFilter:
        return self._assemble(self._bits.copy(), self._nhashes)

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return self._bits == other._bits and self._nhashes == other._nhashes

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bits={len(self._bits)}, hashes={self._nhashes})"

    def _require_comparable(self, operation: str, other: BloomFilter) -> None:
        if not self.is_comparable(other):
            raise IncompatibleFilterError(operation)

    def _hashes(self, item: Any) -> Iterator[int]:
        data = _item_bytes(item)
        h1 = mmh3.hash64(data, self.seeds[0], signed=False)[0]
        h2 = xxhash.xxh64(data, seed=self.seeds[1]).intdigest()
        nbits = len(self._bits)

        for i in range(self._nhashes):
            yield ((h1 + i * h2 + i ** 3) & _MASK64) % nbits


def _ratio(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator
