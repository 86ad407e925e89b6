"""Space-efficient probabilistic set membership.

A Bloom filter answers "possibly in the set" or "definitely not in the set".
Items can be inserted but never removed, and the false positive probability
grows as more items are inserted. Fewer than 10 bits per item are enough for a
1% false positive rate, independent of the item size.

Example::

    from bloomy import BloomFilter

    bf = BloomFilter(32)
    bf.insert("foo")
    bf.insert("bar")

    "foo" in bf   # True
    "baz" in bf   # False
    bf.count()    # 2
"""
from .bitvec import BitVec
from .bloom import (
    DEFAULT_FALSE_POSITIVE_RATE,
    HASHER_SEEDS,
    BloomFilter,
    optimal_bits,
    optimal_capacity,
    optimal_hashes,
)
from .errors import BitIndexError, BloomyError, IncompatibleFilterError, LengthMismatchError

__all__ = [
    "DEFAULT_FALSE_POSITIVE_RATE",
    "HASHER_SEEDS",
    "BitIndexError",
    "BitVec",
    "BloomFilter",
    "BloomyError",
    "IncompatibleFilterError",
    "LengthMismatchError",
    "optimal_bits",
    "optimal_capacity",
    "optimal_hashes",
]
