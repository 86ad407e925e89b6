"""Exceptions raised by the bit vector and the Bloom filter.

All three classes signal caller programming errors:
- BitIndexError: a bit index outside ``0 <= index < len``
- LengthMismatchError: merging bit vectors of different lengths
- IncompatibleFilterError: merging or comparing filters whose configurations differ
"""


class BloomyError(Exception):
    """Base class for all errors raised by this package."""


class BitIndexError(BloomyError, IndexError):
    """Raised when a bit index is out of range.

    Attributes:
        index: The offending index
        length: Length of the bit vector, in bits
    """

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(
            f"index out of bounds: the len is {length} but the index is {index}"
        )


class LengthMismatchError(BloomyError, ValueError):
    """Raised when two bit vectors of different lengths are combined.

    Attributes:
        operation: Name of the attempted operation
        left: Length of the receiving vector, in bits
        right: Length of the other vector, in bits
    """

    def __init__(self, operation: str, left: int, right: int) -> None:
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(
            f"unable to {operation} bitvecs with different lengths: {left} and {right}"
        )


class IncompatibleFilterError(BloomyError, ValueError):
    """Raised when filters with different configurations are combined or compared."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"unable to {operation} filters with different configurations"
        )
