"""Packed bit vector backed by a bytearray.

Bit ``i`` lives in byte ``i >> 3`` under the mask ``1 << (i & 7)``, least
significant bit first. The byte buffer is always ``ceil(nbits / 8)`` long; when
``nbits`` is not a multiple of eight the unused high bits of the last byte are
padding. Padding starts at zero and is never addressed through ``set`` or
``is_set``.
"""
from __future__ import annotations

from typing import Union

from .errors import BitIndexError, LengthMismatchError

BytesLike = Union[bytes, bytearray, memoryview]


class BitVec:
    """Fixed-length packed bit storage."""

    __slots__ = ("_nbits", "_bytes")

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, capacity: int) -> None:
        """Create a zero-filled vector of ``capacity`` addressable bits.

        Raises:
            ValueError: If capacity is negative.
        """
        if capacity < 0:
            raise ValueError("capacity must be non-negative")

        self._nbits = capacity
        self._bytes = bytearray((capacity + 7) // 8)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> BitVec:
        """Wrap a copy of ``data``; the length becomes ``len(data) * 8`` bits."""
        vec = cls.__new__(cls)
        vec._bytes = bytearray(data)
        vec._nbits = len(vec._bytes) * 8
        return vec

    def __len__(self) -> int:
        return self._nbits

    def is_empty(self) -> bool:
        return self._nbits == 0

    def clear(self) -> None:
        """Set all bits to zero."""
        for i in range(len(self._bytes)):
            self._bytes[i] = 0

    def set(self, index: int) -> None:
        """Set bit ``index`` to one."""
        self._check_index(index)
        self._bytes[index >> 3] |= 1 << (index & 7)

    def is_set(self, index: int) -> bool:
        """Return True if bit ``index`` is one."""
        self._check_index(index)
        mask = 1 << (index & 7)
        return self._bytes[index >> 3] & mask == mask

    def count_ones(self) -> int:
        return int.from_bytes(self._bytes, "little").bit_count()

    def count_zeros(self) -> int:
        return self._nbits - self.count_ones()

    def union(self, other: BitVec) -> BitVec:
        """Return the bitwise ``OR`` of two vectors of equal length."""
        self._check_length("union", other)
        return self._with_bytes(bytearray(a | b for a, b in zip(self._bytes, other._bytes)))

    def intersection(self, other: BitVec) -> BitVec:
        """Return the bitwise ``AND`` of two vectors of equal length."""
        self._check_length("intersect", other)
        return self._with_bytes(bytearray(a & b for a, b in zip(self._bytes, other._bytes)))

    __or__ = union
    __and__ = intersection

    def as_bytes(self) -> bytes:
        """Return the packed storage, padding bits included."""
        return bytes(self._bytes)

    to_bytes = as_bytes
    __bytes__ = as_bytes

    def copy(self) -> BitVec:
        return self._with_bytes(bytearray(self._bytes))

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVec):
            return NotImplemented
        return self._nbits == other._nbits and self._bytes == other._bytes

    def __repr__(self) -> str:
        bits = "".join("1" if self.is_set(i) else "0" for i in range(self._nbits))
        return f"BitVec({bits})"

    def _with_bytes(self, data: bytearray) -> BitVec:
        vec = BitVec.__new__(BitVec)
        vec._bytes = data
        vec._nbits = self._nbits
        return vec

    def _check_index(self, index: int) -> None:
        # Negative indices would silently wrap around the bytearray.
        if index < 0 or index >= self._nbits:
            raise BitIndexError(index, self._nbits)

    def _check_length(self, operation: str, other: BitVec) -> None:
        if self._nbits != other._nbits:
            raise LengthMismatchError(operation, self._nbits, other._nbits)
