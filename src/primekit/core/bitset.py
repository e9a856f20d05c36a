"""Packed boolean array used as the backing store of the prime sieves.

Bits are stored little-endian within each byte (bit ``i`` lives in byte
``i // 8`` under mask ``1 << (i % 8)``), matching ``np.unpackbits(...,
bitorder="little")``.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from primekit.errors import OutOfRangeError

_BITMASK = (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80)


class BitSet:
    """Fixed-size bit set addressing indices ``0..=size``.

    Reads and writes are O(1). Indices above ``size`` are a caller error
    and are not checked on the scalar paths.

    Args:
        size: Largest addressable index.
    """

    __slots__ = ("size", "_data")

    def __init__(self, size: int):
        if size < 0:
            raise OutOfRangeError(f"BitSet size must be >= 0, got {size}")
        self.size = int(size)
        self._data = np.zeros(self.size // 8 + 1, dtype=np.uint8)

    def __len__(self) -> int:
        return self.size + 1

    def __getitem__(self, pos: int) -> bool:
        return self.read(pos)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size}, set={self.count()})"

    @property
    def nbytes(self) -> int:
        return self._data.nbytes

    def read(self, pos: int) -> bool:
        if pos < 0:
            raise OutOfRangeError(f"negative bit index {pos}")
        return bool(self._data[pos >> 3] & _BITMASK[pos & 7])

    def flip(self, pos: int) -> None:
        if pos < 0:
            raise OutOfRangeError(f"negative bit index {pos}")
        self._data[pos >> 3] ^= _BITMASK[pos & 7]

    def set(self, pos: int, value: bool) -> None:
        if pos < 0:
            raise OutOfRangeError(f"negative bit index {pos}")
        if value:
            self._data[pos >> 3] |= _BITMASK[pos & 7]
        else:
            self._data[pos >> 3] &= 0xFF ^ _BITMASK[pos & 7]

    def one(self) -> None:
        """Set every bit."""
        self._data.fill(0xFF)

    def zero(self) -> None:
        """Clear every bit."""
        self._data.fill(0)

    def flip_many(self, indices: Iterable[int] | np.ndarray) -> None:
        """Toggle each index once per occurrence.

        Uses an unbuffered ufunc, so an index listed twice ends up unchanged.
        """
        idx = np.asarray(indices, dtype=np.int64)
        if idx.size == 0:
            return
        masks = np.left_shift(1, idx & 7).astype(np.uint8)
        np.bitwise_xor.at(self._data, idx >> 3, masks)

    def clear_stride(self, start: int, step: int) -> None:
        """Clear bits ``start, start + step, ...`` up to and including ``size``."""
        if start > self.size:
            return
        idx = np.arange(start, self.size + 1, step, dtype=np.int64)
        masks = np.left_shift(1, idx & 7).astype(np.uint8)
        np.bitwise_and.at(self._data, idx >> 3, ~masks)

    def _bits(self) -> np.ndarray:
        return np.unpackbits(self._data, bitorder="little")[: self.size + 1]

    def count(self) -> int:
        """Number of set bits in ``0..=size``."""
        return int(np.count_nonzero(self._bits()))

    def collect_true_indices(self) -> np.ndarray:
        """Return the ascending indices of all set bits as ``uint64``."""
        return np.flatnonzero(self._bits()).astype(np.uint64)
