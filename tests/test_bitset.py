"""Tests for the packed bit set."""

import numpy as np
import pytest

from primekit.core.bitset import BitSet
from primekit.errors import OutOfRangeError


class TestBitSetBasics:
    """Tests for scalar BitSet operations."""

    def test_starts_cleared(self):
        """Test that a new bit set has no bits set."""
        bits = BitSet(20)
        assert bits.count() == 0
        assert not any(bits.read(i) for i in range(21))

    def test_length_includes_size(self):
        """Test that indices 0..=size are addressable."""
        bits = BitSet(16)
        assert len(bits) == 17
        bits.set(16, True)
        assert bits[16]
        assert bits.nbytes == 3

    def test_set_and_clear(self):
        """Test setting and clearing individual bits."""
        bits = BitSet(10)
        bits.set(3, True)
        bits.set(7, True)
        assert bits.read(3)
        assert bits.read(7)
        assert not bits.read(4)

        bits.set(3, False)
        assert not bits.read(3)
        assert bits.read(7)

    def test_flip(self):
        """Test that flip toggles a bit."""
        bits = BitSet(10)
        bits.flip(5)
        assert bits.read(5)
        bits.flip(5)
        assert not bits.read(5)

    def test_one_and_zero(self):
        """Test bulk set and clear."""
        bits = BitSet(13)
        bits.one()
        assert bits.count() == 14
        bits.zero()
        assert bits.count() == 0

    def test_negative_index(self):
        """Test that negative indices are rejected."""
        bits = BitSet(8)
        with pytest.raises(OutOfRangeError):
            bits.read(-1)
        with pytest.raises(OutOfRangeError):
            bits.set(-3, True)

    def test_negative_size(self):
        """Test that a negative size is rejected."""
        with pytest.raises(OutOfRangeError):
            BitSet(-1)


class TestBitSetVectorized:
    """Tests for the helpers used by the sieves."""

    def test_flip_many_repeated_index(self):
        """Test that an index listed twice ends unchanged."""
        bits = BitSet(30)
        bits.flip_many([1, 9, 9, 17, 25, 25, 25])
        np.testing.assert_array_equal(bits.collect_true_indices(), [1, 17, 25])

    def test_flip_many_empty(self):
        """Test that flipping nothing is a no-op."""
        bits = BitSet(8)
        bits.flip_many(np.array([], dtype=np.int64))
        assert bits.count() == 0

    def test_clear_stride(self):
        """Test clearing an arithmetic progression."""
        bits = BitSet(20)
        bits.one()
        bits.clear_stride(4, 4)
        assert [i for i in range(21) if not bits.read(i)] == [4, 8, 12, 16, 20]

    def test_clear_stride_past_end(self):
        """Test that a start beyond size leaves the set untouched."""
        bits = BitSet(10)
        bits.one()
        bits.clear_stride(11, 3)
        assert bits.count() == 11

    def test_collect_true_indices(self):
        """Test that indices are ascending uint64 and ignore padding bits."""
        bits = BitSet(9)
        bits.one()
        result = bits.collect_true_indices()
        assert result.dtype == np.uint64
        np.testing.assert_array_equal(result, np.arange(10))
