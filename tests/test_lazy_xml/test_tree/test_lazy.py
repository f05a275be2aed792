"""Tests for the memoizing lazy sequence."""

from typing import Iterator, List

import pytest

from lazy_xml.tree import LazySequence


class CountingFeeder:
    """Feeder that appends one item per pull and records the pulls."""

    def __init__(self, items: List[int]) -> None:
        self._items: Iterator[int] = iter(items)
        self.pulls = 0

    def pull(self, sequence: LazySequence) -> None:
        self.pulls += 1
        item = next(self._items, None)
        if item is None:
            sequence._close()
        else:
            sequence._append(item)


def make_sequence(items: List[int]):
    feeder = CountingFeeder(items)
    return LazySequence(feeder), feeder


class TestLazySequence:
    """Test on-demand realization of LazySequence."""

    def test_nothing_is_pulled_on_creation(self):
        """Test that creating a sequence reads nothing."""
        sequence, feeder = make_sequence([1, 2, 3])

        assert feeder.pulls == 0
        assert not sequence.is_realized

    def test_indexing_pulls_only_what_is_needed(self):
        """Test that indexing realizes a prefix of the sequence."""
        sequence, feeder = make_sequence([1, 2, 3, 4])

        assert sequence[1] == 2
        assert feeder.pulls == 2
        assert sequence.realized_count == 2

    def test_negative_index_realizes_everything(self):
        """Test that negative indexes force the whole sequence."""
        sequence, _ = make_sequence([1, 2, 3])

        assert sequence[-1] == 3
        assert sequence.is_realized

    def test_index_out_of_range(self):
        """Test IndexError past the end."""
        sequence, _ = make_sequence([1])

        with pytest.raises(IndexError):
            sequence[5]

    def test_slice_returns_tuple(self):
        """Test slicing."""
        sequence, _ = make_sequence([1, 2, 3])

        assert sequence[1:] == (2, 3)

    def test_iteration_is_memoized(self):
        """Test that items are produced once and can be iterated again."""
        sequence, feeder = make_sequence([1, 2, 3])

        assert list(sequence) == [1, 2, 3]
        pulls = feeder.pulls
        assert list(sequence) == [1, 2, 3]
        assert feeder.pulls == pulls

    def test_partial_iteration(self):
        """Test that stopping early leaves the rest unread."""
        sequence, feeder = make_sequence([1, 2, 3, 4])

        for item in sequence:
            if item == 2:
                break

        assert feeder.pulls == 2

    def test_len_and_bool(self):
        """Test len forces everything and bool only the first item."""
        sequence, feeder = make_sequence([1, 2, 3])

        assert sequence
        assert feeder.pulls == 1
        assert len(sequence) == 3

        empty, _ = make_sequence([])
        assert not empty

    def test_equality_with_sequences(self):
        """Test comparison against lists and tuples."""
        sequence, _ = make_sequence([1, 2])

        assert sequence == (1, 2)
        assert sequence == [1, 2]
        assert sequence != [1, 2, 3]
        assert sequence != "12"

    def test_realize(self):
        """Test forcing the whole sequence."""
        sequence, _ = make_sequence([1, 2])

        assert sequence.realize() is sequence
        assert sequence.is_realized

    def test_of_builds_realized_sequence(self):
        """Test a sequence built from known items."""
        sequence = LazySequence.of([1, 2])

        assert sequence.is_realized
        assert list(sequence) == [1, 2]

    def test_unhashable(self):
        """Test that lazy sequences cannot be hashed."""
        with pytest.raises(TypeError):
            hash(LazySequence.of([]))
