"""Fixed-capacity circular buffer of weight samples."""

from typing import Iterable, Iterator, List, Optional, Tuple

from ..core.value_objects.weight_sample import WeightSample

# Backing list is compacted once it holds this many times the capacity
COMPACT_FACTOR = 4


class SampleBuffer:
    """Ring buffer keeping the most recent ``capacity`` samples.

    Versions share an append-only backing list and each one sees only its
    own ``[start, end)`` window of it. Appending to the newest version
    writes in place, so ``appended`` is O(1) amortized and never disturbs
    older versions. Appending to an older version copies its window first.
    The backing list is compacted to the live window every
    ``COMPACT_FACTOR * capacity`` slots, so memory stays bounded.

    Iteration yields samples oldest first, most recent last.

    Example:
        >>> buf = SampleBuffer(capacity=2)
        >>> for g in (1.0, 2.0, 3.0):
        ...     buf = buf.appended(WeightSample(g, 0))
        >>> [s.grams for s in buf]
        [2.0, 3.0]
    """

    __slots__ = ("_capacity", "_items", "_start", "_end")

    def __init__(self, capacity: int, samples: Iterable[WeightSample] = ()) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._items: List[WeightSample] = []
        self._start = 0
        self._end = 0
        for sample in samples:
            self.append(sample)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, sample: WeightSample) -> None:
        """Add a sample in place, discarding the oldest one when full."""
        self._items, self._start, self._end = self._push(sample)

    def appended(self, sample: WeightSample) -> "SampleBuffer":
        """New buffer with the sample added; this buffer is left unchanged."""
        clone = self._view(self._items, self._start, self._end)
        clone.append(sample)
        return clone

    def latest(self) -> Optional[WeightSample]:
        """Most recent sample, None when empty."""
        if self._end == self._start:
            return None
        return self._items[self._end - 1]

    def copy(self) -> "SampleBuffer":
        """Independent buffer with the same capacity and contents."""
        return self._view(self._items, self._start, self._end)

    def to_list(self) -> List[WeightSample]:
        return self._items[self._start:self._end]

    def _view(self, items: List[WeightSample], start: int, end: int) -> "SampleBuffer":
        clone = SampleBuffer.__new__(SampleBuffer)
        clone._capacity = self._capacity
        clone._items = items
        clone._start = start
        clone._end = end
        return clone

    def _push(self, sample: WeightSample) -> Tuple[List[WeightSample], int, int]:
        items, start, end = self._items, self._start, self._end
        # another version already wrote past our window, or compaction is due
        if end != len(items) or len(items) >= COMPACT_FACTOR * self._capacity:
            items = items[start:end]
            start, end = 0, len(items)
        items.append(sample)
        end += 1
        if end - start > self._capacity:
            start += 1
        return items, start, end

    def __iter__(self) -> Iterator[WeightSample]:
        for index in range(self._start, self._end):
            yield self._items[index]

    def __len__(self) -> int:
        return self._end - self._start

    def __bool__(self) -> bool:
        return self._end > self._start

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleBuffer):
            return NotImplemented
        return self._capacity == other._capacity and self.to_list() == other.to_list()

    def __repr__(self) -> str:
        return f"SampleBuffer(capacity={self._capacity}, size={len(self)})"
