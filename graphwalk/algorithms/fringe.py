"""Fringe containers that decide the order of a traversal.

A fringe only needs ``push``, ``pop`` and ``len``. The container chosen
decides the search: FIFO gives breadth-first, LIFO depth-first and
:class:`PriorityFringe` gives Dijkstra / A*.
"""

from abc import ABC, abstractmethod
from collections import deque


class Fringe(ABC):
    """Ordered container of vertex ids driving a :class:`Traversal`."""

    @abstractmethod
    def push(self, v):
        """Offer ``v`` to the fringe."""

    @abstractmethod
    def pop(self):
        """Remove and return the next vertex, or None when empty."""

    @abstractmethod
    def peek(self):
        """Next vertex without removing it, or None when empty."""

    @abstractmethod
    def __len__(self):
        ...

    def __bool__(self):
        return len(self) > 0

    def extend(self, vertices):
        for v in vertices:
            self.push(v)

    def size(self) -> int:
        return len(self)


class FifoFringe(Fringe):
    """First in, first out; yields a breadth-first traversal."""

    def __init__(self, vertices=()):
        self._queue = deque(vertices)

    def push(self, v):
        self._queue.append(v)

    def pop(self):
        return self._queue.popleft() if self._queue else None

    def peek(self):
        return self._queue[0] if self._queue else None

    def __len__(self):
        return len(self._queue)

    def __contains__(self, v):
        return v in self._queue


class LifoFringe(Fringe):
    """Last in, first out; yields a depth-first traversal."""

    def __init__(self, vertices=()):
        self._stack = list(vertices)

    def push(self, v):
        self._stack.append(v)

    def pop(self):
        return self._stack.pop() if self._stack else None

    def peek(self):
        return self._stack[-1] if self._stack else None

    def __len__(self):
        return len(self._stack)

    def __contains__(self, v):
        return v in self._stack


class PriorityFringe(Fringe):
    """Duplicate-free indexed binary min-heap of vertex ids.

    Entries are ordered by ``(key(v), v)``: the priority first, the vertex id
    as a deterministic tie-break. ``key`` is read when ``v`` is inserted and
    again whenever ``v`` is pushed while already queued, which is how callers
    signal that its priority changed (decrease-key in O(log n)).

    Parameters
    --
    key : callable
        ``key(v) -> float``, e.g. tentative distance plus heuristic.

    """

    def __init__(self, key):
        self._key = key
        self._heap = []  # list of (priority, vertex)
        self._pos = {}  # vertex -> index in _heap

    def insert(self, v):
        """Add ``v``, or re-read its priority and reorder it if already queued."""
        entry = (self._key(v), v)
        i = self._pos.get(v)
        if i is None:
            self._heap.append(entry)
            self._pos[v] = len(self._heap) - 1
            self._sift_up(len(self._heap) - 1)
            return
        old = self._heap[i]
        self._heap[i] = entry
        if entry < old:
            self._sift_up(i)
        else:
            self._sift_down(i)

    push = insert

    def update(self, v):
        """Re-read the priority of a queued ``v``; returns False if ``v`` is not queued."""
        if v not in self._pos:
            return False
        self.insert(v)
        return True

    def remove(self, v) -> bool:
        """Drop ``v`` if queued; returns whether it was."""
        i = self._pos.pop(v, None)
        if i is None:
            return False
        last = self._heap.pop()
        if i < len(self._heap):
            self._heap[i] = last
            self._pos[last[1]] = i
            self._sift_down(i)
            self._sift_up(self._pos[last[1]])
        return True

    def extract_min(self):
        """Remove and return the minimum-priority vertex, or None when empty."""
        if not self._heap:
            return None
        top = self._heap[0][1]
        self.remove(top)
        return top

    pop = extract_min

    def peek_min(self):
        """Minimum-priority vertex without removing it, or None when empty."""
        return self._heap[0][1] if self._heap else None

    peek = peek_min

    def priority(self, v):
        """Priority ``v`` is currently queued with, or None."""
        i = self._pos.get(v)
        return None if i is None else self._heap[i][0]

    def clear(self):
        self._heap.clear()
        self._pos.clear()

    def __len__(self):
        return len(self._heap)

    def __contains__(self, v):
        return v in self._pos

    def __iter__(self):
        """Queued vertices in priority order (non-destructive)."""
        return (v for _, v in sorted(self._heap))

    # heap internals

    def _swap(self, i, j):
        h = self._heap
        h[i], h[j] = h[j], h[i]
        self._pos[h[i][1]] = i
        self._pos[h[j][1]] = j

    def _sift_up(self, i):
        h = self._heap
        while i > 0:
            parent = (i - 1) >> 1
            if h[i] < h[parent]:
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i):
        h = self._heap
        n = len(h)
        while True:
            smallest = i
            left = 2 * i + 1
            right = left + 1
            if left < n and h[left] < h[smallest]:
                smallest = left
            if right < n and h[right] < h[smallest]:
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
