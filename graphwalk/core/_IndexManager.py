import heapq


class IndexManager:
    """Namespace for vertex/edge identity allocation.

    Owns the vertex slot table and the free-slot heap. Slot ``i`` is live when
    ``slots[i] == i`` and free when it holds 0; slot 0 is never used, so 0 is
    always available as the "absent" sentinel.
    """

    def __init__(self, graph):
        self._G = graph
        self._slots = [0]  # slot 0 is the sentinel
        self._free = []  # min-heap of free ids below _max
        self._live = 0
        self._max = 0
        self._next_edge_id = 1

    # ==================== Vertex slots ====================

    def allocate_vertex(self) -> int:
        """Reserve the lowest free id, or extend past the current max."""
        if self._free:
            v = heapq.heappop(self._free)
        else:
            v = self._max + 1
            self._slots.append(0)
        self._slots[v] = v
        self._live += 1
        if v > self._max:
            self._max = v
        return v

    def release_vertex(self, v: int) -> None:
        """Return slot ``v`` to the free pool and fix up the max id."""
        self._slots[v] = 0
        self._live -= 1
        if v != self._max:
            heapq.heappush(self._free, v)
            return
        top = v - 1
        while top > 0 and self._slots[top] == 0:
            top -= 1
        self._max = top
        # Free slots above the new max are dropped so allocation extends from it.
        del self._slots[top + 1 :]
        self._free = [f for f in self._free if f < top]
        heapq.heapify(self._free)

    def slot_is_live(self, v) -> bool:
        """True if ``v`` names a live vertex slot."""
        try:
            return 0 < v < len(self._slots) and self._slots[v] == v
        except TypeError:
            return False

    def iter_live(self):
        """Live ids in ascending slot order."""
        for v in range(1, len(self._slots)):
            if self._slots[v]:
                yield v

    def free_slots(self) -> list[int]:
        """Free ids below the current max, ascending."""
        return sorted(self._free)

    def vertex_count(self) -> int:
        return self._live

    def max_vertex(self) -> int:
        return self._max

    # ==================== Edge ids ====================

    def allocate_edge(self) -> int:
        """Next edge id; edge ids are never handed out twice."""
        eid = self._next_edge_id
        self._next_edge_id += 1
        return eid

    def peek_edge_id(self) -> int:
        """Id the next created edge will receive."""
        return self._next_edge_id

    # ==================== Utilities ====================

    def reset(self):
        """Free every vertex slot. The edge counter keeps increasing."""
        self._slots = [0]
        self._free = []
        self._live = 0
        self._max = 0

    def stats(self):
        """Get index statistics."""
        return {
            "n_vertices": self._live,
            "max_vertex": self._max,
            "n_free_slots": len(self._free),
            "table_size": len(self._slots) - 1,
            "n_edges": self._G.edge_size(),
            "next_edge_id": self.peek_edge_id(),
        }
