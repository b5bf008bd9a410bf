class GraphDiff:
    """Set difference between two graph snapshots, ``a`` (before) and ``b`` (after).

    Parameters
    --
    snapshot_a, snapshot_b : dict
        Snapshots as produced by ``Graph.snapshot`` (``label``, ``version``,
        ``vertex_ids``, ``edge_ids``).

    Attributes
    --
    vertices_added, vertices_removed : set[int]
    edges_added, edges_removed : set[int]

    Notes
    -
    Vertex ids are recycled, so a vertex removed and re-allocated between the
    two snapshots does not show up here. Edge ids are never reused, so every
    edge created or removed in between always does.

    """

    def __init__(self, snapshot_a, snapshot_b):
        self.snapshot_a = snapshot_a
        self.snapshot_b = snapshot_b

        va, vb = snapshot_a["vertex_ids"], snapshot_b["vertex_ids"]
        ea, eb = snapshot_a["edge_ids"], snapshot_b["edge_ids"]
        self.vertices_added = vb - va
        self.vertices_removed = va - vb
        self.edges_added = eb - ea
        self.edges_removed = ea - eb

    @property
    def versions(self):
        """``(version_a, version_b)``; None for a snapshot without a version."""
        return self.snapshot_a.get("version"), self.snapshot_b.get("version")

    def is_empty(self) -> bool:
        return not (self.vertices_added or self.vertices_removed or self.edges_added or self.edges_removed)

    def __bool__(self):
        return not self.is_empty()

    def summary(self) -> str:
        a, b = self.snapshot_a["label"], self.snapshot_b["label"]
        return "\n".join(
            [
                f"Diff: {a} - {b}",
                "",
                f"Vertices: {len(self.vertices_added):+d} added, {len(self.vertices_removed)} removed",
                f"Edges: {len(self.edges_added):+d} added, {len(self.edges_removed)} removed",
            ]
        )

    def __repr__(self):
        return self.summary()

    def to_dict(self) -> dict:
        """JSON-ready form; id sets become ascending lists."""
        out = {
            "snapshot_a": self.snapshot_a["label"],
            "snapshot_b": self.snapshot_b["label"],
            "versions": list(self.versions),
        }
        for name in ("vertices_added", "vertices_removed", "edges_added", "edges_removed"):
            out[name] = sorted(getattr(self, name))
        return out
