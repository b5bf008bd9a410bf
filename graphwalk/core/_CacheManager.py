import numpy as np
import scipy.sparse as sp


class CacheManager:
    """Sparse views of the topology, rebuilt lazily when the graph version moves.

    Reached through ``G.cache``. Row and column ``i`` of every matrix belong to
    vertex id ``i``; index 0 and free slots stay empty.
    """

    def __init__(self, graph):
        self._G = graph
        self._store = {}  # name -> (graph version, value)

    def _cached(self, name, build):
        entry = self._store.get(name)
        version = self._G._version
        if entry is None or entry[0] != version:
            entry = (version, build())
            self._store[name] = entry
        return entry[1]

    def _is_fresh(self, name) -> bool:
        entry = self._store.get(name)
        return entry is not None and entry[0] == self._G._version

    @property
    def adjacency(self):
        """CSR (Compressed Sparse Row) adjacency of shape ``(max_vertex + 1,) * 2``.

        Undirected edges are stored in both directions, a self-edge once.
        """
        return self._cached("adjacency", self._build_adjacency)

    def _build_adjacency(self):
        n = self._G.max_vertex() + 1
        edges = self._G.edge_list()
        src = np.fromiter((u for u, _, _ in edges), dtype=np.int64, count=len(edges))
        dst = np.fromiter((v for _, v, _ in edges), dtype=np.int64, count=len(edges))
        if not self._G.is_directed():
            loop = src == dst
            src, dst = np.concatenate([src, dst[~loop]]), np.concatenate([dst, src[~loop]])
        data = np.ones(len(src), dtype=np.float32)
        return sp.csr_matrix((data, (src, dst)), shape=(n, n))

    def has_adjacency(self) -> bool:
        """True if a built adjacency matches the current graph version."""
        return self._is_fresh("adjacency")

    def get_adjacency(self):
        return self.adjacency

    def invalidate(self):
        """Drop every cached view."""
        self._store.clear()

    def info(self) -> dict:
        """Per-view status: ``cached``, ``version`` and ``size_bytes``."""
        out = {}
        for name in ("adjacency",):
            version, matrix = self._store.get(name, (None, None))
            size = 0 if matrix is None else matrix.data.nbytes + matrix.indices.nbytes + matrix.indptr.nbytes
            out[name] = {"cached": matrix is not None, "version": version, "size_bytes": size}
        return out
