import enum
import math

import polars as pl

_NUMERIC_DTYPES = {
    pl.Int8, pl.Int16, pl.Int32, pl.Int64,
    pl.UInt8, pl.UInt16, pl.UInt32, pl.UInt64,
    pl.Float32, pl.Float64,
}


class LabeledGraph:
    """Attribute layer over a topology store.

    The core graph only knows integer ids. ``LabeledGraph`` keeps per-vertex and
    per-edge attributes in Polars DF [DataFrame] tables keyed by those ids, and
    routes every structural mutation through the wrapped graph so rows are
    dropped in step, including edges removed by a vertex cascade.

    Parameters
    --
    G : Graph
        The wrapped store. Mutate it only through this object, or the tables
        go stale.

    Attributes
    --
    vertex_attributes : polars.DataFrame
        Key column ``vertex_id``.
    edge_attributes : polars.DataFrame
        Key column ``edge_id``. Endpoints are structural and are not stored.

    Notes
    -
    Read-only topology queries (``successors``, ``contains``, ``edge_id``...)
    are forwarded to the wrapped graph.

    """

    _VERTEX_RESERVED = {"vertex_id"}
    _EDGE_RESERVED = {"edge_id", "source", "target"}

    _FORWARDED = frozenset(
        {
            "vertex_size",
            "max_vertex",
            "edge_size",
            "is_directed",
            "contains",
            "check_my_vertex",
            "vertices",
            "edges",
            "edge_list",
            "incident_edges",
            "successors",
            "predecessors",
            "successor",
            "predecessor",
            "out_degree",
            "in_degree",
            "degree",
            "edge_id",
            "history",
            "snapshot",
            "diff",
            "cache",
            "idx",
        }
    )

    def __init__(self, G):
        self._G = G
        self.vertex_attributes = pl.DataFrame(schema={"vertex_id": pl.Int64})
        self.edge_attributes = pl.DataFrame(schema={"edge_id": pl.Int64})

    @property
    def graph(self):
        return self._G

    def __getattr__(self, name):
        if name in LabeledGraph._FORWARDED:
            return getattr(self._G, name)
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    def __len__(self):
        return len(self._G)

    def __contains__(self, v):
        return v in self._G

    def __iter__(self):
        return iter(self._G)

    def __repr__(self):
        return f"LabeledGraph({self._G!r})"

    # Structure (mirrored)

    def add_vertex(self, /, **attrs) -> int:
        """Add a vertex to the wrapped graph and store ``attrs`` for it.

        If storing ``attrs`` fails the vertex is removed again before the
        error propagates.
        """
        v = self._G.add_vertex()
        # the id may be recycled; never inherit a previous owner's row
        self.vertex_attributes = self.vertex_attributes.filter(pl.col("vertex_id") != v)
        if attrs:
            try:
                self.set_vertex_attrs(v, **attrs)
            except Exception:
                self._G.remove_vertex(v)
                raise
        return v

    def add_edge(self, u, v, /, **attrs) -> int:
        """Add ``(u, v)`` to the wrapped graph and upsert ``attrs`` for it.

        A newly created edge is removed again if storing ``attrs`` fails.
        """
        existed = self._G.contains(u, v)
        eid = self._G.add_edge(u, v)
        if attrs:
            try:
                self._set_edge_attrs_by_id(eid, attrs)
            except Exception:
                if not existed:
                    self._G.remove_edge(u, v)
                raise
        return eid

    def remove_vertex(self, v):
        """Remove ``v``, its incident edges, and their attribute rows."""
        eids = self._G.incident_edges(v)
        self._G.remove_vertex(v)
        self.vertex_attributes = self.vertex_attributes.filter(pl.col("vertex_id") != v)
        if eids:
            self.edge_attributes = self.edge_attributes.filter(~pl.col("edge_id").is_in(eids))

    def remove_edge(self, u, v):
        """Remove ``(u, v)`` and its attribute row."""
        eid = self._G.edge_id(u, v)
        if not eid:
            return
        self._G.remove_edge(u, v)
        self.edge_attributes = self.edge_attributes.filter(pl.col("edge_id") != eid)

    def clear(self):
        self._G.clear()
        self.vertex_attributes = self.vertex_attributes.clear()
        self.edge_attributes = self.edge_attributes.clear()

    # Vertex attributes

    def set_vertex_attrs(self, vertex_id, /, **attrs):
        """Upsert pure vertex attributes (non-structural) into the vertex DF [DataFrame].

        Raises
        --
        InvalidVertexError
            If ``vertex_id`` is not live.

        """
        self._G.check_my_vertex(vertex_id)
        clean = {k: v for k, v in attrs.items() if k not in self._VERTEX_RESERVED}
        if not clean:
            return
        self.vertex_attributes = self._upsert_row(self.vertex_attributes, "vertex_id", vertex_id, clean)

    def get_vertex_attrs(self, vertex_id) -> dict:
        """Attribute dict for a vertex; {} if it has none."""
        return self._row(self.vertex_attributes, "vertex_id", vertex_id)

    def get_attr_vertex(self, vertex_id, key, default=None):
        value = self.get_vertex_attrs(vertex_id).get(key)
        return default if value is None else value

    def label(self, vertex_id, default=None):
        """The ``label`` attribute of a vertex."""
        return self.get_attr_vertex(vertex_id, "label", default)

    def set_label(self, vertex_id, value):
        self.set_vertex_attrs(vertex_id, label=value)

    def find_vertices(self, **attrs) -> list[int]:
        """Ids of vertices whose attributes equal every given ``key=value``, ascending."""
        df = self.vertex_attributes
        for k, v in attrs.items():
            if k not in df.columns:
                return []
            df = df.filter(pl.col(k) == v)
        return sorted(df.get_column("vertex_id").to_list())

    def find_vertex(self, **attrs) -> int:
        """First vertex matching ``attrs``, or 0 if none does."""
        found = self.find_vertices(**attrs)
        return found[0] if found else 0

    # Edge attributes

    def set_edge_attrs(self, u, v, /, **attrs):
        """Upsert attributes for the edge ``(u, v)``.

        Raises
        --
        KeyError
            If there is no edge ``(u, v)``.

        """
        eid = self._G.edge_id(u, v)
        if not eid:
            raise KeyError(f"Edge ({u}, {v}) not found")
        self._set_edge_attrs_by_id(eid, attrs)

    def _set_edge_attrs_by_id(self, eid, attrs):
        clean = {k: v for k, v in attrs.items() if k not in self._EDGE_RESERVED}
        if not clean:
            return
        self.edge_attributes = self._upsert_row(self.edge_attributes, "edge_id", eid, clean)

    def get_edge_attrs(self, u, v) -> dict:
        """Attribute dict for the edge ``(u, v)``; {} if absent or bare."""
        eid = self._G.edge_id(u, v)
        if not eid:
            return {}
        return self._row(self.edge_attributes, "edge_id", eid)

    def get_attr_edge(self, u, v, key, default=None):
        value = self.get_edge_attrs(u, v).get(key)
        return default if value is None else value

    def edge_label(self, u, v, default=None):
        return self.get_attr_edge(u, v, "label", default)

    def set_edge_label(self, u, v, value):
        self.set_edge_attrs(u, v, label=value)

    def weight_function(self, key: str = "weight", default: float = 1.0):
        """Edge-weight callable for :class:`ShortestPaths` reading attribute ``key``.

        Parameters
        --
        key : str, default "weight"
        default : float, default 1.0
            Weight of an existing edge without the attribute.

        Returns
        ---
        callable
            ``weight(u, v)``; infinity when ``(u, v)`` is not an edge.

        """
        if key in self.edge_attributes.columns:
            table = dict(
                zip(
                    self.edge_attributes.get_column("edge_id").to_list(),
                    self.edge_attributes.get_column(key).to_list(),
                )
            )
        else:
            table = {}

        def weight(u, v):
            eid = self._G.edge_id(u, v)
            if not eid:
                return math.inf
            w = table.get(eid)
            return float(default if w is None else w)

        return weight

    # Internals (Polars upsert)

    @staticmethod
    def _row(df, key_col, key) -> dict:
        for row in df.filter(pl.col(key_col) == key).iter_rows(named=True):
            out = dict(row)
            out.pop(key_col, None)
            return out
        return {}

    @staticmethod
    def _normalize_value(v):
        if isinstance(v, enum.Enum):
            return v.name
        if v is None or isinstance(v, (bool, int, float, str, bytes)):
            return v
        return str(v)

    @staticmethod
    def _pl_dtype_for_value(v):
        """INTERNAL: Infer a Polars dtype for a normalized Python value."""
        if v is None:
            return pl.Null
        if isinstance(v, bool):
            return pl.Boolean
        if isinstance(v, int):
            return pl.Int64
        if isinstance(v, float):
            return pl.Float64
        if isinstance(v, bytes):
            return pl.Binary
        return pl.Utf8

    def _ensure_attr_columns(self, df: pl.DataFrame, attrs: dict) -> pl.DataFrame:
        """INTERNAL: Create/align attribute columns and dtypes to accept ``attrs``.

        Notes
        -
        - New columns are created with the inferred dtype.
        - A ``Null`` column is cast to the incoming dtype.
        - Mixed numeric dtypes widen to Int64/Float64; other conflicts fall back to ``Utf8``.

        """
        schema = df.schema
        for col, val in attrs.items():
            target = self._pl_dtype_for_value(val)
            if col not in schema:
                df = df.with_columns(pl.lit(None).cast(target).alias(col))
                continue
            cur = schema[col]
            if cur == pl.Null and target != pl.Null:
                df = df.with_columns(pl.col(col).cast(target))
            elif cur != target and target != pl.Null:
                if cur in _NUMERIC_DTYPES and target in _NUMERIC_DTYPES:
                    supertype = pl.Float64 if pl.Float64 in (cur, target) else pl.Int64
                    df = df.with_columns(pl.col(col).cast(supertype))
                else:
                    df = df.with_columns(pl.col(col).cast(pl.Utf8))
        return df

    def _upsert_row(self, df: pl.DataFrame, key_col: str, key, attrs: dict) -> pl.DataFrame:
        """INTERNAL: Upsert one row of ``attrs`` keyed by ``key_col == key``."""
        attrs = {k: self._normalize_value(v) for k, v in attrs.items()}
        df = self._ensure_attr_columns(df, attrs)
        schema = df.schema
        for k, v in attrs.items():
            if schema[k] == pl.Utf8 and v is not None and not isinstance(v, str):
                attrs[k] = str(v)

        cond = pl.col(key_col) == pl.lit(key)
        if df.filter(cond).height > 0:
            upds = [
                pl.when(cond).then(pl.lit(v).cast(schema[k])).otherwise(pl.col(k)).alias(k)
                for k, v in attrs.items()
            ]
            return df.with_columns(upds)

        new_row = dict.fromkeys(df.columns)
        new_row[key_col] = key
        new_row.update(attrs)
        to_append = pl.DataFrame([new_row], schema=schema, strict=False)
        return pl.concat([df, to_append], how="vertical_relaxed")
