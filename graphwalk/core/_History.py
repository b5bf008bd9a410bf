import inspect
import json
import time
from datetime import UTC, datetime
from functools import wraps

import numpy as np
import polars as pl

from ._GraphDiff import GraphDiff


class History:
    """Mutation log, version counter and snapshots for a graph.

    Every structural mutator listed in ``_HISTORY_OPS`` is wrapped per instance
    so that each call appends one event::

        {"version": 3, "ts_utc": "...Z", "mono_ns": 1200, "op": "add_edge",
         "u": 1, "v": 2, "result": 1}

    Only calls that change the graph are logged: an idempotent ``add_edge`` or
    a removal of something absent leaves both log and version untouched. The
    version counter moves on every change even while recording is paused;
    caches key on it.
    """

    # Mutators wrapped at construction. Every new mutator goes here.
    _HISTORY_OPS = (
        "add_vertex",
        "add_edge",
        "remove_vertex",
        "remove_edge",
        "clear",
    )

    def _init_history(self, enabled: bool = True):
        self._history_enabled = bool(enabled)
        self._history = []  # list[dict], append-only
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        self._snapshots = []
        self._install_history_hooks()

    # Event log

    @staticmethod
    def _utcnow_iso() -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, np.generic):
            return x.item()
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        return f"<<{type(x).__name__}>>"

    def _log_event(self, op: str, **fields):
        self._version += 1
        if not self._history_enabled:
            return
        evt = {
            "version": self._version,
            "ts_utc": self._utcnow_iso(),
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        evt.update((k, self._jsonify(v)) for k, v in fields.items())
        self._history.append(evt)

    def _log_mutation(self, name=None):
        """Decorator factory: log the bound call arguments and the result of a mutator."""

        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                before = self._mutation_token()
                result = fn(*args, **kwargs)
                if self._mutation_token() == before:
                    return result  # no-op call: nothing logged, version unchanged
                fields = {k: v for k, v in bound.arguments.items() if k != "self"}
                self._log_event(op, **fields, result=result)
                return result

            return wrapper

        return deco

    def _mutation_token(self):
        """Value that differs before and after any effective mutation."""
        return (self.vertex_size(), self.edge_size(), self.idx.peek_edge_id())

    def _install_history_hooks(self):
        for name in self._HISTORY_OPS:
            fn = getattr(self, name, None)
            if fn is None or getattr(fn, "__wrapped__", None) is not None:
                continue  # missing, or already wrapped
            setattr(self, name, self._log_mutation(name)(fn))

    @property
    def version(self) -> int:
        """Number of mutations applied so far, logged or not."""
        return self._version

    def history(self, as_df: bool = False):
        """Logged events, oldest first.

        Parameters
        --
        as_df : bool, default False
            Return a Polars DF [DataFrame] (one column per event field, nulls
            where an op has no such field) instead of a list of dicts.

        Returns
        ---
        list[dict] | polars.DataFrame

        """
        if as_df:
            return self._history_frame()
        return list(self._history)

    def _history_frame(self) -> pl.DataFrame:
        return pl.from_dicts(self._history, infer_schema_length=None)

    def export_history(self, path) -> int:
        """Write the event log to ``path``; the format follows the extension.

        ``.parquet``, ``.csv``, ``.json`` (one array) and ``.ndjson`` / ``.jsonl``
        (one event per line) are recognised; any other name gets ``.parquet``
        appended.

        Returns
        ---
        int
            Events written; 0, and no file, when the log is empty.

        """
        if not self._history:
            return 0
        path = str(path)
        df = self._history_frame()
        suffix = path.lower().rsplit(".", 1)[-1] if "." in path else ""

        if suffix in ("ndjson", "jsonl"):
            with open(path, "w", encoding="utf-8") as f:
                f.writelines(json.dumps(row, ensure_ascii=False) + "\n" for row in df.iter_rows(named=True))
        elif suffix == "json":
            with open(path, "w", encoding="utf-8") as f:
                json.dump(df.to_dicts(), f, ensure_ascii=False)
        elif suffix == "csv":
            df.write_csv(path)
        elif suffix == "parquet":
            df.write_parquet(path)
        else:
            df.write_parquet(path + ".parquet")
        return df.height

    def enable_history(self, flag: bool = True):
        """Resume (True) or pause (False) event recording."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Drop all logged events. Version and snapshots are kept."""
        self._history.clear()

    def mark(self, label: str):
        """Append a ``mark`` event carrying ``label`` to the log."""
        self._log_event("mark", label=label)

    # Snapshots

    def _current_snapshot(self, label="current"):
        return {
            "label": label,
            "version": self._version,
            "vertex_ids": set(self.vertices()),
            "edge_ids": {eid for _, _, eid in self.edge_list()},
        }

    def snapshot(self, label=None) -> dict:
        """Record the current vertex and edge ids under ``label``.

        Parameters
        --
        label : str, optional
            Defaults to ``snapshot_<n>``.

        Returns
        ---
        dict
            ``label``, ``version``, ``timestamp``, ``counts`` and the id sets.

        """
        snap = self._current_snapshot(label or f"snapshot_{len(self._snapshots)}")
        snap["timestamp"] = self._utcnow_iso()
        snap["counts"] = {"vertices": len(snap["vertex_ids"]), "edges": len(snap["edge_ids"])}
        self._snapshots.append(snap)
        return snap

    def diff(self, a, b=None) -> GraphDiff:
        """Compare snapshot ``a`` with ``b``, or with the current state.

        ``a`` and ``b`` may each be a snapshot label, a snapshot dict or another
        graph (whose current state is used).

        Raises
        --
        ValueError
            Unknown snapshot label.
        TypeError
            Anything else.

        """
        before = self._resolve_snapshot(a)
        after = self._current_snapshot() if b is None else self._resolve_snapshot(b)
        return GraphDiff(before, after)

    def _resolve_snapshot(self, ref):
        if isinstance(ref, dict):
            return ref
        if isinstance(ref, History):
            return ref._current_snapshot("external")
        if isinstance(ref, str):
            found = next((s for s in self._snapshots if s["label"] == ref), None)
            if found is None:
                raise ValueError(f"Snapshot '{ref}' not found")
            return found
        raise TypeError(f"Invalid snapshot reference: {type(ref)}")

    def list_snapshots(self) -> list[dict]:
        """Snapshot metadata (no id sets), oldest first."""
        keys = ("label", "timestamp", "version", "counts")
        return [{k: s[k] for k in keys} for s in self._snapshots]
