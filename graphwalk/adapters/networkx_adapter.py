from __future__ import annotations

try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install graphwalk[networkx]"
    ) from e

import warnings
from typing import TYPE_CHECKING, Any

from ..core.graph import Graph

if TYPE_CHECKING:
    from ..core.labeled import LabeledGraph


def to_nx(graph: Graph | LabeledGraph):
    """Export a graph to NetworkX.

    Parameters
    ----------
    graph : Graph | LabeledGraph
        Source graph. For a ``LabeledGraph`` the vertex and edge attribute
        rows are copied onto the NetworkX nodes and edges.

    Returns
    -------
    networkx.DiGraph | networkx.Graph
        Integer nodes equal to the vertex ids; every edge carries its
        ``edge_id``.

    """
    G = getattr(graph, "graph", graph)
    nxG = nx.DiGraph() if G.is_directed() else nx.Graph()

    vattrs = getattr(graph, "get_vertex_attrs", None)
    for v in G.vertices():
        attrs = vattrs(v) if vattrs is not None else {}
        nxG.add_node(v, **{k: val for k, val in attrs.items() if val is not None})

    eattrs = getattr(graph, "get_edge_attrs", None)
    for u, v, eid in G.edge_list():
        attrs = eattrs(u, v) if eattrs is not None else {}
        attrs = {k: val for k, val in attrs.items() if val is not None}
        nxG.add_edge(u, v, edge_id=eid, **attrs)
    return nxG


def from_nx(nxG, *, labeled: bool = False, history: bool = True):
    """Build a graph from a NetworkX graph.

    Parameters
    ----------
    nxG : networkx.Graph
        Any NetworkX graph. Node keys can be arbitrary hashables; they are
        mapped to fresh vertex ids in iteration order.
    labeled : bool, default False
        If True, return a ``LabeledGraph`` carrying node and edge data dicts.
    history : bool, default True
        Passed to the graph constructor.

    Returns
    -------
    tuple[Graph | LabeledGraph, dict]
        The graph and the ``{networkx node: vertex id}`` mapping.

    Notes
    -----
    Multigraphs are collapsed: parallel edges become one edge (with the data
    of the first one) and a ``UserWarning`` is emitted.

    """
    G = Graph.create(directed=nxG.is_directed(), history=history)
    if labeled:
        from ..core.labeled import LabeledGraph

        out: Any = LabeledGraph(G)
    else:
        out = G

    mapping = {}
    for node, data in nxG.nodes(data=True):
        mapping[node] = out.add_vertex(**_clean(data)) if labeled else out.add_vertex()

    if nxG.is_multigraph():
        n_edges = nxG.number_of_edges()
        n_pairs = len({(u, v) for u, v, _ in nxG.edges(keys=True)}) if nxG.is_directed() else len(
            {frozenset((u, v)) for u, v, _ in nxG.edges(keys=True)}
        )
        if n_pairs < n_edges:
            warnings.warn(
                f"NetworkX -> graphwalk conversion is lossy: {n_edges - n_pairs} parallel edge(s) collapsed"
            )

    for u, v, data in nxG.edges(data=True):
        a, b = mapping[u], mapping[v]
        if G.contains(a, b):
            continue
        if labeled:
            out.add_edge(a, b, **_clean(data))
        else:
            out.add_edge(a, b)
    return out, mapping


def _clean(data: dict) -> dict:
    return {str(k): v for k, v in data.items() if k != "edge_id"}
