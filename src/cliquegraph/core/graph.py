"""
Graph model shared by the clique engine and its sibling algorithms.

The model is a small multigraph builder: it records nodes in insertion order
and keeps every edge exactly as it was added, including parallel edges and
self-loops. Consumers that need a simple graph (such as the clique engine)
normalize it through their own read-only view instead of the model doing it.

Examples:
    >>> from cliquegraph import Graph
    >>> G = Graph.from_edges([(1, 2), (2, 3), (1, 3)])
    >>> sorted(G.neighbors(1))
    [2, 3]
    >>> G.is_directed
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Set, Tuple

import networkx as nx

__all__ = ['Edge', 'Graph']


@dataclass(frozen=True)
class Edge:
    """A single (possibly parallel) edge of the model."""
    source: Hashable
    target: Hashable
    weight: Any = 1


class Graph:
    """
    Directed or undirected multigraph with insertion-ordered nodes.

    Satisfies the engine's graph-model protocol:
        - vertex_ids() -> ordered sequence of ids
        - neighbors(id) -> set of ids (successors when directed)
        - is_directed flag
    """

    def __init__(self, directed: bool = False):
        self._directed = directed
        self._succ: Dict[Hashable, Dict[Hashable, List[Edge]]] = {}
        self._pred: Dict[Hashable, Dict[Hashable, List[Edge]]] = {}
        self._n_edges = 0

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple],
        directed: bool = False,
        nodes: Iterable[Hashable] = (),
    ) -> "Graph":
        """
        Build a graph from (u, v) or (u, v, weight) tuples.

        Nodes listed in `nodes` are added first, so isolated vertices can be
        declared explicitly.
        """
        graph = cls(directed=directed)
        for node in nodes:
            graph.add_node(node)
        for edge in edges:
            if len(edge) == 2:
                graph.add_edge(edge[0], edge[1])
            elif len(edge) == 3:
                graph.add_edge(edge[0], edge[1], weight=edge[2])
            else:
                raise ValueError(f"Edge must be (u, v) or (u, v, weight), got {edge!r}")
        return graph

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> "Graph":
        """Copy a networkx graph (any flavour) into the model."""
        graph = cls(directed=G.is_directed())
        for node in G.nodes():
            graph.add_node(node)
        for u, v, data in G.edges(data=True):
            graph.add_edge(u, v, weight=data.get('weight', 1))
        return graph

    @property
    def is_directed(self) -> bool:
        return self._directed

    def add_node(self, node: Hashable) -> None:
        if node not in self._succ:
            self._succ[node] = {}
            self._pred[node] = {}

    def add_edge(self, u: Hashable, v: Hashable, weight: Any = 1) -> None:
        """Add an edge; parallel edges and self-loops are kept as given."""
        self.add_node(u)
        self.add_node(v)
        edge = Edge(u, v, weight)
        self._succ[u].setdefault(v, []).append(edge)
        self._pred[v].setdefault(u, []).append(edge)
        if not self._directed and u != v:
            self._succ[v].setdefault(u, []).append(edge)
            self._pred[u].setdefault(v, []).append(edge)
        self._n_edges += 1

    def vertex_ids(self) -> List[Hashable]:
        return list(self._succ)

    def neighbors(self, node: Hashable) -> Set[Hashable]:
        """Distinct neighbors of `node` (successors for directed graphs)."""
        if node not in self._succ:
            raise KeyError(f"Node {node!r} is not in the graph")
        return set(self._succ[node])

    def predecessors(self, node: Hashable) -> Set[Hashable]:
        if node not in self._pred:
            raise KeyError(f"Node {node!r} is not in the graph")
        return set(self._pred[node])

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        return u in self._succ and v in self._succ[u]

    def edges(self) -> Iterator[Edge]:
        """Yield every edge once, parallel edges included."""
        for u, targets in self._succ.items():
            for v, edges in targets.items():
                for edge in edges:
                    # Undirected edges are stored under both endpoints
                    if self._directed or edge.source == u:
                        yield edge

    def number_of_nodes(self) -> int:
        return len(self._succ)

    def number_of_edges(self) -> int:
        return self._n_edges

    def to_undirected(self) -> "Graph":
        """
        Symmetrized copy: every directed edge u->v becomes an undirected edge.

        Returns a copy even when the graph is already undirected.
        """
        graph = Graph(directed=False)
        for node in self._succ:
            graph.add_node(node)
        for edge in self.edges():
            graph.add_edge(edge.source, edge.target, weight=edge.weight)
        return graph

    def to_networkx(self) -> nx.Graph:
        """Convert to a networkx MultiGraph / MultiDiGraph."""
        G = nx.MultiDiGraph() if self._directed else nx.MultiGraph()
        G.add_nodes_from(self._succ)
        for edge in self.edges():
            G.add_edge(edge.source, edge.target, weight=edge.weight)
        return G

    def __contains__(self, node: object) -> bool:
        try:
            return node in self._succ
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._succ)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._succ)

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph({kind}, nodes={self.number_of_nodes()}, edges={self.number_of_edges()})"
