"""
Read-only adjacency view and dense index compaction for clique searches.

Every engine call starts here:

    graph model → AdjacencyView → CompactGraph → search → external ids

AdjacencyView normalizes whatever the caller hands in (the library's Graph,
a networkx graph, any object with vertex_ids()/neighbors()/is_directed, or a
plain adjacency mapping) into a simple undirected graph: self-loops are
dropped, parallel edges collapse, and an edge listed from either endpoint is
an edge. Directed inputs are rejected with InvalidGraphKind.

CompactGraph assigns each vertex a dense index 0..n-1 in the view's vertex
order and stores neighborhoods as Python int bitsets, so set intersection and
difference cost O(n / word size) instead of O(n).

Vertex Ordering:
    Vertices are sorted ascending by id. If the ids are not mutually
    comparable (e.g. a mix of str and int), the graph's own vertex order is
    kept instead. Vertices that only appear in a neighbor listing follow
    the vertex that lists them, ordered by type name and repr. Either way
    the order is a pure function of the snapshot, independent of hash
    seeds, which keeps pivot choice and tie-breaks reproducible across runs.

Examples:
    >>> view = AdjacencyView.from_graph({1: [2, 3], 2: [3], 4: []})
    >>> view.vertices()
    (1, 2, 3, 4)
    >>> sorted(view.neighbors(3))
    [1, 2]
    >>> compact = CompactGraph.from_view(view)
    >>> compact.decode(compact.neighbor_masks[0])
    {2, 3}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, FrozenSet, Hashable, Iterable, Iterator, List, Set, Tuple
import logging

import networkx as nx

from cliquegraph.cliques.errors import InvalidGraphKind

logger = logging.getLogger(__name__)

__all__ = [
    'AdjacencyView',
    'CompactGraph',
    'iter_bits',
    'popcount',
]


def iter_bits(mask: int) -> Iterator[int]:
    """Yield the indices of set bits in ascending order."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


def popcount(mask: int) -> int:
    return mask.bit_count()


def _is_directed(graph) -> bool:
    flag = getattr(graph, 'is_directed', False)
    return bool(flag() if callable(flag) else flag)


def _fallback_key(vertex: Hashable) -> Tuple[str, str]:
    # Independent of hashing, so set iteration order never leaks into the result
    return (type(vertex).__name__, repr(vertex))


def _stable_order(vertices: List[Hashable]) -> Tuple[Hashable, ...]:
    try:
        return tuple(sorted(vertices))
    except TypeError:
        logger.debug("Vertex ids are not mutually comparable; keeping graph order")
        return tuple(vertices)


class AdjacencyView:
    """
    Deterministic, read-only neighbor-set accessor over a graph snapshot.

    Use AdjacencyView.from_graph() rather than the constructor; the
    constructor trusts its arguments to be already normalized.
    """

    def __init__(self, order: Tuple[Hashable, ...], adjacency: Dict[Hashable, FrozenSet[Hashable]]):
        self._order = order
        self._adj = adjacency

    @classmethod
    def from_graph(cls, graph) -> "AdjacencyView":
        """
        Build a normalized view of `graph`.

        Args:
            graph: The library's Graph, a networkx graph, any object exposing
                vertex_ids(), neighbors(id) and is_directed, or a mapping of
                vertex id to an iterable of neighbor ids

        Returns:
            AdjacencyView of the underlying simple undirected graph

        Raises:
            InvalidGraphKind: If the graph is directed
            TypeError: If `graph` is none of the supported kinds
        """
        if isinstance(graph, AdjacencyView):
            return graph

        if isinstance(graph, nx.Graph):
            if graph.is_directed():
                raise InvalidGraphKind(
                    "Clique search requires an undirected graph; got a directed networkx graph. "
                    "Convert it with G.to_undirected() first."
                )
            order = list(graph.nodes())
            raw = {v: graph.adj[v] for v in order}
        elif isinstance(graph, Mapping):
            order = list(graph.keys())
            raw = graph
        elif hasattr(graph, 'vertex_ids') and hasattr(graph, 'neighbors'):
            if _is_directed(graph):
                raise InvalidGraphKind(
                    "Clique search requires an undirected graph; got a directed graph model. "
                    "Symmetrize it (e.g. Graph.to_undirected()) first."
                )
            order = list(graph.vertex_ids())
            raw = {v: graph.neighbors(v) for v in order}
        else:
            raise TypeError(
                f"Unsupported graph type {type(graph).__name__}: expected a Graph, "
                f"a networkx graph, or a mapping of vertex -> neighbors"
            )

        return cls._normalize(order, raw)

    @classmethod
    def _normalize(cls, order: List[Hashable], raw) -> "AdjacencyView":
        adjacency: Dict[Hashable, Set[Hashable]] = {v: set() for v in order}
        n_loops = 0

        for v in list(order):
            added = []
            for w in raw[v]:
                if w == v:
                    n_loops += 1
                    continue
                if w not in adjacency:
                    # Referenced only as a neighbor
                    adjacency[w] = set()
                    added.append(w)
                adjacency[v].add(w)
                adjacency[w].add(v)
            order.extend(sorted(added, key=_fallback_key))

        if n_loops:
            logger.debug(f"Dropped {n_loops} self-loop entries from adjacency")

        frozen = {v: frozenset(neighbors) for v, neighbors in adjacency.items()}
        return cls(_stable_order(order), frozen)

    def vertices(self) -> Tuple[Hashable, ...]:
        return self._order

    def neighbors(self, vertex: Hashable) -> FrozenSet[Hashable]:
        """Distinct neighbors of `vertex`, never including `vertex` itself."""
        try:
            return self._adj[vertex]
        except KeyError:
            raise KeyError(f"Vertex {vertex!r} is not in the graph") from None

    def degree(self, vertex: Hashable) -> int:
        return len(self.neighbors(vertex))

    def number_of_edges(self) -> int:
        return sum(len(neighbors) for neighbors in self._adj.values()) // 2

    def restrict(self, vertices: Iterable[Hashable]) -> "AdjacencyView":
        """Induced sub-view on `vertices`, keeping this view's vertex order."""
        keep = set(vertices)
        order = tuple(v for v in self._order if v in keep)
        adjacency = {v: self._adj[v] & keep for v in order}
        return AdjacencyView(order, adjacency)

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self._order)
        G.add_edges_from((v, w) for v in self._order for w in self._adj[v])
        return G

    def __contains__(self, vertex: object) -> bool:
        try:
            return vertex in self._adj
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"AdjacencyView(vertices={len(self)}, edges={self.number_of_edges()})"


class CompactGraph:
    """
    Dense-index bitset form of an AdjacencyView.

    Attributes:
        vertex_ids: Index → external id, in the view's vertex order
        neighbor_masks: Index → bitset of neighbor indices
    """

    def __init__(self, vertex_ids: Tuple[Hashable, ...], neighbor_masks: List[int]):
        self.vertex_ids = vertex_ids
        self.neighbor_masks = neighbor_masks
        self._index = {v: i for i, v in enumerate(vertex_ids)}

    @classmethod
    def from_view(cls, view: AdjacencyView) -> "CompactGraph":
        vertex_ids = view.vertices()
        index = {v: i for i, v in enumerate(vertex_ids)}
        masks = []
        for v in vertex_ids:
            mask = 0
            for w in view.neighbors(v):
                mask |= 1 << index[w]
            masks.append(mask)
        return cls(vertex_ids, masks)

    @classmethod
    def from_graph(cls, graph) -> "CompactGraph":
        return cls.from_view(AdjacencyView.from_graph(graph))

    @property
    def n(self) -> int:
        return len(self.vertex_ids)

    @property
    def all_mask(self) -> int:
        return (1 << len(self.vertex_ids)) - 1

    def index_of(self, vertex: Hashable) -> int:
        return self._index[vertex]

    def mask_of(self, vertices: Iterable[Hashable]) -> int:
        mask = 0
        for v in vertices:
            mask |= 1 << self._index[v]
        return mask

    def decode(self, mask: int) -> Set[Hashable]:
        """Map a bitset of indices back to a set of external ids."""
        return {self.vertex_ids[i] for i in iter_bits(mask)}

    def decode_indices(self, indices: Iterable[int]) -> Set[Hashable]:
        return {self.vertex_ids[i] for i in indices}

    def __len__(self) -> int:
        return len(self.vertex_ids)
