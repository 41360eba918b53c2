"""
Graph loaders for edge lists and JSON documents.

Supported formats:
    - Edge lists (.csv, .tsv, .txt, .edges): one edge per row,
      ``source<sep>target[<sep>weight]``. An optional header row naming the
      columns ``source`` and ``target`` is recognised. Rows with a single
      value declare an isolated vertex. Lines starting with ``#`` are
      comments.
    - JSON (.json): ``{"directed": false, "nodes": [...], "edges": [[u, v], ...]}``
      where edges may also carry a third weight element.

Vertex ids that are all canonical integers ("7", "-3", not "07" or "+3") are
loaded as ints; otherwise ids stay strings.

Examples:
    >>> from pathlib import Path
    >>> from cliquegraph.io.loaders import load_graph
    >>> G = load_graph(Path("triangle.csv"))  # doctest: +SKIP
    >>> G.number_of_edges()  # doctest: +SKIP
    3
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json
import logging

import pandas as pd

from cliquegraph.core.graph import Graph

logger = logging.getLogger(__name__)

__all__ = ['load_graph', 'load_edge_list', 'load_json_graph']

EDGE_LIST_SEPARATORS = {
    '.csv': ',',
    '.tsv': '\t',
    '.txt': r'\s+',
    '.edges': r'\s+',
}


def load_graph(path: Path, directed: Optional[bool] = None) -> Graph:
    """
    Load a graph, choosing the parser from the file extension.

    Args:
        path: Input file
        directed: Force directedness. None = the file's own flag for JSON,
            undirected for edge lists.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unsupported or the content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Graph file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.json':
        graph = load_json_graph(path, directed=directed)
    elif suffix in EDGE_LIST_SEPARATORS:
        graph = load_edge_list(path, directed=bool(directed))
    else:
        raise ValueError(
            f"Unsupported graph format: {suffix}. "
            f"Use .json or one of {', '.join(sorted(EDGE_LIST_SEPARATORS))}"
        )

    logger.info(f"Loaded {graph!r} from {path}")
    return graph


def load_edge_list(path: Path, directed: bool = False) -> Graph:
    """Load a delimited edge list into a Graph."""
    sep = EDGE_LIST_SEPARATORS.get(Path(path).suffix.lower(), ',')

    try:
        df = pd.read_csv(
            path,
            sep=sep,
            header=None,
            names=['source', 'target', 'weight'],
            dtype=str,
            comment='#',
            skip_blank_lines=True,
            engine='python',
        )
    except pd.errors.EmptyDataError:
        return Graph(directed=directed)
    except pd.errors.ParserError as e:
        raise ValueError(f"Malformed edge list {path}: {e}")

    df = df.apply(lambda col: col.map(lambda v: v.strip() if isinstance(v, str) else v))

    # Optional header row
    first = [str(v).lower() for v in df.iloc[0].tolist()] if len(df) else []
    if first[:2] == ['source', 'target']:
        df = df.iloc[1:].reset_index(drop=True)

    sources, targets = _coerce_ids(df['source'], df['target'])
    weights = pd.to_numeric(df['weight'], errors='coerce')

    graph = Graph(directed=directed)
    for i in range(len(df)):
        u = sources.iloc[i]
        v = targets.iloc[i]
        if pd.isna(u):
            raise ValueError(f"Edge list {path}: row {i + 1} has no source vertex")
        if pd.isna(v):
            graph.add_node(u)
            continue
        if not pd.isna(weights.iloc[i]):
            graph.add_edge(u, v, weight=float(weights.iloc[i]))
        else:
            graph.add_edge(u, v)

    return graph


def load_json_graph(path: Path, directed: Optional[bool] = None) -> Graph:
    """Load a ``{"directed", "nodes", "edges"}`` JSON document into a Graph."""
    try:
        with open(path, 'r') as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in graph file: {e}")

    if not isinstance(doc, dict):
        raise ValueError("Graph JSON must contain an object at top level")

    if directed is None:
        directed = doc.get('directed', False)
        if not isinstance(directed, bool):
            raise ValueError(f"Graph JSON 'directed' must be true or false, got: {directed!r}")
    nodes = [_json_id(v) for v in doc.get('nodes', [])]
    edges = []
    for edge in doc.get('edges', []):
        if not isinstance(edge, (list, tuple)) or len(edge) not in (2, 3):
            raise ValueError(f"Invalid edge in graph JSON: {edge!r}")
        edges.append((_json_id(edge[0]), _json_id(edge[1]), *edge[2:]))

    return Graph.from_edges(edges, directed=directed, nodes=nodes)


def _json_id(value):
    # JSON arrays are unhashable; treat them as tuples
    if isinstance(value, list):
        return tuple(_json_id(v) for v in value)
    if isinstance(value, dict):
        raise ValueError(f"Graph JSON vertex ids must be scalars or arrays, got: {value!r}")
    return value


def _coerce_ids(*columns: pd.Series) -> list:
    """
    Convert ids to int when every present value in every column is a canonical
    integer literal.

    "01", "+1" and "1" are different vertices in the file, so ids only become
    ints when the conversion round-trips through str().
    """
    present = pd.concat([c.dropna() for c in columns])
    if len(present) and present.str.fullmatch(r"0|-?[1-9]\d*").all():
        return [c.map(lambda v: v if pd.isna(v) else int(v)).astype(object) for c in columns]
    return list(columns)
