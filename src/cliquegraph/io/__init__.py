"""Graph loading and clique result writing."""

from cliquegraph.io.loaders import load_edge_list, load_graph, load_json_graph
from cliquegraph.io.writers import (
    sorted_members,
    write_cliques,
    write_cliques_csv,
    write_cliques_json,
)

__all__ = [
    'load_graph',
    'load_edge_list',
    'load_json_graph',
    'write_cliques',
    'write_cliques_json',
    'write_cliques_csv',
    'sorted_members',
]
