"""Core graph model."""

from cliquegraph.core.graph import Edge, Graph

__all__ = ['Edge', 'Graph']
