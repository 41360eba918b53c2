"""Exceptions raised by the clique engine."""

from __future__ import annotations

from typing import Any, Optional

__all__ = ['InvalidGraphKind', 'ResourceExhausted']


class InvalidGraphKind(ValueError):
    """Raised when a directed graph is passed where an undirected graph is required."""
    pass


class ResourceExhausted(RuntimeError):
    """
    Raised when a search exceeds a configured time, frame or depth bound.

    The engine never returns a partial result: hitting a bound always
    surfaces as this exception.

    Attributes:
        limit: Name of the bound that was exceeded ('timeout_seconds',
            'max_frames' or 'max_depth')
        value: The configured bound
    """

    def __init__(self, limit: str, value: Any, detail: Optional[str] = None):
        self.limit = limit
        self.value = value
        message = f"Clique search exceeded {limit}={value}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
