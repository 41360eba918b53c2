"""
Resource bounds for clique searches.

A search never returns a partial result: when a configured bound is hit the
budget raises ResourceExhausted and the whole call fails.

Examples:
    >>> from cliquegraph import SearchLimits, all_maximal_cliques
    >>> limits = SearchLimits(timeout_seconds=5.0, max_frames=1_000_000)
    >>> cliques = all_maximal_cliques(G, limits=limits)  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from cliquegraph.cliques.errors import ResourceExhausted

logger = logging.getLogger(__name__)

__all__ = ['SearchLimits', 'SearchBudget']


@dataclass(frozen=True)
class SearchLimits:
    """
    Hard bounds for one engine call.

    Attributes:
        timeout_seconds: Wall-clock budget for the whole call (None = unbounded)
        max_frames: Maximum number of search frames expanded (None = unbounded)
        max_depth: Maximum size of the partial clique R (None = unbounded)
    """
    timeout_seconds: Optional[float] = None
    max_frames: Optional[int] = None
    max_depth: Optional[int] = None

    def __post_init__(self):
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.max_frames is not None and self.max_frames < 1:
            raise ValueError(f"max_frames must be >= 1, got {self.max_frames}")
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

    @property
    def unbounded(self) -> bool:
        return (
            self.timeout_seconds is None
            and self.max_frames is None
            and self.max_depth is None
        )


class SearchBudget:
    """
    Per-call accounting against SearchLimits.

    Shared by all worker threads of one call, so counters are updated under a
    lock.
    """

    def __init__(self, limits: Optional[SearchLimits] = None):
        self.limits = limits or SearchLimits()
        self.frames = 0
        self._start = time.monotonic()
        self._lock = threading.Lock()
        self._tripped: Optional[ResourceExhausted] = None

    def start(self) -> None:
        """Restart the wall clock. Lazy searches call this on their first item."""
        self._start = time.monotonic()

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start

    def charge(self, depth: int) -> None:
        """
        Account for one expanded frame whose partial clique has `depth` members.

        Raises:
            ResourceExhausted: If any configured bound is exceeded
        """
        limits = self.limits
        if self._tripped is not None:
            # Another worker already exceeded a bound
            raise ResourceExhausted(self._tripped.limit, self._tripped.value, "search aborted")
        with self._lock:
            self.frames += 1
            frames = self.frames

        if limits.max_depth is not None and depth > limits.max_depth:
            self._exhausted('max_depth', limits.max_depth, f"partial clique reached {depth} vertices")
        if limits.max_frames is not None and frames > limits.max_frames:
            self._exhausted('max_frames', limits.max_frames, f"{frames} frames expanded")
        if limits.timeout_seconds is not None:
            elapsed = self.elapsed
            if elapsed > limits.timeout_seconds:
                self._exhausted('timeout_seconds', limits.timeout_seconds, f"ran for {elapsed:.2f}s")

    def _exhausted(self, limit: str, value, detail: str) -> None:
        logger.warning(f"Clique search aborted: {limit}={value} exceeded ({detail})")
        error = ResourceExhausted(limit, value, detail)
        self._tripped = error
        raise error
