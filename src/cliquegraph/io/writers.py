"""
Writers for clique results.

Two formats:
    - JSON: ``{"metadata": {...}, "n_cliques": N, "cliques": [[...], ...]}``,
      written atomically
    - CSV: one row per clique with columns ``clique_id``, ``size``,
      ``members`` (members joined by ``;``), also written atomically

Members are written in ascending order when the ids are comparable.

Examples:
    >>> from pathlib import Path
    >>> from cliquegraph.io.writers import write_cliques
    >>> write_cliques(Path("cliques.json"), [{1, 2, 3}], metadata={"mode": "maximal"})  # doctest: +SKIP
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Set
import logging

import pandas as pd

from cliquegraph.utils.fileio import atomic_write_json, atomic_write_text

logger = logging.getLogger(__name__)

__all__ = ['write_cliques', 'write_cliques_json', 'write_cliques_csv', 'sorted_members']


def sorted_members(clique: Iterable[Hashable]) -> List[Hashable]:
    """Clique members in ascending order, or by their string form if not comparable."""
    members = list(clique)
    try:
        return sorted(members)
    except TypeError:
        return sorted(members, key=str)


def _jsonable(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def write_cliques_json(
    path: Path,
    cliques: Sequence[Set[Hashable]],
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """Write cliques and run metadata to a JSON file (atomic)."""
    data = {
        'metadata': metadata or {},
        'n_cliques': len(cliques),
        'cliques': [[_jsonable(v) for v in sorted_members(c)] for c in cliques],
    }
    atomic_write_json(path, data)
    logger.info(f"Wrote {len(cliques)} cliques to {path}")


def write_cliques_csv(path: Path, cliques: Sequence[Set[Hashable]]) -> None:
    """Write one row per clique: clique_id, size, members."""
    df = pd.DataFrame({
        'clique_id': range(len(cliques)),
        'size': [len(c) for c in cliques],
        'members': [';'.join(str(v) for v in sorted_members(c)) for c in cliques],
    })
    atomic_write_text(path, df.to_csv(index=False))
    logger.info(f"Wrote {len(cliques)} cliques to {path}")


def write_cliques(
    path: Path,
    cliques: Sequence[Set[Hashable]],
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Write cliques, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is neither .json nor .csv
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == '.json':
        write_cliques_json(path, cliques, metadata)
    elif suffix == '.csv':
        write_cliques_csv(path, cliques)
    else:
        raise ValueError(f"Unsupported output format: {suffix}. Use .json or .csv")
