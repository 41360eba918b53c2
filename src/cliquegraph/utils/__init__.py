"""Utility modules."""

from cliquegraph.utils.fileio import (
    atomic_write_json,
    atomic_write_text,
)

__all__ = [
    'atomic_write_json',
    'atomic_write_text',
]
