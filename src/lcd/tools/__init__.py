"""
Directory index engine and hand-off tools for lcd.

This package contains the indexer that persists the directory snapshot, the
resolver that matches search terms against it, and the launcher used once a
directory has been resolved.
"""

from .errors import DirectoryNotFoundError, LcdError, SnapshotIOError
from .indexer import SnapshotIndexer, build_snapshot, read_snapshot_root
from .resolver import SnapshotResolver, resolve

__all__ = [
    'DirectoryNotFoundError',
    'LcdError',
    'SnapshotIOError',
    'SnapshotIndexer',
    'SnapshotResolver',
    'build_snapshot',
    'read_snapshot_root',
    'resolve'
]
