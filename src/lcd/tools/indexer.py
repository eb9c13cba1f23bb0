"""
Directory indexer for lcd.

This module walks a root directory tree and persists a flat snapshot of every
directory below it. The snapshot is a UTF-8 text file whose first line is the
scan root and whose remaining lines are absolute directory paths in traversal
order. Version-control metadata directories are pruned, unreadable subtrees
are skipped, and symbolic links are never descended into.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from ..models.config import LcdConfig, SKIPPED_DIR_NAME
from ..models.snapshot import ScanStats, SnapshotHeader
from .errors import SnapshotIOError


logger = logging.getLogger(__name__)


class SnapshotIndexer:
    """
    Builds the persisted directory snapshot.

    Every scan fully replaces the snapshot at the configured location; there is
    no incremental merge. Only a failure to access the root or to write the
    snapshot is fatal, errors on individual subtrees prune that subtree.
    """

    def __init__(self, config: LcdConfig):
        """
        Initialize the indexer.

        Args:
            config: Configuration holding the snapshot location
        """
        self.config = config
        self._stats = self._new_stats()

    @staticmethod
    def _new_stats() -> Dict[str, int]:
        return {
            'directories_indexed': 0,
            'directories_skipped': 0,
            'errors': 0
        }

    def build_snapshot(self, root: Union[str, Path]) -> ScanStats:
        """
        Scan a directory tree and overwrite the snapshot with the result.

        Args:
            root: Directory to scan; "~" is expanded and relative paths are made absolute

        Returns:
            ScanStats describing the completed scan

        Raises:
            SnapshotIOError: If the root cannot be accessed or the snapshot cannot be written
        """
        self.reset_stats()
        root_path = self._check_root(root)
        snapshot_path = self.config.get_snapshot_path()
        header = SnapshotHeader(root=root_path)

        logger.info(f"Building snapshot of {root_path} into {snapshot_path}")

        try:
            snapshot_path.parent.mkdir(parents=True, exist_ok=True)
            with open(snapshot_path, 'w', encoding='utf-8', errors='surrogateescape', newline='\n') as f:
                f.write(header.to_line())
                for directory in self.walk_directories(root_path):
                    f.write(directory + "\n")
                    self._stats['directories_indexed'] += 1
                f.flush()
        except OSError as e:
            raise SnapshotIOError(f"Cannot write snapshot {snapshot_path}: {e}") from e

        stats = ScanStats(root=header.root, **self._stats)
        logger.info(f"Scan complete: {stats}")
        return stats

    def _check_root(self, root: Union[str, Path]) -> str:
        """
        Normalize the root and make sure it can be listed.

        Raises:
            SnapshotIOError: If the root is missing, not a directory or unreadable
        """
        root_str = str(root).strip() if root is not None else ""
        if not root_str:
            raise SnapshotIOError("Scan root cannot be empty")

        root_path = os.path.abspath(os.path.expanduser(root_str))

        if '\n' in root_path or '\r' in root_path:
            raise SnapshotIOError(f"Root path must fit on a single line: {root_path!r}")
        if not os.path.exists(root_path):
            raise SnapshotIOError(f"Root directory does not exist: {root_path}")
        if not os.path.isdir(root_path):
            raise SnapshotIOError(f"Root path is not a directory: {root_path}")

        try:
            with os.scandir(root_path):
                pass
        except OSError as e:
            raise SnapshotIOError(f"Cannot read root directory {root_path}: {e}") from e

        return root_path

    def walk_directories(self, root_path: str) -> Iterator[str]:
        """
        Yield every directory below root_path in traversal order.

        The root itself is not yielded. Children of a directory are yielded in
        sorted order when the directory is visited, so unreadable directories
        are still listed even though their contents are not.

        Args:
            root_path: Absolute path of an accessible directory

        Yields:
            Absolute directory paths
        """
        for current_dir, subdirs, _files in os.walk(root_path, topdown=True,
                                                    onerror=self._on_walk_error,
                                                    followlinks=False):
            kept = []
            for name in sorted(subdirs):
                if self._should_skip(current_dir, name):
                    continue
                kept.append(name)
                yield os.path.join(current_dir, name)

            # Prune in place so os.walk only descends into kept entries
            subdirs[:] = kept

    def _should_skip(self, parent: str, name: str) -> bool:
        """
        Decide whether a child directory is left out of the snapshot.

        Args:
            parent: Directory being listed
            name: Base name of the child directory

        Returns:
            True if the child and its subtree must not be indexed
        """
        if name == SKIPPED_DIR_NAME:
            logger.debug(f"Skipping version control directory: {os.path.join(parent, name)}")
            self._stats['directories_skipped'] += 1
            return True

        path = os.path.join(parent, name)

        # Symlinked directories are neither listed nor followed
        if os.path.islink(path):
            return True

        if '\n' in name or '\r' in name:
            logger.warning(f"Skipping directory with a line break in its name: {path!r}")
            self._stats['directories_skipped'] += 1
            return True

        return False

    def _on_walk_error(self, error: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror or error}")
        self._stats['errors'] += 1

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last scan.

        Returns:
            Dictionary containing scan counters
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._new_stats()


def read_snapshot_root(snapshot_path: Union[str, Path]) -> Optional[str]:
    """
    Read the root stored in a snapshot header.

    Args:
        snapshot_path: Location of the snapshot file

    Returns:
        The stored root, or None if the snapshot is missing, unreadable or has a blank header
    """
    try:
        with open(snapshot_path, 'r', encoding='utf-8', errors='surrogateescape') as f:
            first_line = f.readline()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning(f"Cannot read snapshot header from {snapshot_path}: {e}")
        return None

    root = first_line.strip()
    return root or None


def build_snapshot(config: LcdConfig, root: Union[str, Path]) -> ScanStats:
    """
    Convenience function to scan a root into the configured snapshot.

    Args:
        config: Configuration holding the snapshot location
        root: Directory to scan

    Returns:
        ScanStats describing the completed scan

    Raises:
        SnapshotIOError: If the root cannot be accessed or the snapshot cannot be written
    """
    indexer = SnapshotIndexer(config)
    return indexer.build_snapshot(root)
