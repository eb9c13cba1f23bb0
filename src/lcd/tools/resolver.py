"""
Match resolver for lcd.

This module resolves a search term against a persisted snapshot. Each body
line is compared by its base name: a case-insensitive equal name is an exact
candidate, a name containing the term is a partial candidate. Exact
candidates always win over partial ones; inside a tier the shortest path
wins and the first one seen breaks ties. The snapshot is streamed line by
line and never loaded whole.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..models.config import LcdConfig
from ..models.snapshot import MatchCandidate, MatchType, ResolveResult
from .errors import DirectoryNotFoundError, SnapshotIOError


logger = logging.getLogger(__name__)


def base_name(path: str) -> str:
    """Return the part of path after the last '/', or path itself."""
    return path[path.rfind('/') + 1:]


def classify_match(name: str, term_lower: str) -> Optional[MatchType]:
    """
    Compare a base name with an already lower-cased term.

    Args:
        name: Base name of a snapshot entry
        term_lower: Lower-cased search term

    Returns:
        MatchType.EXACT, MatchType.PARTIAL, or None if the name does not match
    """
    name_lower = name.lower()
    if name_lower == term_lower:
        return MatchType.EXACT
    if term_lower in name_lower:
        return MatchType.PARTIAL
    return None


class SnapshotResolver:
    """
    Resolves search terms against the snapshot named by the configuration.

    The resolver only reads the snapshot; it is safe to run once the indexer
    has finished writing it.
    """

    def __init__(self, config: LcdConfig):
        self.config = config

    def resolve(self, term: str) -> ResolveResult:
        """
        Find the best matching directory for a search term.

        Args:
            term: Directory name or fragment typed by the user

        Returns:
            ResolveResult holding the winning candidate

        Raises:
            ValueError: If the term is empty
            DirectoryNotFoundError: If no base name equals or contains the term
            SnapshotIOError: If the snapshot cannot be read
        """
        if not term:
            raise ValueError("Search term cannot be empty")

        snapshot_path = self.config.get_snapshot_path()
        term_lower = term.lower()
        best_exact: Optional[MatchCandidate] = None
        best_partial: Optional[MatchCandidate] = None
        lines_scanned = 0

        try:
            with open(snapshot_path, 'r', encoding='utf-8', errors='surrogateescape') as f:
                # Header holds the scan root and is never matched
                f.readline()

                for line in f:
                    path = line.rstrip('\r\n')
                    if not path:
                        continue
                    lines_scanned += 1

                    name = base_name(path)
                    match_type = classify_match(name, term_lower)
                    if match_type is None:
                        continue

                    candidate = MatchCandidate.from_path(path, name, match_type)
                    if match_type is MatchType.EXACT:
                        if candidate.is_shorter_than(best_exact):
                            best_exact = candidate
                    elif candidate.is_shorter_than(best_partial):
                        best_partial = candidate
        except OSError as e:
            raise SnapshotIOError(f"could not open database: {e}") from e

        winner = best_exact if best_exact is not None else best_partial
        if winner is None:
            logger.debug(f"No match for '{term}' in {lines_scanned} entries")
            raise DirectoryNotFoundError(term)

        logger.debug(f"Resolved '{term}' to {winner.path} ({winner.match_type.value} match)")
        return ResolveResult(term=term, candidate=winner, lines_scanned=lines_scanned)


def resolve(snapshot_path: Union[str, Path], term: str) -> str:
    """
    Convenience function to resolve a term against a snapshot file.

    Args:
        snapshot_path: Location of the snapshot
        term: Directory name or fragment

    Returns:
        The resolved absolute directory path

    Raises:
        DirectoryNotFoundError: If nothing matches
        SnapshotIOError: If the snapshot cannot be read
    """
    config = LcdConfig(snapshot_path=str(snapshot_path))
    return SnapshotResolver(config).resolve(term).path
