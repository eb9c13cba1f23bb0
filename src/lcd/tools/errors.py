"""
Exceptions raised by the lcd indexer and resolver.
"""


class LcdError(Exception):
    """Base class for errors raised by the directory index engine."""
    pass


class SnapshotIOError(LcdError):
    """Raised when the snapshot cannot be read or written, or the scan root is inaccessible."""
    pass


class DirectoryNotFoundError(LcdError):
    """Raised when no directory in the snapshot matches the search term."""

    def __init__(self, term: str):
        self.term = term
        super().__init__(f"directory not found: {term}")
