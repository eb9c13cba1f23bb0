"""
Snapshot data models for lcd.

This module defines the structures exchanged by the indexer and resolver:
the snapshot header, the transient match candidates built while resolving
a search term, the resolution result and the scan statistics.
"""

from typing import Dict, Optional, Any
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


class MatchType(Enum):
    """Enumeration of the two match tiers."""
    EXACT = "exact"
    PARTIAL = "partial"


class SnapshotHeader(BaseModel):
    """
    The first line of a snapshot file.

    Attributes:
        root: Absolute root path the snapshot was built from
    """

    root: str = Field(..., min_length=1, description="Root path used for the scan")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Header lines never carry surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Snapshot root cannot be empty")
        if '\n' in v or '\r' in v:
            raise ValueError("Snapshot root must fit on a single line")
        return v

    def to_line(self) -> str:
        """Render the header as it is written to disk."""
        return self.root + "\n"


class MatchCandidate(BaseModel):
    """
    A directory from the snapshot body whose base name matched the term.

    Attributes:
        path: Full directory path as stored in the snapshot
        name: Base name the term was compared against
        length: Length of the full path string, used for tie-breaking
        match_type: Whether the base name equals or only contains the term
    """

    path: str = Field(..., min_length=1, description="Full directory path")
    name: str = Field(..., description="Matched base name")
    length: int = Field(..., ge=0, description="Length of the path string")
    match_type: MatchType = Field(..., description="Match tier")

    @model_validator(mode='after')
    def validate_candidate(self):
        """The stored length must describe the stored path."""
        if self.length != len(self.path):
            raise ValueError("Candidate length must equal len(path)")
        return self

    @classmethod
    def from_path(cls, path: str, name: str, match_type: MatchType) -> 'MatchCandidate':
        return cls(path=path, name=name, length=len(path), match_type=match_type)

    def is_shorter_than(self, other: Optional['MatchCandidate']) -> bool:
        """Strict comparison so the first candidate seen wins a tie."""
        return other is None or self.length < other.length


class ResolveResult(BaseModel):
    """
    Outcome of a successful resolution.

    Attributes:
        term: Search term as supplied by the user
        candidate: Winning match candidate
        lines_scanned: Number of snapshot body lines examined
    """

    term: str = Field(..., description="Original search term")
    candidate: MatchCandidate = Field(..., description="Winning candidate")
    lines_scanned: int = Field(0, ge=0, description="Number of body lines examined")

    @property
    def path(self) -> str:
        return self.candidate.path

    @property
    def match_type(self) -> MatchType:
        return self.candidate.match_type

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data['candidate']['match_type'] = self.match_type.value
        return data

    def __str__(self) -> str:
        return f"{self.path} ({self.match_type.value} match for '{self.term}')"


class ScanStats(BaseModel):
    """
    Counters collected while building a snapshot.

    Attributes:
        root: Root the snapshot was built from
        directories_indexed: Number of body lines written
        directories_skipped: Number of version-control directories pruned
        errors: Number of unreadable subtrees pruned
    """

    root: str = Field(..., description="Root the snapshot was built from")
    directories_indexed: int = Field(0, ge=0)
    directories_skipped: int = Field(0, ge=0)
    errors: int = Field(0, ge=0)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def __str__(self) -> str:
        return (
            f"{self.directories_indexed} directories indexed under {self.root} "
            f"({self.directories_skipped} skipped, {self.errors} errors)"
        )
