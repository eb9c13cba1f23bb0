"""
Data models for lcd.

This module contains the configuration model and the snapshot structures
shared by the indexer and the resolver.
"""

from .config import LcdConfig
from .snapshot import MatchCandidate, MatchType, ResolveResult, ScanStats, SnapshotHeader

__all__ = [
    'LcdConfig',
    'MatchCandidate',
    'MatchType',
    'ResolveResult',
    'ScanStats',
    'SnapshotHeader'
]
