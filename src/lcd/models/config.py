"""
Configuration data models for lcd.

This module defines the settings that used to be process-wide state (home
directory, snapshot location, default scan root, shell and clipboard tools).
An LcdConfig is built once per invocation and handed explicitly to the
indexer, resolver and launcher.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field, field_validator


DEFAULT_SNAPSHOT_FILENAME = ".lcd-tree.txt"
DEFAULT_SHELL = "/bin/sh"

# Version-control metadata directory pruned during every scan
SKIPPED_DIR_NAME = ".git"


def _default_clipboard_commands() -> List[List[str]]:
    return [
        ["xclip", "-selection", "clipboard"],
        ["wl-copy"],
    ]


class LcdConfig(BaseModel):
    """
    Main configuration class for lcd.

    Attributes:
        home_dir: Home directory of the invoking user
        snapshot_filename: File name of the snapshot inside home_dir
        snapshot_path: Explicit snapshot location (overrides home_dir/snapshot_filename)
        default_root: Root scanned when no root is stored or supplied (defaults to home_dir)
        shell: Shell spawned when entering a directory (defaults to $SHELL)
        clipboard_commands: Clipboard commands tried in order on Linux
    """

    home_dir: str = Field(default_factory=lambda: str(Path.home()), description="Home directory of the user")
    snapshot_filename: str = Field(DEFAULT_SNAPSHOT_FILENAME, description="Snapshot file name inside home_dir")
    snapshot_path: Optional[str] = Field(None, description="Explicit snapshot file location")
    default_root: Optional[str] = Field(None, description="Default scan root")
    shell: Optional[str] = Field(None, description="Shell spawned when entering a directory")
    clipboard_commands: List[List[str]] = Field(
        default_factory=_default_clipboard_commands,
        description="Clipboard commands tried in order on Linux"
    )

    @field_validator('home_dir')
    @classmethod
    def validate_home_dir(cls, v: str) -> str:
        """Expand and normalize the home directory."""
        if not v or not v.strip():
            raise ValueError("Home directory cannot be empty")
        return str(Path(v.strip()).expanduser())

    @field_validator('snapshot_filename')
    @classmethod
    def validate_snapshot_filename(cls, v: str) -> str:
        """Snapshot file name must be a bare file name."""
        v = v.strip() if v else v
        if not v:
            raise ValueError("Snapshot filename cannot be empty")
        if '/' in v or (os.sep != '/' and os.sep in v):
            raise ValueError(f"Snapshot filename must not contain a path separator: {v}")
        return v

    @field_validator('snapshot_path', 'default_root', 'shell')
    @classmethod
    def validate_optional_path(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank values as unset and expand user paths."""
        if v is None or not v.strip():
            return None
        return str(Path(v.strip()).expanduser())

    @field_validator('clipboard_commands')
    @classmethod
    def validate_clipboard_commands(cls, v: List[List[str]]) -> List[List[str]]:
        """Drop empty commands."""
        return [list(cmd) for cmd in v if cmd]

    def get_snapshot_path(self) -> Path:
        """Get the location of the persisted snapshot."""
        if self.snapshot_path:
            return Path(self.snapshot_path)
        return Path(self.home_dir) / self.snapshot_filename

    def get_default_root(self) -> str:
        """Get the root scanned when nothing else is known."""
        return self.default_root or self.home_dir

    def get_shell(self) -> str:
        """Get the shell to spawn, falling back to $SHELL and then /bin/sh."""
        return self.shell or os.environ.get('SHELL') or DEFAULT_SHELL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LcdConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Snapshot: {self.get_snapshot_path()}"]
        parts.append(f"Default root: {self.get_default_root()}")
        parts.append(f"Shell: {self.shell or '$SHELL'}")
        return " | ".join(parts)
