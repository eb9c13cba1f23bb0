"""
Hand-off actions for a resolved directory.

The engine produces a single path; this module either copies it to the
system clipboard or enters it by changing the working directory and
replacing the current process with an interactive shell.
"""

import os
import sys
import shutil
import logging
import subprocess
from typing import List, Optional

from ..models.config import LcdConfig


logger = logging.getLogger(__name__)


class LaunchError(Exception):
    """Raised when the resolved directory cannot be entered."""
    pass


class ClipboardError(Exception):
    """Raised when the resolved path cannot be copied to the clipboard."""
    pass


def find_clipboard_command(config: LcdConfig, platform: Optional[str] = None) -> List[str]:
    """
    Pick the clipboard command for the current platform.

    Args:
        config: Configuration holding the Linux clipboard candidates
        platform: Platform name, defaults to sys.platform

    Returns:
        Command line to run with the text on stdin

    Raises:
        ClipboardError: If no usable clipboard tool exists
    """
    platform = platform or sys.platform

    if platform == 'darwin':
        return ['pbcopy']

    if platform.startswith('linux'):
        for command in config.clipboard_commands:
            if shutil.which(command[0]):
                return command
        raise ClipboardError("no clipboard tool found")

    raise ClipboardError("unsupported OS")


def copy_to_clipboard(text: str, config: LcdConfig, platform: Optional[str] = None) -> None:
    """
    Copy text to the system clipboard.

    Raises:
        ClipboardError: If no clipboard tool is available or it fails
    """
    command = find_clipboard_command(config, platform)
    logger.debug(f"Copying to clipboard with {' '.join(command)}")

    try:
        subprocess.run(command, input=text, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise ClipboardError(f"{command[0]} failed: {e}") from e


def is_current_directory(target_path: str) -> bool:
    """Check whether target_path is already the working directory."""
    try:
        current_dir = os.getcwd()
    except OSError:
        return False
    return os.path.normpath(current_dir) == os.path.normpath(target_path)


def enter_directory(target_path: str, config: LcdConfig) -> bool:
    """
    Change into target_path and replace this process with an interactive shell.

    Leaving the shell with "exit" returns the user to the directory lcd was
    started from.

    Args:
        target_path: Directory to enter
        config: Configuration naming the shell

    Returns:
        False if the working directory already is target_path; otherwise does not return

    Raises:
        LaunchError: If the directory cannot be entered or the shell cannot be started
    """
    if is_current_directory(target_path):
        print(f"Already in: {target_path}")
        return False

    try:
        os.chdir(target_path)
    except OSError as e:
        raise LaunchError(f"Could not enter directory {target_path}: {e}") from e

    shell = config.get_shell()
    logger.debug(f"Spawning interactive shell {shell}")
    print(f"cd {target_path}", flush=True)

    try:
        os.execve(shell, [shell, '-i'], os.environ.copy())
    except OSError as e:
        raise LaunchError(f"Failed to spawn new shell: {e}") from e

    return True
