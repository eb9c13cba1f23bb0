"""
Unit tests for the clipboard and shell hand-off actions.
"""

import os
import tempfile
import shutil
import subprocess
from unittest.mock import patch, MagicMock
import pytest

from lcd.models.config import LcdConfig
from lcd.tools.launcher import (
    ClipboardError,
    LaunchError,
    copy_to_clipboard,
    enter_directory,
    find_clipboard_command,
    is_current_directory
)


class TestClipboard:
    """Test cases for clipboard support."""

    def setup_method(self):
        self.config = LcdConfig(home_dir="/home/alice")

    def test_macos_uses_pbcopy(self):
        assert find_clipboard_command(self.config, platform='darwin') == ['pbcopy']

    def test_linux_prefers_xclip(self):
        with patch('lcd.tools.launcher.shutil.which', return_value='/usr/bin/xclip'):
            command = find_clipboard_command(self.config, platform='linux')
        assert command == ['xclip', '-selection', 'clipboard']

    def test_linux_falls_back_to_wl_copy(self):
        with patch('lcd.tools.launcher.shutil.which', side_effect=lambda name: name == 'wl-copy' and '/usr/bin/wl-copy' or None):
            command = find_clipboard_command(self.config, platform='linux')
        assert command == ['wl-copy']

    def test_linux_without_tools(self):
        with patch('lcd.tools.launcher.shutil.which', return_value=None):
            with pytest.raises(ClipboardError, match="no clipboard tool found"):
                find_clipboard_command(self.config, platform='linux')

    def test_unsupported_platform(self):
        with pytest.raises(ClipboardError, match="unsupported OS"):
            find_clipboard_command(self.config, platform='win32')

    def test_copy_feeds_stdin(self):
        with patch('lcd.tools.launcher.subprocess.run') as mock_run:
            copy_to_clipboard("/a/proj", self.config, platform='darwin')

        mock_run.assert_called_once_with(['pbcopy'], input="/a/proj", text=True, check=True)

    def test_copy_failure(self):
        error = subprocess.CalledProcessError(1, ['pbcopy'])
        with patch('lcd.tools.launcher.subprocess.run', side_effect=error):
            with pytest.raises(ClipboardError, match="pbcopy failed"):
                copy_to_clipboard("/a/proj", self.config, platform='darwin')


class TestEnterDirectory:
    """Test cases for entering the resolved directory."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.original_cwd = os.getcwd()
        self.config = LcdConfig(home_dir=self.temp_dir, shell="/bin/test-shell")

    def teardown_method(self):
        os.chdir(self.original_cwd)
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_is_current_directory(self):
        os.chdir(self.temp_dir)
        cwd = os.getcwd()
        assert is_current_directory(cwd)
        assert is_current_directory(cwd + os.sep)
        assert not is_current_directory(os.path.join(cwd, "other"))

    def test_already_in_directory(self, capsys):
        os.chdir(self.temp_dir)

        with patch('lcd.tools.launcher.os.execve') as mock_execve:
            assert enter_directory(os.getcwd(), self.config) is False

        mock_execve.assert_not_called()
        assert "Already in:" in capsys.readouterr().out

    def test_changes_directory_and_execs_shell(self, capsys):
        target = os.path.join(self.temp_dir, "target")
        os.mkdir(target)

        with patch('lcd.tools.launcher.os.execve') as mock_execve:
            enter_directory(target, self.config)

        assert os.path.samefile(os.getcwd(), target)
        args = mock_execve.call_args[0]
        assert args[0] == "/bin/test-shell"
        assert args[1] == ["/bin/test-shell", "-i"]
        assert f"cd {target}" in capsys.readouterr().out

    def test_missing_directory(self):
        with patch('lcd.tools.launcher.os.execve') as mock_execve:
            with pytest.raises(LaunchError, match="Could not enter directory"):
                enter_directory(os.path.join(self.temp_dir, "missing"), self.config)

        mock_execve.assert_not_called()

    def test_shell_failure(self):
        target = os.path.join(self.temp_dir, "target")
        os.mkdir(target)

        with patch('lcd.tools.launcher.os.execve', side_effect=FileNotFoundError(2, "No such file")):
            with pytest.raises(LaunchError, match="Failed to spawn new shell"):
                enter_directory(target, self.config)
