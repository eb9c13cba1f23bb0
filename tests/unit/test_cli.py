"""
Unit tests for the command line interface.

Tests the scan/search orchestration, exit codes and the print, copy and
enter-directory actions. HOME points at a temporary tree so the default
snapshot location and scan root stay inside it.
"""

import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch
import pytest

from lcd import __version__
from lcd.cli import build_arg_parser, run
from lcd.tools.errors import SnapshotIOError
from lcd.tools.launcher import ClipboardError, LaunchError


class TestArgParser:
    """Test cases for flag parsing."""

    def test_defaults(self):
        args = build_arg_parser().parse_args([])

        assert args.terms == []
        assert not args.verbose
        assert not args.print_only
        assert not args.copy_to_clip
        assert not args.rescan
        assert args.newbasedir is None
        assert args.config is None

    def test_flags(self):
        args = build_arg_parser().parse_args(["-v", "--print", "--rescan", "--newbasedir", "/srv", "my", "docs"])

        assert args.verbose
        assert args.print_only
        assert args.rescan
        assert args.newbasedir == "/srv"
        assert args.terms == ["my", "docs"]


class TestRun:
    """Test cases for the run() entry point."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.home = Path(self.temp_dir) / "home"
        for directory in ["projects/app/vendor/app", "Documents/My Notes", "repo/.git/objects"]:
            (self.home / directory).mkdir(parents=True)
        self.snapshot_path = self.home / ".lcd-tree.txt"
        self.env_patch = patch.dict(os.environ, {'HOME': str(self.home)})
        self.env_patch.start()

    def teardown_method(self):
        self.env_patch.stop()
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _header(self):
        return self.snapshot_path.read_text(encoding='utf-8').splitlines()[0]

    def test_first_run_scans_home(self, capsys):
        assert not self.snapshot_path.exists()

        assert run(["--print", "app"]) == 0

        out, err = capsys.readouterr()
        assert out.strip() == str(self.home / "projects" / "app")
        assert f"(Re-)Scanning directory tree from {self.home}" in err
        assert self._header() == str(self.home)

    def test_existing_snapshot_is_reused(self, capsys):
        run(["--print", "app"])
        (self.home / "fresh").mkdir()
        capsys.readouterr()

        assert run(["--print", "fresh"]) == 1

        out, err = capsys.readouterr()
        assert "Scanning" not in err
        assert "Error: directory not found: fresh" in err

    def test_rescan_picks_up_new_directories(self, capsys):
        run(["--print", "app"])
        (self.home / "fresh").mkdir()
        capsys.readouterr()

        assert run(["--rescan", "--print", "fresh"]) == 0
        assert capsys.readouterr().out.strip() == str(self.home / "fresh")

    def test_rescan_keeps_stored_root(self, capsys):
        projects = self.home / "projects"
        run(["--newbasedir", str(projects)])

        assert run(["--rescan"]) == 1

        assert self._header() == str(projects)
        assert "Database updated." in capsys.readouterr().err

    def test_newbasedir_rescans(self, capsys):
        run(["--print", "app"])
        capsys.readouterr()

        assert run(["--newbasedir", str(self.home / "Documents"), "--print", "notes"]) == 0

        assert capsys.readouterr().out.strip() == str(self.home / "Documents" / "My Notes")
        assert self._header() == str(self.home / "Documents")

    def test_scan_without_term(self, capsys):
        assert run(["--rescan"]) == 1

        assert "Database updated." in capsys.readouterr().err
        assert self.snapshot_path.exists()

    def test_missing_term(self, capsys):
        run(["--rescan"])
        capsys.readouterr()

        assert run([]) == 1
        assert "Error: Please provide a directory name to search for." in capsys.readouterr().err

    def test_multi_word_term(self, capsys):
        assert run(["--print", "my", "notes"]) == 0
        assert capsys.readouterr().out.strip() == str(self.home / "Documents" / "My Notes")

    def test_git_contents_not_found(self, capsys):
        assert run(["--print", "objects"]) == 1
        assert "Error: directory not found: objects" in capsys.readouterr().err

    def test_bad_newbasedir(self, capsys):
        assert run(["--newbasedir", str(self.home / "missing"), "app"]) == 1
        assert "Error: Error generating database: Root directory does not exist" in capsys.readouterr().err

    def test_unreadable_snapshot(self, capsys):
        run(["--rescan"])
        capsys.readouterr()

        with patch('lcd.cli.SnapshotResolver.resolve', side_effect=SnapshotIOError("could not open database: boom")):
            assert run(["--print", "app"]) == 1

        assert "Error: could not open database: boom" in capsys.readouterr().err

    def test_version(self, capsys):
        assert run(["--version"]) == 1
        assert capsys.readouterr().out.strip() == f"lcd version {__version__}"

    def test_help(self, capsys):
        assert run(["--help"]) == 1
        out = capsys.readouterr().out
        assert "usage: lcd [options] <directory_name_or_fragment>" in out
        assert "--newbasedir" in out

    def test_copy(self, capsys):
        with patch('lcd.cli.copy_to_clipboard') as mock_copy:
            assert run(["--copy", "app"]) == 0

        expected = str(self.home / "projects" / "app")
        assert mock_copy.call_args[0][0] == expected
        assert f"Copied to clipboard: {expected}" in capsys.readouterr().out

    def test_copy_failure(self, capsys):
        with patch('lcd.cli.copy_to_clipboard', side_effect=ClipboardError("no clipboard tool found")):
            assert run(["--copy", "app"]) == 1

        assert "Error: Failed to copy to clipboard: no clipboard tool found" in capsys.readouterr().err

    def test_enter_directory_is_default_action(self):
        with patch('lcd.cli.enter_directory') as mock_enter:
            assert run(["app"]) == 0

        assert mock_enter.call_args[0][0] == str(self.home / "projects" / "app")

    def test_enter_directory_failure(self, capsys):
        with patch('lcd.cli.enter_directory', side_effect=LaunchError("Failed to spawn new shell: boom")):
            assert run(["app"]) == 1

        assert "Error: Failed to spawn new shell: boom" in capsys.readouterr().err

    def test_config_file_sets_default_root(self, capsys):
        config_path = self.home / ".lcd.yaml"
        config_path.write_text(f"default_root: {self.home / 'projects'}\n", encoding='utf-8')

        assert run(["--rescan"]) == 1

        assert self._header() == str(self.home / "projects")

    def test_missing_config_file(self, capsys):
        assert run(["--config", str(self.home / "nope.yaml"), "app"]) == 1
        assert "Error: Configuration file not found" in capsys.readouterr().err
