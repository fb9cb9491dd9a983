"""Tests for the external archiver call."""
import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from solution_packer.archiver import build_command, run_archiver
from solution_packer.exceptions import ArchiverError
from solution_packer.types import ArchiveEntry


class TestBuildCommand:
    def test_argument_shape(self):
        args = build_command(
            "jar",
            Path("/work/ex_01/solution/solution_01.zip"),
            [
                ArchiveEntry(Path("/work/ex_01/solution"), "Main.java"),
                ArchiveEntry(Path("/etc/notes"), "NOTE.txt"),
            ],
        )
        assert args == [
            "jar", "cvf", str(Path("/work/ex_01/solution/solution_01.zip")),
            "-C", str(Path("/work/ex_01/solution")), "Main.java",
            "-C", str(Path("/etc/notes")), "NOTE.txt",
        ]

    def test_special_characters_stay_single_arguments(self):
        args = build_command("jar", Path("out.zip"), [ArchiveEntry(Path("a b"), "x; rm -rf y.java")])
        assert args[-1] == "x; rm -rf y.java"
        assert args[-2] == "a b"


class TestRunArchiver:
    def test_runs_without_shell(self):
        completed = Mock(stdout="added manifest\n")
        with patch("solution_packer.archiver.subprocess.run", return_value=completed) as run:
            assert run_archiver(["jar", "cvf", "out.zip"]) is completed
        run.assert_called_once_with(
            ["jar", "cvf", "out.zip"], check=True, capture_output=True, text=True
        )

    def test_non_zero_exit(self):
        err = subprocess.CalledProcessError(1, ["jar"], output="", stderr="bad entry")
        with patch("solution_packer.archiver.subprocess.run", side_effect=err):
            with pytest.raises(ArchiverError, match="bad entry"):
                run_archiver(["jar", "cvf", "out.zip"])

    def test_missing_executable(self):
        with patch("solution_packer.archiver.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ArchiverError, match="not found"):
                run_archiver(["no-such-archiver", "cvf", "out.zip"])
