"""Shared fixtures."""

import stat

import pytest
from fileshell.config import CompletionConfig


def make_executable(path):
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def tree(tmp_path):
    """Directory with src/, srv/, bin/, a script, a plain file and a dotfile."""
    for name in ("src", "srv", "bin"):
        (tmp_path / name).mkdir()
    make_executable(tmp_path / "script.sh")
    (tmp_path / "readme.txt").write_text("hello\n")
    (tmp_path / ".hidden").write_text("")
    return tmp_path


@pytest.fixture
def bin_dir(tmp_path_factory):
    """Search directory holding vim, vimdiff and vimtutor."""
    directory = tmp_path_factory.mktemp("path_bin")
    for name in ("vim", "vimdiff", "vimtutor"):
        make_executable(directory / name)
    (directory / "vimrc").write_text("")
    return directory


@pytest.fixture
def config():
    return CompletionConfig(home_dir="/home/tester", case_insensitive_paths=False)


