"""Filesystem completion: directory entries matching a typed path fragment."""

import os
from enum import Enum, auto
from typing import Optional, List
import logging

from fileshell.config import CompletionConfig
from fileshell.paths import (
    IS_WINDOWS,
    chosp,
    expand_envvars,
    expand_tilde,
    is_path_absolute,
    is_root_dir,
)
from fileshell.session import MatchSession

logger = logging.getLogger(__name__)


class EntryType(Enum):
    """Which directory entries a walk offers."""
    DIR_ONLY = auto()
    EXEC_ONLY = auto()
    DIR_EXEC = auto()
    ALL = auto()
    ALL_WOS = auto()    # all, without a trailing slash on directories


def is_executable(path: str) -> bool:
    """
    Check whether path names an executable regular file.

    Symbolic links are followed, links to anything that is not a regular
    file do not count.
    """
    if not os.path.isfile(path):
        return False

    if IS_WINDOWS:
        extensions = os.environ.get("PATHEXT", ".COM;.EXE;.BAT;.CMD").lower().split(";")
        return os.path.splitext(path)[1].lower() in extensions

    return os.access(path, os.X_OK)


class _Entry:
    """Directory entry as far as completion is concerned."""

    __slots__ = ("name", "path", "is_dir")

    def __init__(self, name: str, path: str, is_dir: bool):
        self.name = name
        self.path = path
        self.is_dir = is_dir

    @property
    def is_exec(self) -> bool:
        return not self.is_dir and is_executable(self.path)


class FilesystemWalker:
    """
    Completes path fragments against directory contents.

    Relative fragments are resolved against base_dir rather than the
    process working directory, which is never changed. Directory reads are
    synchronous, so completing inside a slow network mount blocks the
    caller until the read returns.
    """

    def __init__(
        self,
        session: MatchSession,
        config: Optional[CompletionConfig] = None,
        base_dir: Optional[str] = None
    ):
        """
        Initialize walker.

        Args:
            session: Session receiving the matches
            config: Completion config (home directory, case rules)
            base_dir: Directory relative fragments start from (default: cwd)
        """
        self.session = session
        self.config = config or CompletionConfig()
        self.base_dir = base_dir

    def complete(self, text: str, entry_type: EntryType, base_dir: Optional[str] = None) -> None:
        """
        Add path matches for text to the session.

        Args:
            text: Path fragment as typed
            entry_type: Filter applied to directory entries
            base_dir: Overrides the walker's base directory for this call
        """
        home_dir = self.config.home_dir

        if text.startswith("~") and "/" not in text:
            expanded = expand_tilde(text, home_dir)
            if expanded != text:
                expanded = chosp(expanded) + "/"
            self.session.add_path_match(expanded)
            return

        expanded = expand_tilde(text, home_dir)
        filename = expanded
        dirname = expand_envvars(expanded)

        slash = dirname.rfind("/")
        if slash != -1:
            filename = dirname[slash + 1:]
            dirname = dirname[:slash + 1]
        else:
            dirname = "."

        directory = self._resolve(dirname, base_dir)

        try:
            entries = self._read_directory(directory)
        except OSError as e:
            logger.debug(f"Cannot complete in {directory}: {e}")
            self.session.add_path_match(filename)
            return

        self._add_entries(entries, filename, entry_type)

    def complete_in_dir(self, path: str, text: str, entry_type: EntryType) -> None:
        """Complete text as if it were typed inside directory path."""
        if is_root_dir(text) or is_path_absolute(text) or text.startswith("~"):
            self.complete(text, entry_type)
        else:
            self.complete(text, entry_type, base_dir=path)

    def _resolve(self, dirname: str, base_dir: Optional[str]) -> str:
        if is_path_absolute(dirname):
            return dirname
        base = base_dir or self.base_dir or os.getcwd()
        return os.path.join(base, dirname)

    def _read_directory(self, directory: str) -> List[_Entry]:
        if not os.path.isdir(directory):
            raise NotADirectoryError(f"Not a directory: {directory}")

        entries = [
            _Entry(".", os.path.join(directory, "."), True),
            _Entry("..", os.path.join(directory, ".."), True),
        ]
        with os.scandir(directory) as it:
            for dirent in it:
                try:
                    is_dir = dirent.is_dir()
                except OSError:
                    is_dir = False
                entries.append(_Entry(dirent.name, dirent.path, is_dir))
        return entries

    def _matches(self, name: str, prefix: str) -> bool:
        if self.config.case_insensitive_paths:
            return name.lower().startswith(prefix.lower())
        return name.startswith(prefix)

    def _accepts(self, entry: _Entry, entry_type: EntryType) -> bool:
        if entry_type is EntryType.DIR_ONLY:
            return entry.is_dir
        if entry_type is EntryType.EXEC_ONLY:
            return entry.is_exec
        if entry_type is EntryType.DIR_EXEC:
            return entry.is_dir or entry.is_exec
        return True

    def _add_entries(self, entries: List[_Entry], filename: str, entry_type: EntryType) -> None:
        for entry in entries:
            if not filename and entry.name.startswith("."):
                continue
            if not self._matches(entry.name, filename):
                continue
            if not self._accepts(entry, entry_type):
                continue

            if entry.is_dir and entry_type is not EntryType.ALL_WOS:
                self.session.add_path_match(entry.name + "/")
            else:
                self.session.add_path_match(entry.name)

        self.session.finish_group()
        if entry_type is not EntryType.EXEC_ONLY:
            self.session.add_echo_path_match(filename)

