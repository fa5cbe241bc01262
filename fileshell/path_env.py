"""Executable lookup in PATH and resolution of abbreviated command names."""

import os
import logging
from typing import Optional, List, Iterator

from fileshell.commands import extract_cmd_name
from fileshell.config import CompletionConfig
from fileshell.paths import contains_slash, expand_tilde, is_path_absolute
from fileshell.session import MatchSession
from fileshell.walker import EntryType, FilesystemWalker, is_executable

logger = logging.getLogger(__name__)


class AmbiguousCommandError(Exception):
    """Raised when a typed command prefix matches several executables."""

    def __init__(self, command: str, candidates: List[str]):
        self.command = command
        self.candidates = candidates
        super().__init__("Command beginning is ambiguous")


class PathSearchList:
    """Ordered, de-duplicated directories to search for executables."""

    def __init__(self, directories: Optional[List[str]] = None):
        self._directories: List[str] = []
        for directory in directories or []:
            self.add(directory)

    @classmethod
    def from_environ(cls, value: Optional[str] = None) -> "PathSearchList":
        """
        Build the list from a PATH-style string.

        Args:
            value: Search path (default: the PATH environment variable)

        Returns:
            PathSearchList
        """
        if value is None:
            value = os.environ.get("PATH", "")
        return cls(value.split(os.pathsep))

    def add(self, directory: str) -> None:
        if not directory:
            return
        directory = expand_tilde(directory)
        if directory not in self._directories:
            self._directories.append(directory)

    @property
    def directories(self) -> List[str]:
        return list(self._directories)

    def __iter__(self) -> Iterator[str]:
        return iter(self._directories)

    def __len__(self) -> int:
        return len(self._directories)


def find_in_path(cmd: str, search_list: Optional[PathSearchList] = None) -> Optional[str]:
    """
    Find an executable by searching directories in order.

    Args:
        cmd: Command name, returned as is when it contains a slash
        search_list: Directories to search (default: from PATH)

    Returns:
        Path of the first executable found or None
    """
    if contains_slash(cmd):
        return cmd

    if search_list is None:
        search_list = PathSearchList.from_environ()

    for directory in search_list:
        candidate = os.path.join(directory, cmd)
        if is_executable(candidate):
            return candidate

    logger.debug(f"Command not found in PATH: {cmd}")
    return None


def get_cmd_path(cmd: str, search_list: Optional[PathSearchList] = None) -> Optional[str]:
    """Path of cmd, a leading "!!" (run and pause) is ignored."""
    if cmd.startswith("!!"):
        cmd = cmd[2:]
    return find_in_path(cmd, search_list)


def external_command_exists(cmd: str, search_list: Optional[PathSearchList] = None) -> bool:
    path = get_cmd_path(cmd, search_list)
    return path is not None and is_executable(path)


def complete_command_name(
    session: MatchSession,
    beginning: str,
    search_list: Optional[PathSearchList] = None,
    config: Optional[CompletionConfig] = None
) -> None:
    """
    Add executables from every search directory whose name starts with beginning.

    Each directory forms its own group, the typed text is added once at the
    end as the echo entry.
    """
    if search_list is None:
        search_list = PathSearchList.from_environ()

    walker = FilesystemWalker(session, config)
    for directory in search_list:
        if not os.path.isdir(directory):
            logger.debug(f"Skipping missing PATH entry: {directory}")
            continue
        walker.complete(beginning, EntryType.EXEC_ONLY, base_dir=directory)

    session.add_echo_path_match(beginning)


def resolve_ambiguous_external(
    cmd_line: str,
    search_list: Optional[PathSearchList] = None,
    config: Optional[CompletionConfig] = None
) -> str:
    """
    Expand an abbreviated external command name.

    Args:
        cmd_line: Command line whose first word may be a prefix of a command

    Returns:
        Command line with the full command name spliced in, or unchanged
        when the typed name is absolute or already names a command

    Raises:
        AmbiguousCommandError: If several commands start with the typed name
            and none is equal to it
    """
    command, args = extract_cmd_name(cmd_line)

    if is_path_absolute(command):
        return cmd_line

    config = config or CompletionConfig()
    session = MatchSession(case_insensitive_paths=config.case_insensitive_paths)
    complete_command_name(session, command, search_list, config)
    session.merge_all_groups()

    candidates = [c.text for c in session.candidates]

    if len(candidates) > 1:
        for candidate in candidates:
            if candidate == command or (config.case_insensitive_paths and candidate.lower() == command.lower()):
                return cmd_line

        logger.warning(f"Command beginning is ambiguous: {command} ({len(candidates)} candidates)")
        raise AmbiguousCommandError(command, candidates)

    completed = session.next()
    if not args:
        return completed
    return f"{completed} {args}"
