"""Programs associated with a file, by name pattern and by content type."""

import fnmatch
import mimetypes
import logging
from typing import List, Optional, Any, Dict

from fileshell.commands import extract_cmd_name
from fileshell.providers.base import VocabularyProvider, MatchMode

logger = logging.getLogger(__name__)


def escape_chars(text: str, chars: str) -> str:
    """Put a backslash in front of every character listed in chars."""
    return "".join("\\" + c if c in chars else c for c in text)


class FileTypeProvider(VocabularyProvider):
    """
    Program names that can open the current file.

    Names come from two tables: glob patterns of file names (several
    patterns may be joined with commas) and MIME types guessed for the file,
    where MIME keys may use wildcards such as "image/*".
    """

    match_mode = MatchMode.PLATFORM

    def __init__(
        self,
        associations: Optional[Dict[str, List[str]]] = None,
        mime_handlers: Optional[Dict[str, List[str]]] = None
    ):
        self.associations = associations or {}
        self.mime_handlers = mime_handlers or {}

    @property
    def name(self) -> str:
        return "filetypes"

    @property
    def description(self) -> str:
        return "Programs associated with the current file"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        fname = (context or {}).get("current_file") or ""
        commands = self.association_commands(fname) + self.mime_commands(fname)
        return [self._program_name(command) for command in commands]

    def association_commands(self, fname: str) -> List[str]:
        commands = []
        for patterns, programs in self.associations.items():
            for pattern in patterns.split(","):
                if pattern and fnmatch.fnmatch(fname, pattern.strip()):
                    commands.extend(programs)
                    break
        return commands

    def mime_commands(self, fname: str) -> List[str]:
        if not fname:
            return []

        mime_type, _ = mimetypes.guess_type(fname)
        if mime_type is None:
            logger.debug(f"Unknown content type for {fname}")
            return []

        commands = []
        for pattern, programs in self.mime_handlers.items():
            if fnmatch.fnmatchcase(mime_type, pattern):
                commands.extend(programs)
        return commands

    @staticmethod
    def _program_name(command: str) -> str:
        name, _ = extract_cmd_name(command)
        return escape_chars(name, "|")
