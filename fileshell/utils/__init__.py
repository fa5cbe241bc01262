"""Utility modules for fileshell."""

from fileshell.utils.completion import FileShellCompleter
from fileshell.utils.logging import setup_logging

__all__ = [
    "FileShellCompleter",
    "setup_logging",
]
