"""Context-aware completion for file manager command lines."""

from fileshell.dispatcher import CompletionContext, CompletionDispatcher
from fileshell.session import MatchSession

__version__ = "0.1.0"

__all__ = ["CompletionContext", "CompletionDispatcher", "MatchSession"]
