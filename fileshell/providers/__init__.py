"""Vocabulary providers for the specialized completers."""

from fileshell.providers.base import VocabularyProvider, KeywordProvider, MatchMode
from fileshell.providers.registry import VocabularyRegistry

__all__ = ["VocabularyProvider", "KeywordProvider", "MatchMode", "VocabularyRegistry"]
