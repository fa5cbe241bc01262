"""Base vocabulary provider protocol."""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import List, Optional, Any, Dict


class MatchMode(Enum):
    """How typed text is compared with vocabulary words."""
    CASE_SENSITIVE = auto()
    IGNORE_CASE = auto()
    PLATFORM = auto()    # follows the file system's case rules
    SUBSTRING = auto()


class VocabularyProvider(ABC):
    """
    Abstract base class for completion vocabularies.

    A provider is a read-only source of words for one completion domain
    (option names, user names, color names, ...). Adding a domain means
    adding a provider, the completers only ever see this interface.
    """

    match_mode: MatchMode = MatchMode.CASE_SENSITIVE

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique provider name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable provider description."""
        pass

    @abstractmethod
    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        """
        Get the vocabulary.

        Args:
            context: Optional request context (current file name and such)

        Returns:
            List of words in preferred order
        """
        pass


class KeywordProvider(VocabularyProvider):
    """Provider backed by a fixed keyword table."""

    match_mode = MatchMode.IGNORE_CASE

    def __init__(self, name: str, description: str, words, match_mode: Optional[MatchMode] = None):
        self._name = name
        self._description = description
        self._words = list(words)
        if match_mode is not None:
            self.match_mode = match_mode

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        return list(self._words)
