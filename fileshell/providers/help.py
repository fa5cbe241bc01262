"""Help topics read from a vim-style tags file."""

import logging
from pathlib import Path
from typing import List, Optional, Any, Dict

from fileshell.providers.base import VocabularyProvider, MatchMode

logger = logging.getLogger(__name__)


class HelpTagsProvider(VocabularyProvider):
    """
    Help tags for :help completion.

    The tags file holds one "tag<TAB>file<TAB>address" record per line.
    Typed text matches anywhere inside a tag.
    """

    match_mode = MatchMode.SUBSTRING

    def __init__(self, tags_file: Optional[Path] = None, tags: Optional[List[str]] = None):
        self.tags_file = tags_file
        self._tags = list(tags) if tags is not None else None

    @property
    def name(self) -> str:
        return "help"

    @property
    def description(self) -> str:
        return "Help topics"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if self._tags is None:
            self._tags = self._read_tags()
        return list(self._tags)

    def _read_tags(self) -> List[str]:
        if self.tags_file is None:
            return []

        tags = []
        try:
            with open(self.tags_file, "r", encoding="utf-8") as f:
                for line in f:
                    tag = line.split("\t", 1)[0].strip()
                    if tag and not tag.startswith("!_TAG_"):
                        tags.append(tag)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read help tags: {e}")
            return []

        logger.debug(f"Loaded {len(tags)} help tags from {self.tags_file}")
        return tags
