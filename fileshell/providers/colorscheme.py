"""Color schemes declared in the colors directory."""

import os
import logging
from typing import List, Optional, Any, Dict

from fileshell.providers.base import VocabularyProvider, MatchMode

logger = logging.getLogger(__name__)

SCHEME_EXTENSION = ".vifm"


class ColorSchemeProvider(VocabularyProvider):
    """Names of the color scheme files found in a directory."""

    match_mode = MatchMode.PLATFORM

    def __init__(self, colors_dir: Optional[str] = None):
        self.colors_dir = colors_dir

    @property
    def name(self) -> str:
        return "colorschemes"

    @property
    def description(self) -> str:
        return "Declared color schemes"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if not self.colors_dir:
            return []

        try:
            with os.scandir(self.colors_dir) as entries:
                names = [e.name for e in entries if e.is_file() and not e.name.startswith(".")]
        except OSError as e:
            logger.debug(f"Cannot list color schemes in {self.colors_dir}: {e}")
            return []

        return [
            name[:-len(SCHEME_EXTENSION)] if name.endswith(SCHEME_EXTENSION) else name
            for name in names
        ]
