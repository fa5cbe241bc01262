"""Names of the live process environment variables."""

import os
from typing import List, Optional, Any, Dict

from fileshell.providers.base import VocabularyProvider, MatchMode


class EnvironmentProvider(VocabularyProvider):
    """Environment variable names, read on every request."""

    match_mode = MatchMode.CASE_SENSITIVE

    @property
    def name(self) -> str:
        return "environment"

    @property
    def description(self) -> str:
        return "Environment variable names"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        return list(os.environ)
