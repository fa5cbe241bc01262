"""User and group names from the platform identity database."""

from typing import List, Optional, Any, Dict
import logging

from fileshell.providers.base import VocabularyProvider, MatchMode

try:
    import grp
    import pwd
except ImportError:
    grp = None
    pwd = None

logger = logging.getLogger(__name__)


class UserProvider(VocabularyProvider):
    """Account names for ~name and chown completion."""

    match_mode = MatchMode.CASE_SENSITIVE

    @property
    def name(self) -> str:
        return "users"

    @property
    def description(self) -> str:
        return "User account names"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if pwd is None:
            logger.debug("No user database on this platform")
            return []
        return [entry.pw_name for entry in pwd.getpwall()]


class GroupProvider(VocabularyProvider):
    """Group names for the group half of chown completion."""

    match_mode = MatchMode.CASE_SENSITIVE

    @property
    def name(self) -> str:
        return "groups"

    @property
    def description(self) -> str:
        return "Group names"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if grp is None:
            logger.debug("No group database on this platform")
            return []
        return [entry.gr_name for entry in grp.getgrall()]
