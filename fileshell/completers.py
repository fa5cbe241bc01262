"""Completers for domains other than the file system."""

import re
import logging
from typing import Optional, List, Any, Dict

from fileshell.config import CompletionConfig
from fileshell.providers.base import VocabularyProvider, MatchMode
from fileshell.providers.expression import OptionProvider
from fileshell.providers.registry import VocabularyRegistry
from fileshell.session import MatchSession

logger = logging.getLogger(__name__)

_IDENTIFIER_TAIL = re.compile(r"[A-Za-z0-9_]*\Z")


class SpecializedCompleters:
    """
    Vocabulary-backed completers.

    Every completer adds the words matching the typed text, closes one
    group and appends the typed text as the echo entry. Completers that
    complete a sub-segment of their argument return the offset of that
    segment.
    """

    def __init__(self, registry: VocabularyRegistry, config: Optional[CompletionConfig] = None):
        self.registry = registry
        self.config = config or CompletionConfig()

    def matching_words(
        self,
        provider_name: str,
        text: str,
        context: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        """
        Words of a provider that match typed text.

        Args:
            provider_name: Registered provider name
            text: Typed text
            context: Optional request context for the provider

        Returns:
            Matching words, empty when the provider is not registered
        """
        provider = self.registry.get_provider(provider_name)
        if provider is None:
            logger.debug(f"No vocabulary named {provider_name}")
            return []
        return [w for w in provider.get_words(context) if self._word_matches(provider, w, text)]

    def _word_matches(self, provider: VocabularyProvider, word: str, text: str) -> bool:
        mode = provider.match_mode
        if mode is MatchMode.PLATFORM:
            mode = MatchMode.IGNORE_CASE if self.config.case_insensitive_paths else MatchMode.CASE_SENSITIVE

        if mode is MatchMode.SUBSTRING:
            return text in word
        if mode is MatchMode.IGNORE_CASE:
            return word.lower().startswith(text.lower())
        return word.startswith(text)

    def complete_from(
        self,
        session: MatchSession,
        provider_name: str,
        text: str,
        context: Optional[Dict[str, Any]] = None,
        suffix: str = ""
    ) -> None:
        """Complete text from a single vocabulary."""
        for word in self.matching_words(provider_name, text, context):
            session.add_match(word + suffix)
        session.finish_group()
        session.add_echo_match(text)

    def complete_history(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "history", text)

    def complete_invert(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "invert", text)

    def complete_winrun(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "winrun", text)

    def complete_help(self, session: MatchSession, text: str) -> None:
        """Help topics containing text, only when vim-style help is on."""
        if not self.config.use_vim_help:
            return
        self.complete_from(session, "help", text)

    def complete_user_name(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "users", text)

    def complete_group_name(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "groups", text)

    def complete_chown(self, session: MatchSession, text: str) -> int:
        """
        Complete "user[:group]".

        Returns:
            Offset of the part being completed within text
        """
        colon = text.find(":")
        if colon == -1:
            self.complete_user_name(session, text)
            return 0

        self.complete_group_name(session, text[colon + 1:])
        return colon + 1

    def complete_filetype(self, session: MatchSession, text: str, current_file: str) -> None:
        """Programs that can open current_file."""
        self.complete_from(session, "filetypes", text, {"current_file": current_file})

    def complete_colorschemes(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "colorschemes", text)

    def complete_envvar(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "environment", text)

    def complete_highlight_groups(self, session: MatchSession, text: str) -> None:
        self.complete_from(session, "highlight_groups", text)

    def complete_highlight_arg(self, session: MatchSession, text: str) -> int:
        """
        Complete one "attribute=value" argument of :highlight.

        Before "=" attribute names are completed. After it, cterm takes a
        comma separated list of styles (only the last element is completed),
        the other attributes take color names.

        Returns:
            Offset of the completed segment within text
        """
        equal = text.find("=")
        if equal == -1:
            self.complete_from(session, "highlight_attributes", text)
            return 0

        attribute = text[:equal]
        value = text[equal + 1:]
        offset = equal + 1

        if attribute.lower() == "cterm":
            comma = value.rfind(",")
            if comma != -1:
                offset += comma + 1
                value = value[comma + 1:]
            self.complete_from(session, "styles", value)
        else:
            self.complete_from(session, "colors", value)

        return offset

    def complete_options(self, session: MatchSession, text: str) -> None:
        """
        Option names for :set, including the no/inv forms of boolean options.
        """
        provider = self.registry.get_provider("options")
        words = ["all"]
        if provider is not None:
            words.extend(provider.get_words())
            booleans = provider.boolean_options() if isinstance(provider, OptionProvider) else []
            words.extend("no" + name for name in booleans)
            words.extend("inv" + name for name in booleans)

        for word in words:
            if word.startswith(text):
                session.add_match(word)
        session.finish_group()
        session.add_echo_match(text)

    def complete_real_option_names(self, session: MatchSession, text: str) -> None:
        """Plain option names, as used after "&" in expressions."""
        self.complete_from(session, "options", text)

    def complete_function_name(self, session: MatchSession, text: str) -> int:
        """
        Complete the function name that ends text.

        Returns:
            Offset where the function name starts within text
        """
        name = _IDENTIFIER_TAIL.search(text).group(0)
        self.complete_from(session, "functions", name, suffix="(")
        return len(text) - len(name)

    def complete_variables(self, session: MatchSession, text: str) -> int:
        """
        Complete a variable reference.

        "$NAME" completes environment variables, anything else completes
        declared variables such as v:count.

        Returns:
            Offset of the completed name within text
        """
        if text.startswith("$"):
            self.complete_envvar(session, text[1:])
            return 1

        self.complete_from(session, "variables", text)
        return 0
