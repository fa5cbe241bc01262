"""Registry of vocabulary providers."""

from pathlib import Path
from typing import Dict, List, Optional
import logging

from fileshell import colors
from fileshell.providers.base import VocabularyProvider, KeywordProvider

logger = logging.getLogger(__name__)

HISTORY_KINDS = (
    ".", "dir",
    "@", "input",
    "/", "search", "fsearch",
    "?", "bsearch",
    ":", "cmd",
    "=", "filter",
)

INVERT_FLAGS = ("f", "s", "o")

WINRUN_MARKERS = ("^", "$", "%", ".", ",")


def default_keyword_providers() -> List[VocabularyProvider]:
    """Static keyword tables used by the specialized completers."""
    return [
        KeywordProvider("history", "History kinds", HISTORY_KINDS),
        KeywordProvider("invert", "Selection inversion flags", INVERT_FLAGS),
        KeywordProvider("winrun", "Window run markers", WINRUN_MARKERS),
        KeywordProvider("highlight_groups", "Highlight groups", colors.HIGHLIGHT_GROUPS),
        KeywordProvider("highlight_attributes", "Highlight attributes", colors.HIGHLIGHT_ATTRIBUTES),
        KeywordProvider("styles", "Text styles", colors.STYLE_NAMES),
        KeywordProvider(
            "colors",
            "Color names",
            colors.COLOR_SENTINELS + colors.COLOR_NAMES + colors.LIGHT_COLOR_NAMES,
        ),
    ]


class VocabularyRegistry:
    """
    Central registry of the vocabularies completers draw from.

    Providers are read-only once registered, the dispatcher only looks
    them up by name.
    """

    def __init__(self):
        self._providers: Dict[str, VocabularyProvider] = {}

    def register(self, provider: VocabularyProvider) -> None:
        """
        Register a provider.

        Args:
            provider: Provider instance to register
        """
        provider_name = provider.name

        if provider_name in self._providers:
            logger.warning(f"Provider {provider_name} already registered, overwriting")

        self._providers[provider_name] = provider
        logger.debug(f"Registered vocabulary: {provider_name}")

    def get_provider(self, name: str) -> Optional[VocabularyProvider]:
        """Get a provider by name."""
        return self._providers.get(name)

    def get_all_providers(self) -> List[VocabularyProvider]:
        """Get all registered providers."""
        return list(self._providers.values())

    def auto_discover(self, config=None) -> None:
        """
        Register the keyword tables and every dynamic vocabulary.

        Args:
            config: Optional CompletionConfig supplying the declared
                options, variables, functions, associations and paths
        """
        from fileshell.config import CompletionConfig
        from fileshell.providers.accounts import UserProvider, GroupProvider
        from fileshell.providers.colorscheme import ColorSchemeProvider
        from fileshell.providers.environment import EnvironmentProvider
        from fileshell.providers.expression import OptionProvider, VariableProvider, FunctionProvider
        from fileshell.providers.filetype import FileTypeProvider
        from fileshell.providers.help import HelpTagsProvider

        if config is None:
            config = CompletionConfig()

        tags_file = Path(config.help_tags_file) if config.help_tags_file else None

        providers = default_keyword_providers() + [
            UserProvider(),
            GroupProvider(),
            EnvironmentProvider(),
            FileTypeProvider(config.filetypes, config.mime_handlers),
            ColorSchemeProvider(config.colors_dir),
            OptionProvider(config.options),
            VariableProvider(config.variables),
            FunctionProvider(config.functions),
            HelpTagsProvider(tags_file),
        ]

        for provider in providers:
            self.register(provider)

        logger.info(f"Auto-discovered {len(providers)} vocabularies")
