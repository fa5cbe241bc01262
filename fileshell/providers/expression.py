"""Options, variables and functions declared by the expression engine."""

from typing import List, Optional, Any, Dict

from fileshell.providers.base import VocabularyProvider, MatchMode


class OptionProvider(VocabularyProvider):
    """Option names with their value types."""

    match_mode = MatchMode.CASE_SENSITIVE

    def __init__(self, options: Optional[Dict[str, str]] = None):
        self.options = dict(options or {})

    @property
    def name(self) -> str:
        return "options"

    @property
    def description(self) -> str:
        return "Option names"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        return list(self.options)

    def boolean_options(self) -> List[str]:
        """Options that take the no/inv prefixes."""
        return [name for name, kind in self.options.items() if kind == "bool"]


class VariableProvider(VocabularyProvider):
    """Variable names such as v:count or g:name."""

    match_mode = MatchMode.CASE_SENSITIVE

    def __init__(self, variables: Optional[List[str]] = None):
        self.variables = list(variables or [])

    @property
    def name(self) -> str:
        return "variables"

    @property
    def description(self) -> str:
        return "Declared variables"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        return list(self.variables)


class FunctionProvider(VocabularyProvider):
    """Builtin function names."""

    match_mode = MatchMode.CASE_SENSITIVE

    def __init__(self, functions: Optional[List[str]] = None):
        self.functions = list(functions or [])

    @property
    def name(self) -> str:
        return "functions"

    @property
    def description(self) -> str:
        return "Builtin functions"

    def get_words(self, context: Optional[Dict[str, Any]] = None) -> List[str]:
        return list(self.functions)
