"""Completion context classification and dispatch."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple
import logging

from fileshell.commands import (
    CommandId,
    CompletionRequest,
    PreProcessing,
    QUOTE_CHARS,
    command_accepts_expr,
    cmd_ends_with_space,
    expand_dquotes_escaping,
    expand_squotes_escaping,
)
from fileshell.completers import SpecializedCompleters
from fileshell.config import CompletionConfig
from fileshell.path_env import PathSearchList, complete_command_name
from fileshell.providers.registry import VocabularyRegistry
from fileshell.session import MatchSession
from fileshell.walker import EntryType, FilesystemWalker

logger = logging.getLogger(__name__)


@dataclass
class CompletionContext:
    """Read-only collaborators a completion request is answered from."""
    registry: VocabularyRegistry
    config: CompletionConfig = field(default_factory=CompletionConfig)
    current_dir: Optional[str] = None
    other_dir: Optional[str] = None
    current_file: str = ""
    search_list: Optional[PathSearchList] = None


@dataclass
class OperatorScan:
    """
    Positions of the operators that decide the completion domain.

    All positions index the request line, -1 means absent. slash is looked
    for from the start of the current argument, dollar and ampersand only
    after the last space.
    """
    arg: str
    arg_start: int
    slash: int
    dollar: int
    ampersand: int

    @classmethod
    def of(cls, request: CompletionRequest) -> "OperatorScan":
        line = request.line
        arg_start = line.rfind(" ") + 1
        slash = line.rfind("/", request.arg_pos)
        dollar = line.rfind("$", arg_start)
        ampersand = line.rfind("&", arg_start)
        return cls(line[arg_start:], arg_start, slash, dollar, ampersand)


class ExpressionTarget(Enum):
    """What the tail of an expression argument names."""
    OPTION = auto()
    FUNCTION = auto()
    VARIABLE = auto()


def classify_expression(arg: str) -> Tuple[ExpressionTarget, int]:
    """
    Decide what to complete inside an expression.

    An "&" that comes after the last "$" starts an option name, no "$" at
    all means a function name, otherwise a variable starts at the "$".

    Returns:
        Tuple of (target, offset within arg where the completed text starts)
    """
    dollar = arg.rfind("$")
    ampersand = arg.rfind("&")

    if ampersand > dollar:
        return ExpressionTarget.OPTION, ampersand + 1
    if dollar == -1:
        return ExpressionTarget.FUNCTION, 0
    return ExpressionTarget.VARIABLE, dollar


def _commands(*ids: CommandId) -> Callable[[CompletionRequest, OperatorScan], bool]:
    wanted = frozenset(ids)
    return lambda request, scan: request.command in wanted


def _first_argument(request: CompletionRequest) -> bool:
    return request.argc == 0 or (request.argc == 1 and not cmd_ends_with_space(request.line))


Handler = Callable[[MatchSession, CompletionRequest, OperatorScan], int]


class CompletionDispatcher:
    """
    Routes a completion request to the completer for its context.

    There is no grammar for command arguments, so the domain is picked from
    the command family and the positions of the last "/", "$" and "&" in the
    argument. The rules are tried in order and the first match wins.
    Anything unmatched is completed as a file name.
    """

    def __init__(self, context: CompletionContext):
        """
        Initialize dispatcher.

        Args:
            context: Vocabularies, pane directories and config to complete from
        """
        self.context = context
        self.completers = SpecializedCompleters(context.registry, context.config)

        self._rules: List[Tuple[Callable[[CompletionRequest, OperatorScan], bool], Handler]] = [
            (_commands(CommandId.SET), self._complete_set),
            (lambda request, scan: command_accepts_expr(request.command), self._complete_expression),
            (_commands(CommandId.UNLET), self._complete_unlet),
            (_commands(CommandId.HELP), self._complete_help),
            (_commands(CommandId.HISTORY), self._complete_history),
            (_commands(CommandId.INVERT), self._complete_invert),
            (_commands(CommandId.CHOWN), self._complete_chown),
            (_commands(CommandId.FILE), self._complete_filetype),
            (_commands(CommandId.HIGHLIGHT), self._complete_highlight),
            (self._wants_envvar, self._complete_envvar),
            (_commands(CommandId.WINDO), self._complete_nothing),
            (_commands(CommandId.WINRUN), self._complete_winrun),
        ]

        self._path_handlers = {
            CommandId.COLORSCHEME: self._path_colorscheme,
            CommandId.CD: self._path_dir_only,
            CommandId.PUSHD: self._path_dir_only,
            CommandId.SYNC: self._path_dir_only,
            CommandId.MKDIR: self._path_dir_only,
            CommandId.COPY: self._path_other_pane,
            CommandId.MOVE: self._path_other_pane,
            CommandId.ALINK: self._path_other_pane,
            CommandId.RLINK: self._path_other_pane,
            CommandId.SPLIT: self._path_current_pane,
            CommandId.VSPLIT: self._path_current_pane,
            CommandId.FIND: self._path_find,
            CommandId.SHELL: self._path_execute,
            CommandId.TOUCH: self._path_without_slash,
            CommandId.RENAME: self._path_without_slash,
        }

    def complete(self, session: MatchSession, request: CompletionRequest) -> int:
        """
        Fill session with candidates for the request.

        Args:
            session: Session to populate, reset by the caller
            request: What is being completed

        Returns:
            Index in request.line where the chosen candidate is spliced in
        """
        scan = OperatorScan.of(request)

        for predicate, handler in self._rules:
            if predicate(request, scan):
                return handler(session, request, scan)

        return self._complete_path(session, request, scan)

    def _wants_envvar(self, request: CompletionRequest, scan: OperatorScan) -> bool:
        if request.command not in (CommandId.CD, CommandId.PUSHD, CommandId.SHELL, CommandId.SOURCE):
            return False
        return scan.dollar != -1 and scan.dollar > scan.slash

    def _complete_set(self, session, request, scan) -> int:
        self.completers.complete_options(session, scan.arg)
        return scan.arg_start

    def _complete_expression(self, session, request, scan) -> int:
        target, offset = classify_expression(scan.arg)
        start = scan.arg_start + offset

        if target is ExpressionTarget.OPTION:
            self.completers.complete_real_option_names(session, scan.arg[offset:])
            return start
        if target is ExpressionTarget.FUNCTION:
            return start + self.completers.complete_function_name(session, scan.arg)
        return start + self.completers.complete_variables(session, scan.arg[offset:])

    def _complete_unlet(self, session, request, scan) -> int:
        return scan.arg_start + self.completers.complete_variables(session, scan.arg)

    def _complete_help(self, session, request, scan) -> int:
        self.completers.complete_help(session, scan.arg)
        return scan.arg_start

    def _complete_history(self, session, request, scan) -> int:
        self.completers.complete_history(session, request.line)
        return 0

    def _complete_invert(self, session, request, scan) -> int:
        self.completers.complete_invert(session, request.line)
        return 0

    def _complete_chown(self, session, request, scan) -> int:
        return scan.arg_start + self.completers.complete_chown(session, scan.arg)

    def _complete_filetype(self, session, request, scan) -> int:
        self.completers.complete_filetype(session, scan.arg, self.context.current_file)
        return scan.arg_start

    def _complete_highlight(self, session, request, scan) -> int:
        if _first_argument(request):
            self.completers.complete_highlight_groups(session, scan.arg)
            return scan.arg_start
        return scan.arg_start + self.completers.complete_highlight_arg(session, scan.arg)

    def _complete_envvar(self, session, request, scan) -> int:
        start = scan.dollar + 1
        self.completers.complete_envvar(session, request.line[start:])
        return start

    def _complete_nothing(self, session, request, scan) -> int:
        return scan.arg_start

    def _complete_winrun(self, session, request, scan) -> int:
        if _first_argument(request):
            self.completers.complete_winrun(session, scan.arg)
        return scan.arg_start

    def _complete_path(self, session: MatchSession, request: CompletionRequest, scan: OperatorScan) -> int:
        line = request.line
        start = scan.slash + 1 if scan.slash != -1 else request.arg_pos
        arg = scan.arg
        arg_num = request.argc

        if request.argc > 0 and not cmd_ends_with_space(line):
            if line[-1:] in QUOTE_CHARS:
                logger.debug("Not completing at an open quote")
                return start
            arg_num = request.argc - 1
            arg = request.argv[arg_num]

        if request.preprocessing is not PreProcessing.NONE:
            quoted = line[request.arg_pos + 1:]
            start = scan.slash + 1 if scan.slash != -1 else request.arg_pos + 1
            if request.preprocessing is PreProcessing.SQUOTES_UNESCAPE:
                arg = expand_squotes_escaping(quoted)
            else:
                arg = expand_dquotes_escaping(quoted)

        walker = FilesystemWalker(session, self.context.config, base_dir=self.context.current_dir)
        handler = self._path_handlers.get(request.command, self._path_all)
        handler(session, walker, request, arg, arg_num)
        return start

    def _path_colorscheme(self, session, walker, request, arg, arg_num) -> None:
        if arg_num == 0:
            self.completers.complete_colorschemes(session, arg)
        elif arg_num == 1:
            walker.complete(arg, EntryType.DIR_ONLY)

    def _path_dir_only(self, session, walker, request, arg, arg_num) -> None:
        walker.complete(arg, EntryType.DIR_ONLY)

    def _path_other_pane(self, session, walker, request, arg, arg_num) -> None:
        other = self.context.other_dir or self.context.current_dir
        if other is None:
            walker.complete(arg, EntryType.ALL)
        else:
            walker.complete_in_dir(other, arg, EntryType.ALL)

    def _path_current_pane(self, session, walker, request, arg, arg_num) -> None:
        if self.context.current_dir is None:
            walker.complete(arg, EntryType.DIR_ONLY)
        else:
            walker.complete_in_dir(self.context.current_dir, arg, EntryType.DIR_ONLY)

    def _path_find(self, session, walker, request, arg, arg_num) -> None:
        if request.argc == 1 and not cmd_ends_with_space(request.line):
            walker.complete(arg, EntryType.DIR_ONLY)

    def _path_execute(self, session, walker, request, arg, arg_num) -> None:
        if not _first_argument(request):
            walker.complete(arg, EntryType.ALL)
        elif arg.startswith("."):
            walker.complete(arg, EntryType.DIR_EXEC)
        else:
            complete_command_name(session, arg, self.context.search_list, self.context.config)

    def _path_without_slash(self, session, walker, request, arg, arg_num) -> None:
        walker.complete(arg, EntryType.ALL_WOS)

    def _path_all(self, session, walker, request, arg, arg_num) -> None:
        walker.complete(arg, EntryType.ALL)
