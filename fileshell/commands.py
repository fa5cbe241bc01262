"""Command identifiers and command-line tokenizing for completion requests."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class CommandId(Enum):
    """Families of commands that complete differently."""
    SET = auto()
    LET = auto()
    ECHO = auto()
    EXPR_EXECUTE = auto()  # :execute, evaluates an expression
    IF = auto()
    ELSEIF = auto()
    UNLET = auto()
    HELP = auto()
    HISTORY = auto()
    INVERT = auto()
    CHOWN = auto()
    FILE = auto()
    HIGHLIGHT = auto()
    CD = auto()
    PUSHD = auto()
    SHELL = auto()      # :!, runs a shell command
    SOURCE = auto()
    WINDO = auto()
    WINRUN = auto()
    SYNC = auto()
    MKDIR = auto()
    COPY = auto()
    MOVE = auto()
    ALINK = auto()
    RLINK = auto()
    SPLIT = auto()
    VSPLIT = auto()
    FIND = auto()
    TOUCH = auto()
    RENAME = auto()
    COLORSCHEME = auto()
    DEFAULT = auto()


class PreProcessing(Enum):
    """How the current argument is unescaped before completion."""
    NONE = auto()
    SQUOTES_UNESCAPE = auto()
    DQUOTES_UNESCAPE = auto()


COMMAND_NAMES = {
    "!": CommandId.SHELL,
    "alink": CommandId.ALINK,
    "cd": CommandId.CD,
    "chown": CommandId.CHOWN,
    "colorscheme": CommandId.COLORSCHEME,
    "copy": CommandId.COPY,
    "echo": CommandId.ECHO,
    "elseif": CommandId.ELSEIF,
    "execute": CommandId.EXPR_EXECUTE,
    "file": CommandId.FILE,
    "find": CommandId.FIND,
    "help": CommandId.HELP,
    "highlight": CommandId.HIGHLIGHT,
    "history": CommandId.HISTORY,
    "if": CommandId.IF,
    "invert": CommandId.INVERT,
    "let": CommandId.LET,
    "mkdir": CommandId.MKDIR,
    "move": CommandId.MOVE,
    "pushd": CommandId.PUSHD,
    "rename": CommandId.RENAME,
    "rlink": CommandId.RLINK,
    "set": CommandId.SET,
    "source": CommandId.SOURCE,
    "split": CommandId.SPLIT,
    "sync": CommandId.SYNC,
    "touch": CommandId.TOUCH,
    "unlet": CommandId.UNLET,
    "vsplit": CommandId.VSPLIT,
    "windo": CommandId.WINDO,
    "winrun": CommandId.WINRUN,
}

EXPRESSION_COMMANDS = frozenset({
    CommandId.LET,
    CommandId.ECHO,
    CommandId.EXPR_EXECUTE,
    CommandId.IF,
    CommandId.ELSEIF,
})

QUOTE_CHARS = "\"'"

_DQUOTE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def command_accepts_expr(command: CommandId) -> bool:
    return command in EXPRESSION_COMMANDS


def lookup_command(name: str) -> CommandId:
    """
    Map a typed command name to its identifier.

    Full names win, otherwise an abbreviation that is a prefix of exactly
    one known command is accepted.

    Args:
        name: Command name as typed

    Returns:
        CommandId, DEFAULT for unknown or ambiguous names
    """
    if name in COMMAND_NAMES:
        return COMMAND_NAMES[name]

    if not name:
        return CommandId.DEFAULT

    matches = [cmd for full, cmd in COMMAND_NAMES.items() if full.startswith(name)]
    if len(matches) == 1:
        return matches[0]

    if len(matches) > 1:
        logger.debug(f"Ambiguous command abbreviation: {name}")
    return CommandId.DEFAULT


@dataclass
class CompletionRequest:
    """
    One completion invocation.

    line holds the argument text that follows the command name, arg_pos is
    the index in line where the argument being completed starts.
    """
    line: str
    command: CommandId = CommandId.DEFAULT
    arg_pos: int = 0
    argv: List[str] = field(default_factory=list)
    preprocessing: PreProcessing = PreProcessing.NONE

    @property
    def argc(self) -> int:
        return len(self.argv)


def cmd_ends_with_space(text: str) -> bool:
    """Check whether text ends with a space that is not backslash-escaped."""
    i = 0
    while i + 1 < len(text):
        if text[i] == "\\":
            i += 1
        i += 1
    return i < len(text) and text[i] == " "


def extract_cmd_name(line: str) -> Tuple[str, str]:
    """
    Split a shell command into the program name and its arguments.

    Args:
        line: Command line such as 'vim -p "%f"'

    Returns:
        Tuple of (name, arguments)
    """
    line = line.lstrip(" ")
    if line.startswith('"'):
        end = line.find('"', 1)
        if end != -1:
            return line[1:end], line[end + 1:].lstrip(" ")

    space = line.find(" ")
    if space == -1:
        return line, ""
    return line[:space], line[space:].lstrip(" ")


def expand_squotes_escaping(text: str) -> str:
    """Undo single-quote escaping, where '' stands for one quote."""
    return text.replace("''", "'")


def expand_dquotes_escaping(text: str) -> str:
    """Undo backslash escaping used inside double quotes."""
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            i += 1
            char = _DQUOTE_ESCAPES.get(text[i], text[i])
        out.append(char)
        i += 1
    return "".join(out)


def tokenize_args(args: str) -> Tuple[List[str], List[int], Optional[str]]:
    """
    Split command arguments the way the command line parser does.

    Args:
        args: Argument text

    Returns:
        Tuple of (argv, start offsets, quote still open at the end or None)
    """
    argv: List[str] = []
    starts: List[int] = []
    current: List[str] = []
    quote: Optional[str] = None
    in_token = False
    i = 0

    while i < len(args):
        char = args[i]

        if quote == "'":
            if char == "'" and args[i + 1:i + 2] == "'":
                current.append("'")
                i += 1
            elif char == "'":
                quote = None
            else:
                current.append(char)
        elif quote == '"':
            if char == "\\" and i + 1 < len(args):
                i += 1
                current.append(_DQUOTE_ESCAPES.get(args[i], args[i]))
            elif char == '"':
                quote = None
            else:
                current.append(char)
        elif char in " \t":
            if in_token:
                argv.append("".join(current))
                current = []
                in_token = False
        else:
            if not in_token:
                starts.append(i)
                in_token = True
            if char == "\\" and i + 1 < len(args):
                i += 1
                current.append(args[i])
            elif char in QUOTE_CHARS:
                quote = char
            else:
                current.append(char)
        i += 1

    if in_token:
        argv.append("".join(current))

    return argv, starts, quote


def parse_command_line(text: str) -> Tuple[str, CompletionRequest]:
    """
    Build a completion request from a raw command line.

    Args:
        text: Line as typed, with or without the leading colon

    Returns:
        Tuple of (command name, CompletionRequest)
    """
    body = text.lstrip(": ")

    if body[:1].isalpha():
        end = 0
        while end < len(body) and body[end].isalnum():
            end += 1
        name = body[:end]
    else:
        name = body[:1]

    args = body[len(name):].lstrip(" ")
    argv, starts, _ = tokenize_args(args)

    if argv and not cmd_ends_with_space(args):
        arg_pos = starts[-1]
    else:
        arg_pos = len(args)

    preprocessing = PreProcessing.NONE
    first = args[arg_pos:arg_pos + 1]
    if first == "'":
        preprocessing = PreProcessing.SQUOTES_UNESCAPE
    elif first == '"':
        preprocessing = PreProcessing.DQUOTES_UNESCAPE

    request = CompletionRequest(
        line=args,
        command=lookup_command(name),
        arg_pos=arg_pos,
        argv=argv,
        preprocessing=preprocessing,
    )
    return name, request
