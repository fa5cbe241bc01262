"""Lexical path algebra: canonicalization, relative paths, tilde and shell escaping."""

import os
import logging
from pathlib import Path
from typing import List, Optional, Tuple

try:
    import pwd
except ImportError:
    # No account database on this platform, ~name stays unexpanded
    pwd = None

logger = logging.getLogger(__name__)

# Upper bound for every path produced here, longer results are truncated.
PATH_MAX = 4096

IS_WINDOWS = os.name == "nt"

# Characters that get a backslash anywhere in an escaped name.
SHELL_SPECIAL_CHARS = frozenset("'\\\r\n\t\"; ?|[]{}<>`!$&*()#")


def os_fold(text: str) -> str:
    """Fold case the way the host file system compares names."""
    return text.lower() if IS_WINDOWS else text


def os_equal(a: str, b: str) -> bool:
    """Compare two path strings using host file system case rules."""
    return os_fold(a) == os_fold(b)


def chosp(path: str) -> str:
    """Remove a single trailing slash."""
    if path.endswith("/"):
        return path[:-1]
    return path


def ends_with_slash(path: str) -> bool:
    return path.endswith("/")


def contains_slash(path: str) -> bool:
    if "/" in path:
        return True
    return IS_WINDOWS and "\\" in path


def path_starts_with(path: str, begin: str) -> bool:
    """
    Check whether path lies inside begin (or equals it).

    Comparison stops at a separator boundary, so "/usr/lib" does not start
    with "/usr/li".
    """
    length = len(begin)
    if length > 0 and begin[-1] == "/":
        length -= 1

    if not os_equal(path[:length], begin[:length]):
        return False

    return len(path) == length or path[length] == "/"


def paths_are_equal(s: str, t: str) -> bool:
    """Compare two paths after canonicalizing both."""
    return os_equal(canonicalize(s), canonicalize(t))


def _split_anchor(path: str) -> Tuple[str, str]:
    """
    Split off the non-collapsible prefix of a Windows path.

    Returns:
        Tuple of (anchor, rest) where anchor is "//host" or "C:" or ""
    """
    if not IS_WINDOWS:
        return "", path

    if path.startswith("//") and path[2:3] != "/":
        end = path.find("/", 2)
        if end == -1:
            end = len(path)
        return path[:end], path[end:]

    if len(path) >= 2 and path[0].isalpha() and path[1] == ":":
        return path[:2], path[2:]

    return "", path


def _is_dot_component(part: str) -> bool:
    if part == ".":
        return True
    # Windows treats "..." and longer runs of dots as the current directory
    return IS_WINDOWS and len(part) > 2 and part == "." * len(part)


def canonicalize(path: str, capacity: int = PATH_MAX) -> str:
    """
    Lexically simplify a path without touching the file system.

    Repeated separators collapse, "." components are dropped (a leading "./"
    of a relative path is kept as its anchor) and ".." removes the component
    before it unless that component is itself an unresolved "..". The result
    always ends with exactly one separator.

    Args:
        path: Path to simplify
        capacity: Maximum length of the result, longer output is truncated

    Returns:
        Canonical, separator-terminated path
    """
    anchor, rest = _split_anchor(path)
    absolute = rest.startswith("/") or anchor.startswith("//")

    parts = []
    for index, part in enumerate(rest.split("/")):
        if not part:
            continue

        if _is_dot_component(part):
            if index == 0 and not anchor:
                parts.append(".")
            continue

        if part == "..":
            if parts and parts[-1] != "..":
                if parts[-1] == ".":
                    parts[-1] = ".."
                else:
                    parts.pop()
            elif not absolute:
                parts.append("..")
            continue

        parts.append(part)

    result = _join_components(anchor, parts, absolute, bool(rest))

    if len(result) > capacity - 1:
        logger.debug(f"Canonical path truncated to {capacity - 1} characters")
        # Drop whole components so the result stays canonical
        while parts and len(result) > capacity - 1:
            parts.pop()
            result = _join_components(anchor, parts, absolute, bool(rest))

    return result


def _join_components(anchor: str, parts: List[str], absolute: bool, relative_input: bool) -> str:
    if absolute:
        result = anchor + "/" + "/".join(parts)
    elif parts:
        result = anchor + "/".join(parts)
    elif anchor:
        result = anchor
    elif relative_input:
        result = "."
    else:
        result = ""

    if not result.endswith("/"):
        result += "/"
    return result


def _component_ends(path: str):
    """Yield the index of each separator that ends a leading component."""
    pos = 0
    while pos + 1 < len(path):
        end = path.find("/", pos + 1)
        if end == -1:
            end = len(path)
        yield end
        pos = end


def relative(path: str, base: str) -> str:
    """
    Compute path relative to base.

    Both paths are canonicalized first. Shared leading components are then
    matched whole (a common string prefix that does not end on a separator
    in both paths does not count).

    Args:
        path: Target path
        base: Directory the result is relative to

    Returns:
        Relative path without trailing separator, "." when both are equal
    """
    path = chosp(canonicalize(path))
    base = chosp(canonicalize(base))

    if IS_WINDOWS and path[1:2] == ":" and base[1:2] == ":" and not os_equal(path[0], base[0]):
        return path

    path_end = 0
    base_end = 0
    for p, b in zip(_component_ends(path), _component_ends(base)):
        if p != b or not os_equal(path[:p], base[:b]):
            break
        path_end, base_end = p, b

    remaining_base = canonicalize(base[base_end:])
    ups = sum(1 for part in remaining_base.split("/") if part and part != ".")

    result = "../" * ups
    suffix = path[path_end:]
    if suffix.startswith("/"):
        suffix = suffix[1:]
    if suffix:
        tail = canonicalize(suffix, PATH_MAX - len(result))
        if tail != "./":
            result += tail

    result = chosp(result)
    return result or "."


def is_path_absolute(path: str) -> bool:
    if IS_WINDOWS:
        if path[:1].isalpha() and path[1:2] == ":":
            return True
        if path.startswith("//"):
            return True
    return path.startswith("/")


def is_unc_path(path: str) -> bool:
    return IS_WINDOWS and path.startswith("//") and path[2:3] != "/"


def is_unc_root(path: str) -> bool:
    if not is_unc_path(path) or len(path) <= 2:
        return False
    slash = path.find("/", 2)
    return slash == -1 or slash == len(path) - 1


def is_root_dir(path: str) -> bool:
    if IS_WINDOWS:
        if path[:1].isalpha() and os_equal(path[1:], ":/"):
            return True
        if is_unc_root(path):
            return True
    return path == "/"


def get_home_dir() -> str:
    """Home directory without trailing separator."""
    home = str(Path.home())
    return home if is_root_dir(home) else home.rstrip("/")


def expand_tilde(path: str, home_dir: Optional[str] = None) -> str:
    """
    Expand a leading "~" or "~name".

    Expansion is best effort: an unknown account name leaves the input as is.

    Args:
        path: Path that may start with a tilde
        home_dir: Home directory to use for a bare "~" (defaults to the user's)

    Returns:
        Expanded path, or the input when nothing could be expanded
    """
    if not path.startswith("~"):
        return path

    if home_dir is None:
        home_dir = get_home_dir()

    if path == "~":
        return home_dir
    if path.startswith("~/"):
        return chosp(home_dir) + "/" + path[2:]

    if pwd is None:
        return path

    slash = path.find("/")
    if slash == -1:
        name, rest = path[1:], ""
    else:
        name, rest = path[1:slash], path[slash + 1:]

    try:
        account = pwd.getpwnam(name)
    except KeyError:
        logger.debug(f"No such user for tilde expansion: {name}")
        return path

    return chosp(account.pw_dir) + "/" + rest


def replace_home_part(directory: str, home_dir: Optional[str] = None) -> str:
    """Replace the home directory prefix with "~" for display."""
    if home_dir is None:
        home_dir = get_home_dir()
    home_dir = chosp(home_dir)

    if home_dir and path_starts_with(directory, home_dir):
        result = "~" + directory[len(home_dir):]
    else:
        result = directory

    if not is_root_dir(result):
        result = chosp(result)
    return result


def expand_envvars(text: str) -> str:
    """Expand $NAME and ${NAME} references, unknown names stay as typed."""
    return os.path.expandvars(text)


def escape_for_shell(text: str, quote_percent: bool = False) -> str:
    """
    Escape a file name for insertion into a shell command line.

    A leading "-" becomes "./-" so the name is not taken for an option, and a
    leading "~" is escaped so the shell does not expand it.

    Args:
        text: Name to escape
        quote_percent: Double "%" characters for consumers that expand macros

    Returns:
        Escaped string
    """
    out = []
    if text.startswith("-"):
        out.append("./")

    for char in text:
        if char == "%":
            if quote_percent:
                out.append("%")
        elif char in SHELL_SPECIAL_CHARS:
            out.append("\\")
        elif char == "~" and not out:
            out.append("\\")
        out.append(char)

    return "".join(out)


def _find_ext_dot(path: str) -> int:
    slash = path.rfind("/")
    dot = path.rfind(".")
    if dot == -1 or dot < slash or dot == 0 or dot == slash + 1:
        return -1
    return dot


def split_extension(path: str) -> Tuple[str, str]:
    """
    Split path into root and extension.

    The extension excludes its dot. A dot that starts the base name does not
    begin an extension, and ".tar.<ext>" is kept together as one extension.

    Args:
        path: File path

    Returns:
        Tuple of (root, extension), extension is "" when there is none
    """
    dot = _find_ext_dot(path)
    if dot == -1:
        return path, ""

    root = path[:dot]
    inner = _find_ext_dot(root)
    if inner != -1 and os_equal(root[inner + 1:], "tar"):
        dot = inner

    return path[:dot], path[dot + 1:]


def get_extension(path: str) -> str:
    return split_extension(path)[1]


def get_last_path_component(path: str) -> str:
    """Last component of path, a trailing slash is kept."""
    slash = path.rfind("/")
    if slash == -1:
        return path
    if slash != len(path) - 1:
        return path[slash + 1:]

    stripped = path.rstrip("/")
    if not stripped:
        return path
    start = stripped.rfind("/") + 1
    return path[start:]


def remove_last_path_component(path: str) -> str:
    while path.endswith("/") and path != "/":
        path = path[:-1]

    slash = path.rfind("/")
    if slash == -1:
        return path
    if slash == 0:
        return "/"
    return path[:slash]


def is_parent_dir(path: str) -> bool:
    return path in ("..", "../")


def is_builtin_dir(name: str) -> bool:
    return name in (".", "..")


def get_tmpdir() -> str:
    for name in ("TMPDIR", "TEMP", "TEMPDIR", "TMP"):
        value = os.environ.get(name)
        if value:
            return value
    return "/tmp/"
