"""Color names, styles and highlight groups known to the :highlight command."""

import os
import sys

HIGHLIGHT_GROUPS = (
    "Win",
    "Directory",
    "Link",
    "BrokenLink",
    "Socket",
    "Device",
    "Fifo",
    "Executable",
    "Selected",
    "CurrLine",
    "TopLine",
    "TopLineSel",
    "StatusLine",
    "WildMenu",
    "CmdLine",
    "ErrorMsg",
    "Border",
    "OtherLine",
)

HIGHLIGHT_ATTRIBUTES = ("cterm", "ctermfg", "ctermbg")

STYLE_NAMES = ("bold", "underline", "reverse", "inverse", "standout", "none")

# Values accepted by ctermfg/ctermbg besides the named colors
COLOR_SENTINELS = ("default", "none")

COLOR_NAMES = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

LIGHT_COLOR_NAMES = tuple(f"light{name}" for name in COLOR_NAMES)

RESET = "\033[0m"

# ANSI foreground codes by color name
ANSI_FOREGROUND = {name: f"\033[{30 + i}m" for i, name in enumerate(COLOR_NAMES)}
ANSI_FOREGROUND.update(
    {name: f"\033[{90 + i}m" for i, name in enumerate(LIGHT_COLOR_NAMES)}
)


def supports_color() -> bool:
    """Check if terminal supports color."""
    if not sys.stdout.isatty():
        return False

    if os.name == "nt":
        return os.environ.get("WT_SESSION") is not None or \
               os.environ.get("TERM") is not None or \
               os.environ.get("ANSICON") is not None

    return os.environ.get("TERM") != "dumb"


def colorize(text: str, color: str) -> str:
    """Apply a named color to text if the terminal supports it."""
    code = ANSI_FOREGROUND.get(color.lower())
    if code is None or not supports_color():
        return text
    return f"{code}{text}{RESET}"
