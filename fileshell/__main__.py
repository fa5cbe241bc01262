"""Interactive command line with file manager style completion."""

import argparse
import os
import sys

from prompt_toolkit import PromptSession

from fileshell.colors import colorize
from fileshell.config import ConfigManager
from fileshell.dispatcher import CompletionContext
from fileshell.path_env import AmbiguousCommandError, PathSearchList, resolve_ambiguous_external
from fileshell.providers.registry import VocabularyRegistry
from fileshell.utils.completion import FileShellCompleter
from fileshell.utils.logging import setup_logging


def build_context(args: argparse.Namespace) -> CompletionContext:
    config = ConfigManager().config
    registry = VocabularyRegistry()
    registry.auto_discover(config)

    current_dir = os.path.abspath(args.left)
    other_dir = os.path.abspath(args.right or args.left)
    return CompletionContext(
        registry=registry,
        config=config,
        current_dir=current_dir,
        other_dir=other_dir,
        current_file=args.file or "",
        search_list=PathSearchList.from_environ(),
    )


def run(context: CompletionContext) -> None:
    session = PromptSession(completer=FileShellCompleter(context))

    while True:
        try:
            line = session.prompt(":")
        except KeyboardInterrupt:
            continue
        except EOFError:
            break

        line = line.strip()
        if line in ("q", "quit"):
            break

        if line.startswith("!"):
            try:
                resolved = resolve_ambiguous_external(line[1:], context.search_list, context.config)
            except AmbiguousCommandError as e:
                print(colorize(f"{e}: {', '.join(e.candidates)}", "red"))
                continue
            print(colorize(f"!{resolved}", "green"))
        elif line:
            print(line)


def main() -> int:
    parser = argparse.ArgumentParser(prog="fileshell", description=__doc__)
    parser.add_argument("left", nargs="?", default=".", help="Directory of the current pane")
    parser.add_argument("right", nargs="?", help="Directory of the other pane")
    parser.add_argument("--file", help="File under the cursor, used by :file completion")
    parser.add_argument("--debug", action="store_true", help="Log debug output to the console")
    args = parser.parse_args()

    setup_logging(debug=args.debug)
    run(build_context(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
