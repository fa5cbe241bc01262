"""Tab completion for file manager command lines."""

from typing import Optional, Iterable
import logging

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from fileshell.commands import COMMAND_NAMES, PreProcessing, parse_command_line
from fileshell.dispatcher import CompletionContext, CompletionDispatcher
from fileshell.paths import escape_for_shell
from fileshell.session import MatchSession

logger = logging.getLogger(__name__)


class FileShellCompleter(Completer):
    """Feeds the completion dispatcher's candidates to prompt_toolkit."""

    def __init__(self, context: CompletionContext, dispatcher: Optional[CompletionDispatcher] = None):
        """
        Initialize completer.

        Args:
            context: Completion context shared with the dispatcher
            dispatcher: Dispatcher to use (default: one built from context)
        """
        self.context = context
        self.dispatcher = dispatcher or CompletionDispatcher(context)

    def get_completions(
        self,
        document: Document,
        complete_event
    ) -> Iterable[Completion]:
        """
        Get completions for current input.

        Args:
            document: Current document (input text)
            complete_event: Completion event

        Yields:
            Completion objects
        """
        text = document.text_before_cursor
        body = text.lstrip(": ")

        # Still typing the command name
        if body and " " not in body and body[:1].isalpha():
            for name in sorted(COMMAND_NAMES):
                if name.startswith(body) and name != body:
                    yield Completion(name, start_position=-len(body))
            return

        name, request = parse_command_line(text)
        if not name:
            return

        session = MatchSession(case_insensitive_paths=self.context.config.case_insensitive_paths)
        start = self.dispatcher.complete(session, request)
        start_position = -(len(request.line) - start)

        logger.debug(f"{session.count()} entries for {name!r} at {start}")

        for candidate in session.candidates:
            completion = candidate.text
            if candidate.is_path and request.preprocessing is PreProcessing.NONE:
                completion = escape_for_shell(completion)
            yield Completion(
                completion,
                start_position=start_position,
                display=candidate.text,
            )
