"""Match session: the ordered, cyclable result of one completion request."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class CompletionStateError(RuntimeError):
    """Raised when the session lifecycle is used out of order."""


class CandidateKind(Enum):
    """Kind of a completion candidate."""
    PLAIN = auto()
    PATH = auto()


@dataclass
class Candidate:
    """A single completion candidate."""
    text: str
    kind: CandidateKind = CandidateKind.PLAIN

    @property
    def is_path(self) -> bool:
        return self.kind is CandidateKind.PATH


@dataclass
class MatchSession:
    """
    Collects completion candidates for one request.

    Candidates are added to an open group which finish_group() sorts and
    de-duplicates. The session ends with an echo entry holding the text the
    user typed, so cycling with next() always comes back to the original
    input.
    """

    case_insensitive_paths: bool = False
    groups: List[List[Candidate]] = field(default_factory=list)
    echo: Optional[Candidate] = None
    _pending: List[Candidate] = field(default_factory=list, init=False, repr=False)
    _cursor: int = field(default=0, init=False, repr=False)

    def reset(self) -> None:
        """Forget everything collected so far."""
        self.groups = []
        self.echo = None
        self._pending = []
        self._cursor = 0

    def add_match(self, text: str) -> None:
        """Add a plain candidate to the open group."""
        self._add(Candidate(text, CandidateKind.PLAIN))

    def add_path_match(self, text: str) -> None:
        """Add a path candidate to the open group."""
        self._add(Candidate(text, CandidateKind.PATH))

    def _add(self, candidate: Candidate) -> None:
        if self.echo is not None:
            raise CompletionStateError(
                f"Cannot add '{candidate.text}' after the echo entry"
            )
        self._pending.append(candidate)

    def _sort_key(self, candidate: Candidate) -> str:
        if candidate.is_path and self.case_insensitive_paths:
            return candidate.text.lower()
        return candidate.text

    def _sorted_unique(self, candidates: List[Candidate]) -> List[Candidate]:
        seen = set()
        unique = []
        for candidate in sorted(candidates, key=self._sort_key):
            if candidate.text in seen:
                continue
            seen.add(candidate.text)
            unique.append(candidate)
        return unique

    def finish_group(self) -> None:
        """Close the open group, sorting it and dropping duplicates."""
        if self._pending:
            self.groups.append(self._sorted_unique(self._pending))
        self._pending = []

    def add_echo_match(self, original_text: str) -> None:
        """Finish the session with the literal typed text."""
        self._set_echo(Candidate(original_text, CandidateKind.PLAIN))

    def add_echo_path_match(self, original_text: str) -> None:
        """Finish the session with the literal typed path."""
        self._set_echo(Candidate(original_text, CandidateKind.PATH))

    def _set_echo(self, candidate: Candidate) -> None:
        if self.echo is not None:
            raise CompletionStateError("Echo entry already added")
        self.finish_group()
        self.echo = candidate

    def merge_all_groups(self) -> None:
        """Unite all groups into a single sorted one."""
        merged = [c for group in self.groups for c in group] + self._pending
        self._pending = []
        self.groups = [self._sorted_unique(merged)] if merged else []
        self._cursor = 0

    @property
    def candidates(self) -> List[Candidate]:
        """Real candidates in priority order, without the echo entry."""
        return [c for group in self.groups for c in group] + list(self._pending)

    @property
    def entries(self) -> List[Candidate]:
        """Everything next() cycles through, echo entry last."""
        entries = self.candidates
        if self.echo is not None:
            entries.append(self.echo)
        return entries

    def texts(self) -> List[str]:
        return [c.text for c in self.entries]

    def count(self) -> int:
        """Number of entries including the echo entry."""
        return len(self.entries)

    def next(self) -> str:
        """
        Return the next entry, wrapping around after the last one.

        Raises:
            CompletionStateError: If the session holds no entries
        """
        entries = self.entries
        if not entries:
            raise CompletionStateError("No completion entries")

        entry = entries[self._cursor % len(entries)]
        self._cursor = (self._cursor + 1) % len(entries)
        return entry.text
