"""Selection state for the interactive picker.

The event loop owns exactly one ``SelectionState`` and drives it through the
transition methods below. Each transition leaves the cursor inside
``0 <= cursor < max(1, len(ranked_candidates))``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .candidates import Candidate
from .fuzzy import RankedCandidate, filter_candidates

CURSOR_WRAP_UNFILTERED = "unfiltered"
CURSOR_WRAP_FILTERED = "filtered"
CURSOR_WRAP_MODES = (CURSOR_WRAP_UNFILTERED, CURSOR_WRAP_FILTERED)


@dataclass
class SelectionState:
    candidates: tuple[Candidate, ...]
    query: str = ""
    cursor: int = 0
    exited: bool = False
    confirmed: bool = False
    ranked_candidates: list[RankedCandidate] = field(default_factory=list)
    cursor_wrap: str = CURSOR_WRAP_UNFILTERED

    @classmethod
    def create(
        cls,
        candidates: Sequence[Candidate],
        query: str = "",
        *,
        cursor_wrap: str = CURSOR_WRAP_UNFILTERED,
    ) -> SelectionState:
        """Build a browsing state with ``query`` already applied."""
        if cursor_wrap not in CURSOR_WRAP_MODES:
            raise ValueError(f"unknown cursor wrap mode: {cursor_wrap!r}")
        frozen = tuple(candidates)
        return cls(
            candidates=frozen,
            query=query,
            ranked_candidates=filter_candidates(frozen, query),
            cursor_wrap=cursor_wrap,
        )

    @property
    def browsing(self) -> bool:
        return not self.exited

    def _clamp_cursor(self) -> None:
        if not (0 <= self.cursor < max(1, len(self.ranked_candidates))):
            self.cursor = 0

    def set_query(self, query: str) -> bool:
        """Replace the query, re-rank, and return focus to the top match.

        Returns ``False`` without touching state when ``query`` is unchanged.
        """
        if query == self.query:
            return False
        self.query = query
        self.ranked_candidates = filter_candidates(self.candidates, query)
        self.cursor = 0
        return True

    def move_down(self) -> None:
        # Unfiltered mode wraps on the full bookmark count; a cursor that
        # lands past the filtered tail goes to 0.
        if self.cursor_wrap == CURSOR_WRAP_FILTERED:
            count = len(self.ranked_candidates)
        else:
            count = len(self.candidates)
        if count == 0:
            self.cursor = 0
            return
        self.cursor = (self.cursor + 1) % count
        self._clamp_cursor()

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
        else:
            self.cursor = max(0, len(self.ranked_candidates) - 1)

    def accept(self) -> None:
        self.exited = True
        self.confirmed = True

    def cancel(self) -> None:
        self.exited = True
        self.confirmed = False

    def selected_candidate(self) -> Candidate | None:
        """Return the candidate under the cursor, or ``None`` with no matches."""
        if not self.ranked_candidates:
            return None
        return self.ranked_candidates[self.cursor].candidate

    def sole_candidate(self) -> Candidate | None:
        """Return the only ranked candidate when exactly one matches."""
        if len(self.ranked_candidates) != 1:
            return None
        return self.ranked_candidates[0].candidate

    def result_path(self) -> str | None:
        """Return the path to emit after the loop ends, if any."""
        if not self.confirmed:
            return None
        selected = self.selected_candidate()
        return selected.path if selected is not None else None
