"""Event dataclass and the associative merge every stage is built on.

WHY: A speech-to-text engine emits a flat sequence of timestamped text
fragments. Every reduction policy needs the same two things from them:
an interval and a piece of text, and a way to glue two neighbours into
one. Keeping that in one tiny, immutable type means every stage merges
runs of events the same way.

HOW: Event is a frozen dataclass of (start, end, text) with times in
integer milliseconds. merge() takes the outer bounds and concatenates the
text, so folding a run left-to-right gives the same result as any other
bracketing.

RULES:
- start/end are inclusive integer milliseconds, end >= start
- text may be empty and may begin with whitespace; it is never altered
  by merge()
- merge(a, b) is only meaningful when b comes at or after a in sequence
  order; the caller guarantees this
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce as _fold
from typing import Iterable


@dataclass(frozen=True)
class Event:
    """One timestamped text fragment, or a merged run of fragments.

    Attributes:
        start: Inclusive start of the interval, in milliseconds.
        end: Inclusive end of the interval, in milliseconds.
        text: The fragment text, verbatim (leading whitespace marks a new word).
    """

    start: int
    end: int
    text: str

    @property
    def duration(self) -> int:
        """Length of the interval in milliseconds."""
        return self.end - self.start

    @property
    def content(self) -> str:
        """The text with surrounding whitespace removed."""
        return self.text.strip()

    @property
    def word_count(self) -> int:
        """Number of whitespace-delimited tokens in the text."""
        return len(self.text.split())

    def is_continuation(self) -> bool:
        """True if this fragment continues the previous word.

        A fragment that does not start with whitespace (including an empty
        fragment) belongs to the word before it: "lo" after "Hel", "!"
        after " world".
        """
        return not self.text[:1].isspace()


def merge(a: Event, b: Event) -> Event:
    """Merge two events into one spanning both.

    Args:
        a: The earlier event.
        b: An event occurring at or after ``a`` in sequence order.

    Returns:
        Event(start=a.start, end=b.end, text=a.text + b.text).
    """
    return Event(start=a.start, end=b.end, text=a.text + b.text)


def merge_all(events: Iterable[Event]) -> Event:
    """Fold a non-empty run of events into one with :func:`merge`.

    Raises:
        TypeError: If ``events`` is empty.
    """
    return _fold(merge, events)
