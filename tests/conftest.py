"""Shared test fixtures for the transcript_reducer test suite.

WHY: Most engine tests start from the same short transcript: thirteen
sub-word fragments forming three sentences, with gaps of different
lengths between them. Centralizing it avoids duplication and keeps every
test reading the same data.

HOW: SAMPLE_FRAGMENTS holds the raw (start, end, text) tuples; fixtures
turn them into Event lists, both raw and already word-joined.

RULES:
- Times are integer milliseconds
- SAMPLE_WORDS is the exact word-join output for SAMPLE_FRAGMENTS
"""

from typing import Iterable, List, Tuple

import pytest

from transcript_reducer.core.ir import Event

SAMPLE_FRAGMENTS: List[Tuple[int, int, str]] = [
    (0,    1000, "Hel"),
    (1000, 1100, "lo"),
    (1100, 2000, " world"),
    (2000, 2000, "!"),
    (2500, 3000, " How"),
    (3100, 3500, " are"),
    (4100, 5000, " you"),
    (5000, 5000, "?"),
    (6300, 6700, " I'm"),
    (6800, 7200, " fine"),
    (7200, 7200, ","),
    (7300, 7500, " thanks"),
    (7500, 7500, "!"),
]

SAMPLE_WORDS: List[Tuple[int, int, str]] = [
    (0,    1100, "Hello"),
    (1100, 2000, " world!"),
    (2500, 3000, " How"),
    (3100, 3500, " are"),
    (4100, 5000, " you?"),
    (6300, 6700, " I'm"),
    (6800, 7200, " fine,"),
    (7300, 7500, " thanks!"),
]


def make_events(rows: Iterable[Tuple[int, int, str]]) -> List[Event]:
    """Build Events from (start, end, text) tuples."""
    return [Event(start=start, end=end, text=text) for start, end, text in rows]


def as_tuples(events: Iterable[Event]) -> List[Tuple[int, int, str]]:
    """Flatten Events back into (start, end, text) tuples for comparison."""
    return [(e.start, e.end, e.text) for e in events]


@pytest.fixture
def sample_fragments():
    """The raw sample transcript, one Event per fragment."""
    return make_events(SAMPLE_FRAGMENTS)


@pytest.fixture
def sample_words():
    """The sample transcript after the word-join stage."""
    return make_events(SAMPLE_WORDS)


@pytest.fixture
def sample_csv():
    """The sample transcript as whisper.cpp writes it (text column quoted)."""
    lines = ["start,end,text"]
    for start, end, text in SAMPLE_FRAGMENTS:
        lines.append('{},{},"{}"'.format(start, end, text))
    return "\n".join(lines) + "\n"
