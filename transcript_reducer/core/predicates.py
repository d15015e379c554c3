"""Boundary predicates: the stop rules that drive each reduction stage.

WHY: Each merge policy ("join sub-word fragments", "stop at a sentence
end", "stop after two seconds", ...) differs only in *when* the group
being built should close. Isolating that decision in a small predicate
object lets one stage driver (reducer.reduce) run every policy, and lets
policies be stacked as independent passes instead of one combined
decision function.

HOW: A stage keeps a Group: the merged Event so far plus the stage-local
counters (events absorbed, summed silence). For each next event the
driver asks two questions:

  splits_before(group, candidate)  -> close *without* absorbing candidate
  is_complete(group)               -> after absorbing, close now

Policies that must not swallow the triggering event (word-join, by-gap)
answer the first; policies whose triggering event belongs to the closed
group (sentences, lasting, max-silence, min-word-count, chunk-size)
answer the second. finish() lets a policy shape the event it emits.

RULES:
- Predicates are pure: all running state lives in the Group
- Thresholds are positive integers (ms for durations, counts otherwise),
  validated in the constructor
- "Reaches or exceeds" closes; only by-gap closes on strictly-exceeds
- STRATEGIES maps the selectable policy names to predicate classes;
  WordJoinPredicate is not selectable, the pipeline always runs it first
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from transcript_reducer.core.errors import ConfigurationError
from transcript_reducer.core.ir import Event, merge

# Characters ignored at the end of a group when looking for a sentence end.
_TRAILING_QUOTES = "\"'“”‘’»«"

# Punctuation marks that end a sentence.
_SENTENCE_ENDINGS = (".", "!", "?")


@dataclass
class Group:
    """The accumulator of one stage: an Event being grown plus its counters.

    Attributes:
        event: Everything merged into this group so far.
        size: Number of input events absorbed (the opening event counts).
        silence: Sum of the gaps, in ms, between consecutive absorbed events.
    """

    event: Event
    size: int = 1
    silence: int = 0

    def absorb(self, candidate: Event) -> None:
        """Merge ``candidate`` into the group and update the counters.

        Overlapping events (negative gap) add no silence.
        """
        self.silence += max(0, candidate.start - self.event.end)
        self.size += 1
        self.event = merge(self.event, candidate)


def _positive_int(strategy: str, value: object) -> int:
    """Validate a threshold, raising ConfigurationError if it is unusable."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            "Threshold for '{}' must be an integer, got {!r}".format(strategy, value)
        )
    if value <= 0:
        raise ConfigurationError(
            "Threshold for '{}' must be positive, got {}".format(strategy, value)
        )
    return value


class BoundaryPredicate(ABC):
    """Abstract base for all boundary policies.

    To add a new policy:
    1. Subclass BoundaryPredicate
    2. Implement ``name`` and one (or both) of the two decision hooks
    3. Register it in STRATEGIES if users should be able to select it
    """

    threshold: Optional[int] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name, as used on the command line."""

    def splits_before(self, group: Group, candidate: Event) -> bool:
        """Return True to close ``group`` and open a new one at ``candidate``."""
        return False

    def is_complete(self, group: Group) -> bool:
        """Return True to close ``group`` right after an absorption."""
        return False

    def finish(self, event: Event) -> Event:
        """Shape the event emitted for a closed group. Identity by default."""
        return event

    def __repr__(self) -> str:
        if self.threshold is None:
            return "{}()".format(type(self).__name__)
        return "{}({})".format(type(self).__name__, self.threshold)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.threshold == other.threshold

    def __hash__(self) -> int:
        return hash((type(self), self.threshold))


class WordJoinPredicate(BoundaryPredicate):
    """Glue sub-word fragments back into words.

    A fragment that starts with whitespace begins a new word, so the group
    closes before it. Anything else ("lo", "!", "") is a continuation.
    """

    @property
    def name(self) -> str:
        return "word-join"

    def splits_before(self, group: Group, candidate: Event) -> bool:
        return not candidate.is_continuation()


class SentencesPredicate(BoundaryPredicate):
    """Concatenate up to the next sentence ending ('.', '!', or '?').

    WHY: Sentences are the natural reading unit for transcripts.

    HOW: After each absorption the group text is checked with trailing
    whitespace and quote characters ignored. The emitted event is put in
    sentence form: a single space is prepended when the text does not
    already start with whitespace, so the opening sentence reads
    " Hello world!" like every other. Text that already starts with
    whitespace is emitted unchanged.
    """

    @property
    def name(self) -> str:
        return "sentences"

    def is_complete(self, group: Group) -> bool:
        return ends_sentence(group.event.text)

    def finish(self, event: Event) -> Event:
        if event.text[:1].isspace():
            return event
        return Event(start=event.start, end=event.end, text=" " + event.text)


class LastingPredicate(BoundaryPredicate):
    """Concatenate until the group lasts at least ``duration_ms``."""

    def __init__(self, duration_ms: int) -> None:
        self.threshold = _positive_int(self.name, duration_ms)

    @property
    def name(self) -> str:
        return "lasting"

    def is_complete(self, group: Group) -> bool:
        return group.event.duration >= self.threshold


class MaxSilencePredicate(BoundaryPredicate):
    """Concatenate until the summed gaps inside the group reach ``silence_ms``.

    The event whose gap pushes the sum over the threshold stays in the
    group it closes. Compare ByGapPredicate, which looks at one gap at a
    time and never absorbs the event after a long pause.
    """

    def __init__(self, silence_ms: int) -> None:
        self.threshold = _positive_int(self.name, silence_ms)

    @property
    def name(self) -> str:
        return "max-silence"

    def is_complete(self, group: Group) -> bool:
        return group.silence >= self.threshold


class ByGapPredicate(BoundaryPredicate):
    """Concatenate until the pause before the next event exceeds ``gap_ms``."""

    def __init__(self, gap_ms: int) -> None:
        self.threshold = _positive_int(self.name, gap_ms)

    @property
    def name(self) -> str:
        return "by-gap"

    def splits_before(self, group: Group, candidate: Event) -> bool:
        return candidate.start - group.event.end > self.threshold


class MinWordCountPredicate(BoundaryPredicate):
    """Concatenate until the group holds at least ``count`` words."""

    def __init__(self, count: int) -> None:
        self.threshold = _positive_int(self.name, count)

    @property
    def name(self) -> str:
        return "min-word-count"

    def is_complete(self, group: Group) -> bool:
        return group.event.word_count >= self.threshold


class ChunkSizePredicate(BoundaryPredicate):
    """Concatenate up to ``size`` events, regardless of their content."""

    def __init__(self, size: int) -> None:
        self.threshold = _positive_int(self.name, size)

    @property
    def name(self) -> str:
        return "chunk-size"

    def is_complete(self, group: Group) -> bool:
        return group.size >= self.threshold


def ends_sentence(text: str) -> bool:
    """True if ``text`` ends with '.', '!' or '?', ignoring trailing space and quotes."""
    return text.rstrip().rstrip(_TRAILING_QUOTES).rstrip().endswith(_SENTENCE_ENDINGS)


STRATEGIES: Dict[str, type] = {
    "sentences": SentencesPredicate,
    "lasting": LastingPredicate,
    "max-silence": MaxSilencePredicate,
    "by-gap": ByGapPredicate,
    "min-word-count": MinWordCountPredicate,
    "chunk-size": ChunkSizePredicate,
}

# Strategies that take no threshold.
_UNPARAMETERISED = frozenset({"sentences"})


def build_predicate(name: str, threshold: Optional[int] = None) -> BoundaryPredicate:
    """Instantiate a selectable strategy by name.

    Args:
        name: One of the STRATEGIES keys.
        threshold: Milliseconds for lasting/max-silence/by-gap, a count for
            min-word-count/chunk-size, None for sentences.

    Returns:
        A ready BoundaryPredicate.

    Raises:
        ConfigurationError: Unknown name, missing or unexpected threshold,
            or a threshold that is not a positive integer.
    """
    if name not in STRATEGIES:
        raise ConfigurationError(
            "Unknown strategy '{}'. Available: {}".format(
                name, ", ".join(sorted(STRATEGIES))
            )
        )
    if name in _UNPARAMETERISED:
        if threshold is not None:
            raise ConfigurationError("Strategy '{}' takes no threshold".format(name))
        return STRATEGIES[name]()
    if threshold is None:
        raise ConfigurationError("Strategy '{}' requires a threshold".format(name))
    return STRATEGIES[name](threshold)
