"""Ordered composition of reduction stages.

WHY: Merge policies are stackable: "sentences, then pairs of sentences"
is two passes, each consuming the previous pass's merged events. The
pipeline owns that ordering and the rule that sub-word fragments are
always joined into words first.

HOW: Pipeline holds the user-selected predicates in order. run() prepends
the word-join stage and folds reducer.reduce over the stage list. Stages
share nothing but the sequence handed forward, so counters such as
chunk-size count the previous stage's merged events, not raw fragments.

RULES:
- Word-join always runs first, even when no strategy is selected
- Selected stages run in the order given
- Thresholds are validated when the pipeline is built, not when it runs
- Empty input yields empty output
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from transcript_reducer.core.errors import ConfigurationError
from transcript_reducer.core.ir import Event
from transcript_reducer.core.predicates import (
    BoundaryPredicate,
    WordJoinPredicate,
    build_predicate,
)
from transcript_reducer.core.reducer import reduce

logger = logging.getLogger(__name__)

# One entry of the selection surface: (strategy name, threshold or None).
Selection = Tuple[str, Optional[int]]


class Pipeline:
    """A fixed word-join stage followed by zero or more selected stages."""

    def __init__(self, stages: Iterable[BoundaryPredicate] = ()) -> None:
        self.stages: List[BoundaryPredicate] = list(stages)
        for stage in self.stages:
            if not isinstance(stage, BoundaryPredicate):
                raise ConfigurationError(
                    "Pipeline stages must be boundary predicates, got {!r}".format(stage)
                )

    @classmethod
    def from_selection(cls, selection: Iterable[Selection]) -> Pipeline:
        """Build a pipeline from ordered (strategy name, threshold) pairs.

        Raises:
            ConfigurationError: If any pair names an unknown strategy or
                carries an invalid threshold.
        """
        return cls(build_predicate(name, threshold) for name, threshold in selection)

    @property
    def all_stages(self) -> List[BoundaryPredicate]:
        """Every stage that run() applies, word-join included."""
        return [WordJoinPredicate()] + self.stages

    def run(self, raw: Sequence[Event]) -> List[Event]:
        """Reduce raw fragments through every stage in order."""
        events = list(raw)
        for stage in self.all_stages:
            before = len(events)
            events = reduce(events, stage)
            logger.debug("Stage %s reduced %d events to %d", stage.name, before, len(events))

        logger.info(
            "Reduced %d fragments to %d events over %d stage(s)",
            len(raw), len(events), len(self.all_stages),
        )
        return events

    def __repr__(self) -> str:
        return "Pipeline({!r})".format(self.stages)


def run(raw: Sequence[Event], stages: Iterable[BoundaryPredicate] = ()) -> List[Event]:
    """Run ``raw`` through word-join followed by ``stages``."""
    return Pipeline(stages).run(raw)
