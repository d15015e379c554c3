"""Single-pass reduction stage driver.

WHY: Every boundary policy shares the same mechanics: walk the sequence
once, grow a group, close it when the policy says so. Writing that loop
once keeps the policies down to their decision rules.

HOW: Open a Group on the first event. For each following event, ask the
predicate whether to split before it; if so emit the group and open a new
one at the event, otherwise absorb it. After every open or absorption,
ask whether the group is complete and emit it if so. Whatever is still
open at end-of-input is emitted as-is.

RULES:
- Output length <= input length; output is non-empty iff input is
- Events are never reordered, dropped, or duplicated
- No side effects beyond the returned list
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from transcript_reducer.core.ir import Event
from transcript_reducer.core.predicates import BoundaryPredicate, Group


def reduce(events: Sequence[Event], predicate: BoundaryPredicate) -> List[Event]:
    """Apply one boundary predicate to an ordered sequence of events.

    Args:
        events: Input events, ordered by start.
        predicate: The policy deciding where groups close.

    Returns:
        The merged events, one per closed group, in input order.
    """
    reduced: List[Event] = []
    group: Optional[Group] = None

    for event in events:
        if group is not None and predicate.splits_before(group, event):
            reduced.append(predicate.finish(group.event))
            group = None

        if group is None:
            group = Group(event=event)
        else:
            group.absorb(event)

        if predicate.is_complete(group):
            reduced.append(predicate.finish(group.event))
            group = None

    if group is not None:
        reduced.append(predicate.finish(group.event))

    return reduced
