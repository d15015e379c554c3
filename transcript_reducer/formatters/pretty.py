"""Human-readable formatter for reading a reduced transcript in a terminal."""

from __future__ import annotations

from typing import List

from transcript_reducer.core.ir import Event
from transcript_reducer.formatters.base import BaseFormatter, FormatterOutput, ms_to_timecode


def format_event(event: Event) -> str:
    """Render one event as ``[HH:MM:SS.mmm --> HH:MM:SS.mmm] text``."""
    return "[{} --> {}] {}".format(
        ms_to_timecode(event.start, "."),
        ms_to_timecode(event.end, "."),
        event.content,
    )


class PrettyFormatter(BaseFormatter):
    """Formatter producing one timestamped block per event, blank-line separated."""

    @property
    def name(self) -> str:
        return "Pretty"

    def format(self, events: List[Event]) -> FormatterOutput:
        return FormatterOutput(
            content="".join("{}\n\n".format(format_event(e)) for e in events),
            extension=".txt",
            media_type="text/plain",
        )
