"""SRT subtitle formatter.

WHY: Reduced segments (sentences, fixed-duration windows) map directly to
subtitle cues, and SRT is the format every player and editor accepts.

HOW: One cue per event: 1-based sequence number, a timecode line derived
from the millisecond fields by integer division, the trimmed text, and a
blank separator line. Timings are written exactly as reduced; no
minimum-duration or overlap adjustment is applied.

RULES:
- Cue numbers are 1-based and consecutive
- Timecodes: ``HH:MM:SS,mmm --> HH:MM:SS,mmm``
- Text is stripped of surrounding whitespace
- Media type: "application/x-subrip"
"""

from __future__ import annotations

from typing import List

from transcript_reducer.core.ir import Event
from transcript_reducer.formatters.base import BaseFormatter, FormatterOutput, ms_to_timecode


class SrtFormatter(BaseFormatter):
    """Formatter producing SRT cues, one per event."""

    @property
    def name(self) -> str:
        return "SRT subtitles"

    def format(self, events: List[Event]) -> FormatterOutput:
        lines: List[str] = []
        for index, event in enumerate(events, 1):
            lines.append(str(index))
            lines.append("{} --> {}".format(ms_to_timecode(event.start), ms_to_timecode(event.end)))
            lines.append(event.content)
            lines.append("")

        return FormatterOutput(
            content="\n".join(lines) + ("\n" if lines else ""),
            extension=".srt",
            media_type="application/x-subrip",
        )
