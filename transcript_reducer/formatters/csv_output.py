"""CSV formatter: the same three-column layout the CSV reader accepts."""

from __future__ import annotations

import csv
import io
from typing import List

from transcript_reducer.core.ir import Event
from transcript_reducer.formatters.base import BaseFormatter, FormatterOutput


class CsvFormatter(BaseFormatter):
    """Formatter producing ``start,end,text`` rows with a header.

    Text is written verbatim and quoted only when it needs to be, so the
    output reads back through the plain ``csv`` reader unchanged.
    """

    @property
    def name(self) -> str:
        return "CSV"

    def format(self, events: List[Event]) -> FormatterOutput:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["start", "end", "text"])
        for event in events:
            writer.writerow([event.start, event.end, event.text])

        return FormatterOutput(
            content=buffer.getvalue(),
            extension=".csv",
            media_type="text/csv",
        )
