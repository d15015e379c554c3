"""CSV readers, with and without the whisper.cpp quoting fix.

WHY: whisper.cpp writes its CSV output with the text column wrapped in
double quotes but does not escape quotes inside the text, so a line like

    1200,2400," He said "hi""

is invalid CSV. Records whose text has no commas can be repaired by
dropping the bookending quotes before parsing.

HOW: CsvReader hands the stream to csv.DictReader. WhisperCppCsvReader
first passes every physical line through fix_whisper_cpp_line(): a line
with exactly two commas (three fields, none needing quotes) loses its
first and last double-quote characters. Everything else is untouched.

RULES:
- First row is the header: start,end,text
- Text is kept verbatim, leading whitespace included
- Extra columns are ignored; missing columns are an InputFormatError
"""

from __future__ import annotations

import csv
import logging
from typing import Iterable, Iterator, List, TextIO

from transcript_reducer.core.errors import InputFormatError
from transcript_reducer.core.ir import Event
from transcript_reducer.readers.base import BaseReader, build_event

logger = logging.getLogger(__name__)


def fix_whisper_cpp_line(line: str) -> str:
    """Remove the bookending quotes from a line that has exactly two commas.

    Lines with any other number of commas are returned unchanged, as are
    lines with fewer than two double quotes.
    """
    if line.count(",") != 2:
        return line

    left = line.find('"')
    right = line.rfind('"')
    if left == -1 or left == right:
        return line

    return line[:left] + line[left + 1:right] + line[right + 1:]


def _fixed_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield fix_whisper_cpp_line(line)


class CsvReader(BaseReader):
    """Reader for plain, correctly-quoted CSV."""

    @property
    def name(self) -> str:
        return "CSV"

    def _lines(self, stream: TextIO) -> Iterable[str]:
        return stream

    def read(self, stream: TextIO) -> List[Event]:
        reader = csv.DictReader(self._lines(stream))
        events: List[Event] = []
        try:
            for number, row in enumerate(reader, 1):
                events.append(build_event(row, number))
        except csv.Error as exc:
            raise InputFormatError(
                "Malformed CSV at line {}: {}".format(reader.line_num, exc)
            ) from exc

        logger.debug("Read %d CSV records", len(events))
        return events


class WhisperCppCsvReader(CsvReader):
    """CSV reader that repairs whisper.cpp's unescaped quotes first."""

    @property
    def name(self) -> str:
        return "CSV (whisper.cpp fix)"

    def _lines(self, stream: TextIO) -> Iterable[str]:
        return _fixed_lines(stream)
