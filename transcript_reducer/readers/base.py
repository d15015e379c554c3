"""Abstract base reader and the record-to-Event validation they share.

WHY: The engine assumes well-formed Events and never checks them. Every
decoder therefore has to turn its raw records into Events the same way
and reject the same malformed ones, whatever the wire format.

HOW: BaseReader is an ABC with a ``name`` property and a ``read()``
method taking a text stream. build_event() converts one raw record into
an Event or raises InputFormatError naming the record.

RULES:
- Subclasses MUST implement ``name`` and ``read()``
- ``read()`` returns the complete list of Events (no partial results)
- Times must be non-negative integers and end >= start
- Integer-valued strings ("1200") are accepted for CSV sources
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, List, TextIO

from transcript_reducer.core.errors import InputFormatError
from transcript_reducer.core.ir import Event

# Fields every record must carry.
REQUIRED_FIELDS = ("start", "end", "text")

# Optionally signed ASCII digits, as written by CSV sources.
_INTEGER_RE = re.compile(r"-?[0-9]+")


def _to_millis(value: Any, field_name: str, record_number: int) -> int:
    if isinstance(value, bool):
        raise InputFormatError(
            "Record {}: '{}' must be an integer, got {!r}".format(record_number, field_name, value)
        )
    if isinstance(value, int):
        millis = value
    elif isinstance(value, float) and value.is_integer():
        millis = int(value)
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        millis = int(value.strip())
    else:
        raise InputFormatError(
            "Record {}: '{}' must be an integer, got {!r}".format(record_number, field_name, value)
        )
    if millis < 0:
        raise InputFormatError(
            "Record {}: '{}' must not be negative, got {}".format(record_number, field_name, millis)
        )
    return millis


def build_event(record: dict, record_number: int) -> Event:
    """Convert one raw record into a validated Event.

    Args:
        record: Mapping with ``start``, ``end`` and ``text`` keys.
        record_number: 1-based position of the record, for error messages.

    Returns:
        The Event.

    Raises:
        InputFormatError: Missing field, non-integer or negative time,
            non-string text, or end < start.
    """
    missing = [name for name in REQUIRED_FIELDS if record.get(name) is None]
    if missing:
        raise InputFormatError(
            "Record {}: missing field(s): {}".format(record_number, ", ".join(missing))
        )

    start = _to_millis(record["start"], "start", record_number)
    end = _to_millis(record["end"], "end", record_number)
    if end < start:
        raise InputFormatError(
            "Record {}: end ({}) is before start ({})".format(record_number, end, start)
        )

    text = record["text"]
    if not isinstance(text, str):
        raise InputFormatError(
            "Record {}: 'text' must be a string, got {!r}".format(record_number, text)
        )

    return Event(start=start, end=end, text=text)


class BaseReader(ABC):
    """Abstract base for all input decoders.

    To add a new input format:
    1. Create a new file in readers/
    2. Subclass BaseReader
    3. Implement read() and name
    4. Register in READERS dict in readers/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'CSV'."""

    @abstractmethod
    def read(self, stream: TextIO) -> List[Event]:
        """Decode every record in ``stream`` into Events.

        Raises:
            InputFormatError: If any record is malformed.
        """
