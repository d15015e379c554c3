"""JSON reader for lists (or streams) of event records.

WHY: Some tools write a single JSON array of records, others write one
object after another (JSON Lines, or objects simply concatenated). Both
carry the same three fields and should decode the same way.

HOW: The whole input is decoded value by value with
json.JSONDecoder.raw_decode(). Arrays contribute their items, objects
contribute themselves. The collected records are validated against the
bundled schema with jsonschema, then converted with build_event(), which
also enforces end >= start.

RULES:
- Accepts: one array, several arrays, a stream of objects, or a mix
- Any other top-level value (number, string, null) is an InputFormatError
- Schema violations are reported with the 1-based record number
- Empty input decodes to an empty list
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, TextIO

import jsonschema

from transcript_reducer.core.errors import InputFormatError
from transcript_reducer.core.ir import Event
from transcript_reducer.readers.base import BaseReader, build_event
from transcript_reducer.schema import get_event_schema

logger = logging.getLogger(__name__)


def decode_records(raw: str) -> List[Any]:
    """Decode every top-level JSON value in ``raw`` into one record list.

    Raises:
        InputFormatError: If the text is not valid JSON or a top-level
            value is neither an array nor an object.
    """
    decoder = json.JSONDecoder()
    records: List[Any] = []
    pos = 0
    length = len(raw)

    while True:
        while pos < length and raw[pos].isspace():
            pos += 1
        if pos >= length:
            break
        try:
            value, pos = decoder.raw_decode(raw, pos)
        except json.JSONDecodeError as exc:
            raise InputFormatError("Malformed JSON: {}".format(exc)) from exc

        if isinstance(value, list):
            records.extend(value)
        elif isinstance(value, dict):
            records.append(value)
        else:
            raise InputFormatError(
                "Expected a JSON array or object, got {}".format(type(value).__name__)
            )

    return records


class JsonReader(BaseReader):
    """Reader for JSON arrays and object streams of {start, end, text}."""

    @property
    def name(self) -> str:
        return "JSON"

    def read(self, stream: TextIO) -> List[Event]:
        records = decode_records(stream.read())

        try:
            jsonschema.validate(instance=records, schema=get_event_schema())
        except jsonschema.ValidationError as exc:
            location = list(exc.absolute_path)
            if location and isinstance(location[0], int):
                prefix = "Record {}: ".format(location[0] + 1)
            else:
                prefix = ""
            raise InputFormatError("{}{}".format(prefix, exc.message)) from exc

        events = [build_event(record, number) for number, record in enumerate(records, 1)]
        logger.debug("Read %d JSON records", len(events))
        return events
