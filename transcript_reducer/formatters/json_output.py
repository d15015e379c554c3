"""JSON formatter: an array of {start, end, text} records.

WHY: Downstream tooling (and this tool's own JSON reader) consumes the
record list directly, so the output must match the bundled schema.

HOW: Events become plain dicts, the list is validated with jsonschema
against the same schema the reader uses, then serialised with
indent=2 and ensure_ascii=False.

RULES:
- Output validates against event_records.schema.json
- Text is written verbatim, non-ASCII characters unescaped
- Trailing newline after the closing bracket
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import jsonschema

from transcript_reducer.core.ir import Event
from transcript_reducer.formatters.base import BaseFormatter, FormatterOutput
from transcript_reducer.schema import get_event_schema


def events_to_records(events: List[Event]) -> List[Dict[str, Any]]:
    """Convert events into JSON-ready dicts, preserving order."""
    return [{"start": e.start, "end": e.end, "text": e.text} for e in events]


class JsonFormatter(BaseFormatter):
    """Formatter producing a schema-validated JSON array."""

    @property
    def name(self) -> str:
        return "JSON"

    def format(self, events: List[Event]) -> FormatterOutput:
        """Render events as a JSON array.

        Raises:
            jsonschema.ValidationError: If the generated records do not
                conform to the bundled schema.
        """
        records = events_to_records(events)
        jsonschema.validate(instance=records, schema=get_event_schema())

        return FormatterOutput(
            content=json.dumps(records, indent=2, ensure_ascii=False) + "\n",
            extension=".json",
            media_type="application/json",
        )
