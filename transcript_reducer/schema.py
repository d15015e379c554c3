"""Bundled JSON schema for event record lists.

Shared by the JSON reader (validating input) and the JSON formatter
(validating output before it is written).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

_SCHEMA_PATH = Path(__file__).resolve().parent / "event_records.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def get_event_schema() -> dict:
    """Load and cache the event records JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA
