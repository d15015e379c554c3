"""Input reader registry: pluggable decoders.

WHY: The CLI needs a single lookup to find the right decoder by the name
given to --input-format.

HOW: READERS maps CLI keys to reader *classes* (not instances). Callers
instantiate through get_reader(), which rejects unknown keys.

RULES:
- Keys are the exact --input-format values
- "csv-fix" is the default, since whisper.cpp is the common source
"""

from __future__ import annotations

from typing import Dict

from transcript_reducer.core.errors import ConfigurationError
from transcript_reducer.readers.base import BaseReader
from transcript_reducer.readers.csv_reader import CsvReader, WhisperCppCsvReader
from transcript_reducer.readers.json_reader import JsonReader

READERS: Dict[str, type] = {
    "csv-fix": WhisperCppCsvReader,
    "csv": CsvReader,
    "json": JsonReader,
}


def get_reader(key: str) -> BaseReader:
    """Instantiate the reader registered under ``key``.

    Raises:
        ConfigurationError: If no reader is registered under ``key``.
    """
    if key not in READERS:
        raise ConfigurationError(
            "Unknown input format '{}'. Available: {}".format(key, ", ".join(sorted(READERS)))
        )
    return READERS[key]()


__all__ = ["READERS", "BaseReader", "CsvReader", "JsonReader", "WhisperCppCsvReader", "get_reader"]
