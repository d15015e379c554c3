"""Output formatter registry: pluggable encoders.

WHY: The CLI needs a single lookup to find the right formatter by the
name given to --format. A central dict makes it trivial to add new
formats: create the formatter class, import it here, add one line.

HOW: FORMATTERS maps CLI keys to formatter *classes* (not instances).
Callers instantiate through get_formatter(), which rejects unknown keys.

RULES:
- Keys are the exact --format values
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import Dict

from transcript_reducer.core.errors import ConfigurationError
from transcript_reducer.formatters.base import BaseFormatter, FormatterOutput
from transcript_reducer.formatters.csv_output import CsvFormatter
from transcript_reducer.formatters.json_output import JsonFormatter
from transcript_reducer.formatters.pretty import PrettyFormatter
from transcript_reducer.formatters.srt import SrtFormatter

FORMATTERS: Dict[str, type] = {
    "pretty": PrettyFormatter,
    "csv": CsvFormatter,
    "json": JsonFormatter,
    "srt": SrtFormatter,
}


def get_formatter(key: str) -> BaseFormatter:
    """Instantiate the formatter registered under ``key``.

    Raises:
        ConfigurationError: If no formatter is registered under ``key``
            (e.g. a bad TRANSCRIPT_REDUCER_OUTPUT_FORMAT value).
    """
    if key not in FORMATTERS:
        raise ConfigurationError(
            "Unknown output format '{}'. Available: {}".format(key, ", ".join(sorted(FORMATTERS)))
        )
    return FORMATTERS[key]()


__all__ = ["FORMATTERS", "BaseFormatter", "FormatterOutput", "get_formatter"]
