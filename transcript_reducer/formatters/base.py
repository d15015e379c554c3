"""Abstract base formatter, output container, and timecode helper.

WHY: Every output format consumes the same reduced Event list but
produces different text. This base class enforces a consistent interface
so the CLI can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles the rendered content with its file extension and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` never modifies the events it is given
- ``extension`` starts with a dot, e.g. ``".srt"``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from transcript_reducer.core.ir import Event


@dataclass
class FormatterOutput:
    """The rendered output of a formatter.

    Attributes:
        content: The full text to write.
        extension: File extension for this format, e.g. ``".json"``.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    content: str
    extension: str
    media_type: str


def ms_to_timecode(millis: int, decimal_separator: str = ",") -> str:
    """Render integer milliseconds as ``HH:MM:SS,mmm``.

    Hours are not wrapped at 24 and grow past two digits if needed.
    """
    hours, remainder = divmod(millis, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    seconds, millis = divmod(remainder, 1000)
    return "{:02d}:{:02d}:{:02d}{}{:03d}".format(
        hours, minutes, seconds, decimal_separator, millis
    )


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SRT subtitles'."""

    @abstractmethod
    def format(self, events: List[Event]) -> FormatterOutput:
        """Render the reduced events.

        Args:
            events: The pipeline output, in order.

        Returns:
            A FormatterOutput with the complete rendered text.
        """
