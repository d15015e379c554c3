"""Core reduction engine: events, boundary predicates, stages, pipeline.

WHY: The engine is the stable heart of the tool. Readers produce Events,
formatters consume them, and everything in between lives here.

HOW: ir.py defines the Event and its merge, predicates.py the boundary
policies, reducer.py the single-pass stage driver, pipeline.py the
ordered composition of stages.

RULES:
- The engine assumes validated input and raises nothing on it
- No I/O in this package
"""

from transcript_reducer.core.errors import ConfigurationError, InputFormatError
from transcript_reducer.core.ir import Event, merge
from transcript_reducer.core.pipeline import Pipeline, run
from transcript_reducer.core.reducer import reduce

__all__ = [
    "ConfigurationError",
    "Event",
    "InputFormatError",
    "Pipeline",
    "merge",
    "reduce",
    "run",
]
