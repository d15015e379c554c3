"""Error taxonomy for the reducer.

Both errors subclass ValueError so callers that only care about "bad
input or bad options" can catch one type. The reduction engine itself
raises neither: every check happens at the decoding or construction
boundary.
"""


class ConfigurationError(ValueError):
    """Raised when a strategy selection cannot be turned into a pipeline.

    WHY: A zero or negative threshold (or an unknown strategy name) would
    make a stage meaningless. Rejecting it before any stage runs keeps the
    reduction logic total.

    HOW: Raised by build_predicate() and the predicate constructors.

    RULES:
    - Message names the strategy and the offending value
    - Raised before any event is processed
    """


class InputFormatError(ValueError):
    """Raised when a decoded record is not a well-formed Event.

    WHY: Silently dropping a timestamped fragment would corrupt interval
    coverage, so a bad record aborts the whole run.

    HOW: Raised by the readers while decoding, never by the engine.

    RULES:
    - Message includes the 1-based record number when one is known
    - Covers missing fields, non-integer or negative times, end < start,
      and undecodable CSV/JSON
    """
