"""Command-line interface for the transcript reducer.

WHY: The reducer is used as a filter between a speech-to-text engine and
whatever consumes the transcript (a subtitle editor, a reader, another
script). The CLI wires together decoding, the reduction pipeline, and
encoding behind a single command that reads a file or stdin and writes a
file or stdout.

HOW: Uses argparse with a ``transform`` subcommand. Strategy options are
recorded by a custom action into one ordered list, so
``--sentences --chunk-size 2`` and ``--chunk-size 2 --sentences`` build
different pipelines. The pipeline is built (and its thresholds validated)
before any input is read.

RULES:
- Positional argument: input path, or "-" for stdin
- Strategy stages run in command-line order; an option may be repeated
- Durations: "<digits>ms" or "<digits>s"; counts: positive integers
- Encoded output goes to stdout (default) or --output; status and log
  messages go to stderr
- Exit codes: 0 = success (including a closed stdout pipe), 1 = error
- On error nothing is written to the output
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from pathlib import Path
from typing import List, Optional

from transcript_reducer import __version__
from transcript_reducer.config import (
    DEFAULT_INPUT_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    STDIO_PATH,
)
from transcript_reducer.core.ir import Event
from transcript_reducer.core.pipeline import Pipeline
from transcript_reducer.formatters import FORMATTERS, get_formatter
from transcript_reducer.readers import READERS, BaseReader, get_reader

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^(\d*)(.*)$")

# Milliseconds per supported duration unit.
_DURATION_UNITS = {"ms": 1, "s": 1000}


def _status(msg: str) -> None:
    """Print a status message to stderr, keeping stdout clean for piping."""
    print(msg, file=sys.stderr, flush=True)


def parse_duration(value: str) -> int:
    """Parse a duration such as ``"500ms"`` or ``"2s"`` into milliseconds.

    Raises:
        argparse.ArgumentTypeError: If the value has no digits, no unit,
            or a unit other than "ms" or "s".
    """
    digits, unit = _DURATION_RE.match(value.strip()).groups()
    if not digits:
        raise argparse.ArgumentTypeError("no digits found in value '{}'".format(value))
    if not unit:
        raise argparse.ArgumentTypeError("no unit found in value '{}'".format(value))
    if unit not in _DURATION_UNITS:
        raise argparse.ArgumentTypeError(
            "invalid duration unit in '{}'; expected 's' or 'ms'".format(value)
        )
    return int(digits) * _DURATION_UNITS[unit]


class _StrategyAction(argparse.Action):
    """Append ``(strategy, threshold)`` to the shared ordered selection list."""

    def __init__(self, option_strings, dest, strategy, **kwargs):
        self.strategy = strategy
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        selection = list(getattr(namespace, self.dest, None) or [])
        threshold = None if self.nargs == 0 else values
        selection.append((self.strategy, threshold))
        setattr(namespace, self.dest, selection)


def _read_events(reader: BaseReader, path: str) -> List[Event]:
    """Decode every record from ``path`` (or stdin for "-")."""
    if path == STDIO_PATH:
        return reader.read(sys.stdin)
    with open(path, "r", encoding="utf-8", newline="") as f:
        return reader.read(f)


def _write_output(content: str, path: str) -> None:
    """Write encoded output to ``path`` (or stdout for "-")."""
    if path == STDIO_PATH:
        sys.stdout.write(content)
        sys.stdout.flush()
    else:
        Path(path).write_text(content, encoding="utf-8")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, DEFAULT_LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _run_transform(args: argparse.Namespace) -> None:
    """Decode, reduce, and encode according to the parsed arguments.

    RULES:
    - Resolve the reader, formatter and pipeline before reading any input
    - Any ValueError (bad threshold, bad record) aborts with exit code 1
    - A broken stdout pipe is a normal exit
    """
    try:
        reader = get_reader(args.input_format)
        formatter = get_formatter(args.format)
        pipeline = Pipeline.from_selection(args.strategies)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    logger.debug("Pipeline stages: %s", [stage.name for stage in pipeline.all_stages])

    try:
        raw = _read_events(reader, args.input)
    except FileNotFoundError:
        print("Error: File not found: {}".format(args.input), file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print("Error: Could not read input: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    events = pipeline.run(raw)
    output = formatter.format(events)

    try:
        _write_output(output.content, args.output)
    except BrokenPipeError:
        # Python flushes stdout again at exit; point it at devnull first
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(0)
    except OSError as e:
        print("Error: Could not write output: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if args.output != STDIO_PATH:
        _status("Wrote {} event(s) to {}".format(len(events), args.output))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="transcript-reducer",
        description="Reduce timestamped speech-to-text fragments into words, "
                    "sentences, or time/size-bounded segments.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    transform = subparsers.add_parser(
        "transform",
        help="Read fragments, apply merge strategies, write the result.",
        description="Fragments are always joined into words first; the "
                    "strategy options below then run in the order given.",
    )

    transform.add_argument(
        "input",
        help="Input file path, or '-' for stdin.",
    )

    transform.add_argument(
        "-i", "--input-format",
        choices=sorted(READERS),
        default=DEFAULT_INPUT_FORMAT,
        help="Input format (default: %(default)s). 'csv-fix' is csv plus a "
             "fix for whisper.cpp's unescaped quotes.",
    )

    transform.add_argument(
        "-f", "--format",
        choices=sorted(FORMATTERS),
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output format (default: %(default)s).",
    )

    transform.add_argument(
        "-o", "--output",
        default=STDIO_PATH,
        help="Path to write the output to. Use '-' for stdout (default).",
    )

    transform.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log pipeline details to stderr.",
    )

    strategies = transform.add_argument_group(
        "merge strategies",
        "Each option adds one stage; stages run in command-line order.",
    )
    strategies.add_argument(
        "--max-silence",
        action=_StrategyAction, strategy="max-silence", dest="strategies",
        type=parse_duration, metavar="DURATION",
        help="Concatenates until the accumulated delay between events reaches the given duration.",
    )
    strategies.add_argument(
        "-s", "--sentences",
        action=_StrategyAction, strategy="sentences", dest="strategies", nargs=0,
        help="Concatenates up to the next sentence ending ('.', '!', or '?').",
    )
    strategies.add_argument(
        "-w", "--min-word-count",
        action=_StrategyAction, strategy="min-word-count", dest="strategies",
        type=int, metavar="N",
        help="Concatenates until the total word count of the result reaches N.",
    )
    strategies.add_argument(
        "-g", "--by-gap",
        action=_StrategyAction, strategy="by-gap", dest="strategies",
        type=parse_duration, metavar="DURATION",
        help="Concatenates until the delay before the next event exceeds the given duration.",
    )
    strategies.add_argument(
        "-l", "--lasting",
        action=_StrategyAction, strategy="lasting", dest="strategies",
        type=parse_duration, metavar="DURATION",
        help="Concatenates until the total duration of the result reaches the given value.",
    )
    strategies.add_argument(
        "-c", "--chunk-size",
        action=_StrategyAction, strategy="chunk-size", dest="strategies",
        type=int, metavar="N",
        help="Concatenates up to N events.",
    )
    transform.set_defaults(strategies=[], handler=_run_transform)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    args.handler(args)


if __name__ == "__main__":
    main()
