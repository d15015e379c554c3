"""Configuration defaults and .env loading.

WHY: The input format, output format, and log level a user wants rarely
change between runs. Letting them live in the environment (or a .env
file next to where the tool is run) saves repeating flags.

HOW: python-dotenv loads the .env file on import. Defaults are plain
module-level constants read from the environment; the CLI uses them as
argparse defaults, so an explicit flag always wins.

RULES:
- Only CLI defaults come from here; the reduction engine reads no config
- Values are not validated here; argparse does not check defaults against
  its choices, so the CLI resolves them through get_reader() and
  get_formatter(), which raise ConfigurationError for unknown names
- Log level names are the standard logging names (DEBUG, INFO, ...)
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the directory the tool is run from
load_dotenv()

DEFAULT_INPUT_FORMAT = os.getenv("TRANSCRIPT_REDUCER_INPUT_FORMAT", "csv-fix")
DEFAULT_OUTPUT_FORMAT = os.getenv("TRANSCRIPT_REDUCER_OUTPUT_FORMAT", "pretty")
DEFAULT_LOG_LEVEL = os.getenv("TRANSCRIPT_REDUCER_LOG_LEVEL", "WARNING").upper()

# Path value meaning stdin (for input) or stdout (for output).
STDIO_PATH = "-"
