"""Package entry point for ``python -m transcript_reducer``."""

from transcript_reducer.cli import main

if __name__ == "__main__":
    main()
