"""Transcript Reducer: stackable merge policies for timestamped speech fragments.

WHY: Speech-to-text engines emit hundreds of tiny timestamped fragments
("Hel", "lo", " world", "!"). Reading, subtitling, or chunking a transcript
needs coarser segments: whole words, sentences, fixed-duration windows,
pause-delimited phrases. This package reduces the raw fragment sequence
into those larger segments without ever dropping or reordering text.

HOW: Three-stage pipeline: read (pluggable decoders), reduce (core
pipeline of merge stages), format (pluggable encoders). The reduction
engine is a list of boundary predicates, each applied as one
left-to-right pass over the previous pass's output.

RULES:
- Every stage is built on a single associative merge over Events
- The word-join stage always runs first
- Adding a new boundary policy = one new predicate class, no driver changes
"""

__version__ = "0.1.0"
