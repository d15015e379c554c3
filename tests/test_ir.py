"""Unit tests for the Event dataclass and the merge operation.

WHY: Every stage folds runs of events with merge(). If merge were not
associative, the result of a stage would depend on how its driver
happened to bracket the fold.

HOW: Direct checks of merge's bounds and text, then associativity over
every consecutive triple of the sample transcript and over whole-run
bracketings.
"""

import pytest

from transcript_reducer.core.ir import Event, merge, merge_all


class TestMerge:
    """merge() takes outer bounds and concatenates text."""

    def test_bounds_and_text(self):
        merged = merge(Event(0, 1000, "Hel"), Event(1000, 1100, "lo"))
        assert merged == Event(0, 1100, "Hello")

    def test_gap_is_covered(self):
        merged = merge(Event(0, 100, " a"), Event(900, 1000, " b"))
        assert merged.start == 0
        assert merged.end == 1000
        assert merged.text == " a b"

    def test_empty_text(self):
        assert merge(Event(0, 10, ""), Event(10, 20, "")).text == ""

    def test_inputs_unchanged(self):
        a = Event(0, 10, "a")
        b = Event(10, 20, "b")
        merge(a, b)
        assert a == Event(0, 10, "a")
        assert b == Event(10, 20, "b")


class TestAssociativity:
    """merge(merge(a, b), c) == merge(a, merge(b, c)) for ordered events."""

    def test_every_consecutive_triple(self, sample_fragments):
        for a, b, c in zip(sample_fragments, sample_fragments[1:], sample_fragments[2:]):
            assert merge(merge(a, b), c) == merge(a, merge(b, c))

    def test_whole_run_bracketings(self, sample_fragments):
        expected = merge_all(sample_fragments)
        for split in range(1, len(sample_fragments)):
            left = merge_all(sample_fragments[:split])
            right = merge_all(sample_fragments[split:])
            assert merge(left, right) == expected

    def test_merge_all_spans_run(self, sample_fragments):
        merged = merge_all(sample_fragments)
        assert merged.start == 0
        assert merged.end == 7500
        assert merged.text == "Hello world! How are you? I'm fine, thanks!"

    def test_merge_all_single(self):
        assert merge_all([Event(5, 6, "x")]) == Event(5, 6, "x")

    def test_merge_all_empty_raises(self):
        with pytest.raises(TypeError):
            merge_all([])


class TestEventProperties:

    def test_duration(self):
        assert Event(1100, 2000, " world").duration == 900
        assert Event(2000, 2000, "!").duration == 0

    def test_content_strips(self):
        assert Event(0, 1, "  Hello world!\n").content == "Hello world!"

    def test_word_count(self):
        assert Event(0, 1, " I'm fine, thanks!").word_count == 3
        assert Event(0, 1, "").word_count == 0
        assert Event(0, 1, "   ").word_count == 0

    @pytest.mark.parametrize("text,expected", [
        ("lo", True),
        ("!", True),
        ("", True),
        (" world", False),
        ("\tworld", False),
        ("\nworld", False),
    ])
    def test_is_continuation(self, text, expected):
        assert Event(0, 1, text).is_continuation() is expected

    def test_frozen(self):
        event = Event(0, 1, "a")
        with pytest.raises(AttributeError):
            event.text = "b"
