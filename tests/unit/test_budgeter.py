"""Unit tests for the text budgeter."""

import pytest

from src.utils.budgeter import (
    assemble_text,
    trim_to_end_sentence,
    trim_to_start_sentence,
    unique,
)


def test_unique_keeps_first_occurrence_order():
    assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


class TestTrimToEndSentence:
    def test_cuts_trailing_fragment(self):
        assert trim_to_end_sentence("Hello world. This is cut") == "Hello world."

    def test_keeps_other_sentence_enders(self):
        assert trim_to_end_sentence("Really? Yes! And then") == "Really? Yes!"

    def test_no_boundary_keeps_text(self):
        assert trim_to_end_sentence("no boundary at all ") == "no boundary at all"

    def test_no_boundary_strict_drops_text(self):
        assert trim_to_end_sentence("no boundary at all", strict=True) == ""

    def test_empty(self):
        assert trim_to_end_sentence("") == ""

    def test_sentence_ending_in_a_number_keeps_its_period(self):
        text = trim_to_end_sentence("Python was released in 1991. It is popular and")
        assert text == "Python was released in 1991."

    def test_lone_mark_after_whitespace_is_not_kept(self):
        assert trim_to_end_sentence("Done . trailing") == "Done"

    def test_emoji_is_a_boundary(self):
        assert trim_to_end_sentence("Great launch 🚀 more to") == "Great launch 🚀"

    def test_emoji_with_variation_selector(self):
        assert trim_to_end_sentence("We love it ❤️ and then", strict=True) == "We love it ❤️"


class TestTrimToStartSentence:
    def test_drops_leading_fragment(self):
        assert trim_to_start_sentence("tail of one. Whole second.") == "Whole second."

    def test_newline_is_a_boundary(self):
        assert trim_to_start_sentence("partial line\nNext line") == "Next line"

    def test_earliest_boundary_wins(self):
        assert trim_to_start_sentence("fragment! More. Even more.") == "More. Even more."

    def test_no_boundary_unchanged(self):
        assert trim_to_start_sentence("no boundary here") == "no boundary here"


class TestAssembleText:
    def test_joins_unique_bits_with_newlines(self):
        text = assemble_text(["One.", "Two.", "One.", "", "Three."], 100)
        assert text == "One.\nTwo.\nThree.\n"

    def test_trailing_ellipsis_trimmed_to_sentence(self):
        text = assemble_text(["First sentence. Second is cut..."], 100)
        assert text == "First sentence.\n"

    def test_trailing_ellipsis_after_a_year(self):
        text = assemble_text(["Founded in 1991. Revenue grew to 5..."], 100)
        assert text == "Founded in 1991.\n"

    def test_leading_ellipsis_trimmed_to_sentence(self):
        text = assemble_text(["...tail of one. Whole second."], 100)
        assert text == "Whole second.\n"

    def test_bit_emptied_by_trimming_is_skipped(self):
        assert assemble_text(["...only a tail."], 100) == ""

    def test_tiny_budget_never_leaves_partial_words(self):
        text = assemble_text(["Hello world...", "...and more."], 5)
        assert len(text) <= 5
        assert "Hell" not in text

    def test_overflowing_bit_cut_back_to_sentence(self):
        text = assemble_text(["One. Two three four five"], 10)
        assert text == "One.\n"

    def test_overflowing_bit_without_boundary_is_dropped(self):
        text = assemble_text(["Short.", "a very long bit without any boundary"], 12)
        assert text == "Short.\n"

    def test_stops_once_budget_is_reached(self):
        assert assemble_text(["aaaa.", "bbbb."], 6) == "aaaa.\n"

    def test_later_short_bit_can_fill_remaining_room(self):
        text = assemble_text(["First.", "This one is far too long to fit.", "Ok."], 12)
        assert text == "First.\nOk.\n"

    def test_zero_budget(self):
        assert assemble_text(["Anything."], 0) == ""

    def test_no_bits(self):
        assert assemble_text([], 100) == ""

    @pytest.mark.parametrize("budget", [0, 1, 2, 5, 9, 17, 33, 64, 150, 400])
    def test_output_never_exceeds_budget(self, budget):
        bits = [
            "Python is a programming language. It was created by Guido...",
            "...released in 1991. It emphasises readability.",
            "Python 3.12 adds faster startup!",
            "",
            "Python is a programming language. It was created by Guido...",
            "Key: value",
            "A snippet with no punctuation whatsoever that keeps on going",
        ]
        text = assemble_text(bits, budget)
        assert len(text) <= budget
        if text:
            assert text.endswith("\n")
