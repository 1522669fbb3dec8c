"""Unit tests for whitespace segmentation and sentence boundary search.

WHY: How long a word stays up and where "previous sentence" lands
both depend on the segmenter tagging tokens
correctly. A misclassified full stop changes both timing and navigation.

HOW: Tests are grouped by concern:
  - TestSegment: splitting, indices, punctuation flags, multipliers
  - TestCountWords: word counting matches segmentation
  - TestSentenceSearch: backward/forward boundary scans

RULES:
- Empty and whitespace-only input must produce empty sequences
- Sentence-end classification wins over clause-end
"""

import pytest

from rsvp_reader.core.segmenter import (
    count_words,
    find_next_sentence_start,
    find_sentence_start,
    segment,
)


# ---------------------------------------------------------------------------
# TestSegment
# ---------------------------------------------------------------------------


class TestSegment:
    """segment() splits on whitespace runs and tags punctuation."""

    def test_splits_on_whitespace_runs(self):
        words = segment("  one\ttwo \n\n three   ")
        assert words.texts == ["one", "two", "three"]

    def test_indices_are_sequential(self):
        words = segment("a b c d")
        assert [w.index for w in words] == [0, 1, 2, 3]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t \r\n"])
    def test_blank_text_gives_empty_sequence(self, text):
        words = segment(text)
        assert len(words) == 0
        assert not words

    @pytest.mark.parametrize("token", ["end.", "wow!", "why?"])
    def test_sentence_end(self, token):
        word = segment(token)[0]
        assert word.is_sentence_end
        assert not word.is_clause_end
        assert word.delay_multiplier == 1.5

    @pytest.mark.parametrize("token", ["first,", "then;", "note:"])
    def test_clause_end(self, token):
        word = segment(token)[0]
        assert word.is_clause_end
        assert not word.is_sentence_end
        assert word.delay_multiplier == 1.2

    def test_plain_word(self):
        word = segment("plain")[0]
        assert not word.is_sentence_end
        assert not word.is_clause_end
        assert word.delay_multiplier == 1.0

    def test_only_trailing_character_counts(self):
        words = segment("e.g Mr.Smith ,lead")
        assert [w.delay_multiplier for w in words] == [1.0, 1.0, 1.0]

    def test_punctuation_kept_in_text(self):
        assert segment("Hello, world.").texts == ["Hello,", "world."]

    def test_keeps_source_text(self):
        text = "Hello world."
        assert segment(text).source_text == text

    def test_units_are_immutable(self):
        word = segment("frozen")[0]
        with pytest.raises(AttributeError):
            word.text = "thawed"

    def test_count_matches_non_whitespace_runs(self):
        text = "  alpha beta,\tgamma.\n delta  "
        assert len(segment(text)) == 4


# ---------------------------------------------------------------------------
# TestCountWords
# ---------------------------------------------------------------------------


class TestCountWords:
    """count_words() agrees with segment()."""

    @pytest.mark.parametrize("text, expected", [
        ("", 0),
        ("   ", 0),
        ("one", 1),
        ("one two  three", 3),
        ("line one\nline two", 4),
    ])
    def test_counts(self, text, expected):
        assert count_words(text) == expected
        assert count_words(text) == len(segment(text))


# ---------------------------------------------------------------------------
# TestSentenceSearch
# ---------------------------------------------------------------------------


class TestSentenceSearch:
    """Backward and forward sentence boundary scans."""

    @pytest.fixture
    def words(self):
        # 0 Hello  1 world.  2 Next  3 sentence!
        return segment("Hello world. Next sentence!")

    def test_sentence_start_mid_sentence(self, words):
        assert find_sentence_start(words, 3) == 2

    def test_sentence_start_in_first_sentence(self, words):
        assert find_sentence_start(words, 1) == 0

    def test_sentence_start_at_sentence_start_stays(self, words):
        assert find_sentence_start(words, 2) == 2

    def test_sentence_start_at_zero(self, words):
        assert find_sentence_start(words, 0) == 0

    def test_next_sentence_from_start(self, words):
        assert find_next_sentence_start(words, 0) == 2

    def test_next_sentence_inclusive_of_current(self, words):
        assert find_next_sentence_start(words, 1) == 2

    def test_next_sentence_clamped_to_last_word(self, words):
        assert find_next_sentence_start(words, 2) == 3

    def test_next_sentence_without_boundary(self):
        words = segment("no full stop here")
        assert find_next_sentence_start(words, 0) == 3

    def test_next_sentence_empty(self):
        assert find_next_sentence_start(segment(""), 0) == 0
