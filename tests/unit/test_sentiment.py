"""
Unit Tests for the keyword sentiment classifier
"""
import pytest

from app.models.feedback import Sentiment
from app.services.sentiment import classify, POSITIVE_WORDS, NEGATIVE_WORDS


class TestClassify:
    """Test keyword counting and tie breaking"""

    @pytest.mark.parametrize("text,expected", [
        ("This was GREAT", Sentiment.POSITIVE),
        ("it was bad and boring", Sentiment.NEGATIVE),
        ("it happened", Sentiment.NEUTRAL),
        ("", Sentiment.NEUTRAL),
    ])
    def test_reference_comments(self, text, expected):
        assert classify(text) == expected

    def test_none_is_neutral(self):
        assert classify(None) == Sentiment.NEUTRAL

    def test_case_insensitive(self):
        assert classify("EXCELLENT talk") == classify("excellent talk") == Sentiment.POSITIVE

    def test_tie_is_neutral(self):
        """One positive and one negative keyword cancel out"""
        assert classify("good speaker, poor venue") == Sentiment.NEUTRAL

    def test_more_negative_than_positive(self):
        assert classify("good idea but awful sound and terrible seats") == Sentiment.NEGATIVE

    def test_keyword_counted_once_however_often_it_appears(self):
        """Repeating a word does not outweigh two distinct keywords"""
        assert classify("bad bad bad bad, but great and useful") == Sentiment.POSITIVE

    def test_substring_matches_count(self):
        """Keywords match inside longer words, e.g. 'hatefully' contains 'hate'"""
        assert classify("they spoke hatefully") == Sentiment.NEGATIVE
        assert classify("goodness me") == Sentiment.POSITIVE

    def test_deterministic(self):
        text = "The best workshop, really useful"
        assert len({classify(text) for _ in range(10)}) == 1

    def test_keyword_lists_are_lowercase(self):
        for word in POSITIVE_WORDS + NEGATIVE_WORDS:
            assert word == word.lower()
