"""Tests for metrics computation."""

from docanalyzer.analysis import compute_metrics, count_words, reading_time


class TestCountWords:
    """Tests for count_words."""

    def test_empty(self):
        assert count_words("") == 0

    def test_whitespace_only(self):
        assert count_words("  \n\t ") == 0

    def test_mixed_whitespace(self):
        assert count_words("one  two\nthree\tfour ") == 4


class TestReadingTime:
    """Tests for reading_time."""

    def test_zero_words(self):
        assert reading_time(0) == 0

    def test_exactly_200_words(self):
        assert reading_time(200) == 1

    def test_rounds_up(self):
        assert reading_time(201) == 2
        assert reading_time(1) == 1


class TestComputeMetrics:
    """Tests for compute_metrics."""

    def test_from_text(self):
        metrics = compute_metrics(" ".join(["word"] * 201), page_count=3, sentiment="positive")

        assert metrics.word_count == 201
        assert metrics.reading_time == 2
        assert metrics.page_count == 3
        assert metrics.sentiment == "positive"

    def test_defaults(self):
        metrics = compute_metrics("")
        assert metrics.word_count == 0
        assert metrics.reading_time == 0
        assert metrics.page_count is None
        assert metrics.sentiment == "neutral"
