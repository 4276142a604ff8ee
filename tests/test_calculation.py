"""Tests for the statistics helpers."""

import pytest

from app import calculation


@pytest.mark.parametrize(
    "offset, elapsed, expected",
    [
        (0.0, 5.3, 1.0),   # the keystroke that starts the session
        (0.4, 5.3, 1.0),
        (1.0, 5.3, 1.0),
        (2.0, 5.3, 2.0),
        (2.01, 5.3, 3.0),
        (5.0, 5.3, 5.0),
        (5.1, 5.3, 5.3),   # trailing partial second
        (0.4, 0.8, 0.8),   # no whole second elapsed yet
    ],
)
def test_bucket_second(offset, elapsed, expected):
    assert calculation.bucket_second(offset, elapsed) == pytest.approx(expected)


def test_correct_chars_per_second_is_sorted():
    buckets = calculation.correct_chars_per_second([2.5, 0.0, 0.3, 1.7, 2.9], 3.5)
    assert buckets == [(1.0, 2.0), (2.0, 1.0), (3.0, 2.0)]


def test_correct_chars_per_second_empty():
    assert calculation.correct_chars_per_second([], 4.0) == []


class TestConsistency:
    def test_empty(self):
        assert calculation.consistency([]) == 0.0

    def test_single_bucket(self):
        assert calculation.consistency([(1.0, 7.0)]) == 0.0

    def test_last_bucket_is_ignored(self):
        assert calculation.consistency([(1.0, 4.0), (1.5, 100.0)]) == 0.0

    def test_population_std_dev(self):
        buckets = [(1.0, 2.0), (2.0, 4.0), (3.0, 4.0), (4.0, 4.0), (5.0, 5.0),
                   (6.0, 5.0), (7.0, 7.0), (8.0, 9.0), (8.5, 1.0)]
        assert calculation.consistency(buckets) == pytest.approx(2.0)


def test_speed_over_time_is_cumulative():
    samples = calculation.speed_over_time([(1.0, 5.0), (2.0, 5.0), (2.5, 5.0)])
    assert samples == [
        pytest.approx((1.0, 60.0)),
        pytest.approx((2.0, 60.0)),
        pytest.approx((2.5, 72.0)),
    ]


def test_raw_speed_uses_bucket_width():
    samples = calculation.raw_speed([(1.0, 5.0), (2.0, 10.0), (2.5, 5.0)])
    assert samples == [
        pytest.approx((1.0, 60.0)),
        pytest.approx((2.0, 120.0)),
        pytest.approx((2.5, 120.0)),
    ]


class TestWords:
    @staticmethod
    def pairs(typed, expected):
        return [(c, c == g) for c, g in zip(typed, expected)]

    def test_all_correct(self):
        assert calculation.correct_word_count(self.pairs("one two three", "one two three")) == 3

    def test_mistake_spoils_word(self):
        assert calculation.correct_word_count(self.pairs("one two thrdd", "one two three")) == 2

    def test_wrong_space_still_separates(self):
        # a space typed in the wrong place still ends the word
        assert calculation.correct_word_count([("a", True), (" ", False), ("b", True)]) == 2

    def test_trailing_space_counts_empty_word(self):
        assert calculation.correct_word_count(self.pairs("one ", "one ")) == 2

    def test_empty(self):
        assert calculation.correct_word_count([]) == 1


class TestFinalNumbers:
    def test_wpm(self):
        assert calculation.final_wpm(3, 1.0) == 180
        assert calculation.final_wpm(3, 3.0) == 60
        assert calculation.final_wpm(2, 3.4) == 36

    def test_wpm_without_time(self):
        assert calculation.final_wpm(3, 0.0) == 0

    def test_accuracy(self):
        assert calculation.accuracy(11, 13) == 85
        assert calculation.accuracy(13, 13) == 100
        assert calculation.accuracy(1, 8) == 13

    def test_accuracy_without_keystrokes(self):
        assert calculation.accuracy(0, 0) == 0


def test_elapsed_seconds():
    assert calculation.elapsed_seconds(10.0, 13.4) == 3.4
    assert calculation.elapsed_seconds(10.0, 10.00049) == 0.0
    assert calculation.elapsed_seconds(10.0, 9.0) == 0.0


class TestPacePosition:
    def test_position(self):
        assert calculation.pace_position(60.0, 10.0, 20, 100) == 50
        assert calculation.pace_position(30.0, 3.0, 4, 19) == 7

    def test_without_pace(self):
        assert calculation.pace_position(None, 10.0, 20, 100) is None

    def test_without_words(self):
        assert calculation.pace_position(60.0, 10.0, 0, 100) is None
