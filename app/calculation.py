from typing import Iterable, List, Optional, Sequence, Tuple
from collections import Counter
import math
import statistics

from app.config import CHARS_PER_WORD

Sample = Tuple[float, float]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def elapsed_seconds(started_at: float, now: float) -> float:
    """Seconds between two instants, to the nearest millisecond."""
    millis = round_half_up(max(0.0, now - started_at) * 1000.0)
    return millis / 1000.0


def bucket_second(offset: float, elapsed: float) -> float:
    """
    Second marker a correct keystroke typed `offset` seconds into the session
    is counted under.

    The keystroke that starts the session lands at offset 0 and goes to
    second 1. Offsets inside a completed whole second go to the ceiling of
    that second (sub-second ones to second 1), and anything in the trailing
    partial second is pinned to the elapsed time itself.
    """
    whole_second_limit = math.floor(elapsed)
    if offset <= 0.0:
        return 1.0
    if math.ceil(offset) <= whole_second_limit:
        if offset < 1.0:
            return 1.0
        return float(math.ceil(offset))
    return elapsed


def correct_chars_per_second(offsets: Iterable[float], elapsed: float) -> List[Sample]:
    """Histogram of correct keystrokes per second marker, ordered by time."""
    counts = Counter(bucket_second(o, elapsed) for o in offsets)
    return sorted((marker, float(n)) for marker, n in counts.items())


def consistency(buckets: Sequence[Sample]) -> float:
    # the last bucket is an incomplete second
    counts = [n for _, n in buckets[:-1]]
    if not counts:
        return 0.0
    return statistics.pstdev(counts)


def speed_over_time(buckets: Sequence[Sample]) -> List[Sample]:
    """Cumulative average wpm at every second marker."""
    out: List[Sample] = []
    pressed_until_now = 0.0
    for marker, n in buckets:
        pressed_until_now += n
        if marker <= 0:
            # a sub-millisecond session has no time axis to plot against
            continue
        out.append((marker, ((60.0 / marker) * pressed_until_now) / CHARS_PER_WORD))
    return out


def raw_speed(buckets: Sequence[Sample]) -> List[Sample]:
    """Wpm reached inside each bucket alone, measured over the bucket's width."""
    out: List[Sample] = []
    previous = 0.0
    for marker, n in buckets:
        width = marker - previous
        previous = marker
        if width <= 0:
            continue
        out.append((marker, (n / CHARS_PER_WORD) * (60.0 / width)))
    return out


def correct_word_count(typed: Sequence[Tuple[str, bool]]) -> int:
    """
    Count the space-separated words of `typed` ((char, correct) pairs) that
    contain no incorrect keystroke. Spaces only separate; consecutive spaces
    delimit an empty word, which counts as correct.
    """
    words = 0
    clean = True
    for ch, ok in typed:
        if ch == " ":
            words += 1 if clean else 0
            clean = True
        elif not ok:
            clean = False
    return words + (1 if clean else 0)


def final_wpm(correct_words: int, elapsed: float) -> int:
    if elapsed <= 0:
        return 0
    return int(math.ceil(correct_words * 60.0 / elapsed))


def accuracy(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(100.0 * correct / total)


def pace_position(
    pace: Optional[float], elapsed: float, number_of_words: int, prompt_length: int
) -> Optional[int]:
    """Index into the prompt a typist holding `pace` wpm would have reached."""
    if pace is None or number_of_words <= 0:
        return None
    progress = ((pace / 60.0) * elapsed) / number_of_words
    return round_half_up(progress * prompt_length)
