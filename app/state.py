from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Tuple
import logging
import time

from app import calculation
from app.config import TICK_RATE_MS
from app.errors import ResultsLogError

log = logging.getLogger(__name__)


class Outcome(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class Keystroke:
    char: str
    outcome: Outcome
    timestamp: float


@dataclass
class SessionSettings:
    """What the command line hands over to build a session."""
    number_of_words: int
    number_of_secs: Optional[float] = None
    pace: Optional[float] = None
    death_mode: bool = False
    prompt: Optional[str] = None


@dataclass(frozen=True)
class SessionResult:
    finished_at: datetime
    number_of_words: int
    number_of_secs: Optional[float]
    elapsed_secs: float
    wpm: int
    accuracy: int
    std_dev: float


class ResultsSink(Protocol):
    def append(self, result: SessionResult) -> None: ...


@dataclass
class Session:
    """
    One attempt at typing a prompt.

    Mutated by write/backspace/word_backspace and on_tick while running,
    summarized once by calc_results when has_finished() turns true. A retry
    builds a new Session instead of resetting this one.
    """
    prompt: str
    number_of_words: int
    number_of_secs: Optional[float] = None
    pace: Optional[float] = None
    death_mode: bool = False
    results_log: Optional[ResultsSink] = field(default=None, repr=False, compare=False)
    clock: Callable[[], float] = field(default=time.time, repr=False, compare=False)

    keystrokes: List[Keystroke] = field(default_factory=list)
    cursor_pos: int = 0
    started_at: Optional[float] = None
    seconds_remaining: Optional[float] = None

    # results, zero until calc_results runs
    elapsed: float = 0.0
    wpm: int = 0
    accuracy: int = 0
    std_dev: float = 0.0
    raw_coords: List[Tuple[float, float]] = field(default_factory=list)
    wpm_coords: List[Tuple[float, float]] = field(default_factory=list)

    _failure_art: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.seconds_remaining is None:
            self.seconds_remaining = self.number_of_secs

    @classmethod
    def from_settings(
        cls,
        settings: SessionSettings,
        prompt: str,
        results_log: Optional[ResultsSink] = None,
    ) -> "Session":
        return cls(
            prompt=prompt,
            number_of_words=settings.number_of_words,
            number_of_secs=settings.number_of_secs,
            pace=settings.pace,
            death_mode=settings.death_mode,
            results_log=results_log,
        )

    # ---------------- timing ----------------
    def on_tick(self):
        if self.seconds_remaining is not None:
            self.seconds_remaining -= TICK_RATE_MS / 1000.0

    def start(self, now: Optional[float] = None):
        if self.started_at is None:
            self.started_at = self.clock() if now is None else now
            log.debug("session started (%d chars)", len(self.prompt))

    def has_started(self) -> bool:
        return self.started_at is not None

    def elapsed_seconds(self, now: Optional[float] = None) -> float:
        if self.started_at is None:
            return 0.0
        now = self.clock() if now is None else now
        return calculation.elapsed_seconds(self.started_at, now)

    def pace_position(self, now: Optional[float] = None) -> Optional[int]:
        if self.pace is None or self.started_at is None:
            return None
        return calculation.pace_position(
            self.pace, self.elapsed_seconds(now), self.number_of_words, len(self.prompt)
        )

    # ---------------- editing ----------------
    def expected_char(self, idx: int) -> Optional[str]:
        if 0 <= idx < len(self.prompt):
            return self.prompt[idx]
        return None

    def increment_cursor(self):
        if self.cursor_pos < len(self.keystrokes):
            self.cursor_pos += 1

    def decrement_cursor(self):
        if self.cursor_pos > 0:
            self.cursor_pos -= 1

    def write(self, char: str):
        # The expected character follows the number of keystrokes, not the
        # cursor; the two only differ after editing in the middle.
        idx = len(self.keystrokes)
        expected = self.expected_char(idx)
        if expected is None:
            return
        now = self.clock()
        if idx == 0 and self.started_at is None:
            self.start(now)

        outcome = Outcome.CORRECT if char == expected else Outcome.INCORRECT
        self.keystrokes.insert(self.cursor_pos, Keystroke(char, outcome, now))
        self.increment_cursor()

    def _remove_before_cursor(self):
        del self.keystrokes[self.cursor_pos - 1]
        self.decrement_cursor()

    def backspace(self):
        if self.cursor_pos > 0:
            self._remove_before_cursor()

    def word_backspace(self):
        if self.cursor_pos > 0 and self.keystrokes[-1].char == " ":
            self._remove_before_cursor()
        while self.cursor_pos > 0 and self.keystrokes[-1].char != " ":
            self._remove_before_cursor()

    def typed_text(self) -> str:
        return "".join(k.char for k in self.keystrokes)

    # ---------------- completion ----------------
    def fatal_error(self) -> bool:
        return self.death_mode and any(
            k.outcome is Outcome.INCORRECT for k in self.keystrokes
        )

    def has_finished(self) -> bool:
        finished_prompt = len(self.keystrokes) == len(self.prompt)
        out_of_time = self.seconds_remaining is not None and self.seconds_remaining <= 0.0
        return finished_prompt or out_of_time or self.fatal_error()

    def calc_results(self, now: Optional[float] = None):
        if self.started_at is None:
            return
        now = self.clock() if now is None else now
        elapsed = calculation.elapsed_seconds(self.started_at, now)

        correct = [k for k in self.keystrokes if k.outcome is Outcome.CORRECT]
        buckets = calculation.correct_chars_per_second(
            (k.timestamp - self.started_at for k in correct), elapsed
        )
        self.std_dev = calculation.consistency(buckets)
        self.wpm_coords = calculation.speed_over_time(buckets)
        self.raw_coords = calculation.raw_speed(buckets)

        words = calculation.correct_word_count(
            [(k.char, k.outcome is Outcome.CORRECT) for k in self.keystrokes]
        )
        self.wpm = calculation.final_wpm(words, elapsed)
        self.accuracy = calculation.accuracy(len(correct), len(self.keystrokes))
        self.elapsed = elapsed
        log.debug(
            "session finished: %d wpm, %d%% acc, %.2f sd in %.2fs",
            self.wpm, self.accuracy, self.std_dev, elapsed,
        )

        self.persist(now)

    def result(self, now: Optional[float] = None) -> SessionResult:
        now = self.clock() if now is None else now
        return SessionResult(
            finished_at=datetime.fromtimestamp(now),
            number_of_words=self.number_of_words,
            number_of_secs=self.number_of_secs,
            elapsed_secs=self.elapsed,
            wpm=self.wpm,
            accuracy=self.accuracy,
            std_dev=self.std_dev,
        )

    def persist(self, now: Optional[float] = None):
        """Append the results to the log; a failed write only gets logged."""
        if self.results_log is None:
            return
        try:
            self.results_log.append(self.result(now))
        except ResultsLogError as e:
            log.warning("Failed to save results: %s", e)

    # ---------------- render cache ----------------
    def failure_art(self, build: Callable[[], Any]) -> Any:
        """Art shown after a fatal error; `build` runs at most once per session."""
        if self._failure_art is None:
            self._failure_art = build()
        return self._failure_art
