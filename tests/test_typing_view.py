"""Tests for the typing view and main window."""

import random

from PySide6.QtCore import Qt

from app.state import Session, SessionSettings
from app.themes import THEMES
from ui.main_window import MainWindow
from ui.session_summary import stats_line
from ui.typing_view import BACKSPACE, WORD_BACKSPACE, TypingView, render_prompt_html
from utils.file_handler import ResultsLog

THEME = THEMES[0]


class TestRenderPrompt:
    def test_colours(self, clock):
        session = Session(prompt="ab cd", number_of_words=2, clock=clock)
        session.write("a")
        session.write("x")
        out = render_prompt_html(session, THEME)
        assert f'color:{THEME.correct}">a<' in out
        # the expected character is shown for a mistake
        assert f'color:{THEME.error}">b<' in out
        assert "text-decoration:underline" in out

    def test_missed_space_is_dotted(self, clock):
        session = Session(prompt="a b", number_of_words=2, clock=clock)
        session.write("a")
        session.write("x")
        assert f'color:{THEME.error}">·<' in render_prompt_html(session, THEME)

    def test_pace_marker_ahead_of_cursor(self, clock):
        session = Session(prompt="abcdefghij", number_of_words=2, pace=60.0, clock=clock)
        session.write("a")
        clock.advance(1.0)
        # (1 word/s * 1s / 2 words) * 10 chars
        assert session.pace_position() == 5
        out = render_prompt_html(session, THEME)
        assert f'background:{THEME.pace}">f<' in out

    def test_markup_is_escaped(self, clock):
        session = Session(prompt="<b>", number_of_words=1, clock=clock)
        assert "&lt;" in render_prompt_html(session, THEME)


class TestTypingView:
    def test_typing_to_the_end_finishes(self, qtbot, clock):
        view = TypingView()
        qtbot.addWidget(view)
        session = Session(prompt="ab", number_of_words=1, clock=clock)
        view.set_session(session)

        view.dispatch("a")
        clock.advance(1.0)
        with qtbot.waitSignal(view.finished, timeout=1000) as blocker:
            view.dispatch("b")

        assert blocker.args == [session]
        assert session.wpm == 60
        assert view.summary.lblStats.text() == stats_line(session)

    def test_editing_keys(self, qtbot, clock):
        view = TypingView()
        qtbot.addWidget(view)
        session = Session(prompt="one two three", number_of_words=3, clock=clock)
        view.set_session(session)

        for ch in "one tw":
            view.dispatch(ch)
        view.dispatch(BACKSPACE)
        assert session.typed_text() == "one t"
        view.dispatch(WORD_BACKSPACE)
        assert session.typed_text() == "one "

    def test_key_presses(self, qtbot, clock):
        view = TypingView()
        qtbot.addWidget(view)
        session = Session(prompt="hello", number_of_words=1, clock=clock)
        view.set_session(session)

        qtbot.keyClicks(view, "hel")
        qtbot.keyClick(view, Qt.Key_Backspace)
        assert session.typed_text() == "he"

    def test_tab_then_retry(self, qtbot, clock):
        view = TypingView()
        qtbot.addWidget(view)
        view.set_session(Session(prompt="hello", number_of_words=1, clock=clock))

        qtbot.keyClick(view, Qt.Key_Tab)
        with qtbot.waitSignal(view.retryRequested, timeout=1000):
            qtbot.keyClick(view, "r")
        assert view.session.keystrokes == []

    def test_tick_counts_down(self, qtbot, clock):
        view = TypingView()
        qtbot.addWidget(view)
        session = Session(prompt="hello", number_of_words=1, number_of_secs=0.2, clock=clock)
        view.set_session(session)

        view.on_tick()
        assert session.seconds_remaining == 0.2  # not started yet

        view.dispatch("h")
        with qtbot.waitSignal(view.finished, timeout=1000):
            for _ in range(3):
                view.on_tick()
        assert session.has_finished()

    def test_death_mode_shows_skull(self, qtbot, clock):
        view = TypingView()
        qtbot.addWidget(view)
        session = Session(prompt="hello", number_of_words=1, death_mode=True, clock=clock)
        view.set_session(session)

        with qtbot.waitSignal(view.finished, timeout=1000):
            view.dispatch("x")
        art = view.summary.lblSkull.text()
        assert art
        assert session.failure_art(lambda: "rebuilt") == art


class TestMainWindow:
    def test_retry_and_new(self, qtbot, tmp_path):
        settings = SessionSettings(number_of_words=3)
        win = MainWindow(settings, results_log=ResultsLog(tmp_path / "log.csv"), rng=random.Random(5))
        qtbot.addWidget(win)
        first = win.session
        assert win.ticks.is_running()

        win.retry()
        assert win.session is not first
        assert win.session.prompt == first.prompt
        assert win.view.session is win.session

        win.new_prompt()
        assert len(win.session.prompt.split(" ")) == 3

    def test_finished_session_is_logged(self, qtbot, tmp_path):
        log = ResultsLog(tmp_path / "log.csv")
        win = MainWindow(SessionSettings(number_of_words=1, prompt="go"), results_log=log)
        qtbot.addWidget(win)

        win.view.dispatch("g")
        win.view.dispatch("o")

        assert not win.ticks.is_running()
        assert len(log.read_rows()) == 1
