# ui/main_window.py
import logging
import random
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMainWindow

from app.config import APP_NAME
from app.state import ResultsSink, Session, SessionSettings
from app.themes import THEMES, DEFAULT_THEME_INDEX, Theme
from core.chrono import TickSource
from services.prompts import build_session
from ui.typing_view import TypingView

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Owns the current session and swaps in a fresh one on retry or new."""

    def __init__(
        self,
        settings: SessionSettings,
        results_log: Optional[ResultsSink] = None,
        theme: Optional[Theme] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__()
        self.resize(1100, 640)
        self.settings = settings
        self.results_log = results_log
        self.rng = rng or random.Random()

        self.view = TypingView(self)
        self.view.retryRequested.connect(self.retry)
        self.view.newRequested.connect(self.new_prompt)
        self.view.quitRequested.connect(self.close)
        self.view.finished.connect(self._on_finished)
        self.setCentralWidget(self.view)

        # ensures the typing view is the focus receiver
        self.setFocusPolicy(Qt.NoFocus)
        self.menuBar().setVisible(False)

        self.ticks = TickSource(parent=self)
        self.ticks.ticked.connect(self.view.on_tick)

        self._apply_theme(theme or THEMES[DEFAULT_THEME_INDEX])
        self.session: Session = build_session(self.settings, self.results_log, self.rng)
        self._show_session()

    # ---------------- Theme ----------------
    def _apply_theme(self, theme: Theme):
        self.view.set_theme(theme)
        self.setStyleSheet(
            f"""
            QWidget {{ background: {theme.background}; color: {theme.primary}; }}
            QLabel#lblTimer, QLabel#lblLegend {{ color: {theme.secondary}; }}
            """
        )

    # ---------------- Sessions ----------------
    def _show_session(self):
        self.view.set_session(self.session)
        self.ticks.start()
        self.setWindowTitle(APP_NAME)

    def retry(self):
        """Same prompt, fresh session."""
        self.session = Session.from_settings(
            self.settings, self.session.prompt, results_log=self.results_log
        )
        self._show_session()

    def new_prompt(self):
        self.session = build_session(self.settings, self.results_log, self.rng)
        self._show_session()

    def _on_finished(self, session: Session):
        self.ticks.stop()
        if session.fatal_error():
            self.setWindowTitle(f"{APP_NAME} — dead")
        else:
            self.setWindowTitle(f"{APP_NAME} — {session.wpm} wpm")
