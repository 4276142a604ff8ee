from __future__ import annotations
import html
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QSizePolicy, QVBoxLayout, QWidget

from app.state import Outcome, Session
from app.themes import THEMES, DEFAULT_THEME_INDEX, Theme
from ui.session_summary import FINISHED_LEGEND, SessionSummary

RUNNING_LEGEND = "Press tab for options"
TABBED_LEGEND = "(r)etry / (n)ew / (esc)ape / (tab) return"

BACKSPACE = "<BACKSPACE>"
WORD_BACKSPACE = "<WORD_BACKSPACE>"
TAB = "<TAB>"
ESCAPE = "<ESC>"


def _span(txt: str, color: Optional[str] = None, underline: bool = False, bg: Optional[str] = None) -> str:
    style_bits = ["font-weight:bold"]
    if color:
        style_bits.append(f"color:{color}")
    if underline:
        style_bits.append("text-decoration:underline")
    if bg:
        style_bits.append(f"background:{bg}")
    style = ";".join(style_bits)
    return f'<span style="{style}">{html.escape(txt)}</span>'


def render_prompt_html(session: Session, theme: Theme, now: Optional[float] = None) -> str:
    """
    Rich-text rendering of a running session. Typed positions show the
    expected character in the correct/error colour (a missed space as '·'),
    the next character is underlined and the pace position gets a background.
    """
    pace = session.pace_position(now)
    prompt = session.prompt
    parts: list[str] = []

    for idx, stroke in enumerate(session.keystrokes):
        expected = session.expected_char(idx) or stroke.char
        bg = theme.pace if pace == idx else None
        if stroke.outcome is Outcome.INCORRECT:
            parts.append(_span("·" if expected == " " else expected, theme.error, bg=bg))
        else:
            parts.append(_span(expected, theme.correct, bg=bg))

    cursor = session.cursor_pos
    nxt = session.expected_char(cursor)
    if nxt is not None:
        bg = theme.pace if pace == cursor else None
        parts.append(_span(nxt, theme.secondary, underline=True, bg=bg))

    next_idx = cursor + 1
    if pace is not None and next_idx <= pace < len(prompt):
        parts.append(_span(prompt[next_idx:pace], theme.secondary))
        parts.append(_span(prompt[pace], theme.secondary, bg=theme.pace))
        parts.append(_span(prompt[pace + 1:], theme.secondary))
    elif next_idx < len(prompt):
        parts.append(_span(prompt[next_idx:], theme.secondary))

    return '<p style="white-space:pre-wrap">' + "".join(parts) + "</p>"


class TypingView(QWidget):
    retryRequested = Signal()
    newRequested = Signal()
    quitRequested = Signal()
    finished = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)

        root = QVBoxLayout(self)
        root.setContentsMargins(40, 30, 40, 20)
        root.setSpacing(20)

        self.lblTimer = QLabel("", self)
        self.lblTimer.setObjectName("lblTimer")
        self.lblTimer.setAlignment(Qt.AlignCenter)
        root.addWidget(self.lblTimer)

        self.lblLine = QLabel("", self)
        self.lblLine.setObjectName("lblLine")
        self.lblLine.setTextFormat(Qt.RichText)
        self.lblLine.setWordWrap(True)
        self.lblLine.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblLine.setStyleSheet("font-size: 30px; line-height: 1.35;")
        root.addWidget(self.lblLine, stretch=1)

        self.summary = SessionSummary(self)
        self.summary.setVisible(False)
        root.addWidget(self.summary, stretch=1)

        self.lblLegend = QLabel(RUNNING_LEGEND, self)
        self.lblLegend.setObjectName("lblLegend")
        self.lblLegend.setStyleSheet("font-style: italic;")
        root.addWidget(self.lblLegend)

        self.session: Optional[Session] = None
        self.theme: Theme = THEMES[DEFAULT_THEME_INDEX]
        self._tabbed = False
        self._summarized = False

    # ---------------- state ----------------
    def set_theme(self, theme: Theme):
        self.theme = theme
        self.summary.set_theme(theme)
        self.refresh()

    def set_session(self, session: Session):
        self.session = session
        self._tabbed = False
        self._summarized = False
        self.summary.setVisible(False)
        self.lblLine.setVisible(True)
        self.refresh()
        self.setFocus()

    def on_tick(self):
        s = self.session
        if s is None:
            return
        if s.has_started() and not s.has_finished():
            s.on_tick()
            self._check_finished()
        self.refresh()

    def _check_finished(self):
        s = self.session
        if s is None or self._summarized or not s.has_finished():
            return
        self._summarized = True
        s.calc_results()
        self.summary.show_session(s)
        self.finished.emit(s)

    # ---------------- rendering ----------------
    def refresh(self):
        s = self.session
        if s is None:
            return
        if self._summarized:
            self.lblTimer.setText("")
            self.lblLine.setVisible(False)
            self.summary.setVisible(True)
            self.lblLegend.setVisible(False)
            return

        if s.seconds_remaining is not None:
            self.lblTimer.setText(f"{s.seconds_remaining:.1f}")
        else:
            self.lblTimer.setText("")
        self.lblLine.setText(render_prompt_html(s, self.theme))
        self.lblLegend.setVisible(True)
        self.lblLegend.setText(TABBED_LEGEND if self._tabbed else RUNNING_LEGEND)

    # ---------------- input ----------------
    def focusNextPrevChild(self, next):
        # Tab toggles the options legend instead of moving focus
        return False

    def keyPressEvent(self, ev):
        nk = self._normalize_key(ev)
        if nk is None or self.session is None:
            return super().keyPressEvent(ev)

        if nk == ESCAPE:
            self.quitRequested.emit()
            return
        if nk == TAB:
            if not self._summarized:
                self._tabbed = not self._tabbed
                self.refresh()
            return

        if self._summarized or self._tabbed:
            if nk == "r":
                self.retryRequested.emit()
            elif nk == "n":
                self.newRequested.emit()
            return

        self.dispatch(nk)

    def dispatch(self, nk: str):
        """Apply one normalized key to the running session."""
        s = self.session
        if s is None or self._summarized:
            return
        if nk == BACKSPACE:
            s.backspace()
        elif nk == WORD_BACKSPACE:
            s.word_backspace()
        else:
            for ch in nk:
                s.write(ch)
        self._check_finished()
        self.refresh()

    def _normalize_key(self, ev) -> Optional[str]:
        key = ev.key()
        mods = ev.modifiers()
        if key == Qt.Key_Escape:
            return ESCAPE
        if key == Qt.Key_Tab:
            return TAB
        if key == Qt.Key_Backspace:
            if mods & (Qt.ControlModifier | Qt.AltModifier):
                return WORD_BACKSPACE
            return BACKSPACE
        if key == Qt.Key_W and mods & Qt.ControlModifier:
            return WORD_BACKSPACE
        if mods & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        t = ev.text()
        if t and t.isprintable():
            return t
        return None
