# ui/session_summary.py
from __future__ import annotations
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget
import pyqtgraph as pg

from app.state import Session
from app.themes import Theme
from ui.ascii_art import skull_art
from utils.graph_helper import setup_wpm_plot, update_curve

FINISHED_LEGEND = "(r)etry / (n)ew / (esc)ape"
SKULL_ROWS = 24


def stats_line(session: Session) -> str:
    return f"{session.wpm} wpm   {session.accuracy}% acc   {session.std_dev:.2f} sd"


class SessionSummary(QWidget):
    """
    Final stats with the wpm-over-time chart, or the skull when a death-mode
    session ended on a mistake.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(12)

        self.plot = pg.PlotWidget()
        self.plot.setFocusPolicy(Qt.NoFocus)
        self.curve = setup_wpm_plot(self.plot, "#c026d3")
        root.addWidget(self.plot, stretch=1)

        self.lblSkull = QLabel("", self)
        self.lblSkull.setObjectName("lblSkull")
        self.lblSkull.setAlignment(Qt.AlignCenter)
        self.lblSkull.setTextFormat(Qt.PlainText)
        mono = QFont("monospace")
        mono.setStyleHint(QFont.Monospace)
        mono.setPointSize(7)
        self.lblSkull.setFont(mono)
        self.lblSkull.setVisible(False)
        root.addWidget(self.lblSkull, stretch=1)

        self.lblStats = QLabel("", self)
        self.lblStats.setObjectName("lblStats")
        self.lblStats.setAlignment(Qt.AlignCenter)
        self.lblStats.setStyleSheet("font-size: 22px; font-weight: bold;")
        root.addWidget(self.lblStats)

        self.lblLegend = QLabel(FINISHED_LEGEND, self)
        self.lblLegend.setStyleSheet("font-style: italic;")
        root.addWidget(self.lblLegend)

    def set_theme(self, theme: Theme):
        self.curve.setPen(pg.mkPen(theme.accent, width=2.5))
        self.lblSkull.setStyleSheet(f"color: {theme.error}; font-weight: bold;")

    def show_session(self, session: Session):
        if session.fatal_error():
            # cells are about twice as tall as they are wide
            art = session.failure_art(lambda: skull_art(SKULL_ROWS * 2, SKULL_ROWS))
            self.lblSkull.setText(art)
            self.lblSkull.setVisible(True)
            self.plot.setVisible(False)
            self.lblStats.setVisible(False)
            return

        update_curve(self.plot, self.curve, session.wpm_coords)
        self.lblStats.setText(stats_line(session))
        self.lblSkull.setVisible(False)
        self.plot.setVisible(True)
        self.lblStats.setVisible(True)
