# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal

from app.config import TICK_RATE_MS


class TickSource(QObject):
    """Fixed-cadence tick that drives session countdowns and redraws."""

    ticked = Signal()
    started = Signal()
    stopped = Signal()

    def __init__(self, tick_ms: int = TICK_RATE_MS, parent=None):
        super().__init__(parent)
        self._tick = QTimer(self)
        self._tick.setInterval(tick_ms)
        self._tick.timeout.connect(self.ticked.emit)

    @property
    def interval_ms(self) -> int:
        return self._tick.interval()

    def is_running(self) -> bool:
        return self._tick.isActive()

    def start(self):
        if not self._tick.isActive():
            self._tick.start()
            self.started.emit()

    def stop(self):
        if self._tick.isActive():
            self._tick.stop()
            self.stopped.emit()
