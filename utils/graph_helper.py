from typing import Sequence, Tuple
import pyqtgraph as pg


def setup_wpm_plot(plot_widget: pg.PlotWidget, line_color: str):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel("left", "wpm")
    plot_widget.setLabel("bottom", "seconds")
    curve = plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), antialias=True)
    return curve


def plot_bounds(coords: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """(duration, highest wpm) for the axes; a session shorter than 1s still spans 1s."""
    duration = coords[-1][0] if coords else 1.0
    highest = max((w for _, w in coords), default=0.0)
    return max(1.0, duration), float(round(highest))


def update_curve(plot_widget: pg.PlotWidget, curve, coords: Sequence[Tuple[float, float]]):
    x = [c[0] for c in coords]
    y = [c[1] for c in coords]
    curve.setData(x, y)
    duration, highest = plot_bounds(coords)
    plot_widget.setXRange(0.0, duration, padding=0.02)
    plot_widget.setYRange(0.0, max(highest, 1.0), padding=0.05)
