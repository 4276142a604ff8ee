# ui/ascii_art.py
from __future__ import annotations
from typing import List

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QImage, QPainter

# darkest to brightest
BRIGHTNESS_CHARS = r"""$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\|()1{}[]?-_+~<>i!lI;:,"^`'."""

SKULL_GLYPH = "☠"


def _luma(color: QColor) -> float:
    return 0.299 * color.red() + 0.587 * color.green() + 0.114 * color.blue()


def image_to_ascii(image: QImage) -> List[str]:
    """One string per pixel row, each pixel mapped onto the brightness ramp."""
    top = len(BRIGHTNESS_CHARS) - 1
    lines: List[str] = []
    for y in range(image.height()):
        row = []
        for x in range(image.width()):
            level = _luma(image.pixelColor(x, y)) / 255.0
            row.append(BRIGHTNESS_CHARS[int(round(level * top))])
        lines.append("".join(row))
    return lines


def render_glyph(glyph: str, cols: int, rows: int) -> QImage:
    """Draw `glyph` black on white in a square canvas, squashed to cols x rows."""
    side = max(cols, rows, 1)
    canvas = QImage(side, side, QImage.Format_RGB32)
    canvas.fill(Qt.white)

    painter = QPainter(canvas)
    try:
        font = QFont()
        font.setPixelSize(int(side * 0.9))
        painter.setFont(font)
        painter.setPen(Qt.black)
        painter.drawText(canvas.rect(), Qt.AlignCenter, glyph)
    finally:
        painter.end()

    return canvas.scaled(
        max(cols, 1), max(rows, 1), Qt.IgnoreAspectRatio, Qt.SmoothTransformation
    )


def skull_art(cols: int, rows: int) -> str:
    return "\n".join(image_to_ascii(render_glyph(SKULL_GLYPH, cols, rows)))
