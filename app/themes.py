# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List


@dataclass
class Theme:
    name: str
    background: str
    primary: str
    secondary: str
    accent: str
    correct: str
    error: str
    pace: str


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="Dark",
        background="#0f1115",
        primary="#e5e7eb",
        secondary="#6b7280",
        accent="#c026d3",
        correct="#22c55e",
        error="#ef4444",
        pace="#f5f5f5",
    ),
    Theme(
        name="Light",
        background="#fafafa",
        primary="#111111",
        secondary="#6b6b6b",
        accent="#a21caf",
        correct="#15803d",
        error="#dc2626",
        pace="#d4d4d4",
    ),
    Theme(
        name="Nord",
        background="#2e3440",
        primary="#eceff4",
        secondary="#88c0d0",
        accent="#b48ead",
        correct="#a3be8c",
        error="#bf616a",
        pace="#4c566a",
    ),
]

DEFAULT_THEME_INDEX = 0


def theme_names() -> List[str]:
    return [t.name.lower() for t in THEMES]


def theme_by_name(name: str) -> Theme:
    for t in THEMES:
        if t.name.lower() == name.lower():
            return t
    raise ValueError(f"Unknown theme: {name}")
