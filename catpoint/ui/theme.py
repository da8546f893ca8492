from __future__ import annotations

from typing import Dict

# Alarm colors follow AlarmStatus.level.
COLOR_OK = "#34d399"          # emerald-400
COLOR_WARN = "#fbbf24"        # amber-400
COLOR_CRIT = "#f87171"        # red-400
COLOR_TEXT = "#e5e7eb"
COLOR_TEXT_MUTED = "#9ca3af"

LEVEL_COLORS: Dict[str, str] = {
    "OK": COLOR_OK,
    "WARNING": COLOR_WARN,
    "CRITICAL": COLOR_CRIT,
}

_PALETTE: Dict[str, str] = {
    "window": "#18181b",
    "card": "#27272a",
    "card_border": "#3f3f46",
    "table": "#1f1f23",
    "header": "#27272a",
    "text": COLOR_TEXT,
    "muted": COLOR_TEXT_MUTED,
    "button": "#4338ca",
    "button_hover": "#4f46e5",
    "button_disabled": "#52525b",
    "armed": "#b45309",
}

_QSS_TEMPLATE = """
QMainWindow, QDialog {{
    background: {window};
    color: {text};
    font-family: Segoe UI, Arial;
    font-size: 13px;
}}

QLabel {{
    color: {text};
}}

QFrame#Card {{
    background: {card};
    border: 1px solid {card_border};
    border-radius: 8px;
}}

QTableWidget {{
    background: {table};
    border: 1px solid {card_border};
    gridline-color: {card_border};
    color: {text};
    selection-background-color: {button};
}}

QHeaderView::section {{
    background: {header};
    color: {muted};
    border: 0px;
    padding: 4px 8px;
}}

QLineEdit, QComboBox {{
    background: {table};
    border: 1px solid {card_border};
    border-radius: 4px;
    padding: 4px 6px;
    color: {text};
}}

QPushButton {{
    background: {button};
    border: 0px;
    padding: 6px 14px;
    border-radius: 6px;
    color: #ffffff;
}}
QPushButton:hover {{
    background: {button_hover};
}}
QPushButton:disabled {{
    background: {button_disabled};
}}
QPushButton#ArmingButton:checked {{
    background: {armed};
    font-weight: 700;
}}
"""


def build_stylesheet(palette: Dict[str, str] = _PALETTE) -> str:
    """Render the application stylesheet from a palette of role -> color."""
    return _QSS_TEMPLATE.format(**palette)


APP_QSS = build_stylesheet()
