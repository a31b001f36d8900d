"""QSS stylesheet and per-state colours for MultiTimer."""

from __future__ import annotations

from ..timer.engine import TimerState

# ── state colours (time text, progress chunk) ───────────────────────────

STATE_COLORS: dict[TimerState, str] = {
    TimerState.IDLE:     "#8A8A8A",   # gray
    TimerState.RUNNING:  "#4CD964",   # green
    TimerState.PAUSED:   "#FFCC00",   # yellow
    TimerState.FINISHED: "#FF3B30",   # red
}

# ── dark palette ─────────────────────────────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":           "#000000",
    "bg_secondary": "#141414",
    "surface":      "#1E1E1E",
    "accent":       "#4CD964",
    "text":         "#FFFFFF",
    "text_muted":   "#8A8A8A",
    "warning":      "#FFCC00",
    "danger":       "#FF3B30",
    "border":       "#2C2C2C",
}


# ── font resolution ───────────────────────────────────────────────────

_resolved_font: str | None = None


def resolve_font_family() -> str:
    """Detect the best available system font.  Must be called after
    QApplication is created (font database needs the app context)."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("SF Pro", ".AppleSystemUIFont", "Helvetica Neue"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "Arial"
    return _resolved_font


def state_color(state: TimerState) -> str:
    return STATE_COLORS.get(state, PALETTE["text_muted"])


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    font = resolve_font_family()
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "{font}", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow, QScrollArea {{
        background-color: {p['bg']};
        border: none;
    }}

    /* ── timer rows ─────────────────────────────── */
    QFrame#timerRow {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 10px;
    }}

    QLabel#timerName {{
        font-size: 16px;
        font-weight: 700;
        background: transparent;
    }}

    QLabel#timerTime {{
        font-size: 22px;
        font-family: "Menlo", "Courier New", monospace;
        background: transparent;
    }}

    QLabel#emptyHint {{
        color: {p['text_muted']};
        font-size: 15px;
    }}

    QProgressBar {{
        background-color: {p['surface']};
        border: none;
        border-radius: 3px;
        max-height: 6px;
    }}

    QProgressBar::chunk {{
        background-color: {p['accent']};
        border-radius: 3px;
    }}

    /* ── buttons ────────────────────────────────── */
    QPushButton {{
        background-color: {p['surface']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 16px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton#startButton {{
        background-color: {p['accent']};
        color: #000000;
        border: none;
    }}

    QPushButton#pauseButton {{
        background-color: {p['warning']};
        color: #000000;
        border: none;
    }}

    QPushButton#resetButton {{
        background-color: {p['danger']};
        color: {p['text']};
        border: none;
    }}

    QPushButton#deleteButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: none;
        padding: 6px 8px;
    }}

    QPushButton:disabled {{
        background-color: {p['surface']};
        color: {p['text_muted']};
    }}

    /* ── inputs ─────────────────────────────────── */
    QLineEdit, QSpinBox {{
        background-color: {p['surface']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 8px 10px;
    }}

    QLineEdit:focus, QSpinBox:focus {{
        border-color: {p['accent']};
    }}

    QLabel#errorLabel {{
        color: {p['danger']};
        font-size: 12px;
    }}

    QToolBar {{
        background-color: {p['bg']};
        border: none;
        spacing: 8px;
    }}

    QStatusBar {{
        color: {p['text_muted']};
    }}
    """
