from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication

# -----------------------------------------------------------------------------
# Color palette (macOS-like neutrals, system blue accent)
# -----------------------------------------------------------------------------


class SnapColors:
    # Dark Theme
    DARK_WINDOW = "#1E1E1E"  # Window background
    DARK_SURFACE = "#2A2A2A"  # Drop zone fill
    DARK_BORDER = "#454545"  # Divider/Border
    DARK_TEXT = "#E6E6E6"  # Primary text
    DARK_TEXT_SEC = "#9A9A9A"  # Secondary text / prompts
    DARK_ACCENT = "#0A84FF"  # System blue (dark)
    DARK_ACCENT_TEXT = "#FFFFFF"  # Text on accent

    # Light Theme
    LIGHT_WINDOW = "#ECECEC"
    LIGHT_SURFACE = "#FFFFFF"
    LIGHT_BORDER = "#D0D0D0"
    LIGHT_TEXT = "#1F1F1F"
    LIGHT_TEXT_SEC = "#6E6E6E"
    LIGHT_ACCENT = "#007AFF"  # System blue (light)
    LIGHT_ACCENT_TEXT = "#FFFFFF"


# -----------------------------------------------------------------------------
# Common QSS template
# -----------------------------------------------------------------------------

COMMON_QSS = """
    * {
        font-size: {{font_size}}pt;
    }

    QToolTip {
        color: {{text}};
        background-color: {{surface}};
        border: 1px solid {{border}};
        padding: 6px;
        border-radius: 4px;
    }

    /* Status line */
    #statusLabel {
        color: {{text_sec}};
    }

    /* Mode selector */
    QCheckBox {
        color: {{text}};
        spacing: 6px;
    }
    QCheckBox::indicator {
        width: 14px;
        height: 14px;
        border: 1px solid {{border}};
        border-radius: 3px;
        background-color: {{surface}};
    }
    QCheckBox::indicator:checked {
        background-color: {{accent}};
        border-color: {{accent}};
    }
    QCheckBox:disabled {
        color: {{text_sec}};
    }

    /* Busy indicator */
    QProgressBar {
        border: none;
        border-radius: 2px;
        background-color: {{border}};
        max-height: 4px;
    }
    QProgressBar::chunk {
        background-color: {{accent}};
        border-radius: 2px;
    }
"""


def _apply_style(app: QApplication, pal_def: dict, font_size: int = 12) -> None:
    """Apply palette and QSS based on definition dict."""
    app.setStyle("Fusion")

    palette = QPalette()

    c_window = QColor(pal_def["window"])
    c_surface = QColor(pal_def["surface"])
    c_text = QColor(pal_def["text"])
    c_text_sec = QColor(pal_def["text_sec"])
    c_accent = QColor(pal_def["accent"])

    palette.setColor(QPalette.ColorRole.Window, c_window)
    palette.setColor(QPalette.ColorRole.WindowText, c_text)
    palette.setColor(QPalette.ColorRole.Base, c_surface)
    palette.setColor(QPalette.ColorRole.Text, c_text)
    palette.setColor(QPalette.ColorRole.PlaceholderText, c_text_sec)
    palette.setColor(QPalette.ColorRole.Button, c_surface)
    palette.setColor(QPalette.ColorRole.ButtonText, c_text)
    palette.setColor(QPalette.ColorRole.Highlight, c_accent)
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(pal_def["accent_text"]))

    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, c_text_sec)
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.WindowText, c_text_sec)

    app.setPalette(palette)

    font = QFont(app.font())
    font.setPointSize(font_size)
    app.setFont(font)

    qss = COMMON_QSS.replace("{{font_size}}", str(font_size))
    for key, val in pal_def.items():
        qss = qss.replace(f"{{{{{key}}}}}", val)

    app.setStyleSheet(qss)


_THEMES = {
    "dark": {
        "window": SnapColors.DARK_WINDOW,
        "surface": SnapColors.DARK_SURFACE,
        "border": SnapColors.DARK_BORDER,
        "text": SnapColors.DARK_TEXT,
        "text_sec": SnapColors.DARK_TEXT_SEC,
        "accent": SnapColors.DARK_ACCENT,
        "accent_text": SnapColors.DARK_ACCENT_TEXT,
    },
    "light": {
        "window": SnapColors.LIGHT_WINDOW,
        "surface": SnapColors.LIGHT_SURFACE,
        "border": SnapColors.LIGHT_BORDER,
        "text": SnapColors.LIGHT_TEXT,
        "text_sec": SnapColors.LIGHT_TEXT_SEC,
        "accent": SnapColors.LIGHT_ACCENT,
        "accent_text": SnapColors.LIGHT_ACCENT_TEXT,
    },
}


def apply_theme(app: QApplication, theme: str = "dark", font_size: int = 12) -> None:
    """Apply the "dark" or "light" theme; unknown names fall back to dark."""
    _apply_style(app, _THEMES.get(theme, _THEMES["dark"]), font_size)
