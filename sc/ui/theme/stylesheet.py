from PySide6.QtGui import QColor
from .colors import THEMES, DEFAULT_THEME


# Picks light or dark label text so it stays readable on any user-chosen row color.
def text_color_for(bg, theme_name=DEFAULT_THEME):
    t = THEMES.get(theme_name, THEMES[DEFAULT_THEME])
    color = QColor(bg)
    if not color.isValid():
        return t["text"]
    return t["text_dark"] if color.lightness() > 160 else t["text"]


# Per-row sheet. It sits nearer the labels than the window sheet, so the negative score rule has to live here too.
def build_row_stylesheet(bg, theme_name=DEFAULT_THEME):
    t = THEMES.get(theme_name, THEMES[DEFAULT_THEME])
    fg = text_color_for(bg, theme_name)
    return (
        f"#rowBg {{ background-color: {bg}; }} "
        f"QLabel {{ color: {fg}; }} "
        f"QLabel#score[negative=\"true\"] {{ color: {t['negative_score']}; }}"
    )


def build_stylesheet(theme_name=DEFAULT_THEME):
    t = THEMES.get(theme_name, THEMES[DEFAULT_THEME])
    return f"""
        QMainWindow, QDialog {{ background-color: {t["bg"]}; }}
        QWidget {{ color: {t["text"]}; }}
        QScrollArea, #rowsHost {{ background: transparent; border: none; }}
        #hud, #emptyState {{ background-color: {t["surface"]}; }}
        QLabel#hint, QLabel#summary {{ color: {t["text_muted"]}; }}
        QPushButton {{
            background-color: {t["button_bg"]};
            border: 1px solid {t["button_border"]};
            border-radius: 6px;
            padding: 4px 10px;
        }}
        QPushButton:hover {{ background-color: {t["button_hover"]}; }}
        QPushButton#primary {{
            background-color: {t["accent"]};
            color: {t["accent_text"]};
            border: none;
            font-weight: bold;
        }}
        QPushButton#danger {{ color: {t["danger"]}; border-color: {t["danger"]}; }}
        QPushButton#pill {{ border-radius: 18px; font-weight: bold; }}
        QLineEdit {{
            background-color: {t["surface"]};
            border: 1px solid {t["button_border"]};
            border-radius: 4px;
            padding: 4px;
        }}
        QLabel#score[negative="true"] {{ color: {t["negative_score"]}; }}
    """
