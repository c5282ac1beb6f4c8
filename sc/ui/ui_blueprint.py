from dataclasses import dataclass
from PySide6.QtGui import QFont

# A unified UI Blueprint dataclass to share across all UI builders.
@dataclass
class UIBlueprint:
    theme_name: str
    theme: dict          # resolved theme dict (THEMES[name])
    size: dict           # resolved size dict (SIZES[name])
    font_family: str
    spacing: int
    pill_w: int
    title_font: QFont
    hint_font: QFont
    name_font: QFont
    score_font: QFont
    pill_font: QFont
    action_font: QFont

    # Builds the blueprint from current settings.
    @staticmethod
    def compute(theme_name, theme, size, font_family):
        title_font = QFont(font_family, size["title"])
        title_font.setBold(True)

        name_font = QFont(font_family, size["name"])
        name_font.setBold(True)

        score_font = QFont(font_family, size["score"])
        score_font.setBold(True)

        pill_font = QFont(font_family, size["pill"])
        pill_font.setBold(True)

        return UIBlueprint(
            theme_name=theme_name, theme=theme, size=size, font_family=font_family,
            spacing=size["padding"], pill_w=size["pill_w"],
            title_font=title_font,
            hint_font=QFont(font_family, size["hint"]),
            name_font=name_font, score_font=score_font, pill_font=pill_font,
            action_font=QFont(font_family, size["action"]),
        )
