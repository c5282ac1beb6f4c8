"""Theme system: colors, sizes and stylesheet generation."""
from .colors import THEMES, DEFAULT_THEME
from .sizes import SIZES, DEFAULT_SIZE
from .stylesheet import build_row_stylesheet, build_stylesheet, text_color_for

__all__ = ["THEMES", "DEFAULT_THEME", "SIZES", "DEFAULT_SIZE", "build_row_stylesheet", "build_stylesheet", "text_color_for"]
