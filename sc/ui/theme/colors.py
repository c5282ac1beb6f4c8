# Window chrome colors. Row backgrounds come from each counter's own color, so these only style everything around
# the rows (header, empty state, footer, dialog).
THEMES = {
    "Slate Dark": {
        "bg": "#020617",
        "surface": "#0f172a",
        "text": "#f8fafc",
        "text_muted": "#94a3b8",
        "text_dark": "#0f172a",
        "accent": "#38bdf8",
        "accent_text": "#0f172a",
        "danger": "#f87171",
        "negative_score": "#fecaca",
        "button_bg": "rgba(255, 255, 255, 0.14)",
        "button_hover": "rgba(255, 255, 255, 0.24)",
        "button_border": "rgba(255, 255, 255, 0.30)",
        "swatch_selected": "#f8fafc",
    },
}

DEFAULT_THEME = "Slate Dark"
