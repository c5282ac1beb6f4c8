# Font point sizes and spacing, in one place so the builders never hardcode them.
SIZES = {
    "Regular": {
        "title": 16,
        "hint": 9,
        "name": 13,
        "score": 34,
        "pill": 22,
        "action": 10,
        "padding": 8,
        "frame_pad": 10,
        "pill_w": 64,
    },
}

DEFAULT_SIZE = "Regular"
