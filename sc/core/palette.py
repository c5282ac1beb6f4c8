from sc.common.logger import log

# Preset row colors, handed out in order to newly created counters.
PALETTE = (
    "#0f172a",
    "#1e3a8a",
    "#047857",
    "#9d174d",
    "#7c3aed",
    "#ea580c",
    "#2563eb",
    "#0f766e",
)

# Rotating default-color picker. The cursor only moves when a new counter actually gets saved, so opening and
# cancelling the add dialog keeps offering the same color.
class PaletteCursor:

    def __init__(self, palette=PALETTE, start=0):
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self.palette = tuple(palette)
        self.index = start % len(self.palette)

    def next_color(self):
        return self.palette[self.index]

    def advance(self):
        self.index = (self.index + 1) % len(self.palette)
        log.debug(f"Palette cursor advanced to {self.index} ({self.palette[self.index]})")
