import time
from sc.common.logger import log

LONG_PRESS_THRESHOLD_MS = 520
SHORT_PRESS_STEP = 1
LONG_PRESS_STEP = 5

def _monotonic_ms():
    return time.monotonic() * 1000.0

# Turns pointer-down/pointer-up pairs on the +/- controls into signed score deltas. Each control is tracked on its
# own, keyed by a control id of (counter_id, sign), so holding one button never affects another.
class PressClassifier:

    def __init__(self, threshold_ms=LONG_PRESS_THRESHOLD_MS, clock=None):
        self.threshold_ms = threshold_ms
        self._clock = clock or _monotonic_ms
        self._pressing = {}  # control_id -> start time in ms

    def is_pressing(self, control_id):
        return control_id in self._pressing

    # A second down on a control that's already held simply restarts it.
    def pointer_down(self, control_id, now=None):
        self._pressing[control_id] = self._clock() if now is None else now

    # Returns the signed delta for a finished press, or None if this control wasn't being pressed.
    def pointer_up(self, control_id, now=None):
        start = self._pressing.pop(control_id, None)
        if start is None:
            return None
        elapsed = (self._clock() if now is None else now) - start
        magnitude = LONG_PRESS_STEP if elapsed >= self.threshold_ms else SHORT_PRESS_STEP
        _, sign = control_id
        delta = magnitude if sign >= 0 else -magnitude
        log.debug(f"Press on {control_id} lasted {elapsed:.0f}ms, emitting {delta:+d}")
        return delta

    # Pointer left the control or the platform cancelled it: forget the press, emit nothing.
    def pointer_cancel(self, control_id):
        if self._pressing.pop(control_id, None) is not None:
            log.debug(f"Press on {control_id} cancelled")

    def cancel_all(self):
        if self._pressing:
            log.debug(f"Cancelled {len(self._pressing)} pending presses")
        self._pressing.clear()
