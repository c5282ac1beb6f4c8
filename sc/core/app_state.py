"""Application controller. Owns the collection, dialog, palette and press state, and wires them to storage.

This is the only place that turns a collection change into a persistence write, and the only place the renderer
talks to. The renderer forwards gestures in through the event methods below and redraws from the ViewState it
receives through subscribe().
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional
from sc.common.logger import log
from sc.core import config
from sc.core.counter import CounterStore
from sc.core.dialog import CounterDraft, DialogController, DialogMode
from sc.core.palette import PaletteCursor
from sc.core.press import PressClassifier

MIN_ROW_HEIGHT_PX = 96

# Every row gets an equal share of the viewport, but never less than the minimum (the list scrolls instead).
def row_height(total_rows, viewport_px, min_row_height_px=MIN_ROW_HEIGHT_PX):
    if total_rows <= 0:
        return viewport_px
    return max(viewport_px / total_rows, min_row_height_px)


@dataclass(frozen=True)
class ViewState:
    counters: tuple
    dialog_mode: DialogMode
    draft: Optional[CounterDraft]
    min_row_height_px: int = MIN_ROW_HEIGHT_PX

    @property
    def row_count(self):
        return len(self.counters)

    @property
    def summary(self):
        return f"{self.row_count} counters"

    def row_height(self, viewport_px):
        return row_height(self.row_count, viewport_px, self.min_row_height_px)

    @staticmethod
    def is_negative(counter):
        return counter.score < 0


class ScoreCounterApp:

    def __init__(self, storage, settings=None, clock=None):
        self.settings = settings or config.default_settings()
        self.store = CounterStore()
        self.dialog = DialogController()
        self.palette = PaletteCursor()
        self.presses = PressClassifier(threshold_ms=self.settings["long_press_ms"], clock=clock)
        self.persistence = config.PersistenceAdapter(storage)
        self._subscribers: list[Callable[[ViewState], None]] = []
        self.store.subscribe(self._on_collection_changed)

    #region === Lifecycle and subscriptions ===

    def load(self):
        """Run the one startup read and hydrate the collection from it."""
        if self.persistence.loaded:
            return
        counters = self.persistence.load()
        self.store.replace_all(counters)

    def subscribe(self, fn: Callable[[ViewState], None]) -> Callable[[], None]:
        self._subscribers.append(fn)
        def unsubscribe() -> None:
            if fn in self._subscribers:
                self._subscribers.remove(fn)
        return unsubscribe

    @property
    def view(self):
        return ViewState(
            counters=tuple(self.store.counters),
            dialog_mode=self.dialog.mode,
            draft=self.dialog.draft,
            min_row_height_px=self.settings["min_row_height_px"],
        )

    def _publish(self):
        view = self.view
        for fn in list(self._subscribers):
            fn(view)

    # Collection changes before the startup read would be overwritten by it, so they are refused outright.
    def _accepting_changes(self, action):
        if not self.persistence.loaded:
            log.debug(f"Ignored {action} before the initial load")
            return False
        return True

    def _on_collection_changed(self, store):
        # PersistenceAdapter refuses this write until load() has run.
        self.persistence.save(store.counters)
        self._publish()

    #endregion === Lifecycle and subscriptions ===

    #region === Dialog events ===

    def open_add(self):
        if self.dialog.open_add(len(self.store), self.palette.next_color()):
            self._publish()

    def open_edit(self, counter_id):
        counter = self.store.get(counter_id)
        if counter is None:
            log.debug(f"Ignored open_edit for unknown counter '{counter_id}'")
            return
        if self.dialog.open_edit(counter):
            self._publish()

    def close_dialog(self):
        if self.dialog.is_open:
            self.dialog.cancel()
            self._publish()

    def draft_field_changed(self, field, value):
        if self.dialog.set_field(field, value):
            self._publish()

    def save_draft(self, draft=None):
        if not self._accepting_changes("save_draft"):
            return None
        result = self.dialog.save(draft)
        if result is None:
            return None
        counter, is_new = result
        if is_new:
            self.palette.advance()
        # upsert publishes, so the closed dialog and the new collection go out together
        self.store.upsert(counter)
        return counter

    def delete_counter(self, counter_id=None):
        """Delete a counter by id, or the one open in the edit dialog when no id is given."""
        if not self._accepting_changes("delete_counter"):
            return
        if counter_id is None:
            counter_id = self.dialog.delete()
            if counter_id is None:
                return
        elif self.dialog.mode is DialogMode.EDITING and self.dialog.draft.id == counter_id:
            self.dialog.delete()
        if self.store.get(counter_id) is None:
            log.debug(f"Ignored delete of unknown counter '{counter_id}'")
            self._publish()
            return
        self.store.remove(counter_id)

    #endregion === Dialog events ===

    #region === Score events ===

    def adjust_counter(self, counter_id, delta):
        if not self._accepting_changes("adjust_counter"):
            return None
        return self.store.adjust(counter_id, delta)

    def pointer_down(self, control_id):
        self.presses.pointer_down(control_id)

    def pointer_up(self, control_id):
        delta = self.presses.pointer_up(control_id)
        if delta is None:
            return None
        counter_id, _ = control_id
        return self.adjust_counter(counter_id, delta)

    def pointer_leave_or_cancel(self, control_id):
        self.presses.pointer_cancel(control_id)

    def cancel_all_presses(self):
        self.presses.cancel_all()

    #endregion === Score events ===
