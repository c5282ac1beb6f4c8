"""Add/edit dialog state machine. Pure logic, no UI."""

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
from sc.common.logger import log
from sc.core.counter import Counter
from sc.util import parse_int


class DialogMode(str, Enum):
    CLOSED = "closed"
    ADDING = "adding"
    EDITING = "editing"


@dataclass
class CounterDraft:
    """Detached, editable copy of a counter's fields. id is None for a counter that doesn't exist yet."""
    id: Optional[str]
    name: str
    score: int
    color: str

    @staticmethod
    def new(color, existing_total):
        return CounterDraft(id=None, name=f"Player {existing_total + 1}", score=0, color=color)

    @staticmethod
    def from_counter(counter):
        return CounterDraft(id=counter.id, name=counter.name, score=counter.score, color=counter.color)

    def to_counter(self):
        return Counter(
            id=self.id if self.id is not None else str(uuid.uuid4()),
            name=self.name.strip(),
            score=self.score,
            color=self.color,
        )


class DialogController:
    """Tracks which modal is open and owns its draft.

    Field edits only ever touch the draft. Nothing reaches the counter collection until save() hands back a
    materialized Counter, and cancel() simply drops the draft.
    """

    def __init__(self):
        self.mode = DialogMode.CLOSED
        self._draft = None

    @property
    def is_open(self):
        return self.mode is not DialogMode.CLOSED

    @property
    def draft(self):
        return replace(self._draft) if self._draft is not None else None

    def open_add(self, existing_total, color):
        if self.is_open:
            log.debug(f"Ignored open_add while dialog is {self.mode.value}")
            return False
        self._draft = CounterDraft.new(color, existing_total)
        self.mode = DialogMode.ADDING
        log.debug(f"Opened add dialog with draft {self._draft}")
        return True

    def open_edit(self, counter):
        if self.is_open:
            log.debug(f"Ignored open_edit while dialog is {self.mode.value}")
            return False
        self._draft = CounterDraft.from_counter(counter)
        self.mode = DialogMode.EDITING
        log.debug(f"Opened edit dialog for counter '{counter.id}'")
        return True

    # Applies one in-dialog field change to the draft. Returns True if the draft actually changed.
    def set_field(self, field, value):
        if self._draft is None:
            return False
        if field == "name":
            new_value = str(value)
        elif field == "score":
            new_value = parse_int(value)
            if new_value is None:
                log.debug(f"Ignored non-integer score input {value!r}")
                return False
        elif field == "color":
            new_value = str(value)
        else:
            raise ValueError(f"Unknown draft field: {field!r}")
        if getattr(self._draft, field) == new_value:
            return False
        setattr(self._draft, field, new_value)
        return True

    def cancel(self):
        if self.is_open:
            log.debug(f"Closed {self.mode.value} dialog without saving")
        self._close()

    def save(self, edited=None):
        """Close the dialog and return (counter, is_new), or None if no dialog was open.

        If `edited` is given, its name/score/color replace the working draft's. The id always stays the one the
        dialog was opened with.
        """
        if self._draft is None:
            return None
        if edited is not None:
            self._draft = replace(self._draft, name=edited.name, score=edited.score, color=edited.color)
        is_new = self.mode is DialogMode.ADDING
        counter = self._draft.to_counter()
        self._close()
        log.debug(f"Saved {'new' if is_new else 'edited'} counter '{counter.id}'")
        return counter, is_new

    def delete(self):
        """Close an edit dialog and return the id to remove. Returns None (and leaves the dialog open) otherwise."""
        if self.mode is not DialogMode.EDITING or self._draft is None or self._draft.id is None:
            return None
        counter_id = self._draft.id
        self._close()
        return counter_id

    def _close(self):
        self.mode = DialogMode.CLOSED
        self._draft = None
