"""Counter entity and the ordered counter collection. Pure logic with no UI or I/O."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from sc.common.logger import log


@dataclass
class Counter:
    id: str
    name: str
    score: int
    color: str

    def to_dict(self):
        return {"id": self.id, "name": self.name, "score": self.score, "color": self.color}

    @staticmethod
    def from_dict(data):
        """Build a Counter from a stored dict. Raises ValueError on a missing or wrong-typed field."""
        if not isinstance(data, dict):
            raise ValueError(f"Counter entry must be an object, got {type(data).__name__}")
        for key, expected in (("id", str), ("name", str), ("color", str)):
            if not isinstance(data.get(key), expected):
                raise ValueError(f"Counter field '{key}' missing or not a {expected.__name__}")
        score = data.get("score")
        if isinstance(score, bool) or not isinstance(score, int):
            raise ValueError("Counter field 'score' missing or not an int")
        return Counter(id=data["id"], name=data["name"], score=score, color=data["color"])


class CounterStore:
    """Ordered collection of counters, unique by id.

    Every successful mutation notifies subscribers with the store itself.
    Subscribers decide what to do (persist, redraw); the store never does I/O.
    """

    def __init__(self, counters=None):
        self._counters = []
        self._subscribers: list[Callable[["CounterStore"], None]] = []
        for counter in counters or []:
            self._upsert_silent(counter)

    def __len__(self):
        return len(self._counters)

    @property
    def counters(self):
        return [replace(c) for c in self._counters]

    def get(self, counter_id):
        return next((replace(c) for c in self._counters if c.id == counter_id), None)

    def subscribe(self, fn: Callable[["CounterStore"], None]) -> Callable[[], None]:
        self._subscribers.append(fn)
        def unsubscribe() -> None:
            if fn in self._subscribers:
                self._subscribers.remove(fn)
        return unsubscribe

    def _notify(self):
        for fn in list(self._subscribers):
            fn(self)

    def _index_of(self, counter_id):
        return next((i for i, c in enumerate(self._counters) if c.id == counter_id), None)

    def _upsert_silent(self, counter):
        idx = self._index_of(counter.id)
        if idx is None:
            self._counters.append(replace(counter))
        else:
            self._counters[idx] = replace(counter)
        return idx is None

    def upsert(self, counter):
        appended = self._upsert_silent(counter)
        log.debug(f"{'Appended' if appended else 'Replaced'} counter '{counter.id}' ({counter.name!r}, {counter.score})")
        self._notify()

    def remove(self, counter_id):
        idx = self._index_of(counter_id)
        if idx is None:
            log.debug(f"Ignored remove of unknown counter '{counter_id}'")
            return
        del self._counters[idx]
        log.debug(f"Removed counter '{counter_id}'")
        self._notify()

    def adjust(self, counter_id, delta):
        """Add delta to a counter's score. Returns the new score, or None if no counter has that id."""
        idx = self._index_of(counter_id)
        if idx is None:
            log.debug(f"Ignored adjust of unknown counter '{counter_id}' by {delta}")
            return None
        counter = self._counters[idx]
        counter.score += delta
        log.debug(f"Adjusted counter '{counter_id}' by {delta} to {counter.score}")
        self._notify()
        return counter.score

    # Swaps the whole collection out (hydration from storage). Duplicate ids collapse onto the first position.
    def replace_all(self, counters):
        self._counters = []
        for counter in counters:
            self._upsert_silent(counter)
        self._notify()
