from types import SimpleNamespace
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from pyseqwriter import eps

# Relative tolerance of the approximate equality used for events and shapes
rtol = np.sqrt(eps)

# Numeric fields of each event type, in the order they are compared
event_fields = {
    "rf": ("signal", "duration", "freq_offset", "delay"),
    "grad": ("amplitude", "duration", "rise_time", "fall_time", "delay"),
    "adc": ("num_samples", "duration", "delay", "freq_offset", "phase_offset"),
}


def safe_approx(a: np.ndarray, b: np.ndarray) -> bool:
    """
    Returns whether `a` and `b` have the same number of elements and are approximately equal, i.e. the norm of their
    difference is within `rtol` of the larger of their norms.
    """
    a = np.ravel(a)
    b = np.ravel(b)
    if len(a) != len(b):
        return False
    return np.linalg.norm(a - b) <= rtol * max(np.linalg.norm(a), np.linalg.norm(b))


def events_approx(event1: SimpleNamespace, event2: SimpleNamespace) -> bool:
    """
    Returns whether two events are of the same type and all their numeric fields are approximately equal.
    """
    if event1.type != event2.type:
        return False
    return all(
        safe_approx(getattr(event1, field), getattr(event2, field))
        for field in event_fields[event1.type]
    )


def is_event_on(event: SimpleNamespace) -> bool:
    """
    Returns whether an event is "on": any of its numeric fields has a non-zero absolute sum.
    """
    if event is None:
        return False
    return any(
        np.sum(np.abs(getattr(event, field))) > 0
        for field in event_fields.get(event.type, ())
    )


def get_events_on(events: Iterable[SimpleNamespace]) -> List[SimpleNamespace]:
    """
    Returns the events of `events` that are "on", in their original order.
    """
    return [event for event in events if is_event_on(event)]


class EventLibrary:
    """
    Defines an event library to maintain a list of unique events. Events are compared with `events_approx()`, so
    lookups are a linear scan over the library and the first matching entry wins.

    Sequence Methods:
    - find - Find an event in the library
    - find_or_insert - Find an event, adding it if it is not present
    - register - Add a sequence of events
    - resolve - Map per-block events to their IDs

    Attributes
    ----------
    keys : list[int]
        Event IDs, in insertion order.
    data : list[SimpleNamespace]
        Unique events, aligned with `keys`.
    next_free_ID : int
        ID assigned to the next inserted event.
    """

    def __init__(self):
        self.keys = []
        self.data = []
        self.next_free_ID = 1

    def __str__(self) -> str:
        s = "EventLibrary:"
        s += "\nkeys: " + str(len(self.keys))
        return s

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[Tuple[SimpleNamespace, int]]:
        return iter(zip(self.data, self.keys))

    def find(self, new_data: SimpleNamespace) -> Tuple[int, bool]:
        """
        Finds event `new_data` in event library.

        Parameters
        ----------
        new_data : SimpleNamespace
            Event to be found in event library.

        Returns
        -------
        key_id : int
            Key of `new_data` in event library if found, else the key it would be inserted with.
        found : bool
            If `new_data` was found in the event library or not.
        """
        for event, key_id in self:
            if events_approx(new_data, event):
                return key_id, True
        return self.next_free_ID, False

    def find_or_insert(self, new_data: SimpleNamespace) -> Tuple[int, bool]:
        """
        Lookup an event in the library and return its key. If the event does not exist in the library it is
        inserted right away.

        Parameters
        ----------
        new_data : SimpleNamespace
            Event to be found (or added, if not found) in event library.

        Returns
        -------
        key_id : int
            Key of `new_data` in event library.
        found : bool
            If `new_data` was found in the event library or not.
        """
        key_id, found = self.find(new_data)
        if not found:
            self.keys.append(key_id)
            self.data.append(new_data)
            self.next_free_ID = key_id + 1
        return key_id, found

    def register(self, events: Iterable[SimpleNamespace]) -> List[Tuple[SimpleNamespace, int]]:
        """
        Add `events` to the library, keeping one entry per distinct event.

        Parameters
        ----------
        events : iterable of SimpleNamespace
            Active events, in sequence order.

        Returns
        -------
        list[tuple[SimpleNamespace, int]]
            All `(event, id)` entries of the library.
        """
        for event in events:
            self.find_or_insert(event)
        return list(self)

    def resolve(self, block_events: Iterable[SimpleNamespace]) -> List[int]:
        """
        Map the events of one channel, one per block, to their library IDs. Blocks without an active event map to 0.

        Raises
        ------
        RuntimeError
            If an active event is not in the library.
        """
        ids = []
        for block_counter, event in enumerate(block_events, start=1):
            if not is_event_on(event):
                ids.append(0)
                continue
            key_id, found = self.find(event)
            if not found:
                raise RuntimeError(
                    f"Event of type '{event.type}' in block {block_counter} is not registered in the event library."
                )
            ids.append(key_id)
        return ids
