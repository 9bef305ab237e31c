"""
Autocomplete Session

Applies place suggestions in dispatch order. Every lookup is tagged with a
sequence number; a response is applied only if it is newer than the last one
applied, so a slow answer to an old keystroke never overwrites the
suggestions for what the user has typed since.
"""

import itertools
from threading import Lock
from typing import List, Tuple

from .nominatim import PlaceCandidate


class AutocompleteSession:
    """Latest-dispatched-wins holder for one input field's suggestions."""

    def __init__(self, geocoder):
        self.geocoder = geocoder
        self._counter = itertools.count(1)
        self._lock = Lock()
        self._applied_sequence = 0
        self.latest: List[PlaceCandidate] = []

    def next_sequence(self) -> int:
        with self._lock:
            return next(self._counter)

    def apply(self, sequence: int, candidates: List[PlaceCandidate]) -> bool:
        """Store candidates if sequence is newer than the last applied. Returns True if applied."""
        with self._lock:
            if sequence <= self._applied_sequence:
                return False
            self._applied_sequence = sequence
            self.latest = list(candidates)
            return True

    def request(self, text: str) -> Tuple[int, bool]:
        """Look up suggestions for text. Returns (sequence, applied)."""
        sequence = self.next_sequence()
        candidates = self.geocoder.suggest(text)
        return sequence, self.apply(sequence, candidates)
