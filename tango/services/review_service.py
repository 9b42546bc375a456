# tango/services/review_service.py
from typing import Any, Dict, Iterable, List, MutableMapping, Optional

from tango.schemas import ReviewState, StateParseError, load_ledger, dump_ledger
from tango.core.log_manager import logger

# --- CONSTANTS ---
SRS_KEY = 'srs_v3'
MAX_INTERVAL = 120

# Fixed steps of the schedule; anything off the table doubles (capped).
GOOD_STEPS = {1: 2, 2: 4, 4: 7, 7: 15, 15: 30}


def next_interval_good(prev: int) -> int:
    """
    Interval (in days) after a successful review.
    0 -> 1 -> 2 -> 4 -> 7 -> 15 -> 30 -> 60 -> 120, never above MAX_INTERVAL.
    """
    if prev <= 0:
        return 1
    if prev in GOOD_STEPS:
        return GOOD_STEPS[prev]
    return min(MAX_INTERVAL, round(prev * 2))


class ReviewLedger:
    """
    Per-card review state, persisted as one JSON blob under `key` in `store`.
    `store` is any mutable mapping; in the app it is NiceGUI's app.storage.user.

    Every mutation is written through before returning.
    """

    def __init__(self, store: MutableMapping[str, Any], key: str = SRS_KEY):
        self._store = store
        self._key = key
        self._states: Dict[int, ReviewState] = {}

    # --- LIFECYCLE ---

    def init(self) -> 'ReviewLedger':
        """Reads the persisted blob. A corrupt blob is replaced by an empty ledger."""
        try:
            self._states = load_ledger(self._store.get(self._key))
        except StateParseError as e:
            logger.warning(f"Discarding unreadable review ledger '{self._key}': {e}")
            self._states = {}
        return self

    def flush(self):
        self._store[self._key] = dump_ledger(self._states)

    # --- QUERIES ---

    def get(self, no: int) -> Optional[ReviewState]:
        return self._states.get(no)

    def __len__(self) -> int:
        return len(self._states)

    def is_learned(self, no: int) -> bool:
        """A card counts as learned once it has a positive interval."""
        state = self._states.get(no)
        return state is not None and state.interval > 0

    def is_due(self, no: int, today: int) -> bool:
        """Unseen cards are never due."""
        state = self._states.get(no)
        return state is not None and state.due <= today

    def count_learned(self, numbers: Iterable[int]) -> int:
        return sum(1 for no in numbers if self.is_learned(no))

    def due_numbers(self, today: int) -> List[int]:
        return sorted(no for no, state in self._states.items() if state.due <= today)

    # --- GRADING ---

    def record_again(self, no: int, today: int) -> ReviewState:
        """A failed review resets progress and makes the card due today."""
        state = ReviewState(interval=0, due=today)
        self._states[no] = state
        self.flush()
        logger.debug(f"Card {no} graded AGAIN; due day {today}.")
        return state

    def record_good(self, no: int, today: int) -> ReviewState:
        prev = self._states.get(no)
        interval = next_interval_good(prev.interval if prev else 0)
        state = ReviewState(interval=interval, due=today + interval)
        self._states[no] = state
        self.flush()
        logger.debug(f"Card {no} graded GOOD; interval {interval}, due day {state.due}.")
        return state
