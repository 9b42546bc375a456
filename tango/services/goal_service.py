# tango/services/goal_service.py
import math
from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from tango.schemas import DailyGoal, StateParseError, load_daily_goal, dump_daily_goal
from tango.core.log_manager import logger

DAILY_KEY = 'daily_v3'
DEFAULT_GOAL = 10


@dataclass(frozen=True)
class DailyProgress:
    done: int
    goal: int
    percent: int


def round_percent(part: int, whole: int) -> int:
    """Percentage rounded half up; 0 when whole is 0."""
    if not whole:
        return 0
    return math.floor(part * 100 / whole + 0.5)


class DailyGoalTracker:
    """
    Counts successful reviews for the current day-number.
    The counter rolls over lazily: the first access on a new day resets it.
    """

    def __init__(self, store: MutableMapping[str, Any], key: str = DAILY_KEY, default_goal: int = DEFAULT_GOAL):
        self._store = store
        self._key = key
        self._default_goal = default_goal
        self._daily: Optional[DailyGoal] = None

    def init(self, today: int) -> 'DailyGoalTracker':
        """Reads the persisted record, falling back to a fresh one for `today`."""
        try:
            stored = load_daily_goal(self._store.get(self._key))
        except StateParseError as e:
            logger.warning(f"Discarding unreadable daily goal '{self._key}': {e}")
            stored = None

        self._daily = stored or DailyGoal(day=today, good_count=0, goal=self._default_goal)
        return self

    def flush(self):
        self._store[self._key] = dump_daily_goal(self.state)

    @property
    def state(self) -> DailyGoal:
        if self._daily is None:
            raise RuntimeError("DailyGoalTracker used before init().")
        return self._daily

    def ensure_current(self, today: int) -> DailyGoal:
        """Starts a new day if the stored one is stale. Idempotent within a day."""
        current = self.state
        if current.day != today:
            self._daily = DailyGoal(day=today, good_count=0, goal=current.goal or self._default_goal)
            self.flush()
            logger.info(f"Daily goal rolled over to day {today}.")
        return self._daily

    def record_good(self, today: int) -> DailyGoal:
        current = self.ensure_current(today)
        self._daily = current.model_copy(update={"good_count": current.good_count + 1})
        self.flush()
        return self._daily

    def set_goal(self, goal: int, today: int) -> DailyGoal:
        if goal <= 0:
            raise ValueError("Daily goal must be a positive number of cards.")
        current = self.ensure_current(today)
        self._daily = current.model_copy(update={"goal": goal})
        self.flush()
        return self._daily

    def progress(self, today: int) -> DailyProgress:
        current = self.ensure_current(today)
        goal = current.goal or self._default_goal
        done = min(current.good_count, goal)
        return DailyProgress(done=done, goal=goal, percent=min(100, round_percent(done, goal)))
