"""Tests for the daily goal counter."""

import json

import pytest

from tango.schemas import DailyGoal
from tango.services.goal_service import DAILY_KEY, DailyGoalTracker, round_percent

from conftest import TODAY


def test_fresh_tracker_defaults(daily):
    assert daily.state == DailyGoal(day=TODAY, good_count=0, goal=10)


def test_fresh_tracker_is_not_persisted_until_changed(store, daily):
    assert DAILY_KEY not in store


def test_rollover_resets_count_and_keeps_goal(store):
    store[DAILY_KEY] = json.dumps({"day": TODAY, "goodCount": 7, "goal": 10})
    tracker = DailyGoalTracker(store).init(TODAY)

    state = tracker.ensure_current(TODAY + 1)

    assert state == DailyGoal(day=TODAY + 1, good_count=0, goal=10)
    assert json.loads(store[DAILY_KEY]) == {"day": TODAY + 1, "goodCount": 0, "goal": 10}


def test_rollover_preserves_custom_goal(store):
    store[DAILY_KEY] = json.dumps({"day": TODAY, "goodCount": 3, "goal": 25})
    tracker = DailyGoalTracker(store).init(TODAY + 4)
    assert tracker.ensure_current(TODAY + 4).goal == 25


def test_rollover_replaces_zero_goal_with_default(store):
    store[DAILY_KEY] = json.dumps({"day": TODAY, "goodCount": 3, "goal": 0})
    tracker = DailyGoalTracker(store).init(TODAY)
    assert tracker.ensure_current(TODAY + 1).goal == 10


def test_ensure_current_is_idempotent_within_a_day(store):
    store[DAILY_KEY] = json.dumps({"day": TODAY, "goodCount": 2, "goal": 10})
    tracker = DailyGoalTracker(store).init(TODAY)
    before = store[DAILY_KEY]

    tracker.ensure_current(TODAY)
    tracker.ensure_current(TODAY)

    assert tracker.state.good_count == 2
    assert store[DAILY_KEY] == before


def test_record_good_increments_and_persists(store, daily):
    daily.record_good(TODAY)
    daily.record_good(TODAY)
    assert daily.state.good_count == 2
    assert json.loads(store[DAILY_KEY])["goodCount"] == 2


def test_record_good_on_new_day_starts_from_zero(daily):
    daily.record_good(TODAY)
    daily.record_good(TODAY)
    daily.record_good(TODAY + 1)
    assert daily.state.day == TODAY + 1
    assert daily.state.good_count == 1


def test_corrupt_record_falls_back_to_defaults(store, caplog):
    store[DAILY_KEY] = "not json"
    tracker = DailyGoalTracker(store, default_goal=15).init(TODAY)
    assert tracker.state == DailyGoal(day=TODAY, good_count=0, goal=15)
    assert "Discarding unreadable daily goal" in caplog.text


def test_set_goal(store, daily):
    daily.set_goal(20, TODAY)
    assert json.loads(store[DAILY_KEY])["goal"] == 20


def test_set_goal_rejects_non_positive(daily):
    with pytest.raises(ValueError):
        daily.set_goal(0, TODAY)


def test_progress_is_capped(daily):
    for _ in range(12):
        daily.record_good(TODAY)
    progress = daily.progress(TODAY)
    assert progress.done == 10
    assert progress.goal == 10
    assert progress.percent == 100


def test_progress_partial(daily):
    for _ in range(3):
        daily.record_good(TODAY)
    assert daily.progress(TODAY).percent == 30


def test_using_tracker_before_init_fails(store):
    with pytest.raises(RuntimeError):
        DailyGoalTracker(store).ensure_current(TODAY)


@pytest.mark.parametrize("part, whole, expected", [
    (0, 0, 0),
    (1, 8, 13),
    (1, 3, 33),
    (2, 3, 67),
    (30, 30, 100),
])
def test_round_percent_rounds_half_up(part, whole, expected):
    assert round_percent(part, whole) == expected
