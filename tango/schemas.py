# tango/schemas.py
import json
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError


class StateParseError(Exception):
    """Raised when a persisted state blob cannot be decoded."""
    pass


class ReviewState(BaseModel):
    """
    Scheduling state of one card.
    interval == 0 means never graded successfully (or just failed).
    """
    interval: int = Field(default=0, ge=0)
    due: int


class ReviewLedgerBlob(RootModel[Dict[int, ReviewState]]):
    """
    The persisted ledger: {"<card no>": {"interval": .., "due": ..}}.
    JSON object keys are strings; pydantic coerces them back to ints.
    """
    root: Dict[int, ReviewState] = Field(default_factory=dict)


class DailyGoal(BaseModel):
    """
    The daily practice counter. Stored with the camelCase key 'goodCount'.
    """
    model_config = ConfigDict(populate_by_name=True)

    day: int
    good_count: int = Field(default=0, ge=0, alias="goodCount")
    goal: int = Field(default=10, ge=0)


def _decode(raw: str):
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise StateParseError(f"Invalid JSON state: {e}") from e


def load_ledger(raw: Optional[str]) -> Dict[int, ReviewState]:
    """
    Decodes a persisted ledger blob.
    Absent blobs (None / empty / JSON null) decode to an empty ledger.
    Raises StateParseError on malformed content.
    """
    if not raw:
        return {}
    data = _decode(raw)
    if data is None:
        return {}
    try:
        return dict(ReviewLedgerBlob.model_validate(data).root)
    except ValidationError as e:
        raise StateParseError(f"Schema Error: {e}") from e


def dump_ledger(ledger: Dict[int, ReviewState]) -> str:
    return ReviewLedgerBlob(ledger).model_dump_json()


def load_daily_goal(raw: Optional[str]) -> Optional[DailyGoal]:
    """
    Decodes a persisted daily goal blob. Returns None when nothing is stored.
    Raises StateParseError on malformed content.
    """
    if not raw:
        return None
    data = _decode(raw)
    if data is None:
        return None
    try:
        return DailyGoal.model_validate(data)
    except ValidationError as e:
        raise StateParseError(f"Schema Error: {e}") from e


def dump_daily_goal(goal: DailyGoal) -> str:
    return goal.model_dump_json(by_alias=True)
