from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

# Placeholder token replaced by a slot value in prompt/answer templates
SLOT_TOKEN = "{x}"

# Shown in place of the slot in a hidden answer
SLOT_BLANK = "___"


class SlotPair(BaseModel):
    """
    One substitution for a templated card,
    e.g. prompt_slot='映画', answer_slot='a movie' for '{x}を見る' / 'watch {x}'.
    """
    model_config = ConfigDict(frozen=True)

    prompt_slot: str
    answer_slot: str = ""


class Card(BaseModel):
    """
    A single vocabulary card as read from the deck CSV.
    `no` is assigned by the deck author and decides both ordering and block membership.
    """
    model_config = ConfigDict(frozen=True)

    no: int
    prompt: str = ""
    answer: str = ""
    slots: Optional[Tuple[SlotPair, ...]] = None
    video_ref: str = ""
    level: int = 1
    note: str = ""
