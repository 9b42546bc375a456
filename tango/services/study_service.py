# tango/services/study_service.py
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

from tango.models import Card, SlotPair, SLOT_TOKEN, SLOT_BLANK
from tango.services.deck_service import cards_in_block
from tango.services.review_service import ReviewLedger
from tango.core.log_manager import logger


class RandomSource(Protocol):
    def choice(self, seq): ...


@dataclass(frozen=True)
class Variant:
    """One concrete rendering of a card. masked_answer is set only for slot cards."""
    prompt: str
    answer: str
    masked_answer: Optional[str] = None


# --- VARIANTS ---

def substitute(card: Card, slot: SlotPair) -> Variant:
    return Variant(
        prompt=card.prompt.replace(SLOT_TOKEN, slot.prompt_slot, 1),
        answer=card.answer.replace(SLOT_TOKEN, slot.answer_slot, 1),
        masked_answer=card.answer.replace(SLOT_TOKEN, SLOT_BLANK, 1),
    )


def pick_variant(card: Card, rng: RandomSource) -> Variant:
    """
    Draws one slot uniformly at random and fills the templates.
    Cards without slots are returned verbatim.
    """
    if not card.slots:
        return Variant(prompt=card.prompt, answer=card.answer)
    return substitute(card, rng.choice(card.slots))


# --- SESSION ---

class StudySession:
    """
    The working set for the current mode plus a wrapping cursor.
    Start methods return the size of the new working set; 0 means nothing
    was started and the previous session is untouched.
    """

    def __init__(self):
        self.working_set: Tuple[Card, ...] = ()
        self.cursor: int = 0
        self.revealed: bool = False

    @property
    def is_active(self) -> bool:
        return bool(self.working_set)

    def __len__(self) -> int:
        return len(self.working_set)

    def _begin(self, cards: Sequence[Card]) -> int:
        self.working_set = tuple(cards)
        self.cursor = 0
        self.revealed = False
        return len(self.working_set)

    def start_block(self, cards: Sequence[Card], block_index: int) -> int:
        selected = cards_in_block(cards, block_index)
        if not selected:
            logger.info(f"Block {block_index} is empty; keeping current session.")
            return 0
        return self._begin(selected)

    def start_sequential(self, cards: Sequence[Card]) -> int:
        if not cards:
            return 0
        return self._begin(sorted(cards, key=lambda c: c.no))

    def start_due_review(self, cards: Sequence[Card], ledger: ReviewLedger, today: int) -> int:
        due = sorted((c for c in cards if ledger.is_due(c.no, today)), key=lambda c: c.no)
        if not due:
            logger.info(f"No cards due on day {today}.")
            return 0
        return self._begin(due)

    def advance(self):
        if not self.working_set:
            return
        self.cursor = (self.cursor + 1) % len(self.working_set)
        self.revealed = False

    def toggle_reveal(self) -> bool:
        self.revealed = not self.revealed
        return self.revealed

    def current_card(self) -> Optional[Card]:
        if not self.working_set:
            return None
        return self.working_set[self.cursor]
