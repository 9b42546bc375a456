# tango/services/trainer_service.py
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from tango.services.deck_service import DeckStore, Progress, BlockSummary, block_of, block_progress, block_summaries
from tango.services.review_service import ReviewLedger
from tango.services.goal_service import DailyGoalTracker, DailyProgress
from tango.services.study_service import StudySession, RandomSource, Variant, pick_variant
from tango.core.log_manager import logger

SECONDS_PER_DAY = 86400


def today_day(now: Optional[float] = None) -> int:
    """Day-number: whole days elapsed since the Unix epoch."""
    if now is None:
        now = time.time()
    return int(now // SECONDS_PER_DAY)


@dataclass(frozen=True)
class CardView:
    """The render payload handed to the page."""
    prompt_text: str
    answer_display: str
    note_text: str
    revealed: bool
    block_index: int
    block_progress: Progress
    daily_progress: DailyProgress


class Trainer:
    """
    Glues the deck, the ledger, the daily goal and the session together and
    exposes the UI events. Every event that changes the current card draws a
    fresh slot variant; toggling the answer keeps the current one.
    """

    def __init__(
        self,
        deck: DeckStore,
        ledger: ReviewLedger,
        daily: DailyGoalTracker,
        clock: Callable[[], int] = today_day,
        rng: Optional[RandomSource] = None,
        hidden_placeholder: str = "",
    ):
        self.deck = deck
        self.ledger = ledger
        self.daily = daily
        self.session = StudySession()
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._hidden_placeholder = hidden_placeholder
        self._variant: Optional[Variant] = None

    def today(self) -> int:
        return self._clock()

    def _draw(self):
        card = self.session.current_card()
        self._variant = pick_variant(card, self._rng) if card else None

    # --- MODE STARTERS ---

    def start_block(self, block_index: int) -> bool:
        started = self.session.start_block(self.deck.cards, block_index) > 0
        if started:
            self._draw()
        return started

    def start_sequential(self) -> bool:
        started = self.session.start_sequential(self.deck.cards) > 0
        if started:
            self._draw()
        return started

    def start_due_review(self) -> bool:
        started = self.session.start_due_review(self.deck.cards, self.ledger, self.today()) > 0
        if started:
            self._draw()
        return started

    # --- CARD EVENTS ---

    def toggle_reveal(self) -> bool:
        return self.session.toggle_reveal()

    def advance(self):
        if not self.session.is_active:
            return
        self.session.advance()
        self._draw()

    def grade_again(self):
        card = self.session.current_card()
        if card is None:
            return
        self.ledger.record_again(card.no, self.today())
        self.advance()

    def grade_good(self):
        card = self.session.current_card()
        if card is None:
            return
        today = self.today()
        self.ledger.record_good(card.no, today)
        self.daily.record_good(today)
        logger.info(f"Card {card.no} GOOD; {self.daily.state.good_count} today.")
        self.advance()

    # --- VIEWS ---

    def current_block(self) -> int:
        if not self.session.working_set:
            return 1
        return block_of(self.session.working_set[0].no)

    def daily_progress(self) -> DailyProgress:
        return self.daily.progress(self.today())

    def block_summaries(self) -> List[BlockSummary]:
        return block_summaries(self.deck.cards, self.ledger)

    def view(self) -> Optional[CardView]:
        card = self.session.current_card()
        if card is None:
            return None
        if self._variant is None:
            self._draw()

        variant = self._variant
        if self.session.revealed:
            answer_display = variant.answer
        elif variant.masked_answer is not None:
            answer_display = variant.masked_answer
        else:
            answer_display = self._hidden_placeholder

        block_index = self.current_block()
        return CardView(
            prompt_text=variant.prompt,
            answer_display=answer_display,
            note_text=card.note,
            revealed=self.session.revealed,
            block_index=block_index,
            block_progress=block_progress(self.deck.cards, self.ledger, block_index),
            daily_progress=self.daily_progress(),
        )
