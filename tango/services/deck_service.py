# tango/services/deck_service.py
import asyncio
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import httpx

from tango.models import Card
from tango.services.import_service import DeckLoadError, parse_deck, read_deck_source
from tango.services.review_service import ReviewLedger
from tango.services.goal_service import round_percent
from tango.core.log_manager import logger

BLOCK_SIZE = 30


@dataclass(frozen=True)
class Progress:
    learned: int
    total: int

    @property
    def percent(self) -> int:
        return round_percent(self.learned, self.total)


@dataclass(frozen=True)
class BlockSummary:
    """Everything a block button needs: '1-30 40%'."""
    index: int
    start: int
    end: int
    percent: int

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end} {self.percent}%"


# --- BLOCK HELPERS ---

def block_of(no: int) -> int:
    return (no - 1) // BLOCK_SIZE + 1


def block_range(block_index: int) -> Tuple[int, int]:
    """First and last card number covered by a block."""
    return (block_index - 1) * BLOCK_SIZE + 1, block_index * BLOCK_SIZE


def cards_in_block(cards: Sequence[Card], block_index: int) -> List[Card]:
    return sorted((c for c in cards if block_of(c.no) == block_index), key=lambda c: c.no)


def max_block(cards: Sequence[Card]) -> int:
    if not cards:
        return 1
    return math.ceil(max(c.no for c in cards) / BLOCK_SIZE)


def block_progress(cards: Sequence[Card], ledger: ReviewLedger, block_index: int) -> Progress:
    """Learned / total for one block. 'Learned' means interval > 0."""
    block_cards = cards_in_block(cards, block_index)
    return Progress(
        learned=ledger.count_learned(c.no for c in block_cards),
        total=len(block_cards),
    )


def block_summaries(cards: Sequence[Card], ledger: ReviewLedger) -> List[BlockSummary]:
    summaries = []
    for b in range(1, max_block(cards) + 1):
        start, end = block_range(b)
        summaries.append(BlockSummary(
            index=b,
            start=start,
            end=end,
            percent=block_progress(cards, ledger, b).percent,
        ))
    return summaries


# --- DECK STORE ---

class DeckStore:
    """
    Holds the immutable card list for the lifetime of the process.
    Until `load` completes the deck is empty; a failed load leaves it empty.
    """

    def __init__(self, cards: Sequence[Card] = ()):
        self._cards: Tuple[Card, ...] = tuple(cards)
        self._by_no: Dict[int, Card] = {c.no: c for c in self._cards}
        self._loaded = asyncio.Event()
        self.load_error: Optional[str] = None
        if self._cards:
            self._loaded.set()

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._cards

    @property
    def is_loaded(self) -> bool:
        return self._loaded.is_set()

    def __len__(self) -> int:
        return len(self._cards)

    def get(self, no: int) -> Optional[Card]:
        return self._by_no.get(no)

    def replace(self, cards: Sequence[Card]):
        self._cards = tuple(cards)
        self._by_no = {c.no: c for c in self._cards}

    async def load(
        self,
        source: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> int:
        """
        Fetches and parses the deck once. Never raises: on failure the deck
        stays empty and `load_error` holds the reason.
        Returns the number of cards loaded.
        """
        try:
            text = await read_deck_source(source, timeout=timeout, client=client)
            self.replace(parse_deck(text))
            self.load_error = None
            logger.info(f"Deck loaded from {source}: {len(self._cards)} cards.")
        except DeckLoadError as e:
            self.replace(())
            self.load_error = str(e)
            logger.error(f"Deck load failed: {e}")
        finally:
            self._loaded.set()
        return len(self._cards)

    async def wait_loaded(self):
        await self._loaded.wait()
