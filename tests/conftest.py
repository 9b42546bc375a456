import pytest

from tango.models import Card
from tango.services.deck_service import DeckStore
from tango.services.review_service import ReviewLedger
from tango.services.goal_service import DailyGoalTracker
from tango.services.import_service import parse_deck

TODAY = 20000

SAMPLE_CSV = """no,jp,en,slots,video,lv,note
1,水,water,,v1,1,
2,{x}を見る,watch {x},映画=a movie|本=a book,v1,2,note here
3,"こんにちは, 世界","hello, world",,v2,1,greeting
31,犬,dog,,v3,1,
32,猫,cat,,v3,2,
61,鳥,bird,,v4,3,
"""


class FirstChoice:
    """Deterministic stand-in for random.Random: always picks the first element."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def store():
    """A plain dict standing in for app.storage.user."""
    return {}


@pytest.fixture
def cards():
    return parse_deck(SAMPLE_CSV)


@pytest.fixture
def deck(cards):
    return DeckStore(cards)


@pytest.fixture
def ledger(store):
    return ReviewLedger(store).init()


@pytest.fixture
def daily(store):
    return DailyGoalTracker(store).init(TODAY)


def make_cards(*numbers):
    return [Card(no=n, prompt=f"p{n}", answer=f"a{n}") for n in numbers]
