"""Tests for block partitioning, progress and the deck store."""

import httpx
import pytest

from tango.services.deck_service import (
    BLOCK_SIZE,
    BlockSummary,
    DeckStore,
    Progress,
    block_of,
    block_progress,
    block_range,
    block_summaries,
    cards_in_block,
    max_block,
)

from conftest import SAMPLE_CSV, TODAY, make_cards


# ---------- blocks ----------


@pytest.mark.parametrize("no, expected", [
    (1, 1),
    (15, 1),
    (30, 1),
    (31, 2),
    (60, 2),
    (61, 3),
])
def test_block_of(no, expected):
    assert block_of(no) == expected


def test_block_of_all_first_block():
    assert {block_of(n) for n in range(1, BLOCK_SIZE + 1)} == {1}


def test_block_range():
    assert block_range(1) == (1, 30)
    assert block_range(3) == (61, 90)


def test_cards_in_block_sorted():
    cards = make_cards(33, 2, 31, 1, 61)
    assert [c.no for c in cards_in_block(cards, 1)] == [1, 2]
    assert [c.no for c in cards_in_block(cards, 2)] == [31, 33]
    assert cards_in_block(cards, 4) == []


def test_max_block():
    assert max_block([]) == 1
    assert max_block(make_cards(1, 30)) == 1
    assert max_block(make_cards(1, 31)) == 2
    assert max_block(make_cards(90)) == 3
    assert max_block(make_cards(91)) == 4


# ---------- progress ----------


def test_block_progress_counts_positive_intervals(cards, ledger):
    ledger.record_good(1, TODAY)
    ledger.record_good(2, TODAY)
    ledger.record_again(2, TODAY)
    assert block_progress(cards, ledger, 1) == Progress(learned=1, total=3)
    assert block_progress(cards, ledger, 2) == Progress(learned=0, total=2)


def test_progress_percent():
    assert Progress(learned=1, total=3).percent == 33
    assert Progress(learned=0, total=0).percent == 0


def test_block_summaries(cards, ledger):
    ledger.record_good(31, TODAY)
    summaries = block_summaries(cards, ledger)
    assert summaries == [
        BlockSummary(index=1, start=1, end=30, percent=0),
        BlockSummary(index=2, start=31, end=60, percent=50),
        BlockSummary(index=3, start=61, end=90, percent=0),
    ]
    assert summaries[1].label == "31-60 50%"


def test_block_summaries_empty_deck(ledger):
    assert block_summaries([], ledger) == [BlockSummary(index=1, start=1, end=30, percent=0)]


# ---------- store ----------


def test_store_lookup(deck):
    assert deck.get(31).prompt == "犬"
    assert deck.get(999) is None
    assert len(deck) == 6
    assert deck.is_loaded


def test_empty_store_is_not_loaded():
    store = DeckStore()
    assert not store.is_loaded
    assert store.cards == ()


@pytest.mark.asyncio
async def test_load_from_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    store = DeckStore()

    count = await store.load(str(path))

    assert count == 6
    assert store.is_loaded
    assert store.load_error is None
    await store.wait_loaded()


@pytest.mark.asyncio
async def test_load_failure_leaves_empty_deck(tmp_path, caplog):
    store = DeckStore()

    count = await store.load(str(tmp_path / "missing.csv"))

    assert count == 0
    assert store.cards == ()
    assert store.is_loaded
    assert store.load_error
    assert "Deck load failed" in caplog.text


@pytest.mark.asyncio
async def test_load_from_url():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text=SAMPLE_CSV))
    store = DeckStore()
    async with httpx.AsyncClient(transport=transport) as client:
        count = await store.load("http://example.test/data.csv", client=client)
    assert count == 6
    assert store.get(2).slots is not None


@pytest.mark.asyncio
async def test_network_failure_leaves_empty_deck():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = DeckStore()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        count = await store.load("http://example.test/data.csv", client=client)
    assert count == 0
    assert store.is_loaded


@pytest.mark.asyncio
async def test_malformed_url_leaves_empty_deck():
    store = DeckStore()
    count = await store.load("http://[::1/x", timeout=1)
    assert count == 0
    assert store.is_loaded
    assert store.load_error
