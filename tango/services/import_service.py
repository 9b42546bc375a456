# tango/services/import_service.py
import asyncio
import math
import re
from pathlib import Path
from typing import List, Optional, Tuple

import httpx

from tango.models import Card, SlotPair
from tango.core.log_manager import logger

# CSV header: no,jp,en,slots,video,lv,note
COL_NO, COL_PROMPT, COL_ANSWER, COL_SLOTS, COL_VIDEO, COL_LEVEL, COL_NOTE = range(7)

DEFAULT_NO = 0
DEFAULT_LEVEL = 1

_EDGE_QUOTES = re.compile(r'^"|"$')


class DeckLoadError(Exception):
    """Raised when the deck source cannot be fetched or read."""
    pass


def split_csv_line(line: str) -> List[str]:
    """
    Splits one CSV line on commas outside quotes.
    Each quote character toggles quoting and is dropped, so '"a,b",c' -> ['a,b', 'c'].
    """
    result = []
    cur = []
    in_quotes = False

    for c in line:
        if c == '"':
            in_quotes = not in_quotes
        elif c == "," and not in_quotes:
            result.append("".join(cur))
            cur = []
        else:
            cur.append(c)
    result.append("".join(cur))

    return [_EDGE_QUOTES.sub("", s) for s in result]


def _to_int(value: str, default: int) -> int:
    """Lenient integer conversion: '5', ' 5 ' and '5.0' all give 5; anything else gives default."""
    value = value.strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return default
    if not math.isfinite(number) or not number.is_integer():
        return default
    return int(number)


def parse_slots(raw: str) -> Optional[Tuple[SlotPair, ...]]:
    """
    'x1=y1|x2=y2' -> (SlotPair(x1, y1), SlotPair(x2, y2)). Empty input -> None.
    A part without '=' gets an empty answer slot.
    """
    if not raw:
        return None
    slots = []
    for part in raw.split("|"):
        pieces = part.split("=")
        slots.append(SlotPair(
            prompt_slot=pieces[0],
            answer_slot=pieces[1] if len(pieces) > 1 else "",
        ))
    return tuple(slots)


def parse_row(line: str) -> Card:
    cols = split_csv_line(line)

    def col(i: int) -> str:
        return cols[i] if i < len(cols) else ""

    return Card(
        no=_to_int(col(COL_NO), DEFAULT_NO),
        prompt=col(COL_PROMPT),
        answer=col(COL_ANSWER),
        slots=parse_slots(col(COL_SLOTS)),
        video_ref=col(COL_VIDEO),
        level=_to_int(col(COL_LEVEL), DEFAULT_LEVEL),
        note=col(COL_NOTE),
    )


def parse_deck(text: str) -> List[Card]:
    """
    Parses the deck CSV into Cards.
    1. Drops the header row.
    2. Skips blank lines.
    3. Degrades malformed numeric fields to defaults instead of failing the load.
    """
    lines = text.strip().split("\n")
    rows = [line.rstrip("\r") for line in lines[1:]]

    cards = []
    for line in rows:
        if not line.strip():
            continue
        cards.append(parse_row(line))

    logger.info(f"Parsed deck: {len(cards)} cards.")
    return cards


# --- FETCHING ---

def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


async def read_deck_source(
    source: str,
    timeout: float = 10.0,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Returns the raw CSV text of a local file or an http(s) URL.
    Raises DeckLoadError on any fetch or read failure.
    """
    if _is_url(source):
        try:
            if client is not None:
                response = await client.get(source, timeout=timeout)
            else:
                async with httpx.AsyncClient(timeout=timeout) as own_client:
                    response = await own_client.get(source)
            response.raise_for_status()
            return response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeckLoadError(f"Could not fetch deck from {source}: {e}") from e

    try:
        return await asyncio.to_thread(Path(source).read_text, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DeckLoadError(f"Could not read deck file {source}: {e}") from e
