# tango/main.py
from nicegui import ui, app
import os
from pathlib import Path

from tango.config import STORAGE_SECRET, DECK_SOURCE, DECK_FETCH_TIMEOUT, PORT
from tango.core.locale_manager import T
from tango.core.log_manager import logger
from tango.services.deck_service import DeckStore
from tango.pages import study_page

# The deck is shared by every browser; review state is per browser.
deck = DeckStore()

study_page.register(deck)


async def load_deck():
    count = await deck.load(DECK_SOURCE, timeout=DECK_FETCH_TIMEOUT)
    if not count:
        logger.warning(f"No cards available from {DECK_SOURCE}.")

app.on_startup(load_deck)

# --- PATH & STYLING SETUP ---
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ASSETS_DIR = os.path.join(PROJECT_ROOT, 'assets')

if os.path.exists(ASSETS_DIR):
    app.add_static_files('/assets', ASSETS_DIR)
    ui.add_css(Path(ASSETS_DIR) / "global.css", shared=True)


def main():
    ui.run(title=T("app_title"), port=PORT, storage_secret=STORAGE_SECRET, reload=False)


# --- STARTUP ---
if __name__ in {"__main__", "__mp_main__"}:
    main()
