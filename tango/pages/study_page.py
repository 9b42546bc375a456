from nicegui import ui, app, events

from tango.config import DAILY_GOAL
from tango.pages.common import setup_page, create_navbar
from tango.core.locale_manager import T
from tango.core.log_manager import logger
from tango.services.deck_service import DeckStore
from tango.services.review_service import ReviewLedger
from tango.services.goal_service import DailyGoalTracker
from tango.services.trainer_service import Trainer, today_day


def register(deck: DeckStore):
    """Registers the study page for the given (process-wide) deck."""

    @ui.page('/')
    def study_page():
        setup_page()
        create_navbar()

        # Per-browser state lives in app.storage.user, like localStorage.
        ledger = ReviewLedger(app.storage.user).init()
        daily = DailyGoalTracker(app.storage.user, default_goal=DAILY_GOAL).init(today_day())
        trainer = Trainer(deck, ledger, daily, hidden_placeholder=T("tap_to_reveal"))

        # --- UI REFERENCES ---
        prompt_label = None
        answer_label = None
        note_label = None
        progress_label = None
        progress_bar = None
        daily_label = None
        daily_bar = None

        def render():
            view = trainer.view()
            daily_progress = trainer.daily_progress()
            if daily_label: daily_label.set_text(T("daily_progress", done=daily_progress.done, goal=daily_progress.goal))
            if daily_bar: daily_bar.set_value(daily_progress.percent / 100)

            if view is None:
                return

            if prompt_label: prompt_label.set_text(view.prompt_text)
            if answer_label: answer_label.set_text(view.answer_display)
            if note_label: note_label.set_text(T("note_line", note=view.note_text) if view.note_text else "")

            progress = view.block_progress
            if progress_label:
                progress_label.set_text(T("block_progress", block=view.block_index, learned=progress.learned, total=progress.total))
            if progress_bar: progress_bar.set_value(progress.percent / 100)

        @ui.refreshable
        def block_buttons():
            for summary in trainer.block_summaries():
                ui.button(summary.label, on_click=lambda b=summary.index: start_block(b))\
                    .props('outline dense no-caps color=indigo-300').classes('text-xs')

        # --- EVENT HANDLERS ---

        def start_block(block_index: int):
            if not trainer.start_block(block_index):
                ui.notify(T("empty_block"), type='warning')
                return
            render()

        def start_sequential():
            if trainer.start_sequential():
                render()

        def start_review():
            if not trainer.start_due_review():
                ui.notify(T("no_due_cards"), type='info')
                return
            render()

        def toggle_reveal():
            if not trainer.session.is_active: return
            trainer.toggle_reveal()
            render()

        def advance():
            trainer.advance()
            render()

        def grade_again():
            trainer.grade_again()
            render()

        def grade_good():
            trainer.grade_good()
            block_buttons.refresh()
            render()

        def handle_key(e: events.KeyEventArguments):
            if not e.action.keydown: return
            if e.key == ' ': toggle_reveal()
            elif e.key == 'ArrowRight': advance()
            elif e.key == '1': grade_again()
            elif e.key == '2': grade_good()

        ui.keyboard(on_key=handle_key)

        async def init_session():
            await deck.wait_loaded()
            if deck.load_error:
                ui.notify(T("deck_load_failed"), type='negative')
            if not len(deck):
                if prompt_label: prompt_label.set_text(T("deck_empty"))
                return
            logger.info(f"Starting study page with {len(deck)} cards.")
            block_buttons.refresh()
            trainer.start_block(1)
            render()

        # --- LAYOUT ---
        with ui.column().classes('w-screen min-h-screen gradient-bg text-white items-center p-4 gap-4'):

            with ui.column().classes('w-full sm:max-w-2xl gap-1'):
                progress_label = ui.label("").classes('text-xs text-gray-400 font-mono')
                progress_bar = ui.linear_progress(value=0, show_value=False)\
                    .props('size="10px" color="indigo-400" track-color="grey-8" rounded')
                daily_label = ui.label("").classes('text-xs text-gray-400 font-mono mt-2')
                daily_bar = ui.linear_progress(value=0, show_value=False)\
                    .props('size="10px" color="green-400" track-color="grey-8" rounded')

            with ui.card().classes('w-full sm:max-w-2xl min-h-[300px] bg-gray-900 border border-white/20 items-center justify-center p-8 cursor-pointer')\
                    .on('click', toggle_reveal):
                prompt_label = ui.label(T("loading_deck")).classes('text-3xl text-center text-white')
                ui.separator().classes('w-1/2 my-6 opacity-30')
                answer_label = ui.label("").classes('text-xl text-center text-gray-300')
                note_label = ui.label("").classes('text-sm text-center text-yellow-200 mt-4')

            with ui.row().classes('gap-4 justify-center'):
                ui.button(T("again"), icon='close', on_click=grade_again).props('color=red-900')
                ui.button(T("good"), icon='check', on_click=grade_good).props('color=green-900')
                ui.button(T("next"), icon='arrow_forward', on_click=advance).props('color=grey-8')

            with ui.row().classes('gap-4 justify-center'):
                ui.button(T("sequential_order"), icon='format_list_numbered', on_click=start_sequential).props('flat color=white')
                ui.button(T("review_due"), icon='history', on_click=start_review).props('flat color=white')

            ui.label(T("blocks")).classes('text-gray-400 text-sm font-bold tracking-widest uppercase mt-4')
            with ui.row().classes('w-full sm:max-w-2xl gap-2 justify-center'):
                block_buttons()

        ui.timer(0, init_session, once=True)
