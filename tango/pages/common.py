from nicegui import app, ui
from tango.core.locale_manager import T, SUPPORTED_LOCALES, global_locale_manager


def setup_page():
    ui.dark_mode()
    ui.add_head_html("<style>html, #c3 { padding: 0 !important;}</style>")


def _switch_language(locale: str):
    app.storage.user['ui_language'] = locale
    ui.navigate.reload()


def create_navbar():
    with ui.header().classes('w-full bg-black text-white justify-between items-center px-6 py-2 shadow-md'):
        ui.label(T("app_title")).classes('text-xl font-bold tracking-tight')

        with ui.button(icon='translate').props('flat round color=white'):
            ui.tooltip(T("language")).classes('bg-black text-xs')
            with ui.menu().props('auto-close'):
                current = global_locale_manager.current_locale()
                for locale in sorted(SUPPORTED_LOCALES):
                    label = f"✓ {locale}" if locale == current else locale
                    ui.menu_item(label, on_click=lambda l=locale: _switch_language(l))
