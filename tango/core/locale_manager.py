# core/locale_manager.py

import json
from typing import Dict, Any, List, Optional
import importlib.resources as pkg_resources
from nicegui import app
from tango.config import DEFAULT_LOCALE
from tango.core.log_manager import logger

# The directory where locale files (e.g., en.json) are stored.
I18N_PACKAGE = 'tango.i18n'

FALLBACK_LOCALE = 'en'


class LocaleManager:
    """
    Loads every locale file shipped in tango/i18n and translates keys for the
    locale stored in the NiceGUI user session ('ui_language').
    Missing keys fall back to English, then to a visible '!! key !!' marker.
    """

    def __init__(self, package: str = I18N_PACKAGE, default_locale: str = DEFAULT_LOCALE):
        self._package = package
        self.default_locale = default_locale
        self._all_translations: Dict[str, Dict[str, str]] = {}

        self._fallback_translations = self._load_translations(FALLBACK_LOCALE)
        self._all_translations[FALLBACK_LOCALE] = self._fallback_translations

        try:
            for path in pkg_resources.files(self._package).iterdir():
                if path.name.endswith('.json'):
                    locale_code = path.name[:-len('.json')]
                    if locale_code not in self._all_translations:
                        self._all_translations[locale_code] = self._load_translations(locale_code)
        except (ModuleNotFoundError, OSError) as e:
            logger.error(f"Error during locale discovery: {e}")

        logger.info(f"LocaleManager initialized. Supported: {list(self._all_translations.keys())}. Fallback: {FALLBACK_LOCALE}")

    def _load_translations(self, locale: str) -> Dict[str, str]:
        file_name = f'{locale}.json'
        try:
            file_path = pkg_resources.files(self._package) / file_name
            with file_path.open('r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError("Translation file root must be a dictionary.")
            return data
        except FileNotFoundError:
            logger.warning(f"Translation resource not found for locale '{locale}' ({file_name}).")
            return {}
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Invalid translation file for locale '{locale}': {e}")
            return {}
        except (ModuleNotFoundError, OSError) as e:
            logger.error(f"Could not open translations for locale '{locale}': {e}")
            return {}

    @property
    def supported_locales(self) -> List[str]:
        return list(self._all_translations.keys())

    def translations(self, locale: str) -> Dict[str, str]:
        return dict(self._all_translations.get(locale, {}))

    def current_locale(self) -> str:
        try:
            return app.storage.user.get('ui_language', self.default_locale)
        except RuntimeError:
            # No page context (startup, tests): user storage is unavailable.
            return self.default_locale

    def T(self, key: str, locale: Optional[str] = None, **kwargs: Any) -> str:
        """
        Translates `key` for `locale` (default: the session's locale) and
        formats it with kwargs.
        """
        current_locale = locale or self.current_locale()
        translated_string = self._all_translations.get(current_locale, {}).get(key)

        if translated_string is None:
            translated_string = self._fallback_translations.get(key)
            if translated_string is None:
                logger.warning(f"Missing translation key '{key}' in both '{current_locale}' and fallback.")
                return f"!! {key} !!"
            logger.warning(f"Missing translation key '{key}' for locale '{current_locale}'.")

        if kwargs:
            try:
                return translated_string.format(**kwargs)
            except (KeyError, IndexError, ValueError) as e:
                logger.error(f"Formatting failed for key '{key}' in locale '{current_locale}': {e}")
                return translated_string

        return translated_string


global_locale_manager = LocaleManager()

T = global_locale_manager.T

SUPPORTED_LOCALES = global_locale_manager.supported_locales
