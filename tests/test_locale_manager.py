"""Tests for translation lookup and the shipped locale files."""

from tango.core.locale_manager import FALLBACK_LOCALE, LocaleManager


def test_shipped_locales_share_keys():
    manager = LocaleManager()
    assert {"en", "ja"} <= set(manager.supported_locales)
    assert set(manager.translations("en")) == set(manager.translations("ja"))


def test_translation_with_interpolation():
    manager = LocaleManager()
    text = manager.T("block_progress", locale="ja", block=2, learned=3, total=30)
    assert text == "ブロック 2：3 / 30"
    assert manager.T("daily_progress", locale="en", done=4, goal=10) == "Today: 4 / 10"


def test_unknown_locale_falls_back_to_english():
    manager = LocaleManager()
    assert manager.T("tap_to_reveal", locale="xx") == manager.translations(FALLBACK_LOCALE)["tap_to_reveal"]


def test_missing_key_is_marked():
    assert LocaleManager().T("no_such_key", locale="en") == "!! no_such_key !!"


def test_default_locale_outside_page_context():
    manager = LocaleManager(default_locale="ja")
    assert manager.T("tap_to_reveal") == "タップして答え"


def test_unreadable_resources_do_not_break_construction(monkeypatch, caplog):
    import tango.core.locale_manager as locale_manager

    def broken_files(package):
        raise NotADirectoryError(package)

    monkeypatch.setattr(locale_manager.pkg_resources, "files", broken_files)

    manager = LocaleManager()

    assert manager.translations("en") == {}
    assert manager.T("tap_to_reveal", locale="en") == "!! tap_to_reveal !!"
    assert "Could not open translations" in caplog.text
