from pathlib import Path

import pytest

from bundles.config import PACKAGED_LOCALES_DIR, LexiconConfig, get_config


def test_defaults():
    cfg = LexiconConfig()
    assert cfg.locales_dir is None
    assert cfg.default_locale == "en"
    assert cfg.on_missing == "key"
    assert cfg.strict_format is False
    assert cfg.search_paths == [PACKAGED_LOCALES_DIR]


def test_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LEXICON_LOCALES_DIR", str(tmp_path))
    monkeypatch.setenv("LEXICON_DEFAULT_LOCALE", "eo")
    monkeypatch.setenv("LEXICON_ON_MISSING", "RAISE")
    monkeypatch.setenv("LEXICON_STRICT_FORMAT", "yes")
    cfg = LexiconConfig()
    assert cfg.locales_dir == Path(str(tmp_path))
    assert cfg.default_locale == "eo"
    assert cfg.on_missing == "raise"
    assert cfg.strict_format is True
    assert cfg.search_paths == [Path(str(tmp_path)), PACKAGED_LOCALES_DIR]


def test_invalid_policy(monkeypatch):
    monkeypatch.setenv("LEXICON_ON_MISSING", "ignore")
    with pytest.raises(ValueError):
        LexiconConfig()


def test_get_config_is_cached():
    assert get_config() is get_config()
