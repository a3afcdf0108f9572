"""
Pytest configuration and shared fixtures for bundle tests.
"""
import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from bundles import loader
from bundles.config import get_config
from bundles.logging_config import ColoredFormatter
from bundles.models import LocaleBundle


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Fresh config, loader cache and root logger for every test"""
    for name in (
        "LEXICON_LOCALES_DIR",
        "LEXICON_DEFAULT_LOCALE",
        "LEXICON_ON_MISSING",
        "LEXICON_STRICT_FORMAT",
        "LEXICON_LOG_LEVEL",
        "LEXICON_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    loader.clear_cache()
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, ColoredFormatter) or isinstance(handler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    get_config.cache_clear()
    loader.clear_cache()


@pytest.fixture
def eo_bundle():
    """The packaged Esperanto bundle"""
    return loader.load_bundle("eo")


@pytest.fixture
def en_data():
    return {
        "application": "Rich Text Editor",
        "common": {
            "ok": "OK",
            "cancel": "Cancel",
            "unavailable": "%1<span class=\"cke_accessibility\">, unavailable</span>",
        },
        "find": {"replaceSuccessMsg": "%1 occurrence(s) replaced."},
        "embedbase": {"unsupportedUrl": "The URL {url} is not supported by Media Embed."},
        "onlyInEnglish": "Only here",
    }


@pytest.fixture
def en_bundle(en_data):
    return LocaleBundle.from_dict("en", en_data)


@pytest.fixture
def locales_dir(tmp_path, en_data):
    """Directory with an English JSON bundle and a small Portuguese editor script"""
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en.json").write_text(json.dumps(en_data, ensure_ascii=False), encoding="utf-8")
    (directory / "pt.js").write_text(
        "\ufeff/*\nCopyright (c) 2003-2024, CKSource Holding sp. z o.o. All rights reserved.\n*/\n"
        "CKEDITOR.lang['pt']={\"application\":\"Editor de texto\",\"common\":{\"ok\":\"OK\",\"cancel\":\"Cancelar\"}};",
        encoding="utf-8",
    )
    return directory
