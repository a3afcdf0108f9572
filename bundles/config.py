from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

PACKAGED_LOCALES_DIR = Path(__file__).resolve().parent / "locales"
MISSING_POLICIES = ("key", "raise")


@dataclass
class LexiconConfig:
    """Settings driven by ``LEXICON_*`` environment variables."""

    locales_dir: Optional[Path] = field(default_factory=lambda: _optional_path(os.getenv("LEXICON_LOCALES_DIR")))
    default_locale: str = field(default_factory=lambda: os.getenv("LEXICON_DEFAULT_LOCALE", "en"))
    on_missing: str = field(default_factory=lambda: os.getenv("LEXICON_ON_MISSING", "key"))
    strict_format: bool = field(default_factory=lambda: _parse_bool(os.getenv("LEXICON_STRICT_FORMAT", "false")))
    log_level: str = field(default_factory=lambda: os.getenv("LEXICON_LOG_LEVEL", "WARNING"))
    log_file: Optional[Path] = field(default_factory=lambda: _optional_path(os.getenv("LEXICON_LOG_FILE")))

    def __post_init__(self) -> None:
        self.on_missing = self.on_missing.strip().lower()
        if self.on_missing not in MISSING_POLICIES:
            raise ValueError(f"on_missing must be one of {', '.join(MISSING_POLICIES)}, got {self.on_missing!r}")
        self.default_locale = self.default_locale.strip() or "en"

    @property
    def search_paths(self) -> List[Path]:
        paths = []
        if self.locales_dir is not None:
            paths.append(self.locales_dir)
        paths.append(PACKAGED_LOCALES_DIR)
        return paths


def _optional_path(raw: Optional[str]) -> Optional[Path]:
    if not raw or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_config() -> LexiconConfig:
    return LexiconConfig()


__all__ = ["LexiconConfig", "get_config", "PACKAGED_LOCALES_DIR", "MISSING_POLICIES"]
