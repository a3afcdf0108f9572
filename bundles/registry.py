from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .config import MISSING_POLICIES, LexiconConfig, get_config
from .errors import KeyNotFound
from .loader import available_locales, load_bundle
from .models import LocaleBundle
from .templating import Args, format_template

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


class BundleRegistry:
    """Locale bundles by code, with fallback to a default locale.

    A lookup tries the negotiated locale, then ``default_locale``. When both
    miss, ``on_missing="key"`` returns the key path itself and
    ``on_missing="raise"`` raises :class:`KeyNotFound`.
    """

    def __init__(
        self,
        bundles: Optional[Iterable[LocaleBundle]] = None,
        default_locale: str = DEFAULT_LOCALE,
        on_missing: str = "key",
    ) -> None:
        if on_missing not in MISSING_POLICIES:
            raise ValueError(f"on_missing must be one of {', '.join(MISSING_POLICIES)}, got {on_missing!r}")
        self._bundles: Dict[str, LocaleBundle] = {}
        self.default_locale = _canonical(default_locale)
        self.on_missing = on_missing
        for bundle in bundles or ():
            self.register(bundle)

    @classmethod
    def from_config(cls, config: Optional[LexiconConfig] = None) -> "BundleRegistry":
        cfg = config or get_config()
        paths = cfg.search_paths
        bundles = [load_bundle(code, paths) for code in available_locales(paths)]
        return cls(bundles, default_locale=cfg.default_locale, on_missing=cfg.on_missing)

    def register(self, bundle: LocaleBundle) -> None:
        self._bundles[_canonical(bundle.code)] = bundle

    @property
    def locales(self) -> List[str]:
        return sorted(self._bundles)

    def bundle(self, locale: str) -> Optional[LocaleBundle]:
        return self._bundles.get(self.negotiate(locale))

    def negotiate(self, requested: Optional[str]) -> str:
        """Pick the best registered code: exact, then base language, then the default."""
        if requested:
            code = _canonical(requested)
            if code in self._bundles:
                return code
            base = code.split("-")[0]
            if base in self._bundles:
                return base
        return self.default_locale

    def get(self, locale: str, key_path: str) -> str:
        chosen = self.negotiate(locale)
        bundle = self._bundles.get(chosen)
        if bundle is not None and key_path in bundle:
            return bundle.get(key_path)

        if chosen != self.default_locale:
            fallback = self._bundles.get(self.default_locale)
            if fallback is not None and key_path in fallback:
                logger.warning("Fallback to %s for key=%s, locale=%s", self.default_locale, key_path, locale)
                return fallback.get(key_path)

        logger.error("Key %s missing in locale %s and default %s", key_path, locale, self.default_locale)
        if self.on_missing == "raise":
            raise KeyNotFound(key_path, locale)
        return key_path

    def translate(
        self,
        locale: str,
        key_path: str,
        args: Args = None,
        *,
        strict: bool = False,
        **kwargs: Any,
    ) -> str:
        return format_template(self.get(locale, key_path), args, strict=strict, **kwargs)

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, str) and _canonical(locale) in self._bundles

    def __len__(self) -> int:
        return len(self._bundles)


def _canonical(code: str) -> str:
    return code.strip().lower().replace("_", "-")


__all__ = ["BundleRegistry", "DEFAULT_LOCALE"]
