from __future__ import annotations

from typing import Iterable, Optional


class LexiconError(Exception):
    pass


class KeyNotFound(LexiconError, LookupError):
    def __init__(self, key_path: str, locale: Optional[str] = None) -> None:
        self.key_path = key_path
        self.locale = locale
        where = f" in locale '{locale}'" if locale else ""
        super().__init__(f"Key '{key_path}' not found{where}")


class MissingArgument(LexiconError, ValueError):
    def __init__(self, names: Iterable[str], template: str = "") -> None:
        self.names = list(names)
        self.template = template
        super().__init__(f"Missing value for placeholder(s): {', '.join(self.names)}")


class BundleLoadError(LexiconError):
    pass


class BundleNotFound(BundleLoadError):
    def __init__(self, code: str, searched: Iterable[object] = ()) -> None:
        self.code = code
        self.searched = [str(path) for path in searched]
        super().__init__(f"No bundle for locale '{code}'")


class BundleFormatError(BundleLoadError):
    pass


class BundleWriteError(LexiconError):
    pass


__all__ = [
    "LexiconError",
    "KeyNotFound",
    "MissingArgument",
    "BundleLoadError",
    "BundleNotFound",
    "BundleFormatError",
    "BundleWriteError",
]
