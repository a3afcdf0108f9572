from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import get_config
from .errors import BundleFormatError, BundleLoadError, BundleNotFound, BundleWriteError
from .models import LocaleBundle

logger = logging.getLogger(__name__)

SUFFIXES = (".json", ".js")

_CODE_RE = re.compile(r"^[a-z]{2,3}(?:-[a-z0-9]{2,8})*$")
_COMMENT_RE = re.compile(r"\A\s*(?:/\*.*?\*/|//[^\n]*\n)", re.DOTALL)
_SCRIPT_RE = re.compile(
    r"\A\s*CKEDITOR\.lang\[\s*(['\"])(?P<code>[^'\"]+)\1\s*\]\s*=\s*(?P<body>\{.*\})\s*;?\s*\Z",
    re.DOTALL,
)


def normalize_code(code: str) -> str:
    normalized = code.strip().lower().replace("_", "-")
    if not _CODE_RE.match(normalized):
        raise BundleLoadError(f"Invalid locale code: {code!r}")
    return normalized


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise BundleFormatError(f"Duplicate key {key!r}")
        result[key] = value
    return result


def _parse_json(text: str, source: str) -> Any:
    try:
        return json.loads(text, object_pairs_hook=_reject_duplicates)
    except json.JSONDecodeError as exc:
        raise BundleFormatError(f"{source}: invalid JSON ({exc})") from exc
    except BundleFormatError as exc:
        raise BundleFormatError(f"{source}: {exc}") from exc


def parse_script(text: str, source: str = "<script>") -> Tuple[str, Any]:
    """Parse an editor language script of the form ``CKEDITOR.lang['eo']={...};``.

    Returns the language code declared in the script and the decoded object.
    """

    text = text.lstrip("\ufeff")
    while True:
        match = _COMMENT_RE.match(text)
        if not match:
            break
        text = text[match.end():]
    match = _SCRIPT_RE.match(text)
    if not match:
        raise BundleFormatError(f"{source}: not a CKEDITOR.lang registration script")
    return match.group("code"), _parse_json(match.group("body"), source)


def load_bundle_file(path: Path, code: Optional[str] = None) -> LocaleBundle:
    path = Path(path)
    expected = normalize_code(code or path.stem)
    if path.suffix not in SUFFIXES:
        raise BundleFormatError(f"{path}: unsupported bundle format '{path.suffix}'")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise BundleNotFound(expected, [path]) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise BundleFormatError(f"{path}: cannot read bundle ({exc})") from exc

    if path.suffix == ".js":
        declared, data = parse_script(text, str(path))
        if normalize_code(declared) != expected:
            raise BundleFormatError(f"{path}: script registers '{declared}', expected '{expected}'")
    else:
        data = _parse_json(text, str(path))

    if not isinstance(data, dict):
        raise BundleFormatError(f"{path}: top level must be an object")
    try:
        bundle = LocaleBundle.from_dict(expected, data)
    except BundleFormatError as exc:
        raise BundleFormatError(f"{path}: {exc}") from exc
    logger.debug("Loaded locale %s from %s (%d keys)", expected, path, len(bundle))
    return bundle


def _resolve_paths(search_paths: Optional[Iterable[Path]]) -> Tuple[Path, ...]:
    paths: List[Path] = [Path(p) for p in search_paths] if search_paths else []
    for path in get_config().search_paths:
        if path not in paths:
            paths.append(path)
    return tuple(paths)


def _stem_code(file: Path) -> Optional[str]:
    if file.suffix not in SUFFIXES or not file.is_file():
        return None
    code = file.stem.lower().replace("_", "-")
    return code if _CODE_RE.match(code) else None


def find_bundle_file(code: str, search_paths: Sequence[Path]) -> Optional[Path]:
    """First file whose stem names ``code``, ignoring case and ``_`` vs ``-``; .json wins over .js."""
    for directory in search_paths:
        if not directory.is_dir():
            continue
        entries = sorted(directory.iterdir())
        for suffix in SUFFIXES:
            for file in entries:
                if file.suffix == suffix and _stem_code(file) == code:
                    return file
    return None


@lru_cache(maxsize=64)
def _load_cached(code: str, search_paths: Tuple[Path, ...]) -> LocaleBundle:
    path = find_bundle_file(code, search_paths)
    if path is None:
        raise BundleNotFound(code, search_paths)
    return load_bundle_file(path, code)


def load_bundle(code: str, search_paths: Optional[Iterable[Path]] = None) -> LocaleBundle:
    """Load the bundle for ``code`` from the first directory that has it.

    Explicit ``search_paths`` come first, then ``LEXICON_LOCALES_DIR`` and the
    packaged locales. Results are memoised until :func:`clear_cache`.
    """

    return _load_cached(normalize_code(code), _resolve_paths(search_paths))


def clear_cache() -> None:
    _load_cached.cache_clear()


def available_locales(search_paths: Optional[Iterable[Path]] = None) -> List[str]:
    codes = set()
    for directory in _resolve_paths(search_paths):
        if not directory.is_dir():
            continue
        for file in directory.iterdir():
            code = _stem_code(file)
            if code is not None:
                codes.add(code)
    return sorted(codes)


def export_bundle(bundle: LocaleBundle, path: Path) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(bundle.to_dict(), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise BundleWriteError(f"{path}: cannot write bundle ({exc})") from exc
    logger.info("Exported locale %s to %s", bundle.code, path)
    return path


__all__ = [
    "load_bundle",
    "load_bundle_file",
    "parse_script",
    "find_bundle_file",
    "available_locales",
    "export_bundle",
    "clear_cache",
    "normalize_code",
]
