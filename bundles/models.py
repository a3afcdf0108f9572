from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import BundleFormatError, KeyNotFound
from .templating import Args, format_template

SEPARATOR = "."


@dataclass(frozen=True, slots=True)
class LocaleBundle:
    """Read-only tree of translation templates for one language.

    ``data`` is frozen on construction: namespaces become mapping proxies
    and every leaf must be a string.
    """

    code: str
    data: Mapping[str, Any] = field(repr=False)
    _leaves: Dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not self.code.strip():
            raise BundleFormatError(f"Invalid locale code: {self.code!r}")
        leaves: Dict[str, str] = {}
        frozen = _freeze(self.data, "", leaves)
        object.__setattr__(self, "data", frozen)
        object.__setattr__(self, "_leaves", leaves)

    def __hash__(self) -> int:
        return hash((self.code, frozenset(self._leaves.items())))

    @classmethod
    def from_dict(cls, code: str, data: Mapping[str, Any]) -> "LocaleBundle":
        return cls(code=code, data=data)

    def to_dict(self) -> dict:
        return _thaw(self.data)

    def get(self, key_path: str) -> str:
        try:
            return self._leaves[key_path]
        except KeyError:
            raise KeyNotFound(key_path, self.code) from None

    def find(self, key_path: str, default: Optional[str] = None) -> Optional[str]:
        return self._leaves.get(key_path, default)

    def namespace(self, path: str) -> Mapping[str, Any]:
        node: Any = self.data
        for part in path.split(SEPARATOR):
            if not isinstance(node, Mapping) or part not in node:
                raise KeyNotFound(path, self.code)
            node = node[part]
        if not isinstance(node, Mapping):
            raise KeyNotFound(path, self.code)
        return node

    def render(self, key_path: str, args: Args = None, *, strict: bool = False, **kwargs: Any) -> str:
        return format_template(self.get(key_path), args, strict=strict, **kwargs)

    def keys(self) -> List[str]:
        return list(self._leaves)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._leaves.items())

    def __contains__(self, key_path: object) -> bool:
        return key_path in self._leaves

    def __iter__(self) -> Iterator[str]:
        return iter(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)


def _freeze(node: Any, prefix: str, leaves: Dict[str, str]) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise BundleFormatError(f"Expected an object at '{prefix or '<root>'}', got {type(node).__name__}")
    frozen: Dict[str, Any] = {}
    for key, value in node.items():
        if not isinstance(key, str) or not key or SEPARATOR in key:
            raise BundleFormatError(f"Invalid key {key!r} under '{prefix or '<root>'}'")
        path = f"{prefix}{SEPARATOR}{key}" if prefix else key
        if isinstance(value, Mapping):
            frozen[key] = _freeze(value, path, leaves)
        elif isinstance(value, str):
            frozen[key] = value
            leaves[path] = value
        else:
            raise BundleFormatError(f"Value at '{path}' must be a string, got {type(value).__name__}")
    return MappingProxyType(frozen)


def _thaw(node: Mapping[str, Any]) -> dict:
    return {key: _thaw(value) if isinstance(value, Mapping) else value for key, value in node.items()}


__all__ = ["LocaleBundle", "SEPARATOR"]
