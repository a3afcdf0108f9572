from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Sequence, Union

from .errors import MissingArgument

__all__ = [
    "PLACEHOLDER_RE",
    "slot_name",
    "placeholders",
    "has_placeholders",
    "format_template",
]

# %1, $1, %name, {name} and ${name}; ${name} is consumed whole, dollar included.
# A % followed by neither a digit nor a letter stays literal, e.g. "({percentage}%)".
PLACEHOLDER_RE = re.compile(
    r"(?P<token>[%$](?P<position>[0-9])|%(?P<percent_name>[A-Za-z_]\w*)|\$\{(?P<dollar_name>[A-Za-z_]\w*)\}|\{(?P<name>[A-Za-z_]\w*)\})"
)

Args = Union[Mapping[Any, Any], Sequence[Any], None]


def slot_name(match: re.Match) -> str:
    """Argument key a placeholder match reads from: "1" for %1 and $1, "max" for {max}, ${max} and %max."""
    return (
        match.group("position")
        or match.group("percent_name")
        or match.group("dollar_name")
        or match.group("name")
    )


def placeholders(template: str) -> List[str]:
    """Return placeholder tokens in order of first appearance, e.g. ``["%1", "{max}"]``."""
    seen: List[str] = []
    for match in PLACEHOLDER_RE.finditer(template):
        token = match.group("token")
        if token not in seen:
            seen.append(token)
    return seen


def has_placeholders(template: str) -> bool:
    return PLACEHOLDER_RE.search(template) is not None


def _normalize_args(args: Args, kwargs: Mapping[str, Any]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    if args is None:
        pass
    elif isinstance(args, Mapping):
        for key, value in args.items():
            values[str(key)] = str(value)
    elif isinstance(args, (str, bytes)):
        raise TypeError("args must be a mapping or a sequence, not a string")
    else:
        for index, value in enumerate(args, start=1):
            values[str(index)] = str(value)
    for key, value in kwargs.items():
        values[key] = str(value)
    return values


def format_template(template: str, args: Args = None, *, strict: bool = False, **kwargs: Any) -> str:
    """Substitute placeholders in a translation template.

    ``args`` maps positions (``1`` or ``"1"``) and names (``"current"``) to
    values; a plain sequence fills positions 1..n. Keyword arguments are
    merged on top. Unresolved placeholders stay verbatim unless ``strict``
    is set, in which case :class:`MissingArgument` lists all of them.
    """

    values = _normalize_args(args, kwargs)
    missing: List[str] = []

    def _replace(match: re.Match) -> str:
        slot = slot_name(match)
        if slot in values:
            return values[slot]
        token = match.group("token")
        if token not in missing:
            missing.append(token)
        return token

    result = PLACEHOLDER_RE.sub(_replace, template)
    if missing and strict:
        raise MissingArgument(missing, template)
    return result

