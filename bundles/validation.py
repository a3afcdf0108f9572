"""
Consistency checks for locale bundles.

- empty templates in a single bundle
- unbalanced braces, usually a broken ``{name}`` placeholder
- keys missing from or extra to a reference bundle
- placeholder mismatch between a translation and its reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .models import LocaleBundle
from .templating import placeholders

PREVIEW_LIMIT = 15


@dataclass
class ValidationReport:
    locale: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationReport") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def _preview(keys: List[str], limit: int = PREVIEW_LIMIT) -> str:
    shown = ", ".join(keys[:limit])
    if len(keys) > limit:
        shown += f" ... and {len(keys) - limit} more"
    return shown


def check_bundle(bundle: LocaleBundle) -> ValidationReport:
    report = ValidationReport(locale=bundle.code)
    for key, text in bundle.items():
        if not text.strip():
            report.errors.append(f"[{bundle.code}] Empty template for '{key}'")
        if text.count("{") != text.count("}"):
            report.warnings.append(f"[{bundle.code}] Unbalanced braces in '{key}'")
    return report


def compare_bundles(bundle: LocaleBundle, reference: LocaleBundle) -> ValidationReport:
    """Check ``bundle`` against ``reference`` for coverage and placeholder consistency."""

    report = ValidationReport(locale=bundle.code)
    ref_keys = set(reference.keys())
    keys = set(bundle.keys())

    missing = sorted(ref_keys - keys)
    if missing:
        report.errors.append(f"[{bundle.code}] Missing {len(missing)} keys: {_preview(missing)}")

    extra = sorted(keys - ref_keys)
    if extra:
        report.warnings.append(f"[{bundle.code}] Extra keys not in {reference.code}: {_preview(extra, 10)}")

    for key in sorted(ref_keys & keys):
        expected = set(placeholders(reference.get(key)))
        actual = set(placeholders(bundle.get(key)))
        if expected != actual:
            report.errors.append(
                f"[{bundle.code}] Placeholder mismatch for '{key}': "
                f"{reference.code} has {sorted(expected)}, {bundle.code} has {sorted(actual)}"
            )
    return report


__all__ = ["ValidationReport", "check_bundle", "compare_bundles"]
