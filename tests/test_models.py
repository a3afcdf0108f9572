"""
Unit tests for LocaleBundle.

- Dotted path lookup and KeyNotFound
- Read-only structure
- Shape validation on construction
"""
import dataclasses

import pytest

from bundles.errors import BundleFormatError, KeyNotFound
from bundles.models import LocaleBundle


class TestLookup:
    def test_get_leaf(self, en_bundle):
        assert en_bundle.get("common.ok") == "OK"
        assert en_bundle.get("application") == "Rich Text Editor"

    def test_get_missing_raises(self, en_bundle):
        with pytest.raises(KeyNotFound) as excinfo:
            en_bundle.get("nonexistent.key")
        assert excinfo.value.key_path == "nonexistent.key"
        assert excinfo.value.locale == "en"
        assert isinstance(excinfo.value, LookupError)

    def test_get_namespace_is_not_a_leaf(self, en_bundle):
        with pytest.raises(KeyNotFound):
            en_bundle.get("common")

    def test_find_and_contains(self, en_bundle):
        assert en_bundle.find("common.cancel") == "Cancel"
        assert en_bundle.find("common.nope", "fallback") == "fallback"
        assert "common.ok" in en_bundle
        assert "common" not in en_bundle

    def test_keys_in_source_order(self, en_bundle):
        assert en_bundle.keys()[:3] == ["application", "common.ok", "common.cancel"]
        assert len(en_bundle) == 7

    def test_namespace(self, en_bundle):
        section = en_bundle.namespace("common")
        assert section["ok"] == "OK"
        with pytest.raises(KeyNotFound):
            en_bundle.namespace("common.ok")
        with pytest.raises(KeyNotFound):
            en_bundle.namespace("missing")

    def test_render(self, en_bundle):
        assert en_bundle.render("find.replaceSuccessMsg", {1: 4}) == "4 occurrence(s) replaced."
        assert en_bundle.render("embedbase.unsupportedUrl", url="x") == "The URL x is not supported by Media Embed."


class TestImmutability:
    def test_namespaces_are_read_only(self, en_bundle):
        with pytest.raises(TypeError):
            en_bundle.data["common"]["ok"] = "changed"

    def test_attributes_are_frozen(self, en_bundle):
        with pytest.raises(dataclasses.FrozenInstanceError):
            en_bundle.code = "eo"

    def test_source_dict_changes_do_not_leak(self, en_data):
        bundle = LocaleBundle.from_dict("en", en_data)
        en_data["common"]["ok"] = "changed"
        assert bundle.get("common.ok") == "OK"

    def test_to_dict_is_a_mutable_copy(self, en_bundle, en_data):
        copy = en_bundle.to_dict()
        assert copy == en_data
        copy["common"]["ok"] = "changed"
        assert en_bundle.get("common.ok") == "OK"

    def test_equality(self, en_data):
        assert LocaleBundle.from_dict("en", en_data) == LocaleBundle.from_dict("en", en_data)
        assert LocaleBundle.from_dict("en", en_data) != LocaleBundle.from_dict("eo", en_data)


class TestShapeValidation:
    @pytest.mark.parametrize("value", [1, True, None, ["a"], 2.5])
    def test_non_string_leaf_rejected(self, value):
        with pytest.raises(BundleFormatError):
            LocaleBundle.from_dict("eo", {"common": {"ok": value}})

    def test_dotted_key_rejected(self):
        with pytest.raises(BundleFormatError):
            LocaleBundle.from_dict("eo", {"common.ok": "Akcepti"})

    def test_empty_key_rejected(self):
        with pytest.raises(BundleFormatError):
            LocaleBundle.from_dict("eo", {"": "x"})

    def test_blank_code_rejected(self):
        with pytest.raises(BundleFormatError):
            LocaleBundle.from_dict(" ", {})

    def test_hashable(self, en_data):
        first = LocaleBundle.from_dict("en", en_data)
        reordered = LocaleBundle.from_dict("en", dict(reversed(list(en_data.items()))))
        assert first == reordered
        assert hash(first) == hash(reordered)
        assert len({first, reordered}) == 1
