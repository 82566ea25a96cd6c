"""Tests for runtime/locale_data.py.

Covers key derivation, merge/add/clear semantics, metadata seeding, plural
rule cache invalidation and the dcnpgettext fallback rules.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gettextengine.constants import CONTEXT_SEPARATOR
from gettextengine.runtime.locale_data import LocaleDataStore, message_key
from gettextengine.runtime.plural_rules import default_plural_forms

texts = st.text(min_size=1, max_size=20)


class TestMessageKey:
    """Lookup key derivation."""

    def test_without_context(self) -> None:
        assert message_key("Post") == "Post"

    def test_with_context(self) -> None:
        assert message_key("Post", "verb") == "verb\u0004Post"

    def test_empty_context_is_no_context(self) -> None:
        assert message_key("Post", "") == "Post"

    @given(texts, texts)
    def test_context_separator_convention(self, single: str, context: str) -> None:
        assert message_key(single, context) == context + CONTEXT_SEPARATOR + single


class TestMerge:
    """Silent merge-set."""

    def test_empty_store(self) -> None:
        store = LocaleDataStore()
        assert len(store) == 0
        assert store.get("default") is None

    def test_merge_none_seeds_metadata(self) -> None:
        store = LocaleDataStore()
        store.merge(None, "plugin")

        data = store.get("plugin")
        assert data is not None
        assert dict(data) == {"": {"plural_forms": default_plural_forms}}

    def test_merge_preserves_untouched_keys(self) -> None:
        store = LocaleDataStore()
        store.merge({"a": ["A"], "b": ["B"]})
        store.merge({"b": ["BB"], "c": ["C"]})

        data = store.get("default")
        assert data is not None
        assert data["a"] == ["A"]
        assert data["b"] == ["BB"]
        assert data["c"] == ["C"]

    def test_later_entry_replaces_wholesale(self) -> None:
        store = LocaleDataStore()
        store.merge({"file": ["fichier", "fichiers"]})
        store.merge({"file": ["dossier"]})

        assert store.get("default")["file"] == ["dossier"]  # type: ignore[index]

    def test_explicit_metadata_wins_over_default(self) -> None:
        def rule(n: int | float) -> int:  # noqa: ARG001
            return 0

        store = LocaleDataStore()
        store.merge({"": {"plural_forms": rule, "lang": "ja"}})

        metadata = store.get("default")[""]  # type: ignore[index]
        assert metadata["plural_forms"] is rule
        assert metadata["lang"] == "ja"

    def test_merge_replaces_previous_metadata(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"lang": "fr", "domain": "messages"}})
        store.merge({"": {"lang": "de"}})

        metadata = store.get("default")[""]  # type: ignore[index]
        assert metadata["lang"] == "de"
        assert "domain" not in metadata
        assert metadata["plural_forms"] is default_plural_forms

    def test_domains_are_independent(self) -> None:
        store = LocaleDataStore()
        store.merge({"hello": ["bonjour"]}, "fr")
        store.merge({"hello": ["hallo"]}, "de")

        assert store.dcnpgettext("fr", None, "hello") == "bonjour"
        assert store.dcnpgettext("de", None, "hello") == "hallo"
        assert sorted(store) == ["de", "fr"]

    def test_get_returns_read_only_view(self) -> None:
        store = LocaleDataStore()
        store.merge({"hello": ["bonjour"]})

        data = store.get("default")
        with pytest.raises(TypeError):
            data["hello"] = ["salut"]  # type: ignore[index]

    def test_non_mapping_data_raises(self) -> None:
        store = LocaleDataStore()
        with pytest.raises(TypeError, match="Locale data must be a mapping"):
            store.merge([("hello", ["bonjour"])])  # type: ignore[arg-type]

    @given(st.dictionaries(texts, st.lists(texts, min_size=1, max_size=3), max_size=5))
    def test_merge_is_idempotent(self, data: dict[str, list[str]]) -> None:
        store = LocaleDataStore()
        store.merge(data)
        first = dict(store.get("default"))  # type: ignore[arg-type]
        store.merge(data)

        assert dict(store.get("default")) == first  # type: ignore[arg-type]
        for key in data:
            assert store.dcnpgettext("default", None, key) == data[key][0]


class TestAdd:
    """add() merges metadata field by field."""

    def test_add_keeps_existing_metadata_fields(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"lang": "fr", "domain": "messages"}})
        store.add({"": {"lang": "de"}, "hello": ["hallo"]})

        data = store.get("default")
        assert data is not None
        assert data[""]["lang"] == "de"
        assert data[""]["domain"] == "messages"
        assert data[""]["plural_forms"] is default_plural_forms
        assert data["hello"] == ["hallo"]

    def test_add_without_metadata(self) -> None:
        store = LocaleDataStore()
        store.add({"hello": ["hola"]}, "es")

        assert store.get("es")[""]["plural_forms"] is default_plural_forms  # type: ignore[index]


class TestClear:
    """Full reset."""

    def test_clear_discards_all_domains(self) -> None:
        store = LocaleDataStore()
        store.merge({"a": ["A"]}, "one")
        store.merge({"b": ["B"]}, "two")
        store.clear()

        assert len(store) == 0
        assert "one" not in store


class TestPluralRuleCache:
    """Compiled rules are cached per domain and invalidated on every write."""

    def test_rule_is_cached(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"Plural-Forms": "nplurals=2; plural=n>1;"}})

        assert store.plural_rule("default") is store.plural_rule("default")

    def test_merge_invalidates(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"Plural-Forms": "nplurals=2; plural=n>1;"}})
        assert store.plural_rule("default")(1) == 0

        store.merge({"": {"Plural-Forms": "nplurals=2; plural=n>0;"}})
        assert store.plural_rule("default")(1) == 1

    def test_add_invalidates(self) -> None:
        store = LocaleDataStore()
        store.merge({"item": ["objet", "objets"]})
        assert store.dcnpgettext("default", None, "item", "items", 0) == "objets"

        store.add({"": {"lang": "fr"}})
        assert store.dcnpgettext("default", None, "item", "items", 0) == "objet"

    def test_clear_invalidates(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"Plural-Forms": "nplurals=1; plural=0;"}})
        assert store.plural_rule("default")(5) == 0

        store.clear()
        store.merge(None)
        assert store.plural_rule("default") is default_plural_forms

    def test_domains_do_not_share_rules(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"lang": "fr"}}, "fr")
        store.merge(None, "en")

        assert store.plural_rule("fr")(0) == 0
        assert store.plural_rule("en")(0) == 1


class TestDcnpgettext:
    """Lookup and fallback."""

    def test_unknown_domain_is_seeded(self) -> None:
        store = LocaleDataStore()
        assert store.dcnpgettext("plugin", None, "hello") == "hello"
        assert "plugin" in store

    def test_singular(self) -> None:
        store = LocaleDataStore()
        store.merge({"hello": ["bonjour"]})
        assert store.dcnpgettext("default", None, "hello") == "bonjour"

    def test_context(self) -> None:
        store = LocaleDataStore()
        store.merge({"verb\u0004Post": ["Publier"], "Post": ["Article"]})

        assert store.dcnpgettext("default", "verb", "Post") == "Publier"
        assert store.dcnpgettext("default", None, "Post") == "Article"
        assert store.dcnpgettext("default", "noun", "Post") == "Post"

    @pytest.mark.parametrize(("n", "expected"), [(1, "%d fichier"), (0, "%d fichiers"), (2, "%d fichiers")])
    def test_plural(self, n: int, expected: str) -> None:
        store = LocaleDataStore()
        store.merge({"%d file": ["%d fichier", "%d fichiers"]})
        assert store.dcnpgettext("default", None, "%d file", "%d files", n) == expected

    def test_missing_form_falls_back_to_plural_source(self) -> None:
        store = LocaleDataStore()
        store.merge({"%d file": ["%d fichier"]})

        assert store.dcnpgettext("default", None, "%d file", "%d files", 1) == "%d fichier"
        assert store.dcnpgettext("default", None, "%d file", "%d files", 3) == "%d files"

    def test_empty_translation_falls_back(self) -> None:
        store = LocaleDataStore()
        store.merge({"hello": [""]})
        assert store.dcnpgettext("default", None, "hello") == "hello"

    def test_null_form_falls_back(self) -> None:
        store = LocaleDataStore()
        store.merge({"%d file": [None, "%d fichiers"]})
        assert store.dcnpgettext("default", None, "%d file", "%d files", 1) == "%d file"

    def test_plain_string_entry(self) -> None:
        store = LocaleDataStore()
        store.merge({"hello": "bonjour"})
        assert store.dcnpgettext("default", None, "hello") == "bonjour"

    def test_out_of_range_index_falls_back(self) -> None:
        store = LocaleDataStore()
        store.merge({"": {"plural_forms": lambda n: 5}, "cat": ["chat", "chats"]})
        assert store.dcnpgettext("default", None, "cat", "cats", 2) == "cats"

    @given(texts, texts, st.integers(min_value=-5, max_value=5))
    def test_missing_key_returns_source(self, single: str, plural: str, n: int) -> None:
        store = LocaleDataStore()
        assert store.dcnpgettext("default", None, single) == single
        expected = single if n == 1 else plural
        assert store.dcnpgettext("default", None, single, plural, n) == expected

    def test_has_entry(self) -> None:
        store = LocaleDataStore()
        store.merge({"hello": ["bonjour"], "empty": []})

        assert store.has_entry("hello")
        assert store.has_entry("empty")
        assert not store.has_entry("missing")
        assert not store.has_entry("hello", "other")
        assert "other" not in store
