"""Tests for the module-level API bound to the default instance."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import gettextengine
from gettextengine import (
    __,
    _n,
    _nx,
    _x,
    add_locale_data,
    default_hooks,
    get_locale_data,
    has_translation,
    is_rtl,
    reset_locale_data,
    set_locale_data,
    sprintf,
    subscribe,
)


@pytest.fixture(autouse=True)
def _clean_default_instance() -> Iterator[None]:
    """Leave the process-wide instance and hooks as we found them."""
    reset_locale_data()
    yield
    for channel in (
        "i18n.gettext",
        "i18n.gettext_with_context",
        "i18n.ngettext",
        "i18n.ngettext_with_context",
    ):
        default_hooks.remove_filter(channel, "tests")
    reset_locale_data()


class TestDefaultInstance:
    """Module-level functions share one instance."""

    def test_default_functions_call_filters(self) -> None:
        default_hooks.add_filter("i18n.gettext", "tests", lambda *_: "goodbye")
        assert __("hello") == "goodbye"

        default_hooks.add_filter("i18n.gettext_with_context", "tests", lambda *_: "goodbye")
        assert _x("hello", "context") == "goodbye"

        def by_count(translation: str, single: str, plural: str, count: int, *_: object) -> str:  # noqa: ARG001
            return "goodbye" if count == 1 else "goodbyes"

        default_hooks.add_filter("i18n.ngettext", "tests", by_count)
        assert _n("hello", "hellos", 1) == "goodbye"
        assert _n("hello", "hellos", 2) == "goodbyes"

        default_hooks.add_filter("i18n.ngettext_with_context", "tests", by_count)
        assert _nx("hello", "hellos", 1, "context") == "goodbye"
        assert _nx("hello", "hellos", 2, "context") == "goodbyes"

    def test_set_and_get(self) -> None:
        set_locale_data({"hello": ["bonjour"]})
        assert __("hello") == "bonjour"
        assert get_locale_data()["hello"] == ["bonjour"]  # type: ignore[index]
        assert has_translation("hello")

    def test_add_locale_data(self) -> None:
        add_locale_data({"%d apple": ["%d pomme", "%d pommes"]}, "fruit")
        assert sprintf(_n("%d apple", "%d apples", 3, "fruit"), 3) == "3 pommes"

    def test_is_rtl(self) -> None:
        assert not is_rtl()
        set_locale_data({"text direction\u0004ltr": ["rtl"]})
        assert is_rtl()

    def test_subscribe(self) -> None:
        calls: list[None] = []
        unsubscribe = subscribe(lambda: calls.append(None))
        try:
            reset_locale_data()
        finally:
            unsubscribe()
        assert calls == [None]

    def test_adding_translation_filter_notifies(self) -> None:
        calls: list[None] = []
        unsubscribe = subscribe(lambda: calls.append(None))
        try:
            default_hooks.add_filter("i18n.gettext", "tests", lambda value, *_: value)
        finally:
            unsubscribe()
        assert calls == [None]

    def test_version(self) -> None:
        assert isinstance(gettextengine.__version__, str)
