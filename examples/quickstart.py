"""Quickstart example for gettextengine.

This example demonstrates basic usage of gettextengine for translation
lookup, plural forms, filters and safe formatting.

Note: Locale data here is written inline. In production it would come from
a catalog compiled to Jed-formatted JSON.
"""

from gettextengine import (
    Hooks,
    __,
    _n,
    _x,
    create_i18n,
    is_rtl,
    set_locale_data,
    sprintf,
    subscribe,
)

# Example 1: Simple translations
print("=" * 50)
print("Example 1: Simple Translations")
print("=" * 50)

set_locale_data({
    "": {"lang": "fr"},
    "Hello, World!": ["Bonjour, le monde !"],
    "verb\u0004Post": ["Publier"],
    "noun\u0004Post": ["Article"],
})

print(__("Hello, World!"))
# Output: Bonjour, le monde !

print(_x("Post", "verb"), "/", _x("Post", "noun"))
# Output: Publier / Article

print(__("Untranslated"))
# Output: Untranslated

# Example 2: Plural forms and formatting
print("\n" + "=" * 50)
print("Example 2: Plural Forms")
print("=" * 50)

set_locale_data({"%d file": ["%d fichier", "%d fichiers"]})

for count in (0, 1, 2):
    print(sprintf(_n("%d file", "%d files", count), count))
# Output (French treats 0 as singular):
# 0 fichier
# 1 fichier
# 2 fichiers

# Example 3: Named placeholders and a broken translation
print("\n" + "=" * 50)
print("Example 3: Safe Formatting")
print("=" * 50)

print(sprintf("Welcome, %(name)s!", {"name": "Anna"}))
# Output: Welcome, Anna!

print(sprintf("Welcome, %(nmae)s!", {"name": "Anna"}))
# Output: Welcome, %(nmae)s!  (error logged once, nothing raised)

# Example 4: Independent instance with its own hooks and subscribers
print("\n" + "=" * 50)
print("Example 4: Filters and Subscriptions")
print("=" * 50)

hooks = Hooks()
shop = create_i18n({"Cart": ["Panier"]}, "shop", hooks=hooks)
shop.subscribe(lambda: print("  shop locale data changed"))

hooks.add_filter("i18n.gettext_shop", "demo", lambda text, *_: text.upper())
# Output: shop locale data changed

print(shop.translate("Cart", "shop"))
# Output: PANIER

unsubscribe = subscribe(lambda: print("  default locale data changed"))
set_locale_data({"text direction\u0004ltr": ["rtl"]})
# Output: default locale data changed
print("RTL:", is_rtl())
# Output: RTL: True
unsubscribe()
